import pytest

from functionality.twitch_live.config import format_duration, load_config, parse_duration
from functionality.twitch_live.exceptions import ConfigurationError


ENV = {
	"TWITCH_ID": "cid",
	"TWITCH_SECRET": "secret",
	"DISCORD_WEBHOOK": "https://discord.com/api/webhooks/1/abc",
}


def test_load_config_full():
	cfg = load_config(
		["--query", "speedrun", "--game", "42", "--title", "Any%", "--timeout", "1h30m", "--http-timeout", "10"],
		ENV,
	)
	assert cfg.client_id == "cid"
	assert cfg.client_secret == "secret"
	assert cfg.webhook_url == ENV["DISCORD_WEBHOOK"]
	assert cfg.search_filter.query == "speedrun"
	assert cfg.search_filter.game_id == "42"
	assert cfg.search_filter.title_contains == "Any%"
	assert cfg.interval_seconds == 5400
	assert cfg.http_timeout == 10
	assert cfg.log_level == "INFO"


def test_load_config_defaults():
	cfg = load_config(["--query", "speedrun"], ENV)
	assert cfg.search_filter.game_id is None
	assert cfg.search_filter.title_contains is None
	assert cfg.interval_seconds == 30 * 60
	assert cfg.http_timeout is None


def test_load_config_interval_from_env():
	cfg = load_config(["--query", "q"], {**ENV, "STREAMSCOUT_INTERVAL": "90s"})
	assert cfg.interval_seconds == 90


def test_load_config_requires_query():
	with pytest.raises(ConfigurationError, match="missing required query parameter"):
		load_config([], ENV)
	with pytest.raises(ConfigurationError, match="missing required query parameter"):
		load_config(["--query", "   "], ENV)


@pytest.mark.parametrize("name", ["TWITCH_ID", "TWITCH_SECRET", "DISCORD_WEBHOOK"])
def test_load_config_requires_env(name):
	env = {k: v for k, v in ENV.items() if k != name}
	with pytest.raises(ConfigurationError, match=f"missing required {name}"):
		load_config(["--query", "q"], env)


@pytest.mark.parametrize("timeout", ["soon", "0s", "10x", "-5m"])
def test_load_config_rejects_bad_timeout(timeout):
	with pytest.raises(ConfigurationError, match="timeout"):
		load_config(["--query", "q", f"--timeout={timeout}"], ENV)


def test_load_config_rejects_bad_http_timeout():
	with pytest.raises(ConfigurationError, match="http timeout"):
		load_config(["--query", "q", "--http-timeout", "0"], ENV)


def test_load_config_rejects_unknown_log_level():
	with pytest.raises(ConfigurationError, match="log level"):
		load_config(["--query", "q", "--log-level", "chatty"], ENV)


def test_load_config_normalizes_log_level():
	cfg = load_config(["--query", "q", "--log-level", "debug"], ENV)
	assert cfg.log_level == "DEBUG"


@pytest.mark.parametrize(
	"text,seconds",
	[
		("30m", 1800),
		("1h30m", 5400),
		("45s", 45),
		("1m30s", 90),
		("1.5h", 5400),
		("500ms", 0.5),
		("15", 900),
	],
)
def test_parse_duration(text, seconds):
	assert parse_duration(text) == pytest.approx(seconds)


@pytest.mark.parametrize(
	"seconds,text",
	[
		(1800, "30m0s"),
		(5400, "1h30m0s"),
		(3600, "1h0m0s"),
		(45, "45s"),
		(0.5, "0.5s"),
		(59.9999999, "1m0s"),
		(3599.9999999, "1h0m0s"),
	],
)
def test_format_duration(seconds, text):
	assert format_duration(seconds) == text
