import os

import pytest

import StreamScout
from functionality.twitch_live.config import MonitorConfig
from functionality.twitch_live.exceptions import CredentialError
from functionality.twitch_live.models import SearchFilter


def make_config() -> MonitorConfig:
	return MonitorConfig(
		client_id="cid",
		client_secret="secret",
		webhook_url="https://discord.example/hook",
		search_filter=SearchFilter(query="q"),
		interval_seconds=60,
	)


def test_main_exits_on_missing_configuration(monkeypatch, tmp_path, capsys):
	monkeypatch.chdir(tmp_path)
	for name in ("TWITCH_ID", "TWITCH_SECRET", "DISCORD_WEBHOOK"):
		monkeypatch.delenv(name, raising=False)
	assert StreamScout.main(["--query", "q"]) == StreamScout.EXIT_CONFIG
	assert "missing required TWITCH_ID" in capsys.readouterr().err


def test_main_reads_dotenv(monkeypatch, tmp_path):
	monkeypatch.chdir(tmp_path)
	for name in ("TWITCH_ID", "TWITCH_SECRET", "DISCORD_WEBHOOK"):
		monkeypatch.delenv(name, raising=False)
	(tmp_path / ".env").write_text(
		"TWITCH_ID=cid\nTWITCH_SECRET=secret\nDISCORD_WEBHOOK=https://discord.example/hook\n",
		encoding="utf-8",
	)
	seen = []

	async def fake_run(config):
		seen.append(config)
		return StreamScout.EXIT_OK

	monkeypatch.setattr(StreamScout, "run", fake_run)
	monkeypatch.setattr(StreamScout, "setup_logging", lambda level: None)
	try:
		assert StreamScout.main(["--query", "q"]) == StreamScout.EXIT_OK
	finally:
		# load_dotenv writes straight into os.environ
		for name in ("TWITCH_ID", "TWITCH_SECRET", "DISCORD_WEBHOOK"):
			os.environ.pop(name, None)
	assert seen[0].client_id == "cid"
	assert seen[0].webhook_url == "https://discord.example/hook"


@pytest.mark.asyncio
async def test_run_exits_on_credential_failure(monkeypatch):
	class FailingTokens:
		def __init__(self, session, client_id, client_secret):
			pass

		async def get_token(self):
			raise CredentialError("invalid client")

	monkeypatch.setattr(StreamScout, "AppTokenProvider", FailingTokens)
	assert await StreamScout.run(make_config()) == StreamScout.EXIT_CREDENTIALS


@pytest.mark.asyncio
async def test_run_starts_and_waits_for_monitor(monkeypatch):
	class OkTokens:
		def __init__(self, session, client_id, client_secret):
			pass

		async def get_token(self):
			return "tok"

	events = []

	class StubMonitor:
		def start(self):
			events.append("start")

		def request_stop(self):
			events.append("stop")

		async def wait(self):
			events.append("wait")

	monkeypatch.setattr(StreamScout, "AppTokenProvider", OkTokens)
	monkeypatch.setattr(StreamScout.LiveMonitor, "from_config", classmethod(lambda cls, config, session, tokens: StubMonitor()))
	assert await StreamScout.run(make_config()) == StreamScout.EXIT_OK
	assert events == ["start", "wait"]
