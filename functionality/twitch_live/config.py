from __future__ import annotations

"""Startup configuration for StreamScout.

Secrets come from the environment (a .env file is loaded by the entrypoint
when present); the search itself is described by command-line flags.
"""

import argparse
import logging
import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from .exceptions import ConfigurationError
from .models import SearchFilter

DEFAULT_INTERVAL = "30m"

_BARE_NUMBER = re.compile(r"\d+(?:\.\d+)?")
_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?|\.\d+)(ns|us|µs|ms|s|m|h)")
_UNIT_SECONDS = {
	"ns": 1e-9,
	"us": 1e-6,
	"µs": 1e-6,
	"ms": 1e-3,
	"s": 1.0,
	"m": 60.0,
	"h": 3600.0,
}


def parse_duration(value: str) -> float:
	"""Parse a duration such as "30m", "1h30m" or "45s" into seconds.

	A bare number is read as minutes.
	"""
	s = value.strip()
	if not s:
		raise ValueError("empty duration")
	if _BARE_NUMBER.fullmatch(s):
		return float(s) * 60.0
	total = 0.0
	pos = 0
	for m in _DURATION_PART.finditer(s):
		if m.start() != pos:
			break
		total += float(m.group(1)) * _UNIT_SECONDS[m.group(2)]
		pos = m.end()
	if pos != len(s):
		raise ValueError(f"invalid duration {value!r}")
	return total


def format_duration(seconds: float) -> str:
	"""Render seconds as e.g. 30m0s or 1h5m0s."""
	seconds = round(seconds, 6)
	hours = int(seconds // 3600)
	minutes = int(seconds % 3600 // 60)
	rest = round(seconds - hours * 3600 - minutes * 60, 6)
	text = f"{rest:g}s"
	if hours:
		return f"{hours}h{minutes}m{text}"
	if minutes:
		return f"{minutes}m{text}"
	return text


@dataclass(frozen=True)
class MonitorConfig:
	"""Validated settings for one monitor run."""

	client_id: str
	client_secret: str
	webhook_url: str
	search_filter: SearchFilter
	interval_seconds: float = 30 * 60.0
	http_timeout: Optional[float] = None
	log_level: str = "INFO"


def build_parser(environ: Mapping[str, str]) -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="streamscout",
		description="Announce newly live Twitch channels to a Discord webhook.",
	)
	parser.add_argument("--query", default="", help="search query")
	parser.add_argument("--game", default="", help="game id to search for")
	parser.add_argument("--title", default="", help="string to find in title")
	parser.add_argument(
		"--timeout",
		default=environ.get("STREAMSCOUT_INTERVAL") or DEFAULT_INTERVAL,
		help="time to wait before searching again (e.g. 30m, 1h, 90s)",
	)
	parser.add_argument(
		"--http-timeout",
		type=float,
		default=None,
		help="total timeout in seconds for each HTTP request",
	)
	parser.add_argument(
		"--log-level",
		default=environ.get("STREAMSCOUT_LOG_LEVEL") or "INFO",
		help="logging level (DEBUG, INFO, WARNING, ...)",
	)
	return parser


def _require(environ: Mapping[str, str], name: str) -> str:
	value = (environ.get(name) or "").strip()
	if not value:
		raise ConfigurationError(f"missing required {name}")
	return value


def load_config(
	argv: Optional[Sequence[str]] = None,
	environ: Optional[Mapping[str, str]] = None,
) -> MonitorConfig:
	"""Build a MonitorConfig from flags and environment.

	Raises ConfigurationError naming the first missing or invalid value.
	"""
	env = os.environ if environ is None else environ
	args = build_parser(env).parse_args(argv)

	query = (args.query or "").strip()
	if not query:
		raise ConfigurationError("missing required query parameter")

	client_id = _require(env, "TWITCH_ID")
	client_secret = _require(env, "TWITCH_SECRET")
	webhook_url = _require(env, "DISCORD_WEBHOOK")

	try:
		interval = parse_duration(str(args.timeout))
	except ValueError as exc:
		raise ConfigurationError(f"invalid timeout: {exc}") from exc
	if interval <= 0:
		raise ConfigurationError("timeout must be positive")

	if args.http_timeout is not None and args.http_timeout <= 0:
		raise ConfigurationError("http timeout must be positive")

	log_level = str(args.log_level).strip().upper()
	if not isinstance(logging.getLevelName(log_level), int):
		raise ConfigurationError(f"unknown log level {args.log_level!r}")

	return MonitorConfig(
		client_id=client_id,
		client_secret=client_secret,
		webhook_url=webhook_url,
		search_filter=SearchFilter(
			query=query,
			game_id=(args.game or "").strip() or None,
			title_contains=args.title or None,
		),
		interval_seconds=interval,
		http_timeout=args.http_timeout,
		log_level=log_level,
	)
