"""StreamScout — Twitch go-live notifier entrypoint.

Searches Twitch on a fixed interval and posts newly live channels to a
Discord webhook. Secrets are read from environment variables, loaded from
.env when present; the search is described with command-line flags.
"""

import os
import sys
import signal
import asyncio
import logging
from typing import Optional, Sequence

import aiohttp
from dotenv import load_dotenv

# Optional: use uvloop on UNIX-like systems for better event loop performance
if os.name != "nt":
	try:
		import uvloop  # type: ignore

		asyncio.set_event_loop_policy(uvloop.EventLoopPolicy())
	except Exception:
		# If uvloop isn't available, continue with default asyncio loop
		pass

from functionality.twitch_live import (
	AppTokenProvider,
	ConfigurationError,
	CredentialError,
	LiveMonitor,
	MonitorConfig,
	load_config,
)
from functionality.twitch_live.config import format_duration

log = logging.getLogger("streamscout")

EXIT_OK = 0
EXIT_CREDENTIALS = 1
EXIT_CONFIG = 2


def setup_logging(level: str) -> None:
	logging.basicConfig(
		level=getattr(logging, level, logging.INFO),
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)


async def run(config: MonitorConfig) -> int:
	"""Acquire credentials, then poll until cancelled by a signal."""
	session_kwargs = {}
	if config.http_timeout:
		session_kwargs["timeout"] = aiohttp.ClientTimeout(total=config.http_timeout)
	async with aiohttp.ClientSession(**session_kwargs) as session:
		tokens = AppTokenProvider(session, config.client_id, config.client_secret)
		try:
			await tokens.get_token()
		except CredentialError as exc:
			log.critical("failed to acquire Twitch app access token. %s", exc)
			return EXIT_CREDENTIALS

		monitor = LiveMonitor.from_config(config, session, tokens)
		loop = asyncio.get_running_loop()
		for sig in (signal.SIGINT, signal.SIGTERM):
			try:
				loop.add_signal_handler(sig, monitor.request_stop)
			except (NotImplementedError, RuntimeError):
				# Windows event loops have no signal handler support
				pass
		monitor.start()
		log.info(
			"StreamScout ready. Searching for %r every %s",
			config.search_filter.query,
			format_duration(config.interval_seconds),
		)
		await monitor.wait()
		log.info("StreamScout stopped")
	return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
	load_dotenv(".env")
	try:
		config = load_config(argv)
	except ConfigurationError as exc:
		print(f"streamscout: {exc}", file=sys.stderr)
		return EXIT_CONFIG
	setup_logging(config.log_level)
	try:
		return asyncio.run(run(config))
	except KeyboardInterrupt:
		return EXIT_OK


if __name__ == "__main__":
	sys.exit(main())
