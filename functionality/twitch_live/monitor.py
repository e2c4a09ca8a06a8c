from __future__ import annotations

"""Background monitoring loop for Twitch go-live announcements."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import aiohttp

from .config import MonitorConfig, format_duration
from .differ import LiveDiff, LiveSetDiffer
from .exceptions import DeliveryError, FetchError
from .fetcher import LiveChannelsFetcher
from .formatter import TWITCH_URL, format_live_message
from .helix import AppTokenProvider
from .models import SearchFilter
from .notifier import WebhookNotifier

log = logging.getLogger(__name__)


@dataclass
class CycleResult:
	"""Outcome of a single poll cycle."""

	fetched: bool
	diff: Optional[LiveDiff] = None
	delivered: bool = False
	error: Optional[str] = None


class LiveMonitor:
	"""Periodically searches Twitch and announces channels that went live.

	live_ids holds the channel ids seen live in the last successful cycle. It
	is replaced only after a fetch succeeds, and a failed delivery does not
	roll it back, so each live session is announced at most once.
	"""

	def __init__(
		self,
		fetcher: LiveChannelsFetcher,
		notifier: WebhookNotifier,
		search_filter: SearchFilter,
		*,
		interval_seconds: float = 30 * 60.0,
		url_prefix: str = TWITCH_URL,
	) -> None:
		self.fetcher = fetcher
		self.notifier = notifier
		self.search_filter = search_filter
		self.interval_seconds = interval_seconds
		self.url_prefix = url_prefix
		self.differ = LiveSetDiffer()
		self.live_ids: frozenset[str] = frozenset()
		self._task: Optional[asyncio.Task] = None

	@classmethod
	def from_config(
		cls,
		config: MonitorConfig,
		session: aiohttp.ClientSession,
		tokens: AppTokenProvider,
	) -> "LiveMonitor":
		return cls(
			LiveChannelsFetcher(session, tokens),
			WebhookNotifier(session, config.webhook_url),
			config.search_filter,
			interval_seconds=config.interval_seconds,
		)

	def start(self) -> None:
		"""Start the monitoring task if not already running."""
		if self._task is None or self._task.done():
			self._task = asyncio.create_task(self._run_loop(), name="live-monitor")

	def request_stop(self) -> None:
		"""Cancel the monitoring task without waiting (safe from signal handlers)."""
		if self._task and not self._task.done():
			self._task.cancel()

	async def stop(self) -> None:
		"""Cancel and await the monitoring task if running."""
		self.request_stop()
		await self.wait()

	async def wait(self) -> None:
		"""Block until the monitoring task ends."""
		if self._task is None:
			return
		try:
			await self._task
		except asyncio.CancelledError:
			if not self._task.cancelled():
				raise

	async def run_cycle(self) -> CycleResult:
		"""Fetch, diff, format and deliver once."""
		log.info("searching for channels")
		try:
			snapshot = await self.fetcher.fetch(self.search_filter)
		except FetchError as exc:
			log.error("failed to get active channels. %s", exc)
			return CycleResult(fetched=False, error=str(exc))

		diff, self.live_ids = self.differ.diff(self.live_ids, snapshot)
		log.info(
			"%d channel(s) live, %d newly live, %d went offline",
			len(self.live_ids),
			len(diff.went_live),
			len(diff.went_offline),
		)
		if diff.went_offline:
			log.debug("went offline: %s", ", ".join(diff.went_offline))

		message = format_live_message(diff.went_live, url_prefix=self.url_prefix)
		if not message:
			return CycleResult(fetched=True, diff=diff)
		try:
			await self.notifier.deliver(message)
		except DeliveryError as exc:
			log.error("failed to send message to discord. %s", exc)
			return CycleResult(fetched=True, diff=diff, error=str(exc))
		log.info("announced %d channel(s)", len(diff.went_live))
		return CycleResult(fetched=True, diff=diff, delivered=True)

	async def _run_loop(self) -> None:
		"""Main loop: fetch → diff → notify → sleep."""
		while True:
			try:
				await self.run_cycle()
			except Exception:
				# Keep polling; live_ids is only replaced after a successful fetch
				log.exception("unexpected error during poll cycle")
			log.info("sleeping for %s", format_duration(self.interval_seconds))
			await asyncio.sleep(self.interval_seconds)
