from __future__ import annotations

"""Snapshot fetching for the Twitch live monitor.

LiveChannelsFetcher turns a Helix channel search into the list of
ChannelRecord objects that currently satisfy the configured SearchFilter.
"""

import asyncio
import logging

import aiohttp

from .exceptions import CredentialError, FetchError
from .helix import MAX_PAGE_SIZE, AppTokenProvider, HelixError, search_channels
from .models import ChannelRecord, SearchFilter

log = logging.getLogger(__name__)


class LiveChannelsFetcher:
	"""Fetches the live channels matching a filter."""

	def __init__(self, session: aiohttp.ClientSession, tokens: AppTokenProvider) -> None:
		self.session = session
		self.tokens = tokens

	async def fetch(self, search_filter: SearchFilter) -> list[ChannelRecord]:
		"""Return every live channel that passes the filter.

		Either the whole snapshot is returned or FetchError is raised; a
		response with a malformed item is rejected rather than partially used.
		"""
		try:
			token = await self.tokens.get_token()
		except CredentialError as exc:
			raise FetchError(f"failed to acquire app access token. {exc}") from exc

		try:
			payload = await search_channels(
				self.session,
				self.tokens.client_id,
				token,
				search_filter.query,
				live_only=True,
				first=MAX_PAGE_SIZE,
			)
		except HelixError as exc:
			if exc.status == 401:
				# Token expired or revoked; pick up a new one next cycle
				log.warning("Helix rejected the app access token; it will be renewed")
				self.tokens.invalidate()
			raise FetchError(f"failed to search for channels. {exc}") from exc
		except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
			raise FetchError(f"failed to search for channels. {exc!r}") from exc

		data = payload.get("data")
		if not isinstance(data, list):
			raise FetchError("malformed search response: 'data' is not a list")

		out: list[ChannelRecord] = []
		for item in data:
			if not isinstance(item, dict) or not item.get("id"):
				raise FetchError(f"malformed search response item: {item!r}")
			game_id = str(item.get("game_id") or "")
			title = str(item.get("title") or "")
			if not search_filter.matches(game_id, title):
				continue
			out.append(ChannelRecord.from_helix(item))
		return out
