from __future__ import annotations

"""Message text helpers for presenting newly live channels."""

from typing import Iterable

from .models import ChannelRecord

TWITCH_URL = "https://twitch.tv"


def format_channel_line(c: ChannelRecord, *, url_prefix: str = TWITCH_URL) -> str:
	return f"{url_prefix.rstrip('/')}/{c.user} is streaming: {c.title}".strip()


def format_live_message(channels: Iterable[ChannelRecord], *, url_prefix: str = TWITCH_URL) -> str:
	"""Render one line per channel, joined with newlines.

	An empty input gives an empty string, which callers treat as nothing to
	send.
	"""
	lines = [format_channel_line(c, url_prefix=url_prefix) for c in channels]
	return "\n".join(lines).strip()
