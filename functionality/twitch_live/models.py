from __future__ import annotations

"""Data models used by the Twitch live monitor.

Simple immutable dataclasses shared by fetch, diff and notification code.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class ChannelRecord:
	"""Condensed representation of a live Twitch channel."""
	id: str
	user: str
	title: str

	@classmethod
	def from_helix(cls, item: dict[str, Any]) -> "ChannelRecord":
		"""Build a record from a Helix search/channels item."""
		return cls(
			id=str(item.get("id") or ""),
			user=str(item.get("broadcaster_login") or ""),
			title=str(item.get("title") or ""),
		)


@dataclass(frozen=True, slots=True)
class SearchFilter:
	"""What to search for and how to narrow down the results.

	query is sent to Twitch; game_id (exact) and title_contains
	(case-insensitive) are applied locally since Helix cannot filter on them.
	"""
	query: str
	game_id: Optional[str] = None
	title_contains: Optional[str] = None

	def matches(self, game_id: str, title: str) -> bool:
		if self.game_id and self.game_id != game_id:
			return False
		if self.title_contains and self.title_contains.lower() not in title.lower():
			return False
		return True
