from __future__ import annotations

"""Diffing logic for live channel snapshots.

Tracks which channels went live since the previous poll. The set of known
live ids is always rebuilt from the latest snapshot, so channels that went
offline drop out and are announced again when they come back.
"""

from dataclasses import dataclass, field
from typing import Iterable

from .models import ChannelRecord


@dataclass
class LiveDiff:
	"""Represents changes between two live channel snapshots."""

	went_live: list[ChannelRecord] = field(default_factory=list)
	went_offline: list[str] = field(default_factory=list)

	def __bool__(self) -> bool:
		return bool(self.went_live)


class LiveSetDiffer:
	"""Compares the previously known live ids with a fresh snapshot."""

	def diff(
		self,
		previous: Iterable[str],
		snapshot: list[ChannelRecord],
	) -> tuple[LiveDiff, frozenset[str]]:
		"""Return the diff and the live id set that replaces previous."""
		prev_ids = frozenset(previous)
		current_ids = frozenset(c.id for c in snapshot)
		went_live: list[ChannelRecord] = []
		seen: set[str] = set()
		for c in snapshot:
			if c.id in prev_ids or c.id in seen:
				continue
			seen.add(c.id)
			went_live.append(c)
		went_offline = sorted(prev_ids - current_ids)
		return LiveDiff(went_live=went_live, went_offline=went_offline), current_ids
