import os
import sys


# Ensure project root is on sys.path so `functionality.*` and `StreamScout` import
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
	sys.path.insert(0, ROOT)

import pytest

from functionality.twitch_live.models import ChannelRecord


@pytest.fixture
def make_channel():
	def factory(cid: str, user: str | None = None, title: str = "Playing X") -> ChannelRecord:
		return ChannelRecord(id=cid, user=user or f"user_{cid}", title=title)

	return factory
