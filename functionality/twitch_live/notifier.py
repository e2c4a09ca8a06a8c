from __future__ import annotations

"""Notification delivery to a Discord webhook.

Posts the formatted message once per call; retrying is left to the caller.
"""

import asyncio
import json
import logging

import aiohttp

from .exceptions import DeliveryError

log = logging.getLogger(__name__)


class WebhookNotifier:
	"""Sends plain-text messages to a Discord webhook URL."""

	def __init__(self, session: aiohttp.ClientSession, url: str) -> None:
		self.session = session
		self.url = url

	async def deliver(self, message: str) -> None:
		"""POST {"content": message}; anything but 204 raises DeliveryError."""
		if not message:
			raise ValueError("refusing to deliver an empty message")
		try:
			payload = json.dumps({"content": message}, ensure_ascii=False)
		except (TypeError, ValueError) as exc:
			raise DeliveryError("serialize", f"failed to marshal message. {exc}") from exc

		headers = {"Content-Type": "application/json"}
		try:
			async with self.session.post(self.url, data=payload.encode("utf-8"), headers=headers) as resp:
				status = resp.status
				if status != 204:
					try:
						text = await resp.text()
					except (aiohttp.ClientError, asyncio.TimeoutError):
						text = ""
					raise DeliveryError(
						"status",
						f"{status} {resp.reason or ''} {text}".strip(),
						status=status,
					)
		except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
			raise DeliveryError("request", f"failed to do request. {exc!r}") from exc
		log.debug("Webhook accepted %d characters", len(message))
