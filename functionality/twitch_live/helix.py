"""Minimal Twitch Helix client for StreamScout.

Provides app access token acquisition via the client-credentials flow and the
channel search call used to build live snapshots.
"""

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from .exceptions import CredentialError


TOKEN_URL = "https://id.twitch.tv/oauth2/token"
HELIX_SEARCH_URL = "https://api.twitch.tv/helix/search/channels"
# Largest page Helix accepts for search/channels
MAX_PAGE_SIZE = 100


class HelixError(RuntimeError):
	"""Raised when Helix answers with an error status or error body."""

	def __init__(self, message: str, *, status: Optional[int] = None) -> None:
		super().__init__(message)
		self.status = status


async def request_app_access_token(
	session: aiohttp.ClientSession,
	client_id: str,
	client_secret: str,
) -> str:
	"""Exchange client credentials for an app access token."""
	payload = {
		"client_id": client_id,
		"client_secret": client_secret,
		"grant_type": "client_credentials",
	}
	try:
		async with session.post(TOKEN_URL, data=payload) as r:
			txt = await r.text()
			if r.status >= 400:
				raise CredentialError(f"{TOKEN_URL} -> {r.status} {txt}")
			try:
				data = await r.json(content_type=None)
			except ValueError as exc:
				raise CredentialError(f"invalid JSON from token endpoint: {exc}") from exc
	except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
		raise CredentialError(f"{TOKEN_URL} -> {exc!r}") from exc
	token = data.get("access_token") if isinstance(data, dict) else None
	if not token:
		raise CredentialError("token endpoint response has no access_token")
	return str(token)


class AppTokenProvider:
	"""Caches an app access token and re-acquires it after invalidation."""

	def __init__(self, session: aiohttp.ClientSession, client_id: str, client_secret: str) -> None:
		self.session = session
		self.client_id = client_id
		self._client_secret = client_secret
		self._token: Optional[str] = None

	async def get_token(self) -> str:
		if self._token is None:
			self._token = await request_app_access_token(self.session, self.client_id, self._client_secret)
		return self._token

	def invalidate(self) -> None:
		"""Forget the cached token so the next call fetches a new one."""
		self._token = None


async def search_channels(
	session: aiohttp.ClientSession,
	client_id: str,
	token: str,
	query: str,
	*,
	live_only: bool = True,
	first: int = MAX_PAGE_SIZE,
) -> Dict[str, Any]:
	"""GET helix/search/channels and return the decoded JSON payload.

	Raises HelixError for error statuses, non-JSON bodies and payloads that
	carry a non-empty error field. Transport errors propagate as aiohttp errors.
	"""
	params = {
		"query": query,
		"live_only": "true" if live_only else "false",
		"first": str(first),
	}
	headers = {
		"Client-Id": client_id,
		"Authorization": f"Bearer {token}",
		"Accept": "application/json",
	}
	async with session.get(HELIX_SEARCH_URL, headers=headers, params=params) as resp:
		text = await resp.text()
		try:
			payload = await resp.json(content_type=None)
		except ValueError:
			payload = None
		status = resp.status

	if status >= 400:
		detail = text
		if isinstance(payload, dict):
			detail = str(payload.get("message") or payload.get("error") or text)
		raise HelixError(f"{status} {detail or 'Failed to search channels'}", status=status)
	if not isinstance(payload, dict):
		raise HelixError(f"Invalid JSON from Helix search/channels: {text[:200]!r}", status=status)
	error = payload.get("error")
	if error:
		raise HelixError(str(payload.get("message") or error), status=payload.get("status") or status)
	return payload
