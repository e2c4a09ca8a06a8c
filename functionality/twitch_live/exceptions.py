"""Exception types raised by the Twitch live monitor."""

from typing import Optional


class StreamScoutError(Exception):
	"""Base class for all StreamScout errors."""


class ConfigurationError(StreamScoutError):
	"""Raised when required startup configuration is missing or invalid."""


class CredentialError(StreamScoutError):
	"""Raised when a Twitch app access token cannot be acquired."""


class FetchError(StreamScoutError):
	"""Raised when the live channel snapshot cannot be obtained."""


class DeliveryError(StreamScoutError):
	"""Raised when a webhook notification is not accepted.

	step names the stage that failed (serialize, request or status).
	"""

	def __init__(self, step: str, message: str, *, status: Optional[int] = None) -> None:
		super().__init__(f"{step}: {message}")
		self.step = step
		self.status = status
