from .models import ChannelRecord, SearchFilter
from .exceptions import (
	ConfigurationError,
	CredentialError,
	DeliveryError,
	FetchError,
	StreamScoutError,
)
from .helix import AppTokenProvider
from .fetcher import LiveChannelsFetcher
from .differ import LiveDiff, LiveSetDiffer
from .formatter import format_live_message
from .notifier import WebhookNotifier
from .config import MonitorConfig, load_config
from .monitor import CycleResult, LiveMonitor

__all__ = [
	"ChannelRecord",
	"SearchFilter",
	"ConfigurationError",
	"CredentialError",
	"DeliveryError",
	"FetchError",
	"StreamScoutError",
	"AppTokenProvider",
	"LiveChannelsFetcher",
	"LiveDiff",
	"LiveSetDiffer",
	"format_live_message",
	"WebhookNotifier",
	"MonitorConfig",
	"load_config",
	"CycleResult",
	"LiveMonitor",
]
