"""Async client for a calendar events REST API with repeat expansion."""

from .const import __version__
from ._client import EventsApiClient
from .config import ClientConfig, config_from_env, load_config
from .exceptions import (
    ApiConnectionError,
    ApiResponseError,
    CalendarEventsError,
    ConfigError,
    EventNotFoundError,
    InvalidEventError,
    RepeatExpansionError,
)
from .models import Event, RepeatRule, RepeatType
from .operations import EventOperations, Notification, NotificationSeverity
from .repeat import ExpansionFailure, expand_repeat, occurrence_dates

__all__ = [
    "__version__",
    "EventsApiClient",
    "ClientConfig",
    "config_from_env",
    "load_config",
    "ApiConnectionError",
    "ApiResponseError",
    "CalendarEventsError",
    "ConfigError",
    "EventNotFoundError",
    "InvalidEventError",
    "RepeatExpansionError",
    "Event",
    "RepeatRule",
    "RepeatType",
    "EventOperations",
    "Notification",
    "NotificationSeverity",
    "ExpansionFailure",
    "expand_repeat",
    "occurrence_dates",
]
