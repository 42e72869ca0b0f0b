"""Constants for the calendar events client."""

from typing import Final

__version__ = "0.1.0"

EVENTS_ENDPOINT: Final = "/api/events"
EVENT_DETAIL_ENDPOINT: Final = "/api/events/{event_id}"
EVENTS_LIST_ENDPOINT: Final = "/api/events-list"

CONF_BASE_URL: Final = "base_url"
CONF_REQUEST_TIMEOUT: Final = "request_timeout"

ENV_BASE_URL: Final = "CALENDAR_EVENTS_BASE_URL"
ENV_REQUEST_TIMEOUT: Final = "CALENDAR_EVENTS_REQUEST_TIMEOUT"

DEFAULT_BASE_URL: Final = "http://localhost:3000"
DEFAULT_REQUEST_TIMEOUT_SECONDS: Final = 10.0

DEFAULT_NOTIFICATION_MINUTES: Final = 10

DATE_FORMAT: Final = "%Y-%m-%d"
TIME_FORMAT: Final = "%H:%M"
