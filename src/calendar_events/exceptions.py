"""Exception hierarchy for the calendar events client."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .repeat import ExpansionFailure


class CalendarEventsError(Exception):
    """Base exception for all calendar events errors."""


class ApiConnectionError(CalendarEventsError):
    """Backend is unreachable (network error, DNS, timeout)."""


class ApiResponseError(CalendarEventsError):
    """Backend returned a non-2xx response.

    Attributes:
        status_code: HTTP status code, if available.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EventNotFoundError(ApiResponseError):
    """Backend returned 404 for an event or event list operation."""

    def __init__(self, message: str = "Event not found") -> None:
        super().__init__(message, status_code=404)


class InvalidEventError(CalendarEventsError):
    """An event payload from the backend failed validation."""


class ConfigError(CalendarEventsError):
    """Client configuration failed validation."""


class RepeatExpansionError(CalendarEventsError):
    """A repeating event could not be expanded into instances.

    Attributes:
        failure: The marker returned by the expander.
    """

    def __init__(self, failure: ExpansionFailure) -> None:
        super().__init__(f"Cannot expand repeating event: {failure.description}")
        self.failure = failure
