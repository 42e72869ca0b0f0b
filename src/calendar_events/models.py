"""Data models for calendar events and their repeat rules."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, time, timedelta
from typing import Any

import voluptuous as vol

from ._serialization import (
    format_date,
    format_time,
    minutes_to_timedelta,
    parse_bound_date,
    parse_time,
    timedelta_to_minutes,
)
from .const import DEFAULT_NOTIFICATION_MINUTES
from .exceptions import InvalidEventError


class RepeatType(str, enum.Enum):
    """How a series recurs. ``NONE`` marks a standalone event."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


_REPEAT_SCHEMA = vol.Schema(
    {
        vol.Optional("type", default=RepeatType.NONE.value): str,
        vol.Optional("interval", default=0): vol.Coerce(int),
        vol.Optional("end_date", default=None): vol.Any(
            None, "", vol.All(str, parse_bound_date)
        ),
        vol.Optional("id", default=None): vol.Any(None, vol.Coerce(str)),
    },
    extra=vol.ALLOW_EXTRA,
)

_EVENT_SCHEMA = vol.Schema(
    {
        vol.Optional("id", default=None): vol.Any(None, vol.Coerce(str)),
        vol.Required("title"): str,
        vol.Required("date"): vol.All(str, date.fromisoformat),
        vol.Required("start_time"): vol.All(str, parse_time),
        vol.Required("end_time"): vol.All(str, parse_time),
        vol.Optional("description", default=""): vol.Any(None, str),
        vol.Optional("location", default=""): vol.Any(None, str),
        vol.Optional("category", default=""): vol.Any(None, str),
        vol.Optional("repeat", default=None): vol.Any(None, dict),
        vol.Optional(
            "notification_time", default=DEFAULT_NOTIFICATION_MINUTES
        ): vol.All(vol.Coerce(int), vol.Range(min=0)),
    },
    extra=vol.ALLOW_EXTRA,
)


@dataclass(frozen=True)
class RepeatRule:
    """Repeat rule attached to every instance of a series.

    ``type`` is a ``RepeatType`` except when a backend payload carries a tag
    outside the known set; the raw string is kept so expansion can report it.
    """

    type: RepeatType | str = RepeatType.NONE
    interval: int = 0
    end_date: date | None = None  # Inclusive
    id: str | None = None  # Series id, assigned by the backend

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> RepeatRule:
        """Construct from a decamelized ``repeat`` object.

        Raises:
            InvalidEventError: If the payload fails validation.
        """
        try:
            fields = _REPEAT_SCHEMA(data)
        except vol.Invalid as err:
            raise InvalidEventError(f"Invalid repeat rule: {err}") from err
        return cls(
            type=_parse_repeat_type(fields["type"]),
            interval=fields["interval"],
            end_date=fields["end_date"] or None,
            id=fields["id"],
        )

    @property
    def kind(self) -> str:
        """The rule tag as it appears on the wire."""
        return self.type.value if isinstance(self.type, RepeatType) else self.type

    @property
    def is_repeating(self) -> bool:
        return self.kind != RepeatType.NONE.value

    def to_api_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"type": self.kind, "interval": self.interval}
        if self.end_date is not None:
            body["end_date"] = format_date(self.end_date)
        if self.id is not None:
            body["id"] = self.id
        return body


@dataclass(frozen=True)
class Event:
    """One concrete, dated calendar event.

    Instances of one series share every field except ``date`` (and ``id``
    once persisted). Use ``dataclasses.replace()`` to derive copies.
    """

    title: str
    date: date
    start_time: time
    end_time: time
    description: str = ""
    location: str = ""
    category: str = ""
    repeat: RepeatRule = field(default_factory=RepeatRule)
    notification_time: timedelta = timedelta(minutes=DEFAULT_NOTIFICATION_MINUTES)
    id: str | None = None  # None until persisted

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Event:
        """Construct from a decamelized API response dict.

        Raises:
            InvalidEventError: If the payload fails validation.
        """
        try:
            fields = _EVENT_SCHEMA(data)
        except vol.Invalid as err:
            raise InvalidEventError(f"Invalid event payload: {err}") from err
        return cls(
            id=fields["id"],
            title=fields["title"],
            date=fields["date"],
            start_time=fields["start_time"],
            end_time=fields["end_time"],
            description=fields["description"] or "",
            location=fields["location"] or "",
            category=fields["category"] or "",
            repeat=RepeatRule.from_api_response(fields["repeat"] or {}),
            notification_time=minutes_to_timedelta(fields["notification_time"]),
        )

    @property
    def is_repeating(self) -> bool:
        """Whether this event carries a repeat rule other than ``none``."""
        return self.repeat.is_repeating

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to a snake_case dict for a request body.

        The id is omitted for events that have not been persisted yet.
        """
        body: dict[str, Any] = {
            "title": self.title,
            "date": format_date(self.date),
            "start_time": format_time(self.start_time),
            "end_time": format_time(self.end_time),
            "description": self.description,
            "location": self.location,
            "category": self.category,
            "repeat": self.repeat.to_api_dict(),
            "notification_time": timedelta_to_minutes(self.notification_time),
        }
        if self.id is not None:
            body["id"] = self.id
        return body


def _parse_repeat_type(value: str) -> RepeatType | str:
    """Map a wire tag onto ``RepeatType``, keeping unknown tags verbatim."""
    try:
        return RepeatType(value)
    except ValueError:
        return value
