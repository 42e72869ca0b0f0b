"""Wire format helpers: JSON key casing and date/time codecs."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Any, Callable

from dateutil.relativedelta import relativedelta

from .const import DATE_FORMAT, TIME_FORMAT

_UPPER = re.compile(r"(?<=[a-z0-9])([A-Z])")
_UNDERSCORE_LOWER = re.compile(r"_([a-z0-9])")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def _snake(key: str) -> str:
    return _UPPER.sub(r"_\1", key).lower()


def _camel(key: str) -> str:
    return _UNDERSCORE_LOWER.sub(lambda m: m.group(1).upper(), key)


def _rekey(data: Any, convert: Callable[[str], str]) -> Any:
    if isinstance(data, dict):
        return {convert(k): _rekey(v, convert) for k, v in data.items()}
    if isinstance(data, list):
        return [_rekey(item, convert) for item in data]
    return data


def decamelize(data: Any) -> Any:
    """Recursively rename ``startTime``-style keys to ``start_time``."""
    return _rekey(data, _snake)


def camelize(data: Any) -> Any:
    """Recursively rename ``start_time``-style keys to ``startTime``."""
    return _rekey(data, _camel)


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def format_time(value: time) -> str:
    return value.strftime(TIME_FORMAT)


def parse_time(value: str) -> time:
    """Parse a wall-clock ``HH:MM`` string.

    Seconds are rejected since ``format_time`` could not write them back.
    """
    return datetime.strptime(value, TIME_FORMAT).time()


def parse_bound_date(value: str) -> date:
    """Parse an inclusive upper-bound date, tolerating overlong days.

    Forms send bounds such as ``2030-02-29``. As an inclusive bound that is
    the same as the last day of the month, so the day is clamped to the
    month length instead of being rejected.

    Raises:
        ValueError: If the string is not ``YYYY-MM-DD`` or the month/day
            are out of range.
    """
    match = _ISO_DATE.match(value)
    if match is None:
        raise ValueError(f"Invalid date: {value!r}")
    year, month, day = (int(part) for part in match.groups())
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise ValueError(f"Invalid date: {value!r}")
    return date(year, month, 1) + relativedelta(day=day)


def minutes_to_timedelta(value: int) -> timedelta:
    return timedelta(minutes=value)


def timedelta_to_minutes(value: timedelta) -> int:
    return int(value.total_seconds() // 60)
