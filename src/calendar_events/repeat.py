"""Expansion of repeating events into dated instances.

Stepping follows RFC 5545 as implemented by ``dateutil.rrule``: a monthly
or yearly candidate whose day does not exist in the target month (Jan 31
into February, Feb 29 into a common year) produces no instance rather than
being clamped or rolled into the next month. Iteration starts at the seed
date and stops once the candidate passes the inclusive end date.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import replace
from datetime import date, datetime, time

from dateutil.rrule import DAILY, MONTHLY, WEEKLY, YEARLY, rrule

from .models import Event, RepeatRule, RepeatType

_FREQUENCIES: dict[RepeatType, int] = {
    RepeatType.DAILY: DAILY,
    RepeatType.WEEKLY: WEEKLY,
    RepeatType.MONTHLY: MONTHLY,
    RepeatType.YEARLY: YEARLY,
}


class ExpansionFailure(enum.Enum):
    """Why a repeat rule could not be expanded."""

    MISSING_END_DATE = "missing_end_date"
    UNKNOWN_REPEAT_KIND = "unknown_repeat_kind"
    INVALID_INTERVAL = "invalid_interval"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    ExpansionFailure.MISSING_END_DATE: "a repeating event needs an end date",
    ExpansionFailure.UNKNOWN_REPEAT_KIND: "unrecognized repeat type",
    ExpansionFailure.INVALID_INTERVAL: "repeat interval must be at least 1",
}


def is_repeating(event: Event) -> bool:
    """Whether saving ``event`` should produce a series."""
    return event.repeat.is_repeating


def occurrence_dates(
    start: date,
    kind: RepeatType,
    interval: int,
    until: date,
) -> Iterator[date]:
    """Yield the dates of a series from ``start`` up to ``until`` inclusive.

    ``kind`` must not be ``RepeatType.NONE``.
    """
    if start > until:
        return
    rule = rrule(
        _FREQUENCIES[kind],
        dtstart=datetime.combine(start, time.min),
        interval=interval,
        until=datetime.combine(until, time.min),
    )
    for occurrence in rule:
        yield occurrence.date()


def expand_repeat(
    seed: Event,
    rule: RepeatRule | None = None,
) -> list[Event] | ExpansionFailure:
    """Expand ``seed`` into one instance per occurrence of ``rule``.

    Args:
        seed: The first, user-authored instance of the series.
        rule: The repeat rule; defaults to ``seed.repeat``.

    Returns:
        The instances in increasing date order, each a copy of ``seed`` with
        only ``date`` changed. A ``none`` rule yields ``[seed]``; a seed after
        the end date yields ``[]``. An ``ExpansionFailure`` is returned,
        never raised, for an unknown rule type, a missing end date or an
        interval below 1.
    """
    if rule is None:
        rule = seed.repeat

    try:
        kind = RepeatType(rule.type)
    except ValueError:
        return ExpansionFailure.UNKNOWN_REPEAT_KIND

    if kind is RepeatType.NONE:
        return [seed]
    if rule.end_date is None:
        return ExpansionFailure.MISSING_END_DATE
    if rule.interval < 1:
        return ExpansionFailure.INVALID_INTERVAL

    return [
        replace(seed, date=day)
        for day in occurrence_dates(seed.date, kind, rule.interval, rule.end_date)
    ]
