"""Event operations: keeps the local event list in sync with the backend."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ._client import EventsApiClient
from .exceptions import CalendarEventsError, RepeatExpansionError
from .models import Event
from .repeat import ExpansionFailure, expand_repeat, is_repeating

_LOGGER = logging.getLogger(__name__)

MSG_LOADED = "Events loaded"
MSG_LOAD_FAILED = "Failed to load events"
MSG_ADDED = "Event added"
MSG_UPDATED = "Event updated"
MSG_SERIES_CREATED = "Repeating events created"
MSG_BULK_UPDATED = "Events updated"
MSG_SAVE_FAILED = "Failed to save event"
MSG_DELETED = "Event deleted"
MSG_BULK_DELETED = "Events deleted"
MSG_DELETE_FAILED = "Failed to delete event"


class NotificationSeverity(str, enum.Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A user-facing message about the outcome of an operation."""

    message: str
    severity: NotificationSeverity


Notifier = Callable[[Notification], None]

_LOG_LEVELS = {
    NotificationSeverity.SUCCESS: logging.INFO,
    NotificationSeverity.INFO: logging.INFO,
    NotificationSeverity.ERROR: logging.ERROR,
}


def log_notification(notification: Notification) -> None:
    """Default notifier: write the message to this module's logger."""
    _LOGGER.log(_LOG_LEVELS[notification.severity], notification.message)


class EventOperations:
    """Fetches, saves and deletes events and reports each outcome.

    Holds the last fetched list of events. Every mutating operation is
    followed by a refetch on success; on failure a single error
    notification is emitted and the held list is left untouched.

    Saving a new event whose repeat rule is not ``none`` expands it into a
    series and submits all instances in one bulk request.
    """

    def __init__(
        self,
        client: EventsApiClient,
        *,
        notify: Notifier | None = None,
        on_save: Callable[[], None] | None = None,
    ) -> None:
        self._client = client
        self._notify = notify or log_notification
        self._on_save = on_save
        self._events: list[Event] = []

    @property
    def events(self) -> list[Event]:
        return list(self._events)

    async def async_initialize(self) -> None:
        """Load the initial event list."""
        if await self.async_fetch_events():
            self._emit(MSG_LOADED, NotificationSeverity.INFO)

    async def async_fetch_events(self) -> bool:
        """Replace the held events with the backend's current list."""
        try:
            self._events = await self._client.async_get_events()
        except CalendarEventsError as err:
            _LOGGER.warning("Error fetching events: %s", err)
            self._emit(MSG_LOAD_FAILED, NotificationSeverity.ERROR)
            return False
        return True

    async def async_save_event(self, event: Event, *, editing: bool = False) -> bool:
        """Create or update ``event``.

        Args:
            event: The event to store. When not ``editing`` and its repeat
                rule is not ``none``, it is the seed of a new series.
            editing: Update the stored event with ``event.id`` instead of
                creating a new one.

        Returns:
            True if the backend accepted the change.
        """
        try:
            if not editing and is_repeating(event):
                instances = _expand_or_raise(event)
                await self._client.async_create_events(instances)
                message = MSG_SERIES_CREATED
            elif editing:
                if event.id is None:
                    raise CalendarEventsError("Cannot update an event without an id")
                await self._client.async_update_event(event.id, event)
                message = MSG_UPDATED
            else:
                await self._client.async_create_event(event)
                message = MSG_ADDED
        except CalendarEventsError as err:
            _LOGGER.warning("Error saving event %r: %s", event.title, err)
            self._emit(MSG_SAVE_FAILED, NotificationSeverity.ERROR)
            return False

        self._emit(message, NotificationSeverity.SUCCESS)
        await self.async_fetch_events()
        if self._on_save is not None:
            self._on_save()
        return True

    async def async_update_events(self, events: Iterable[Event]) -> bool:
        """Update several persisted events in one request."""
        try:
            await self._client.async_update_events(events)
        except CalendarEventsError as err:
            _LOGGER.warning("Error updating events: %s", err)
            self._emit(MSG_SAVE_FAILED, NotificationSeverity.ERROR)
            return False

        self._emit(MSG_BULK_UPDATED, NotificationSeverity.SUCCESS)
        await self.async_fetch_events()
        return True

    async def async_delete_event(self, event_id: str) -> bool:
        """Delete one event by id."""
        try:
            await self._client.async_delete_event(event_id)
        except CalendarEventsError as err:
            _LOGGER.warning("Error deleting event %s: %s", event_id, err)
            self._emit(MSG_DELETE_FAILED, NotificationSeverity.ERROR)
            return False

        await self.async_fetch_events()
        self._emit(MSG_DELETED, NotificationSeverity.INFO)
        return True

    async def async_delete_events(self, event_ids: Iterable[str]) -> bool:
        """Delete several events by id in one request."""
        ids = list(event_ids)
        try:
            await self._client.async_delete_events(ids)
        except CalendarEventsError as err:
            _LOGGER.warning("Error deleting events %s: %s", ids, err)
            self._emit(MSG_DELETE_FAILED, NotificationSeverity.ERROR)
            return False

        await self.async_fetch_events()
        self._emit(MSG_BULK_DELETED, NotificationSeverity.INFO)
        return True

    def _emit(self, message: str, severity: NotificationSeverity) -> None:
        self._notify(Notification(message, severity))


def _expand_or_raise(seed: Event) -> list[Event]:
    result = expand_repeat(seed)
    if isinstance(result, ExpansionFailure):
        raise RepeatExpansionError(result)
    if not result:
        raise CalendarEventsError("Repeat rule ends before the first occurrence")
    return result
