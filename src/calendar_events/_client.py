"""REST client for the calendar events backend."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import aiohttp

from ._serialization import camelize, decamelize
from .const import (
    DEFAULT_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    EVENT_DETAIL_ENDPOINT,
    EVENTS_ENDPOINT,
    EVENTS_LIST_ENDPOINT,
)
from .exceptions import ApiConnectionError, ApiResponseError, EventNotFoundError
from .models import Event

if TYPE_CHECKING:
    from .config import ClientConfig

_LOGGER = logging.getLogger(__name__)


class EventsApiClient:
    """Async client for the calendar events REST API.

    Usage::

        async with aiohttp.ClientSession() as session:
            client = EventsApiClient(session, base_url="http://localhost:3000")
            events = await client.async_get_events()

    If no session is provided, the client creates and manages its own.
    The caller is responsible for calling ``async_close()`` when done
    (or use the client as an async context manager).
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self._owns_session = session is None
        self._session = session or aiohttp.ClientSession()
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=request_timeout)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        session: aiohttp.ClientSession | None = None,
    ) -> EventsApiClient:
        """Build a client from a validated ``ClientConfig``."""
        return cls(
            session,
            base_url=config.base_url,
            request_timeout=config.request_timeout,
        )

    async def __aenter__(self) -> EventsApiClient:
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.async_close()

    @property
    def base_url(self) -> str:
        return self._base_url

    async def async_close(self) -> None:
        """Close the HTTP session if the client owns it."""
        if self._owns_session:
            await self._session.close()

    # ------------------------------------------------------------------ #
    #  Single events
    # ------------------------------------------------------------------ #

    async def async_get_events(self) -> list[Event]:
        """Fetch every stored event."""
        data = await self._request("GET", EVENTS_ENDPOINT)
        raw = data if isinstance(data, list) else (data or {}).get("events", [])
        return [Event.from_api_response(e) for e in raw]

    async def async_create_event(self, event: Event) -> Event:
        """Create one event and return it as stored (with its id)."""
        data = await self._request("POST", EVENTS_ENDPOINT, json_body=event.to_api_dict())
        return Event.from_api_response(_unwrap_event(data))

    async def async_update_event(self, event_id: str, event: Event) -> Event:
        """Replace the fields of an existing event.

        Raises:
            EventNotFoundError: If the backend has no event with this id.
        """
        url = EVENT_DETAIL_ENDPOINT.format(event_id=event_id)
        data = await self._request("PUT", url, json_body=event.to_api_dict())
        return Event.from_api_response(_unwrap_event(data))

    async def async_delete_event(self, event_id: str) -> None:
        """Delete one event.

        Raises:
            EventNotFoundError: If the backend has no event with this id.
        """
        url = EVENT_DETAIL_ENDPOINT.format(event_id=event_id)
        await self._request("DELETE", url)

    # ------------------------------------------------------------------ #
    #  Bulk operations
    # ------------------------------------------------------------------ #

    async def async_create_events(self, events: Iterable[Event]) -> list[Event]:
        """Create a batch of events in one request.

        The backend stores the whole batch or nothing, and assigns a shared
        ``repeat.id`` to the instances of a repeating series.
        """
        body = {"events": [e.to_api_dict() for e in events]}
        data = await self._request("POST", EVENTS_LIST_ENDPOINT, json_body=body)
        return [Event.from_api_response(e) for e in _unwrap_events(data)]

    async def async_update_events(self, events: Iterable[Event]) -> list[Event]:
        """Update a batch of persisted events in one request.

        Returns the backend's full event list after the update.

        Raises:
            EventNotFoundError: If none of the ids matched a stored event.
        """
        body = {"events": [e.to_api_dict() for e in events]}
        data = await self._request("PUT", EVENTS_LIST_ENDPOINT, json_body=body)
        return [Event.from_api_response(e) for e in _unwrap_events(data)]

    async def async_delete_events(self, event_ids: Iterable[str]) -> None:
        """Delete a batch of events by id in one request."""
        body = {"event_ids": list(event_ids)}
        await self._request("DELETE", EVENTS_LIST_ENDPOINT, json_body=body)

    # ------------------------------------------------------------------ #
    #  Internal HTTP layer
    # ------------------------------------------------------------------ #

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
    ) -> Any:
        """Execute an API request and decode the JSON response.

        Outgoing JSON bodies are camelized; incoming JSON responses are
        decamelized. A 204 response yields ``None``.

        Raises:
            EventNotFoundError: On 404 responses.
            ApiResponseError: On other non-2xx responses.
            ApiConnectionError: On network errors and timeouts.
        """
        url = f"{self._base_url}{path}"
        kwargs: dict[str, Any] = {
            "headers": {"Content-Type": "application/json"},
            "timeout": self._timeout,
        }
        if json_body is not None:
            kwargs["json"] = camelize(json_body)

        _LOGGER.debug("%s %s", method, url)
        try:
            async with self._session.request(method, url, **kwargs) as resp:
                if resp.status == 404:
                    raise EventNotFoundError(f"Not found: {method} {path}")

                if resp.status == 204:
                    return None

                if resp.status >= 400:
                    body = await resp.text()
                    raise ApiResponseError(
                        f"API error: HTTP {resp.status} - {body}",
                        status_code=resp.status,
                    )

                data = await resp.json()
                return decamelize(data)

        except aiohttp.ClientError as err:
            raise ApiConnectionError(f"Connection error: {err}") from err
        except asyncio.TimeoutError as err:
            raise ApiConnectionError(f"Request timed out: {method} {path}") from err


def _unwrap_event(data: Any) -> Any:
    # Some backends nest the stored event under an "event" key
    return data.get("event", data) if isinstance(data, dict) else data


def _unwrap_events(data: Any) -> list[Any]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        return data.get("events", [])
    return []
