"""Conftest: an in-process fake of the events backend.

``FakeEventsBackend`` serves the same routes as the real backend from an
in-memory list of camelCase event dicts, so the client and the event
operations can be exercised end to end through aiohttp.
"""

from __future__ import annotations

from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from calendar_events import EventsApiClient


def make_wire_event(
    event_id: str = "1",
    *,
    title: str = "Existing meeting",
    date: str = "2025-10-15",
    start_time: str = "09:00",
    end_time: str = "10:00",
    repeat: dict[str, Any] | None = None,
    notification_time: int = 10,
) -> dict[str, Any]:
    """Build a stored event in the backend's wire format."""
    return {
        "id": event_id,
        "title": title,
        "date": date,
        "startTime": start_time,
        "endTime": end_time,
        "description": "Weekly team sync",
        "location": "Room B",
        "category": "Work",
        "repeat": repeat or {"type": "none", "interval": 0},
        "notificationTime": notification_time,
    }


class FakeEventsBackend:
    """In-memory stand-in for the events REST backend.

    Attributes:
        events: Stored events, camelCase as on the wire.
        requests: ``(method, route)`` for every request received.
        failures: ``(method, route) -> status`` overrides.
    """

    def __init__(self, events: list[dict[str, Any]] | None = None) -> None:
        self.events: list[dict[str, Any]] = [dict(e) for e in events or []]
        self.requests: list[tuple[str, str]] = []
        self.failures: dict[tuple[str, str], int] = {}

    def fail(self, method: str, route: str, status: int = 500) -> None:
        self.failures[(method, route)] = status

    def build_app(self) -> web.Application:
        app = web.Application(middlewares=[self._middleware])
        app.router.add_get("/api/events", self._get_events)
        app.router.add_post("/api/events", self._create_event)
        app.router.add_put("/api/events/{id}", self._update_event)
        app.router.add_delete("/api/events/{id}", self._delete_event)
        app.router.add_post("/api/events-list", self._create_events)
        app.router.add_put("/api/events-list", self._update_events)
        app.router.add_delete("/api/events-list", self._delete_events)
        return app

    @web.middleware
    async def _middleware(self, request: web.Request, handler: Any) -> web.StreamResponse:
        resource = request.match_info.route.resource
        route = resource.canonical if resource is not None else request.path
        self.requests.append((request.method, route))
        status = self.failures.get((request.method, route))
        if status is not None:
            return web.Response(status=status, text="injected failure")
        return await handler(request)

    def _index(self, event_id: str) -> int | None:
        for index, event in enumerate(self.events):
            if event["id"] == event_id:
                return index
        return None

    async def _get_events(self, request: web.Request) -> web.Response:
        return web.json_response({"events": self.events})

    async def _create_event(self, request: web.Request) -> web.Response:
        event = await request.json()
        event["id"] = str(len(self.events) + 1)
        self.events.append(event)
        return web.json_response(event, status=201)

    async def _update_event(self, request: web.Request) -> web.Response:
        index = self._index(request.match_info["id"])
        if index is None:
            return web.Response(status=404)
        self.events[index] = {**self.events[index], **await request.json()}
        return web.json_response(self.events[index])

    async def _delete_event(self, request: web.Request) -> web.Response:
        index = self._index(request.match_info["id"])
        if index is None:
            return web.Response(status=404)
        del self.events[index]
        return web.Response(status=204)

    async def _create_events(self, request: web.Request) -> web.Response:
        incoming = (await request.json())["events"]
        base = len(self.events)
        series_id = str(base + 1)
        created = []
        for offset, event in enumerate(incoming):
            repeat = dict(event["repeat"])
            if repeat["type"] != "none":
                repeat["id"] = series_id
            created.append({**event, "id": str(base + offset + 1), "repeat": repeat})
        self.events.extend(created)
        return web.json_response(created, status=201)

    async def _update_events(self, request: web.Request) -> web.Response:
        incoming = (await request.json())["events"]
        updated = False
        for event in incoming:
            index = self._index(event.get("id"))
            if index is not None:
                self.events[index] = {**self.events[index], **event}
                updated = True
        if not updated:
            return web.Response(status=404)
        return web.json_response(self.events)

    async def _delete_events(self, request: web.Request) -> web.Response:
        ids = set((await request.json())["eventIds"])
        self.events = [e for e in self.events if e["id"] not in ids]
        return web.Response(status=204)


@pytest.fixture
def backend() -> FakeEventsBackend:
    return FakeEventsBackend()


@pytest_asyncio.fixture
async def api_client(backend: FakeEventsBackend):
    """An ``EventsApiClient`` talking to a running ``FakeEventsBackend``."""
    async with TestServer(backend.build_app()) as server:
        base_url = f"http://{server.host}:{server.port}"
        async with EventsApiClient(base_url=base_url) as client:
            yield client
