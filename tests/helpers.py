"""Shared test helpers for the timer server."""

import asyncio

import httpx

from timer_server.models.timer import TimerStatus
from timer_server.services.timer.store import TimerStore
from timer_server.widget.models import StatusSnapshot, WidgetTimer


class CompletionCollector:
    """Notifier stand-in that records every completed timer."""

    def __init__(self):
        self.items: list = []

    def __call__(self, timer):
        self.items.append(timer)

    def __len__(self):
        return len(self.items)

    @property
    def ids(self) -> list:
        return [t.id for t in self.items]


def run_out(store: TimerStore, timer_id: str) -> None:
    """Tick a timer until it leaves the active set."""
    while store.get(timer_id) is not None:
        store.tick(timer_id)


def snapshot(*timers: WidgetTimer, history=None) -> StatusSnapshot:
    return StatusSnapshot(active_timers=list(timers), history=history or [])


def widget_timer(timer_id: str, remaining: int, status: TimerStatus = TimerStatus.RUNNING) -> WidgetTimer:
    return WidgetTimer(
        id=timer_id,
        name=f"Timer {timer_id}",
        remaining_seconds=remaining,
        status=status,
        original_duration=remaining,
    )


class GatedTransport(httpx.AsyncBaseTransport):
    """
    ASGI transport that holds GET responses until ``gate`` is set.

    The request is served by the app right away; only delivery of the
    response is delayed. ``held`` is set once a response is waiting.
    """

    def __init__(self, app):
        self._inner = httpx.ASGITransport(app=app)
        self.gate = asyncio.Event()
        self.held = asyncio.Event()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        response = await self._inner.handle_async_request(request)
        if request.method == "GET" and not self.gate.is_set():
            self.held.set()
            await self.gate.wait()
        return response
