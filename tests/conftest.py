"""Shared pytest fixtures for the timer server tests."""

import httpx
import pytest
from fastapi.testclient import TestClient

from timer_server.main import create_app
from timer_server.services.timer.command_service import TimerCommandService
from timer_server.services.timer.engine import TimerLifecycleEngine
from timer_server.services.timer.store import TimerStore
from timer_server.widget.client import TimerApiClient
from timer_server.widget.sync import TimerWidget

from helpers import CompletionCollector


@pytest.fixture
def store():
    """Fresh, empty store per test."""
    return TimerStore()


@pytest.fixture
def service(store):
    return TimerCommandService(store)


@pytest.fixture
def engine(store):
    """Engine whose loop is never started; tests call tick_once() directly."""
    return TimerLifecycleEngine(store)


@pytest.fixture
def app(store):
    """App around the test store, tick loop disabled."""
    return create_app(store=store, start_engine=False)


@pytest.fixture
def client(app):
    # Not used as a context manager, so the lifespan (and tick loop) never runs
    return TestClient(app)


@pytest.fixture
def completions():
    return CompletionCollector()


@pytest.fixture
async def api(app):
    """Widget API client talking to the app in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield TimerApiClient(client=http)


@pytest.fixture
async def offline_api():
    """Widget API client whose every request fails to connect."""

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(refuse), base_url="http://test") as http:
        yield TimerApiClient(client=http)


@pytest.fixture
async def widget(api, completions):
    """Widget bound to the in-process server; loops slow enough never to fire."""
    w = TimerWidget(api, notifier=completions, sync_interval=3600, tick_interval=3600)
    yield w
    await w.close()


@pytest.fixture
async def offline_widget(offline_api, completions):
    w = TimerWidget(offline_api, notifier=completions, sync_interval=3600, tick_interval=3600)
    yield w
    await w.close()
