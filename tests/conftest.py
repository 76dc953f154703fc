"""Shared pytest fixtures for lifeline tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from lifeline.config import Settings


def build_settings(**overrides) -> Settings:
    """Create a Settings object with safe test defaults."""
    base = {
        "elevenlabs_api_key": "test-elevenlabs-key",
        "elevenlabs_ws_url": "wss://voice.test/v1/convai/conversation",
        "stream_origin": "https://app.example.com",
        "stream_ack_timeout": 5.0,
    }
    base.update(overrides)
    return Settings(_env_file=None, **base)


@pytest.fixture
def settings_factory() -> Callable[..., Settings]:
    """Return a factory to build Settings with overrides."""
    return build_settings


@pytest.fixture
def settings(settings_factory: Callable[..., Settings]) -> Settings:
    """Default Settings fixture."""
    return settings_factory()


# =============================================================================
# Transport Fakes
# =============================================================================


class FakeWebSocket:
    """In-memory stand-in for a websockets client connection."""

    def __init__(self) -> None:
        self.sent: list[str] = []
        self.closed = False
        self._inbox: asyncio.Queue[Any] = asyncio.Queue()

    async def send(self, data: str) -> None:
        self.sent.append(data)

    async def close(self) -> None:
        self.closed = True
        self._inbox.put_nowait(None)

    def feed(self, frame: str | bytes | BaseException | None) -> None:
        """Queue an inbound frame; None ends the stream, an exception is raised."""
        self._inbox.put_nowait(frame)

    def __aiter__(self) -> FakeWebSocket:
        return self

    async def __anext__(self) -> str | bytes:
        item = await self._inbox.get()
        if item is None:
            raise StopAsyncIteration
        if isinstance(item, BaseException):
            raise item
        return item


class FakeConnector:
    """Records connect calls and hands out a FakeWebSocket (or raises)."""

    def __init__(self, error: BaseException | None = None) -> None:
        self.ws = FakeWebSocket()
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def __call__(self, url: str, **kwargs: Any) -> FakeWebSocket:
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.ws


class FakeSocketIOClient:
    """In-memory stand-in for socketio.AsyncClient with scripted acks."""

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.connected = False
        self.sid = "fake-sid"
        self.handlers: dict[str, Callable[..., Any]] = {}
        self.responses = responses or {}
        self.calls: list[tuple[str, Any, float | None]] = []
        self.connect_calls: list[tuple[str, dict[str, Any]]] = []
        self.disconnect_calls = 0
        self.connect_error: BaseException | None = None

    def on(self, event: str, handler: Callable[..., Any] | None = None) -> None:
        self.handlers[event] = handler

    async def connect(self, url: str, **kwargs: Any) -> None:
        self.connect_calls.append((url, kwargs))
        if self.connect_error is not None:
            raise self.connect_error
        self.connected = True

    async def disconnect(self) -> None:
        self.disconnect_calls += 1
        self.connected = False

    async def call(self, event: str, data: Any = None, timeout: float | None = None) -> Any:
        self.calls.append((event, data, timeout))
        response = self.responses.get(event, {"success": True})
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def fake_connector() -> FakeConnector:
    return FakeConnector()


@pytest.fixture
def fake_sio() -> FakeSocketIOClient:
    return FakeSocketIOClient()


@pytest.fixture
def connector_factory() -> type[FakeConnector]:
    return FakeConnector


@pytest.fixture
def sio_factory() -> type[FakeSocketIOClient]:
    return FakeSocketIOClient
