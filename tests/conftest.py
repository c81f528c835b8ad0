from __future__ import annotations

from typing import Any, Dict, List

import pytest

from relay.coordinator import ClientConnection, SessionCoordinator
from relay.registry import RoomRegistry


class FakePeer:
    """Records everything the coordinator sends to it."""

    def __init__(self):
        self.sent: List[Dict[str, Any]] = []
        self.open = True

    @property
    def is_open(self) -> bool:
        return self.open

    def send(self, payload: Dict[str, Any]) -> None:
        if self.open:
            self.sent.append(payload)

    def of_type(self, msg_type: str) -> List[Dict[str, Any]]:
        return [m for m in self.sent if m["type"] == msg_type]

    def last(self, msg_type: str) -> Dict[str, Any]:
        matches = self.of_type(msg_type)
        assert matches, f"no {msg_type} received; got {[m['type'] for m in self.sent]}"
        return matches[-1]

    def clear(self) -> None:
        self.sent.clear()


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry() -> RoomRegistry:
    return RoomRegistry()


@pytest.fixture
def coordinator(registry, clock) -> SessionCoordinator:
    return SessionCoordinator(
        registry=registry,
        clock=clock,
        wall_clock_ms=lambda: int(clock() * 1000),
    )


@pytest.fixture
def connect(coordinator):
    """Open a connection backed by a ``FakePeer``."""

    def _connect() -> ClientConnection:
        return coordinator.open(FakePeer())

    return _connect


@pytest.fixture
def host_room(coordinator, connect):
    """A room created by one host connection. Returns ``(host, room)``."""
    host = connect()
    coordinator.handle_message(host, {"type": "CREATE_ROOM"})
    room = coordinator.registry.lookup(host.room_code)
    return host, room


@pytest.fixture
def join(coordinator, connect):
    def _join(code: str) -> ClientConnection:
        conn = connect()
        coordinator.handle_message(conn, {"type": "JOIN_ROOM", "roomCode": code})
        return conn

    return _join
