"""Host-authoritative state publishing and guest action relay.

The relay enforces two things only: a single writer (the current host) and
strictly increasing versions. Payloads pass through untouched. Rejected
publishes get no reply, whatever the reason.
"""
from __future__ import annotations

import math
from typing import Any

from .logging_config import get_logger
from .room import Room
from .schemas import ActionMessage, StateMessage

logger = get_logger(__name__)


def _valid_version(version: Any) -> bool:
    if isinstance(version, bool):
        return False
    # Arbitrarily large ints compare exactly against floats; never convert them.
    if isinstance(version, int):
        return True
    return isinstance(version, float) and math.isfinite(version)


def handle_publish_state(room: Room, client_id: str, data: dict) -> bool:
    """Apply a ``PUBLISH_STATE`` from *client_id*. Returns ``True`` if accepted."""
    if client_id != room.host_id:
        logger.debug(f"Room {room.code}: publish from non-host {client_id} ignored")
        return False

    version = data.get("version")
    if not _valid_version(version) or version <= room.version:
        logger.debug(f"Room {room.code}: stale or invalid version {version!r} ignored")
        return False

    room.state = data.get("state")
    room.version = version
    room.broadcast(StateMessage(version=room.version, state=room.state))
    return True


def handle_action(room: Room, client_id: str, data: dict) -> bool:
    """Forward an ``ACTION`` to the host only. Returns ``False`` if the host is gone."""
    delivered = room.send_to(room.host_id, ActionMessage(from_=client_id, action=data.get("action")))
    if not delivered:
        logger.debug(f"Room {room.code}: action from {client_id} dropped, host not connected")
    return delivered


__all__ = ["handle_publish_state", "handle_action"]
