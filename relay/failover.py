from __future__ import annotations

from typing import Optional

from .constants import NOTICE_HOST_CHANGED
from .logging_config import get_logger
from .presence import system_chat
from .room import Room
from .schemas import HostChanged

logger = get_logger(__name__)


def elect_host(room: Room, departed_id: str, ts: int) -> Optional[str]:
    """Promote a new host if *departed_id* was the host. Call after removing it.

    The earliest-joined remaining client wins. Returns the new host id, or
    ``None`` when no election was needed or nobody is left to elect.
    """
    if departed_id != room.host_id or room.is_empty():
        return None

    new_host_id = next(iter(room.clients))
    room.host_id = new_host_id
    logger.info(f"Room {room.code}: host {departed_id} left, {new_host_id} promoted")

    room.broadcast(HostChanged(host_id=new_host_id))
    system_chat(room, NOTICE_HOST_CHANGED, ts)
    return new_host_id


__all__ = ["elect_host"]
