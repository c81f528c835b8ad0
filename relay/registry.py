from __future__ import annotations

import secrets
from typing import Callable, Dict, Optional

from .constants import ROOM_CODE_ALPHABET, ROOM_CODE_LENGTH
from .logging_config import get_logger
from .room import Room
from .transport import Peer

logger = get_logger(__name__)


def make_code() -> str:
    """Return a random room code from the unambiguous alphabet."""
    return "".join(secrets.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))


class RoomRegistry:
    """Owns every live ``Room`` keyed by its code.

    One registry backs one coordinator; nothing here is module-global, so
    separate instances never see each other's rooms.
    """

    def __init__(self, code_factory: Callable[[], str] = make_code):
        self._code_factory = code_factory
        self._rooms: Dict[str, Room] = {}

    def _unique_code(self) -> str:
        code = self._code_factory()
        while code in self._rooms:
            code = self._code_factory()
        return code

    def create(self, host_id: str, host_peer: Peer) -> Room:
        code = self._unique_code()
        room = Room(code, host_id, host_peer)
        self._rooms[code] = room
        logger.info(f"Room {code} created by {host_id} ({len(self._rooms)} live)")
        return room

    def lookup(self, code: Optional[str]) -> Optional[Room]:
        if not code:
            return None
        return self._rooms.get(str(code).strip().upper())

    def delete_if_empty(self, code: str) -> bool:
        """Remove the room under *code* if it has no clients. Returns ``True`` if removed."""
        room = self._rooms.get(code)
        if room is None or not room.is_empty():
            return False
        del self._rooms[code]
        logger.info(f"Room {code} destroyed ({len(self._rooms)} live)")
        return True

    def __contains__(self, code: object) -> bool:
        return code in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)


__all__ = ["make_code", "RoomRegistry"]
