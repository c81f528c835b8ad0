"""Connection lifecycle and message dispatch.

Every public method here is synchronous and runs to completion before the
event loop schedules anything else, so room and registry data need no
locking. Sends are non-blocking (see ``relay.transport``).
"""
from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from .constants import (
    ERROR_ALREADY_IN_ROOM,
    ERROR_CHAT_RATE_LIMIT,
    ERROR_ROOM_NOT_FOUND,
    NOTICE_PLAYER_JOINED,
    NOTICE_PLAYER_LEFT,
    NOTICE_ROOM_CREATED,
)
from .failover import elect_host
from .identity import IdentityIssuer
from .logging_config import get_logger
from .moderation import RateWindow, allow_chat, clean_name, clean_text
from .presence import emit_presence, system_chat
from .registry import RoomRegistry
from .room import Room
from .schemas import ChatMessage, ErrorMessage, Hello, RoomCreated, RoomJoined, StateMessage
from .seats import handle_claim_seat, release
from .state_sync import handle_action, handle_publish_state
from .transport import Peer

logger = get_logger(__name__)


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


# -----------------------------
# Connection states
# -----------------------------


@dataclass(frozen=True)
class Unbound:
    """Connected, not in a room yet."""


@dataclass(frozen=True)
class Bound:
    room_code: str


@dataclass(frozen=True)
class Closed:
    """Socket gone. Terminal."""


ConnectionState = Union[Unbound, Bound, Closed]


@dataclass
class ClientConnection:
    client_id: str
    peer: Peer
    state: ConnectionState = field(default_factory=Unbound)
    rate: RateWindow = field(default_factory=RateWindow)

    @property
    def room_code(self) -> Optional[str]:
        return self.state.room_code if isinstance(self.state, Bound) else None


# -----------------------------
# Coordinator
# -----------------------------


class SessionCoordinator:
    """Routes inbound messages to the room components and cleans up on close.

    *clock* returns seconds for rate limiting and *wall_clock_ms* returns the
    epoch-millisecond timestamps stamped on chat lines; both are injectable.
    """

    def __init__(
        self,
        registry: Optional[RoomRegistry] = None,
        identities: Optional[IdentityIssuer] = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock_ms: Callable[[], int] = _wall_clock_ms,
    ):
        self.registry = registry if registry is not None else RoomRegistry()
        self.identities = identities if identities is not None else IdentityIssuer()
        self._clock = clock
        self._wall_clock_ms = wall_clock_ms

    # ---------------------------------------------------------------------
    # Lifecycle
    # ---------------------------------------------------------------------

    def open(self, peer: Peer) -> ClientConnection:
        conn = ClientConnection(client_id=self.identities.issue(), peer=peer)
        logger.info(f"Client {conn.client_id} connected")
        peer.send(Hello(client_id=conn.client_id).payload())
        return conn

    def close(self, conn: ClientConnection) -> None:
        if isinstance(conn.state, Closed):
            return
        room_code = conn.room_code
        conn.state = Closed()
        self.identities.retire(conn.client_id)
        logger.info(f"Client {conn.client_id} disconnected")

        room = self.registry.lookup(room_code)
        if room is None:
            return

        room.remove_client(conn.client_id)
        release(room, conn.client_id)
        room.client_seat.pop(conn.client_id, None)
        ts = self._wall_clock_ms()

        if room.is_empty():
            self.registry.delete_if_empty(room.code)
            return

        system_chat(room, NOTICE_PLAYER_LEFT, ts)
        elect_host(room, conn.client_id, ts)
        emit_presence(room)

    # ---------------------------------------------------------------------
    # Dispatch
    # ---------------------------------------------------------------------

    def handle_raw(self, conn: ClientConnection, raw: Union[str, bytes]) -> None:
        """Decode one inbound frame and dispatch it. Malformed frames are dropped."""
        try:
            if isinstance(raw, (bytes, bytearray)):
                raw = raw.decode("utf-8")
            data = json.loads(raw)
        except (UnicodeDecodeError, ValueError, RecursionError):
            logger.debug(f"Dropping malformed frame from {conn.client_id}")
            return
        if not isinstance(data, dict):
            logger.debug(f"Dropping non-object message from {conn.client_id}")
            return
        self.handle_message(conn, data)

    def handle_message(self, conn: ClientConnection, data: dict) -> None:
        if isinstance(conn.state, Closed):
            return
        msg_type = data.get("type")
        if not isinstance(msg_type, str):
            return

        if msg_type == "CREATE_ROOM":
            self._create_room(conn)
            return
        if msg_type == "JOIN_ROOM":
            self._join_room(conn, data.get("roomCode"))
            return

        # Everything below needs a live room binding.
        room = self.registry.lookup(conn.room_code)
        if room is None or conn.client_id not in room.clients:
            return

        if msg_type == "PUBLISH_STATE":
            handle_publish_state(room, conn.client_id, data)
        elif msg_type == "ACTION":
            handle_action(room, conn.client_id, data)
        elif msg_type == "CHAT":
            self._chat(conn, room, data)
        elif msg_type == "CLAIM_SEAT":
            handle_claim_seat(room, conn.client_id, data, self._wall_clock_ms())
        else:
            logger.debug(f"Ignoring unknown message type {msg_type!r} from {conn.client_id}")

    # -------------------- Room entry -------------------- #

    def _reject_if_bound(self, conn: ClientConnection) -> bool:
        if isinstance(conn.state, Bound):
            conn.peer.send(ErrorMessage(message=ERROR_ALREADY_IN_ROOM).payload())
            return True
        return False

    def _create_room(self, conn: ClientConnection) -> None:
        if self._reject_if_bound(conn):
            return
        room = self.registry.create(conn.client_id, conn.peer)
        conn.state = Bound(room.code)

        room.send_to(
            conn.client_id,
            RoomCreated(room_code=room.code, host_id=room.host_id, client_id=conn.client_id),
        )
        system_chat(room, NOTICE_ROOM_CREATED, self._wall_clock_ms())
        emit_presence(room)

    def _join_room(self, conn: ClientConnection, code: Any) -> None:
        if self._reject_if_bound(conn):
            return
        room = self.registry.lookup(code if isinstance(code, str) else None)
        if room is None:
            conn.peer.send(ErrorMessage(message=ERROR_ROOM_NOT_FOUND).payload())
            return

        room.add_client(conn.client_id, conn.peer)
        conn.state = Bound(room.code)
        logger.info(f"Client {conn.client_id} joined room {room.code} ({len(room.clients)} members)")

        room.send_to(
            conn.client_id,
            RoomJoined(room_code=room.code, host_id=room.host_id, client_id=conn.client_id),
        )
        if room.has_state:
            room.send_to(conn.client_id, StateMessage(version=room.version, state=room.state))
        system_chat(room, NOTICE_PLAYER_JOINED, self._wall_clock_ms())
        emit_presence(room)

    # -------------------- Chat -------------------- #

    def _chat(self, conn: ClientConnection, room: Room, data: dict) -> None:
        if not allow_chat(conn.rate, self._clock()):
            conn.peer.send(ErrorMessage(message=ERROR_CHAT_RATE_LIMIT).payload())
            return

        text = clean_text(data.get("text"))
        if not text:
            return

        room.broadcast(
            ChatMessage(
                ts=self._wall_clock_ms(),
                from_=conn.client_id,
                seat=room.seat_of(conn.client_id).value,
                name=clean_name(data.get("name")),
                text=text,
            )
        )


__all__ = [
    "Unbound",
    "Bound",
    "Closed",
    "ConnectionState",
    "ClientConnection",
    "SessionCoordinator",
]
