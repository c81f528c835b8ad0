"""Pydantic models for every server → client message.

Handlers build one of these and hand ``payload()`` to a peer, so the wire
shape of each message kind is declared in exactly one place. Field names
are snake_case in Python and camelCase on the wire.
"""
from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# -----------------------------
# Base
# -----------------------------


class ServerMessage(BaseModel):
    """Common configuration for outbound messages."""

    model_config = ConfigDict(populate_by_name=True)

    # Optional fields left as ``None`` are dropped from the wire payload.
    omit_none: ClassVar[bool] = False

    def payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=self.omit_none)


Number = Union[int, float]

# -----------------------------
# Connection & room lifecycle
# -----------------------------


class Hello(ServerMessage):
    type: Literal["HELLO"] = "HELLO"
    client_id: str = Field(alias="clientId")


class RoomCreated(ServerMessage):
    type: Literal["ROOM_CREATED"] = "ROOM_CREATED"
    room_code: str = Field(alias="roomCode")
    host_id: str = Field(alias="hostId")
    client_id: str = Field(alias="clientId")


class RoomJoined(ServerMessage):
    type: Literal["ROOM_JOINED"] = "ROOM_JOINED"
    room_code: str = Field(alias="roomCode")
    host_id: str = Field(alias="hostId")
    client_id: str = Field(alias="clientId")


class ErrorMessage(ServerMessage):
    type: Literal["ERROR"] = "ERROR"
    message: str


# -----------------------------
# State sync
# -----------------------------


class StateMessage(ServerMessage):
    type: Literal["STATE"] = "STATE"
    version: Number
    state: Any = None


class ActionMessage(ServerMessage):
    type: Literal["ACTION"] = "ACTION"
    from_: str = Field(alias="from")
    action: Any = None


# -----------------------------
# Chat, presence & seats
# -----------------------------


class ChatMessage(ServerMessage):
    """A player chat line, or a system notice when ``system`` is set."""

    omit_none: ClassVar[bool] = True

    type: Literal["CHAT"] = "CHAT"
    ts: int
    from_: Optional[str] = Field(default=None, alias="from")
    seat: Optional[str] = None
    name: Optional[str] = None
    text: str
    system: Optional[bool] = None


class Presence(ServerMessage):
    type: Literal["PRESENCE"] = "PRESENCE"
    room_code: str = Field(alias="roomCode")
    host_id: str = Field(alias="hostId")
    clients: List[str]
    seats: Dict[str, Optional[str]]


class SeatClaimed(ServerMessage):
    type: Literal["SEAT_CLAIMED"] = "SEAT_CLAIMED"
    seat: str


class SeatRejected(ServerMessage):
    type: Literal["SEAT_REJECTED"] = "SEAT_REJECTED"
    seat: str
    reason: str


class HostChanged(ServerMessage):
    type: Literal["HOST_CHANGED"] = "HOST_CHANGED"
    host_id: str = Field(alias="hostId")


# -----------------------------
# REST responses
# -----------------------------


class HealthResponse(BaseModel):
    status: str
    rooms: int


__all__ = [
    "ServerMessage",
    "Hello",
    "RoomCreated",
    "RoomJoined",
    "ErrorMessage",
    "StateMessage",
    "ActionMessage",
    "ChatMessage",
    "Presence",
    "SeatClaimed",
    "SeatRejected",
    "HostChanged",
    "HealthResponse",
]
