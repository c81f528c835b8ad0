"""Protocol constants shared by the coordinator and its helpers."""
from __future__ import annotations

from enum import Enum


class Seat(str, Enum):
    """The four exclusive player slots plus the unlimited spectator role."""

    P1 = "p1"
    P2 = "p2"
    P3 = "p3"
    P4 = "p4"
    SPECTATOR = "spectator"

    @property
    def is_player_slot(self) -> bool:
        return self is not Seat.SPECTATOR


PLAYER_SEATS: tuple[Seat, ...] = (Seat.P1, Seat.P2, Seat.P3, Seat.P4)

# Older clients send the short form.
SEAT_ALIASES: dict[str, Seat] = {"spec": Seat.SPECTATOR}

# Room codes avoid I, O, 0, 1 and L.
ROOM_CODE_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
ROOM_CODE_LENGTH = 5

# Chat moderation
CHAT_RATE_LIMIT = 6
CHAT_RATE_WINDOW_SECONDS = 8.0
CHAT_TEXT_MAX_LENGTH = 220
CHAT_NAME_MAX_LENGTH = 16

# System notices
NOTICE_ROOM_CREATED = "Room created. Host connected."
NOTICE_PLAYER_JOINED = "A player joined the room."
NOTICE_PLAYER_LEFT = "A player left the room."
NOTICE_SPECTATING = "A player is now spectating."
NOTICE_SEAT_CLAIMED = "Seat {seat} claimed."
NOTICE_HOST_CHANGED = "Host changed."

# Error replies
ERROR_ROOM_NOT_FOUND = "Room not found"
ERROR_ALREADY_IN_ROOM = "Already in a room"
ERROR_INVALID_SEAT = "Invalid seat"
ERROR_CHAT_RATE_LIMIT = "Chat rate limit. Slow down."
REASON_SEAT_TAKEN = "Seat already taken"

__all__ = [
    "Seat",
    "PLAYER_SEATS",
    "SEAT_ALIASES",
    "ROOM_CODE_ALPHABET",
    "ROOM_CODE_LENGTH",
    "CHAT_RATE_LIMIT",
    "CHAT_RATE_WINDOW_SECONDS",
    "CHAT_TEXT_MAX_LENGTH",
    "CHAT_NAME_MAX_LENGTH",
    "NOTICE_ROOM_CREATED",
    "NOTICE_PLAYER_JOINED",
    "NOTICE_PLAYER_LEFT",
    "NOTICE_SPECTATING",
    "NOTICE_SEAT_CLAIMED",
    "NOTICE_HOST_CHANGED",
    "ERROR_ROOM_NOT_FOUND",
    "ERROR_ALREADY_IN_ROOM",
    "ERROR_INVALID_SEAT",
    "ERROR_CHAT_RATE_LIMIT",
    "REASON_SEAT_TAKEN",
]
