"""Seat claims and releases.

``room.seats`` and ``room.client_seat`` must always agree: a player slot
maps to a client exactly when that client maps back to the slot. Every
mutation below goes through ``release`` and ``_assign`` to keep it so.
"""
from __future__ import annotations

from typing import Any, Optional

from .constants import (
    ERROR_INVALID_SEAT,
    NOTICE_SEAT_CLAIMED,
    NOTICE_SPECTATING,
    REASON_SEAT_TAKEN,
    SEAT_ALIASES,
    Seat,
)
from .presence import emit_presence, system_chat
from .room import Room
from .schemas import ErrorMessage, SeatClaimed, SeatRejected


def parse_seat(value: Any) -> Optional[Seat]:
    """Map a client-supplied seat name onto ``Seat``; ``None`` if unrecognised."""
    if not isinstance(value, str):
        return None
    name = value.strip().lower()
    if name in SEAT_ALIASES:
        return SEAT_ALIASES[name]
    try:
        return Seat(name)
    except ValueError:
        return None


def release(room: Room, client_id: str) -> Optional[Seat]:
    """Free any player slot *client_id* holds and mark it a spectator.

    Returns the released slot, if there was one.
    """
    held = room.client_seat.get(client_id)
    released: Optional[Seat] = None
    if held is not None and held.is_player_slot and room.seats.get(held) == client_id:
        room.seats[held] = None
        released = held
    if client_id in room.client_seat:
        room.client_seat[client_id] = Seat.SPECTATOR
    return released


def _assign(room: Room, client_id: str, seat: Seat) -> None:
    if seat.is_player_slot:
        room.seats[seat] = client_id
    room.client_seat[client_id] = seat


def handle_claim_seat(room: Room, client_id: str, data: dict, ts: int) -> Optional[Seat]:
    """Process a ``CLAIM_SEAT`` from *client_id*. Returns the claimed seat, or ``None`` on failure."""
    wanted = parse_seat(data.get("seat"))
    if wanted is None:
        room.send_to(client_id, ErrorMessage(message=ERROR_INVALID_SEAT))
        return None

    # A client holds at most one player slot; drop the old one first.
    release(room, client_id)

    if wanted is Seat.SPECTATOR:
        _assign(room, client_id, Seat.SPECTATOR)
        room.send_to(client_id, SeatClaimed(seat=Seat.SPECTATOR.value))
        system_chat(room, NOTICE_SPECTATING, ts)
        emit_presence(room)
        return Seat.SPECTATOR

    holder = room.seats[wanted]
    if holder is not None and holder != client_id:
        room.send_to(client_id, SeatRejected(seat=wanted.value, reason=REASON_SEAT_TAKEN))
        # The release above still stands.
        emit_presence(room)
        return None

    _assign(room, client_id, wanted)
    room.send_to(client_id, SeatClaimed(seat=wanted.value))
    system_chat(room, NOTICE_SEAT_CLAIMED.format(seat=wanted.value.upper()), ts)
    emit_presence(room)
    return wanted


__all__ = ["parse_seat", "release", "handle_claim_seat"]
