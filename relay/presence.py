from __future__ import annotations

from .room import Room
from .schemas import ChatMessage


def emit_presence(room: Room) -> None:
    """Broadcast the membership and seat snapshot of *room* to all its clients."""
    room.broadcast(room.presence())


def system_chat(room: Room, text: str, ts: int) -> None:
    """Inject a server notice into the chat channel. Blank notices are not sent."""
    text = str(text or "").strip()
    if not text:
        return
    room.broadcast(ChatMessage(ts=ts, system=True, text=text))


__all__ = ["emit_presence", "system_chat"]
