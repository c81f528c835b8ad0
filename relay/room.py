from __future__ import annotations

from typing import Any, Dict, Optional, Union

from .constants import PLAYER_SEATS, Seat
from .schemas import Presence, ServerMessage
from .transport import Peer

# NOTE: ``Room`` only holds data plus the broadcast helpers. The rules that
# mutate it live in ``seats``, ``state_sync`` and ``failover`` so each can be
# tested against a bare room.


class Room:
    """Runtime state and live connections for one relay session."""

    def __init__(self, code: str, host_id: str, host_peer: Peer):
        self.code = code
        self.host_id = host_id
        # client_id -> peer, in join order (host failover relies on this)
        self.clients: Dict[str, Peer] = {host_id: host_peer}
        # Last state published by the host; opaque to the relay.
        self.state: Any = None
        self.version: Union[int, float] = 0
        self.seats: Dict[Seat, Optional[str]] = {seat: None for seat in PLAYER_SEATS}
        self.client_seat: Dict[str, Seat] = {host_id: Seat.SPECTATOR}

    # ---------------------------------------------------------------------
    # Membership
    # ---------------------------------------------------------------------

    def add_client(self, client_id: str, peer: Peer) -> None:
        self.clients[client_id] = peer
        self.client_seat.setdefault(client_id, Seat.SPECTATOR)

    def remove_client(self, client_id: str) -> None:
        """Drop *client_id* from the client set. Seats are released separately."""
        self.clients.pop(client_id, None)

    def is_empty(self) -> bool:
        return not self.clients

    @property
    def has_state(self) -> bool:
        # Every accepted publish carries a version above the initial 0.
        return self.version > 0

    def seat_of(self, client_id: str) -> Seat:
        return self.client_seat.get(client_id, Seat.SPECTATOR)

    def seats_view(self) -> Dict[str, Optional[str]]:
        return {seat.value: holder for seat, holder in self.seats.items()}

    def presence(self) -> Presence:
        return Presence(
            room_code=self.code,
            host_id=self.host_id,
            clients=list(self.clients.keys()),
            seats=self.seats_view(),
        )

    # -------------------- Broadcasting helpers -------------------- #

    def send_to(self, client_id: str, message: ServerMessage) -> bool:
        """Send *message* to one member. Returns ``False`` if it is not connected."""
        peer = self.clients.get(client_id)
        if peer is None or not peer.is_open:
            return False
        peer.send(message.payload())
        return True

    def broadcast(self, message: ServerMessage) -> None:
        """Send *message* to every member, the sender included."""
        payload = message.payload()
        for peer in list(self.clients.values()):
            peer.send(payload)


__all__ = ["Room"]
