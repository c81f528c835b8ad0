from __future__ import annotations

import secrets
from typing import Callable, Set

from .logging_config import get_logger

logger = get_logger(__name__)


def _random_id() -> str:
    return secrets.token_hex(16)


class IdentityIssuer:
    """Hands out unpredictable client ids that are unique among live connections."""

    def __init__(self, id_factory: Callable[[], str] = _random_id):
        self._id_factory = id_factory
        self._live: Set[str] = set()

    def issue(self) -> str:
        client_id = self._id_factory()
        while client_id in self._live:
            logger.debug("Client id collision, resampling")
            client_id = self._id_factory()
        self._live.add(client_id)
        return client_id

    def retire(self, client_id: str) -> None:
        self._live.discard(client_id)

    def __contains__(self, client_id: object) -> bool:
        return client_id in self._live

    def __len__(self) -> int:
        return len(self._live)


__all__ = ["IdentityIssuer"]
