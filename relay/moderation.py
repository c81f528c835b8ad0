"""Chat sanitization and per-connection rate limiting.

Both helpers are pure: the rate limiter mutates only the window object it is
given, and the clock is passed in by the caller so tests can drive it.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from .constants import (
    CHAT_NAME_MAX_LENGTH,
    CHAT_RATE_LIMIT,
    CHAT_RATE_WINDOW_SECONDS,
    CHAT_TEXT_MAX_LENGTH,
)

_CONTROL_CHARS = re.compile(r"[\u0000-\u001F\u007F]")
_WHITESPACE_RUN = re.compile(r"\s+")

# -----------------------------
# Sanitization
# -----------------------------


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def clean_text(value: Any, max_length: int = CHAT_TEXT_MAX_LENGTH) -> str:
    """Return *value* with control characters removed and whitespace collapsed.

    Non-string input (other than plain numbers) is treated as empty. The
    result is truncated to *max_length* characters.
    """
    text = _CONTROL_CHARS.sub("", _as_text(value))
    text = _WHITESPACE_RUN.sub(" ", text).strip()
    return text[:max_length]


def clean_name(value: Any) -> str:
    return clean_text(value)[:CHAT_NAME_MAX_LENGTH]


# -----------------------------
# Rate limiting
# -----------------------------


@dataclass
class RateWindow:
    """Fixed window state carried by one connection."""

    window_start: float = 0.0
    count: int = 0


def allow_chat(
    window: RateWindow,
    now: float,
    limit: int = CHAT_RATE_LIMIT,
    window_seconds: float = CHAT_RATE_WINDOW_SECONDS,
) -> bool:
    """Record a chat attempt at *now* (seconds) and return whether it is allowed.

    The window opens on the first accepted message and restarts once more than
    *window_seconds* have passed since it opened. Rejected attempts are not
    counted.
    """
    if window.count == 0 or (now - window.window_start) > window_seconds:
        window.window_start = now
        window.count = 1
        return True
    if window.count >= limit:
        return False
    window.count += 1
    return True


__all__ = ["clean_text", "clean_name", "RateWindow", "allow_chat"]
