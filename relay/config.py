from __future__ import annotations

import os
from typing import List

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8080))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", None)

WS_PATH = os.getenv("RELAY_WS_PATH", "/ws")
STATIC_DIR = os.getenv("RELAY_STATIC_DIR", "public")

# Outbound messages buffered per connection before new ones are dropped.
SEND_QUEUE_SIZE = int(os.getenv("RELAY_SEND_QUEUE_SIZE", 256))

CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in os.getenv("RELAY_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

__all__ = [
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "LOG_FILE",
    "WS_PATH",
    "STATIC_DIR",
    "SEND_QUEUE_SIZE",
    "CORS_ORIGINS",
]
