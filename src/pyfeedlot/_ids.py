"""Record id generation."""

from __future__ import annotations

import secrets
import time


def generate_id() -> str:
    """Return an opaque unique id: millisecond clock prefix plus random suffix."""
    return f"{int(time.time() * 1000):x}{secrets.token_hex(6)}"
