"""Server bootstrap helpers."""

from __future__ import annotations

from fastjsonapi.config import get_settings


def normalize_port(value: int | str | None = None) -> int:
    """Return ``value`` as an int port, falling back to the configured default."""
    if value is None:
        return get_settings().default_port
    port = int(value)
    if not 0 < port < 65536:
        raise ValueError(f"Port out of range: {value!r}")
    return port
