"""Route path helpers."""

from __future__ import annotations

import re

_DYNAMIC_SEGMENT = re.compile(r"^:(\w+)$")


def get_dynamic_segments(path: str) -> list[str]:
    """Return the parameter names of ``:name`` segments in a route path.

    ``/posts/:pid/comments/:cid`` -> ``["pid", "cid"]``; a trailing slash
    makes no difference and static paths yield an empty list.
    """
    segments: list[str] = []
    for part in path.strip("/").split("/"):
        match = _DYNAMIC_SEGMENT.match(part)
        if match:
            segments.append(match.group(1))
    return segments


def to_fastapi_path(path: str) -> str:
    """Rewrite ``:name`` segments into FastAPI's ``{name}`` form."""
    parts: list[str] = []
    for part in path.rstrip("/").split("/"):
        match = _DYNAMIC_SEGMENT.match(part)
        parts.append(f"{{{match.group(1)}}}" if match else part)
    return "/".join(parts) or "/"
