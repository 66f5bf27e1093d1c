"""Concurrent fan-out that fails as a unit."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable


async def gather_all(*aws: Awaitable[Any]) -> list[Any]:
    """Await ``aws`` concurrently and return their results in input order.

    On the first exception every sibling still running is cancelled and
    awaited before the exception propagates, so no work outlives the call.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []
    try:
        return list(await asyncio.gather(*tasks))
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        # Retrieves secondary failures so none is reported as unhandled.
        await asyncio.gather(*tasks, return_exceptions=True)
