"""Helpers for running independent store reads side by side."""
import asyncio
from collections.abc import Awaitable
from typing import Any


async def gather_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    """Await all reads concurrently. The first failure cancels the others and is re-raised."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        # Let cancelled siblings settle so their errors are not reported as unretrieved.
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
