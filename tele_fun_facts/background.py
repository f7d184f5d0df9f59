"""Fire-and-forget background tasks (one live task per key)."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine

logger = logging.getLogger(__name__)


def _log_task_result(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(
            "Background task %s failed", task.get_name(), exc_info=exc
        )


def spawn_once(
    tasks: dict[str, asyncio.Task],
    key: str,
    factory: Callable[[], Coroutine[Any, Any, Any]],
) -> asyncio.Task | None:
    """Start ``factory()`` as a task unless one is already running for ``key``.

    Returns:
        The new task, or None when a task for ``key`` is still running.
    """
    task = tasks.get(key)
    if isinstance(task, asyncio.Task) and not task.done():
        return None
    task = asyncio.create_task(factory(), name=key)
    task.add_done_callback(_log_task_result)
    tasks[key] = task
    return task


async def cancel_all(tasks: dict[str, asyncio.Task]) -> None:
    pending = [t for t in tasks.values() if isinstance(t, asyncio.Task) and not t.done()]
    for task in pending:
        task.cancel()
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)
    tasks.clear()
