"""Fan-out / join helper for the reconciliation steps."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine, Iterable
from typing import Any, TypeVar

T = TypeVar("T")


async def run_all(coros: Iterable[Coroutine[Any, Any, T]]) -> list[T]:
    """Run *coros* concurrently and return their results in order.

    The first failure cancels the rest and is re-raised as-is rather
    than wrapped in an :class:`ExceptionGroup`.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(coro) for coro in coros]
    except BaseExceptionGroup as group:
        first = group.exceptions[0]
        while isinstance(first, BaseExceptionGroup):
            first = first.exceptions[0]
        raise first from None
    return [task.result() for task in tasks]
