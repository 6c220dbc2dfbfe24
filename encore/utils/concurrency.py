"""Shared concurrency primitives for the enrichment fan-out.

Every outbound provider call made while enriching events goes through a
per-request semaphore and a per-call timeout, so an artist with many
events can never open an unbounded number of upstream connections.

Three patterns are exposed:

1. **bounded_call** -- run one awaitable under a semaphore slot with a
   timeout.  A timeout surfaces as ``asyncio.TimeoutError`` and is handled
   by the caller like any other branch failure.

2. **throttled_gather** -- a drop-in replacement for ``asyncio.gather``
   that wraps each awaitable in :func:`bounded_call`.  Used for the
   weather/hotels/transport sub-lookups of one event.

3. **gather_until_deadline** -- run independent units of work as tasks,
   wait for them up to an overall deadline, cancel whatever is still
   running, and return results in submission order.  Used for the
   per-event fan-out.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

import structlog

from encore.utils.logging import get_logger

_T = TypeVar("_T")

_logger: structlog.BoundLogger = get_logger(__name__)


async def bounded_call(
    awaitable: Awaitable[_T],
    semaphore: asyncio.Semaphore,
    timeout: float | None = None,
) -> _T:
    """Await *awaitable* while holding one slot of *semaphore*.

    The timeout clock starts once the slot is acquired, so time spent
    queueing behind other calls does not count against the call itself.
    """
    async with semaphore:
        if timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=timeout)


async def throttled_gather(
    coros: list[Awaitable[_T]],
    semaphore: asyncio.Semaphore,
    timeout: float | None = None,
    return_exceptions: bool = True,
) -> list[_T | BaseException]:
    """Run awaitables concurrently under a shared semaphore.

    Parameters
    ----------
    coros:
        Awaitable objects to execute concurrently.
    semaphore:
        Semaphore capping how many of them run at once.
    timeout:
        Optional per-awaitable timeout in seconds.
    return_exceptions:
        If ``True``, exceptions are returned in the results list rather
        than being raised.  Mirrors ``asyncio.gather`` semantics.

    Returns
    -------
    list[_T | BaseException]
        Results in the same order as the input coroutines.
    """
    tasks = [bounded_call(c, semaphore, timeout) for c in coros]
    return await asyncio.gather(*tasks, return_exceptions=return_exceptions)


async def gather_until_deadline(
    coros: list[Awaitable[_T]],
    deadline: float | None,
) -> list[_T | BaseException]:
    """Run *coros* as tasks and collect them in order, bounded by *deadline*.

    Tasks still running when the deadline expires are cancelled and show up
    in the result list as ``asyncio.TimeoutError`` instances.  If the caller
    itself is cancelled, every task is cancelled before the cancellation
    propagates.

    Parameters
    ----------
    coros:
        Independent units of work.
    deadline:
        Overall budget in seconds, or ``None`` to wait for everything.

    Returns
    -------
    list[_T | BaseException]
        One entry per input, in submission order.
    """
    if not coros:
        return []

    tasks = [asyncio.ensure_future(c) for c in coros]
    try:
        _, pending = await asyncio.wait(tasks, timeout=deadline)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    if pending:
        _logger.warning("deadline_expired", unfinished=len(pending), total=len(tasks))
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    results: list[_T | BaseException] = []
    for task in tasks:
        if task in pending:
            results.append(asyncio.TimeoutError())
        elif task.cancelled():
            results.append(asyncio.CancelledError())
        elif task.exception() is not None:
            results.append(task.exception())
        else:
            results.append(task.result())
    return results
