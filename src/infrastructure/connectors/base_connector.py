"""Base connector module providing shared functionality for service connectors.

Key Components:
- await_or_interrupt: Race an awaitable against a caller-supplied cancel event

Connectors suspend in two places, waiting for rate limiter admission and
waiting for the network. Both waits must give up promptly when the caller
signals cancellation, and report that as ``LookupInterruptedError`` rather
than as an upstream failure.
"""

import asyncio
from collections.abc import Awaitable
import contextlib
from typing import TypeVar

from src.config import get_logger
from src.domain.exceptions import LookupInterruptedError

logger = get_logger(__name__).bind(service="connectors")

T = TypeVar("T")


async def await_or_interrupt(
    awaitable: Awaitable[T],
    cancel: asyncio.Event | None,
    stage: str,
) -> T:
    """Await ``awaitable`` unless ``cancel`` is set first.

    Args:
        awaitable: Work to wait for
        cancel: Event signalling the caller gave up (None waits unconditionally)
        stage: Name of the wait, recorded on the raised error

    Returns:
        The awaitable's result

    Raises:
        LookupInterruptedError: If ``cancel`` was set before the work finished.
            The work is cancelled.
    """
    if cancel is None:
        return await awaitable

    work = asyncio.ensure_future(awaitable)
    if cancel.is_set():
        work.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await work
        raise LookupInterruptedError(stage)

    waiter = asyncio.ensure_future(cancel.wait())
    try:
        await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        # Also reached when our own task is cancelled
        for pending in (work, waiter):
            if not pending.done():
                pending.cancel()

    if work.done() and not work.cancelled():
        return work.result()

    with contextlib.suppress(asyncio.CancelledError):
        await work
    logger.debug("Wait interrupted by caller", stage=stage)
    raise LookupInterruptedError(stage)
