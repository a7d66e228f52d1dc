"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
CirrusDB client, a product of Garudex Labs

Concurrency throttle for outbound requests.

Bounds the number of in-flight units of work and holds excess demand in a
FIFO wait queue. A unit that settles hands its slot straight to the head of
the queue, so the active count never rises above the limit and a queued unit
is never overtaken by a later submission.

Slot bookkeeping never awaits between reading and updating the active count
or the queue, which makes it atomic with respect to other coroutines on the
same event loop.
"""

import asyncio
from collections import deque
from typing import Awaitable, Callable, Deque, Optional, TypeVar

from cirrusdb.exceptions import CapacityError
from cirrusdb.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar('T')

UnitOfWork = Callable[[], Awaitable[T]]


class Throttle:
    """
    Admission gate limiting concurrently active units of work.

    Args:
        limit: Maximum concurrently active units. ``None`` or a value <= 0
            disables throttling.
        max_queue_length: Maximum number of waiting units. ``None`` means the
            wait queue is unbounded.
        reject_on_full: If True, a submission that would push the queue past
            ``max_queue_length`` fails with :class:`CapacityError` instead of
            waiting.
    """

    def __init__(
        self,
        limit: Optional[int] = 10,
        max_queue_length: Optional[int] = None,
        reject_on_full: bool = False,
    ):
        self._limit = limit if limit is not None and limit > 0 else None
        self._max_queue_length = max_queue_length
        self._reject_on_full = reject_on_full

        self._active = 0
        self._waiters: Deque[asyncio.Future] = deque()

        logger.debug(
            "throttle_initialized",
            limit=self._limit,
            max_queue_length=max_queue_length,
            reject_on_full=reject_on_full,
        )

    @property
    def limit(self) -> Optional[int]:
        return self._limit

    @property
    def active(self) -> int:
        """Number of units currently holding a slot."""
        return self._active

    @property
    def queued(self) -> int:
        """Number of units waiting for a slot."""
        return sum(1 for waiter in self._waiters if not waiter.done())

    @property
    def is_throttling(self) -> bool:
        return self._limit is not None

    async def submit(self, unit_of_work: UnitOfWork) -> T:
        """
        Run ``unit_of_work`` once a slot is available.

        The unit's own result or exception is passed through untouched.

        Raises:
            CapacityError: If the wait queue is full and the overflow
                policy rejects. The unit of work is never invoked.
        """
        if not self.is_throttling:
            return await unit_of_work()

        await self._acquire()
        try:
            return await unit_of_work()
        finally:
            self._release()

    async def _acquire(self) -> None:
        if self._active < self._limit and not self._waiters:
            self._active += 1
            return

        if (
            self._reject_on_full
            and self._max_queue_length is not None
            and len(self._waiters) >= self._max_queue_length
        ):
            logger.warning(
                "throttle_capacity_exceeded",
                active=self._active,
                queued=len(self._waiters),
                max_queue_length=self._max_queue_length,
            )
            raise CapacityError(
                f"Connection limit of {self._limit} reached and wait queue is full "
                f"({self._max_queue_length} queued)"
            )

        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        logger.debug("throttle_queued", active=self._active, queued=len(self._waiters))

        try:
            # The releasing unit transfers its slot by resolving this future.
            await waiter
        except asyncio.CancelledError:
            if waiter.done() and not waiter.cancelled():
                # Slot was already handed over; pass it on.
                self._release()
            else:
                try:
                    self._waiters.remove(waiter)
                except ValueError:
                    pass
            raise

    def _release(self) -> None:
        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                waiter.set_result(None)
                return
        self._active -= 1
