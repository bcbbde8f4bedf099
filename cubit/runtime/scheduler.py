# cubit/runtime/scheduler.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Scheduler(ABC):
    """
    Decides when a stream's deliveries run relative to the emitting caller.

    Implementations must run scheduled callbacks in the order they were
    scheduled; streams rely on this to keep deliveries FIFO.
    """

    @abstractmethod
    def schedule(self, callback: Callable[[], None]) -> None:
        """
        Arrange for ``callback`` to be run.

        :param callback: A zero-argument callable performing one delivery.
        """
        raise NotImplementedError()


class ImmediateScheduler(Scheduler):
    """
    Runs deliveries inline, on the emitting thread, before ``emit`` returns.
    """

    def schedule(self, callback: Callable[[], None]) -> None:
        callback()


class AsyncioScheduler(Scheduler):
    """
    Runs deliveries on a later turn of an asyncio event loop.

    If no loop was given, the loop running at schedule time is used. Streams
    pin an unpinned scheduler to the loop running when they are built or
    subscribed to (see ``bind_running_loop``), so emits from worker threads
    are still delivered on that loop. When no loop is available at all, or the
    pinned loop has closed and none is running, deliveries fall back to
    running inline.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """
        :param loop: Loop to deliver on. Defaults to the running loop at each call.
        """
        self._loop = loop
        self._warned = False

    @property
    def loop(self) -> Optional[asyncio.AbstractEventLoop]:
        """The loop this scheduler is pinned to, if any."""
        return self._loop

    def bind_running_loop(self) -> "AsyncioScheduler":
        """
        Return a scheduler pinned to the loop running in this thread.

        Returns ``self`` when pinned to a loop that is still open, or when no
        loop is running.
        """
        if self._loop is not None and not self._loop.is_closed():
            return self
        loop = _running_loop()
        if loop is None:
            return self
        return AsyncioScheduler(loop=loop)

    def schedule(self, callback: Callable[[], None]) -> None:
        loop = self._loop
        if loop is None or loop.is_closed():
            loop = _running_loop()

        if loop is None:
            self._run_inline(callback)
            return

        try:
            loop.call_soon_threadsafe(callback)
        except RuntimeError:
            # The loop closed after the check above.
            if not loop.is_closed():
                raise
            self._run_inline(callback)

    def _run_inline(self, callback: Callable[[], None]) -> None:
        if not self._warned:
            logger.debug("No running event loop, delivering inline")
            self._warned = True
        callback()


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


_default_lock = threading.Lock()
_default_scheduler: Scheduler = AsyncioScheduler()


def get_default_scheduler() -> Scheduler:
    """
    Return the scheduler used by streams constructed without one.
    """
    with _default_lock:
        return _default_scheduler


def set_default_scheduler(scheduler: Scheduler) -> None:
    """
    Replace the scheduler used by streams constructed without one. Streams that
    already exist keep the scheduler they were built with.

    :param scheduler: The new default scheduler.
    :raises TypeError: If ``scheduler`` is not a Scheduler.
    """
    global _default_scheduler
    if not isinstance(scheduler, Scheduler):
        raise TypeError(f"Expected a Scheduler, got {type(scheduler).__name__}")
    with _default_lock:
        _default_scheduler = scheduler
