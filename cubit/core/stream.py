# cubit/core/stream.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Deque, Generic, List, Optional, Tuple, TypeVar

from cubit.core.errors import EmitAfterCloseError, InvalidInitialStateError
from cubit.core.status import StreamStatus
from cubit.runtime.concurrency import get_lock
from cubit.runtime.scheduler import AsyncioScheduler, Scheduler, get_default_scheduler

logger = logging.getLogger(__name__)

S = TypeVar("S")


class _Unset:
    """Marker for an initial state that was never provided."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


class Subscription(Generic[S]):
    """
    One consumer's registration on a stream. Owned by the consumer, which must
    cancel it when it goes away so callbacks never outlive it.
    """

    def __init__(
        self,
        stream: "CubitStream[S]",
        on_state: Callable[[S], None],
        on_error: Optional[Callable[[Exception], None]] = None,
        on_done: Optional[Callable[[], None]] = None,
    ) -> None:
        """
        :param stream: The stream this subscription is registered on.
        :param on_state: Called with every state emitted after registration.
        :param on_error: Called with any exception raised by ``on_state``.
        :param on_done: Called once when the stream closes.
        """
        self._stream = stream
        self._on_state = on_state
        self._on_error = on_error
        self._on_done = on_done
        self._active = True

    @property
    def is_active(self) -> bool:
        """False once cancelled or once the stream has closed."""
        return self._active

    def cancel(self) -> None:
        """
        Stop receiving states. Safe to call more than once; no callback runs
        after the first call returns.
        """
        self._stream._cancel(self)

    def __enter__(self) -> "Subscription[S]":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.cancel()

    def _deliver(self, state: S) -> None:
        if not self._active:
            return
        try:
            self._on_state(state)
        except Exception as error:
            self._handle_error(error, state)

    def _handle_error(self, error: Exception, state: S) -> None:
        if self._on_error is None:
            logger.error("Subscriber %r failed on state %r", self._on_state, state, exc_info=error)
            return
        try:
            self._on_error(error)
        except Exception:
            logger.exception("Error handler %r failed", self._on_error)

    def _finish(self) -> None:
        self._active = False
        if self._on_done is None:
            return
        try:
            self._on_done()
        except Exception:
            logger.exception("Done handler %r failed", self._on_done)


class CubitStream(Generic[S]):
    """
    Holds exactly one current state and broadcasts every later state to any
    number of independent subscribers.

    ``state`` always answers synchronously with the most recently emitted
    value, even while deliveries of it are still pending on the scheduler.

    Subscriber callbacks run while the stream's lock is held, which is what
    guarantees nothing is delivered after ``close`` or ``cancel`` returns.
    The cost is that a slow callback delays ``state``, ``emit`` and
    ``subscribe`` on every other thread for as long as it runs. A callback
    must not block waiting on another thread that touches this stream, or
    the two deadlock.

    With an ``AsyncioScheduler`` that is not pinned to a loop, the stream pins
    it to the loop running when the stream is built or subscribed to. States
    emitted from worker threads are then delivered on that loop.
    """

    def __init__(self, initial_state: S, *, scheduler: Optional[Scheduler] = None) -> None:
        """
        :param initial_state: The state before anything is emitted. Required.
        :param scheduler: Decides when deliveries run. Defaults to the module
                          default from ``cubit.runtime.scheduler``.
        :raises InvalidInitialStateError: If ``initial_state`` is UNSET.
        """
        if initial_state is UNSET:
            raise InvalidInitialStateError(f"{type(self).__name__} requires an initial state")

        self._lock = get_lock()
        self._state = initial_state
        self._closed = False
        self._subscriptions: List[Subscription[S]] = []
        self._pending: Deque[Tuple[S, Tuple[Subscription[S], ...]]] = deque()
        self._draining = False
        self._scheduler = scheduler if scheduler is not None else get_default_scheduler()
        self._bind_loop()

    @property
    def state(self) -> S:
        """The current state."""
        with self._lock:
            return self._state

    @property
    def is_closed(self) -> bool:
        with self._lock:
            return self._closed

    @property
    def status(self) -> StreamStatus:
        with self._lock:
            return StreamStatus.CLOSED if self._closed else StreamStatus.OPEN

    @property
    def subscriber_count(self) -> int:
        """Number of live subscriptions."""
        with self._lock:
            return len(self._subscriptions)

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    def emit(self, state: S) -> None:
        """
        Make ``state`` the current state and deliver it to every subscription
        active right now.

        If the scheduler raises, the previous state is restored, nothing is
        delivered and the scheduler's exception propagates. Any transition
        hooks a subclass ran before calling this have already seen the
        transition.

        :param state: The new state.
        :raises EmitAfterCloseError: If the stream has been closed.
        """
        with self._lock:
            if self._closed:
                raise EmitAfterCloseError(f"Cannot emit new states after calling close on {type(self).__name__}")
            previous = self._state
            self._state = state
            if not self._subscriptions:
                return
            # Snapshot now: later subscribers must not see this state.
            entry = (state, tuple(self._subscriptions))
            self._pending.append(entry)
            try:
                self._scheduler.schedule(self._drain)
            except Exception:
                if self._pending and self._pending[-1] is entry:
                    self._pending.pop()
                self._state = previous
                raise

    def subscribe(
        self,
        on_state: Callable[[S], None],
        *,
        on_error: Optional[Callable[[Exception], None]] = None,
        on_done: Optional[Callable[[], None]] = None,
    ) -> Subscription[S]:
        """
        Register for states emitted from now on. The current state is not
        replayed; read ``state`` for it.

        :param on_state: Called with each later state, in emission order.
        :param on_error: Receives exceptions raised by ``on_state``. When
                         omitted they are logged.
        :param on_done: Called once when the stream closes. Called right away
                        if the stream is already closed.
        :return: The subscription handle.
        """
        if not callable(on_state):
            raise TypeError("on_state must be callable")

        subscription = Subscription(self, on_state, on_error, on_done)
        with self._lock:
            if self._closed:
                subscription._finish()
                return subscription
            self._bind_loop()
            self._subscriptions.append(subscription)
        logger.debug("Subscribed %r to %s", on_state, type(self).__name__)
        return subscription

    def close(self) -> None:
        """
        End the stream. Pending deliveries are dropped, every subscription is
        finished, and later emissions raise. Calling close again does nothing.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._pending.clear()
            subscriptions, self._subscriptions = self._subscriptions, []
            for subscription in subscriptions:
                subscription._finish()
        logger.debug("Closed %s with state %r", type(self).__name__, self._state)

    def _bind_loop(self) -> None:
        if isinstance(self._scheduler, AsyncioScheduler):
            self._scheduler = self._scheduler.bind_running_loop()

    def _cancel(self, subscription: Subscription[S]) -> None:
        with self._lock:
            if not subscription._active:
                return
            subscription._active = False
            try:
                self._subscriptions.remove(subscription)
            except ValueError:
                pass
        logger.debug("Cancelled subscription %r on %s", subscription._on_state, type(self).__name__)

    def _drain(self) -> None:
        with self._lock:
            # A drain already running further up this thread's stack will pick
            # up whatever was just queued, in order.
            if self._draining:
                return
            self._draining = True
            try:
                while self._pending:
                    state, subscriptions = self._pending.popleft()
                    for subscription in subscriptions:
                        subscription._deliver(state)
            finally:
                self._draining = False

    def __aiter__(self):
        from cubit.runtime.async_support import StateIterator

        return StateIterator(self)
