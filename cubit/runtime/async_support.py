# cubit/runtime/async_support.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Callable, Generic, Optional, TypeVar

from cubit.core.errors import CubitError

if TYPE_CHECKING:
    from cubit.core.stream import CubitStream

S = TypeVar("S")

_DONE = object()


def _call_in_loop(loop: asyncio.AbstractEventLoop, callback: Callable[..., None], *args) -> None:
    # asyncio objects may only be touched from their own loop's thread.
    try:
        running = asyncio.get_running_loop()
    except RuntimeError:
        running = None
    if running is loop:
        callback(*args)
    else:
        loop.call_soon_threadsafe(callback, *args)


class StateIterator(Generic[S]):
    """
    Asynchronous iterator over the states a stream emits after the iterator
    was created. Iteration ends when the stream closes or ``aclose`` is called.

    Must be created and consumed on one event loop. States and the close
    signal may arrive from other threads; they are handed to that loop.
    """

    def __init__(self, stream: "CubitStream[S]") -> None:
        self._loop = asyncio.get_running_loop()
        self._queue: asyncio.Queue = asyncio.Queue()
        self._finished = False
        self._subscription = stream.subscribe(self._on_state, on_done=self._on_done)

    def _on_state(self, state: S) -> None:
        _call_in_loop(self._loop, self._queue.put_nowait, state)

    def _on_done(self) -> None:
        _call_in_loop(self._loop, self._queue.put_nowait, _DONE)

    def __aiter__(self) -> "StateIterator[S]":
        return self

    async def __anext__(self) -> S:
        if self._finished:
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _DONE:
            self._finished = True
            raise StopAsyncIteration
        return item

    async def aclose(self) -> None:
        """Stop iterating and release the subscription."""
        if self._finished:
            return
        self._finished = True
        self._subscription.cancel()
        # Wake a consumer blocked in __anext__.
        self._queue.put_nowait(_DONE)


async def wait_for_state(
    stream: "CubitStream[S]",
    predicate: Callable[[S], bool],
    timeout: Optional[float] = None,
) -> S:
    """
    Wait until the stream holds a state matching ``predicate``.

    :param stream: The stream to watch.
    :param predicate: Returns True for the awaited state.
    :param timeout: Seconds to wait before giving up, or None to wait forever.
    :return: The current state if it already matches, else the first delivered
             state that does.
    :raises asyncio.TimeoutError: If the timeout expires first.
    :raises CubitError: If the stream closes first.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def resolve(state: S) -> None:
        if future.done():
            return
        try:
            matched = predicate(state)
        except Exception as error:
            future.set_exception(error)
            return
        if matched:
            future.set_result(state)

    def fail(error: Exception) -> None:
        if not future.done():
            future.set_exception(error)

    def on_state(state: S) -> None:
        _call_in_loop(loop, resolve, state)

    def on_error(error: Exception) -> None:
        _call_in_loop(loop, fail, error)

    def on_done() -> None:
        _call_in_loop(loop, fail, CubitError(f"{type(stream).__name__} closed before the awaited state"))

    # Subscribe before reading so no emission slips between the two.
    subscription = stream.subscribe(on_state, on_error=on_error, on_done=on_done)
    try:
        current = stream.state
        if predicate(current):
            return current
        return await asyncio.wait_for(future, timeout)
    finally:
        subscription.cancel()
        if future.done() and not future.cancelled():
            # Mark as retrieved so an unused close error is not reported.
            future.exception()
