# cubit/bindings/listener.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Callable, Generic, Optional, TypeVar

from cubit.core.stream import CubitStream, Subscription

logger = logging.getLogger(__name__)

S = TypeVar("S")

ListenerCondition = Callable[[S, S], bool]


class CubitListener(Generic[S]):
    """
    Calls ``listener`` once for each state change of a cubit, for side effects
    such as navigation or notifications.

    An optional ``condition(previous, current)`` decides whether ``listener``
    runs for a given state. ``previous`` starts as the cubit's state at mount
    time and always advances to the delivered state, whether or not the
    listener ran.
    """

    def __init__(
        self,
        cubit: CubitStream[S],
        listener: Callable[[S], None],
        *,
        condition: Optional[ListenerCondition] = None,
    ) -> None:
        """
        :param cubit: The cubit to listen to.
        :param listener: Called with each state that passes ``condition``.
        :param condition: Optional filter over (previous, current) states.
        """
        if listener is None:
            raise ValueError("listener is required")
        self._cubit = cubit
        self._listener = listener
        self._condition = condition
        self._previous: Optional[S] = None
        self._subscription: Optional[Subscription[S]] = None

    @property
    def cubit(self) -> CubitStream[S]:
        return self._cubit

    @property
    def previous_state(self) -> Optional[S]:
        """The last state seen, or the state at mount time."""
        return self._previous

    @property
    def is_mounted(self) -> bool:
        return self._subscription is not None

    def mount(self) -> None:
        """Start listening. Does nothing if already mounted."""
        if self._subscription is not None:
            return
        self._previous = self._cubit.state
        self._subscribe()

    def update(self, cubit: CubitStream[S]) -> None:
        """
        Point the listener at ``cubit``. When it differs from the current one,
        the old subscription is cancelled and ``previous_state`` restarts from
        the new cubit's state.
        """
        if cubit is self._cubit:
            return
        was_mounted = self._subscription is not None
        self._unsubscribe()
        self._cubit = cubit
        if was_mounted:
            self._previous = cubit.state
            self._subscribe()

    def dispose(self) -> None:
        """Stop listening. Safe to call more than once."""
        self._unsubscribe()

    def __enter__(self) -> "CubitListener[S]":
        self.mount()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    def _on_state(self, state: S) -> None:
        try:
            if self._condition is None or self._condition(self._previous, state):
                self._react(state)
        finally:
            self._previous = state

    def _react(self, state: S) -> None:
        self._listener(state)

    def _subscribe(self) -> None:
        self._subscription = self._cubit.subscribe(self._on_state)
        logger.debug("%s mounted on %s", type(self).__name__, type(self._cubit).__name__)

    def _unsubscribe(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None
