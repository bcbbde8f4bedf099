# cubit/core/cubit.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import List, Optional, TypeVar

from cubit.core.errors import EmitAfterCloseError
from cubit.core.hooks import HookManager, TransitionHook
from cubit.core.stream import CubitStream
from cubit.core.transition import Transition
from cubit.runtime.scheduler import Scheduler

S = TypeVar("S")


class Cubit(CubitStream[S]):
    """
    A stream of states driven by methods that call ``emit``, with a single
    extension point, ``on_transition``, that observes every change before it
    becomes visible.

    Example::

        class CounterCubit(Cubit[int]):
            def __init__(self):
                super().__init__(0)

            def increment(self):
                self.emit(self.state + 1)
    """

    def __init__(
        self,
        initial_state: S,
        *,
        hooks: Optional[List[TransitionHook]] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        """
        :param initial_state: The state before anything is emitted. Required.
        :param hooks: Optional list of hook objects implementing on_transition.
        :param scheduler: Decides when subscribers are notified.
        """
        super().__init__(initial_state, scheduler=scheduler)
        self._hook_manager = HookManager(hooks)

    @property
    def hooks(self) -> HookManager:
        """The hooks run by the base ``on_transition``."""
        return self._hook_manager

    def on_transition(self, transition: Transition[S]) -> None:
        """
        Called for every emission, before ``state`` is updated and before any
        subscriber is notified. Raising here cancels the emission.

        The base implementation runs the registered hooks. Overrides should
        call ``super().on_transition(transition)`` last.
        """
        self._hook_manager.execute_on_transition(self, transition)

    def emit(self, state: S) -> None:
        """
        Build the transition from the current state to ``state``, pass it to
        ``on_transition``, then commit ``state``.

        :param state: The new state.
        :raises EmitAfterCloseError: If the cubit has been closed. The hook is
                                     not called.
        """
        with self._lock:
            if self._closed:
                raise EmitAfterCloseError(f"Cannot emit new states after calling close on {type(self).__name__}")
            self.on_transition(Transition(current_state=self._state, next_state=state))
            super().emit(state)
