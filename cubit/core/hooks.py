# cubit/core/hooks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, Optional, Protocol, runtime_checkable

from cubit.core.transition import Transition

if TYPE_CHECKING:
    from cubit.core.cubit import Cubit


@runtime_checkable
class TransitionHook(Protocol):
    """
    Hook protocol for observing transitions.

    Runtime Invariants:
    - Called before the next state is visible through ``cubit.state`` or to
      subscribers.
    - Raising aborts the emission; the exception reaches the emitter unchanged.
    """

    def on_transition(self, cubit: "Cubit", transition: Transition) -> None:
        """Observe a transition about to be applied to ``cubit``."""
        ...


class HookManager:
    """
    Manages the registration and execution of hooks that listen to cubit
    transitions. Users can attach logging, persistence or analytics without
    altering the call sites that emit.
    """

    def __init__(self, hooks: Optional[List[TransitionHook]] = None) -> None:
        """
        Initialize with an optional list of hook objects.
        """
        self._hooks: List[TransitionHook] = []
        for hook in hooks or []:
            self.register_hook(hook)

    @property
    def hooks(self) -> List[TransitionHook]:
        """A copy of the registered hooks, in execution order."""
        return list(self._hooks)

    def register_hook(self, hook: TransitionHook) -> None:
        """
        Add a new hook to the end of the manager's list of hooks.

        :param hook: An object implementing TransitionHook.
        :raises TypeError: If the hook has no on_transition method.
        """
        if not isinstance(hook, TransitionHook):
            raise TypeError(f"{type(hook).__name__} does not implement on_transition")
        self._hooks.append(hook)

    def unregister_hook(self, hook: TransitionHook) -> None:
        """
        Remove a previously registered hook. Unknown hooks are ignored.
        """
        try:
            self._hooks.remove(hook)
        except ValueError:
            pass

    def execute_on_transition(self, cubit: "Cubit", transition: Transition) -> None:
        """
        Run all hooks' on_transition logic, in registration order. The first
        hook that raises stops the chain and its exception propagates.
        """
        for hook in list(self._hooks):
            hook.on_transition(cubit, transition)

    def __len__(self) -> int:
        return len(self._hooks)


class LoggingHook:
    """Logs every transition through the standard logging module."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO) -> None:
        self._logger = logger or logging.getLogger("cubit.transitions")
        self._level = level

    def on_transition(self, cubit: "Cubit", transition: Transition) -> None:
        self._logger.log(
            self._level,
            "%s %r -> %r",
            type(cubit).__name__,
            transition.current_state,
            transition.next_state,
        )


class RecordingHook:
    """Keeps every transition it sees, oldest first."""

    def __init__(self) -> None:
        self.transitions: List[Transition[Any]] = []

    def on_transition(self, cubit: "Cubit", transition: Transition) -> None:
        self.transitions.append(transition)

    def clear(self) -> None:
        self.transitions.clear()
