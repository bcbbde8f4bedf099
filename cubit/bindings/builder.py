# cubit/bindings/builder.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

from cubit.bindings.listener import CubitListener, ListenerCondition
from cubit.core.stream import CubitStream

S = TypeVar("S")
R = TypeVar("R")


class CubitBuilder(CubitListener[S], Generic[S, R]):
    """
    Keeps ``built`` equal to ``builder(state)`` for the cubit's latest state
    that passed ``condition``. The first build happens at mount time from the
    cubit's current state.
    """

    def __init__(
        self,
        cubit: CubitStream[S],
        builder: Callable[[S], R],
        *,
        condition: Optional[ListenerCondition] = None,
        on_rebuild: Optional[Callable[[R], None]] = None,
    ) -> None:
        """
        :param cubit: The cubit to build from.
        :param builder: Turns a state into a result, e.g. a view.
        :param condition: Optional filter over (previous, current) states.
        :param on_rebuild: Called with each new result after a rebuild.
        """
        if builder is None:
            raise ValueError("builder is required")
        super().__init__(cubit, builder, condition=condition)
        self._builder = builder
        self._on_rebuild = on_rebuild
        self._built: Optional[R] = None
        self._build_count = 0

    @property
    def built(self) -> Optional[R]:
        """The most recent result of ``builder``."""
        return self._built

    @property
    def build_count(self) -> int:
        return self._build_count

    def mount(self) -> None:
        if self.is_mounted:
            return
        super().mount()
        self._build(self.cubit.state)

    def update(self, cubit: CubitStream[S]) -> None:
        changed = cubit is not self.cubit
        super().update(cubit)
        if changed and self.is_mounted:
            self._build(cubit.state)

    def _react(self, state: S) -> None:
        self._build(state)
        if self._on_rebuild is not None:
            self._on_rebuild(self._built)

    def _build(self, state: S) -> None:
        self._built = self._builder(state)
        self._build_count += 1
