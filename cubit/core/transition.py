# cubit/core/transition.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from dataclasses import dataclass
from typing import Generic, TypeVar

S = TypeVar("S")


@dataclass(frozen=True)
class Transition(Generic[S]):
    """
    The change from one state to another, built right before a cubit commits a
    newly emitted state. It is handed to ``Cubit.on_transition`` and to any
    registered hooks, and is not stored by the cubit afterwards.

    :param current_state: The state before the emission.
    :param next_state: The state being emitted.
    """

    current_state: S
    next_state: S
