# tests/unit/core/test_transition.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import dataclasses

import pytest

from cubit.core.transition import Transition


def test_transition_fields():
    t = Transition(current_state=0, next_state=1)
    assert t.current_state == 0
    assert t.next_state == 1


def test_transition_equality_by_value():
    assert Transition(0, 1) == Transition(current_state=0, next_state=1)
    assert Transition(0, 1) != Transition(1, 0)
    assert hash(Transition(0, 1)) == hash(Transition(0, 1))


def test_transition_is_immutable():
    t = Transition(0, 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        t.next_state = 2


def test_transition_repr():
    assert repr(Transition(0, 1)) == "Transition(current_state=0, next_state=1)"
