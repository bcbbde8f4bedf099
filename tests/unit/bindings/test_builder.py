# tests/unit/bindings/test_builder.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from cubit.bindings.builder import CubitBuilder
from tests.helpers.counter_cubit import CounterCubit


def test_builder_requires_callback(counter):
    with pytest.raises(ValueError):
        CubitBuilder(counter, None)


def test_builds_initial_state_on_mount(counter):
    cb = CubitBuilder(counter, lambda state: f"count: {state}")
    assert cb.built is None
    cb.mount()
    assert cb.built == "count: 0"
    assert cb.build_count == 1
    cb.dispose()


def test_rebuilds_on_each_state(counter):
    on_rebuild = MagicMock()
    with CubitBuilder(counter, lambda state: state * 10, on_rebuild=on_rebuild) as cb:
        counter.increment()
        counter.increment()
        assert cb.built == 20
        assert cb.build_count == 3
    assert on_rebuild.call_count == 2
    on_rebuild.assert_called_with(20)


def test_condition_limits_rebuilds(counter):
    cb = CubitBuilder(counter, str, condition=lambda previous, current: current > 1)
    cb.mount()
    counter.increment()
    assert cb.built == "0"
    counter.increment()
    assert cb.built == "2"
    assert cb.build_count == 2
    cb.dispose()


def test_no_rebuild_after_dispose(counter):
    cb = CubitBuilder(counter, str)
    cb.mount()
    cb.dispose()
    counter.increment()
    assert cb.built == "0"


def test_update_rebuilds_from_new_cubit(immediate_scheduler):
    first = CounterCubit(scheduler=immediate_scheduler)
    second = CounterCubit(scheduler=immediate_scheduler)
    second.emit(5)
    cb = CubitBuilder(first, str)
    cb.mount()
    cb.update(second)
    assert cb.built == "5"
    second.increment()
    assert cb.built == "6"
    cb.dispose()
