# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from cubit.runtime import scheduler as scheduler_module


@pytest.fixture
def immediate_scheduler():
    """A scheduler delivering inline, for tests that do not run a loop."""
    return scheduler_module.ImmediateScheduler()


@pytest.fixture
def counter(immediate_scheduler):
    """A CounterCubit delivering inline."""
    from tests.helpers.counter_cubit import CounterCubit

    c = CounterCubit(scheduler=immediate_scheduler)
    yield c
    c.close()


@pytest.fixture
def stream_factory(immediate_scheduler):
    """Returns a factory creating inline-delivering streams."""
    from cubit.core.stream import CubitStream

    created = []

    def _factory(initial_state=0):
        s = CubitStream(initial_state, scheduler=immediate_scheduler)
        created.append(s)
        return s

    yield _factory
    for s in created:
        s.close()


@pytest.fixture
def recording_hook():
    """A hook that keeps every transition."""
    from cubit.core.hooks import RecordingHook

    return RecordingHook()


@pytest.fixture
def mock_hook():
    """A hook mock exposing on_transition."""
    hook = MagicMock()
    hook.on_transition = MagicMock()
    return hook


@pytest.fixture
def error_classes():
    """Provides a tuple of error classes for quick reference."""
    from cubit.core.errors import CubitError, EmitAfterCloseError, InvalidInitialStateError

    return (CubitError, InvalidInitialStateError, EmitAfterCloseError)


@pytest.fixture(autouse=True)
def restore_default_scheduler():
    previous = scheduler_module.get_default_scheduler()
    yield
    scheduler_module.set_default_scheduler(previous)
