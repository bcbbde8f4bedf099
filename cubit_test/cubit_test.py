# cubit_test/cubit_test.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import inspect
import re
from typing import Any, Callable, List, Optional, Sequence, Type, TypeVar, Union

import pytest

from cubit.bindings.filters import skip as skip_states
from cubit.core.stream import CubitStream

C = TypeVar("C", bound=CubitStream)

Expected = Union[Sequence[Any], Callable[[], Sequence[Any]]]
ExpectedErrors = Union[Sequence[Type[BaseException]], Callable[[], Sequence[Type[BaseException]]]]


def _resolve(value: Any) -> List[Any]:
    return list(value() if callable(value) else value)


async def expect_states(
    build: Callable[[], C],
    act: Optional[Callable[[C], Any]] = None,
    expect: Expected = (),
    *,
    skip: int = 0,
    wait: Optional[float] = None,
    errors: Optional[ExpectedErrors] = None,
) -> None:
    """
    Build a cubit, act on it and assert the states it emitted.

    :param build: Returns the cubit under test.
    :param act: Optional interaction with the cubit. May be a coroutine function.
    :param expect: The states expected, in order, or a callable returning them.
    :param skip: Number of leading states to ignore.
    :param wait: Seconds to wait after ``act``, for cubits that emit later.
    :param errors: Exception types ``act`` is expected to raise, or a callable
                   returning them. When omitted, exceptions from ``act``
                   propagate.
    :raises AssertionError: If emitted states or raised errors differ.
    """
    cubit = build()
    states: List[Any] = []
    raised: List[BaseException] = []
    subscription = cubit.subscribe(skip_states(skip, states.append))
    try:
        if act is not None:
            try:
                result = act(cubit)
                if inspect.isawaitable(result):
                    await result
            except Exception as error:
                if errors is None:
                    raise
                raised.append(error)
        if wait is not None:
            await asyncio.sleep(wait)
        # Let deliveries scheduled on the loop run before closing drops them.
        await asyncio.sleep(0)
    finally:
        subscription.cancel()
        cubit.close()

    expected = _resolve(expect)
    assert states == expected, f"Expected states {expected!r}, got {states!r}"

    if errors is not None:
        expected_errors = _resolve(errors)
        raised_types = [type(error) for error in raised]
        assert raised_types == expected_errors, f"Expected errors {expected_errors!r}, got {raised_types!r}"


def cubit_test(
    description: str,
    build: Callable[[], C],
    act: Optional[Callable[[C], Any]] = None,
    expect: Expected = (),
    *,
    skip: int = 0,
    wait: Optional[float] = None,
    errors: Optional[ExpectedErrors] = None,
) -> Callable[[], Any]:
    """
    Create a pytest test that runs ``expect_states`` with the given arguments.
    Assign the result to a ``test_`` name in a test module::

        test_increment = cubit_test(
            "emits [1] when increment is called",
            build=CounterCubit,
            act=lambda cubit: cubit.increment(),
            expect=[1],
        )
    """

    @pytest.mark.asyncio
    async def _cubit_test() -> None:
        await expect_states(build, act, expect, skip=skip, wait=wait, errors=errors)

    name = "test_" + re.sub(r"\W+", "_", description).strip("_").lower()
    _cubit_test.__name__ = name
    _cubit_test.__qualname__ = name
    _cubit_test.__doc__ = description
    return _cubit_test
