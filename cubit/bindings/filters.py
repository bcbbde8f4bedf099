# cubit/bindings/filters.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Callable, TypeVar

S = TypeVar("S")


def skip(count: int, callback: Callable[[S], None]) -> Callable[[S], None]:
    """
    Wrap ``callback`` so that its first ``count`` calls are discarded.

    :param count: Number of leading states to drop. Must not be negative.
    :param callback: The callback receiving the remaining states.
    :return: A callable suitable for ``CubitStream.subscribe``.
    """
    if count < 0:
        raise ValueError("count must not be negative")
    if count == 0:
        return callback

    remaining = [count]

    def _skipping(state: S) -> None:
        if remaining[0] > 0:
            remaining[0] -= 1
            return
        callback(state)

    return _skipping
