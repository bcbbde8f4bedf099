"""
Test helpers for asserting the states a cubit emits.

Architecture:
- expect_states runs build / act / expect against one cubit
- cubit_test wraps expect_states into a collectable pytest test
"""

import pytest

pytest.register_assert_rewrite("cubit_test.cubit_test")

from .cubit_test import cubit_test, expect_states  # noqa: E402

__all__ = ["cubit_test", "expect_states"]
