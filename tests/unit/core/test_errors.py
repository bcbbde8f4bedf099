# tests/unit/core/test_errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


def test_error_hierarchy(error_classes):
    CubitError, InvalidInitialStateError, EmitAfterCloseError = error_classes
    assert issubclass(InvalidInitialStateError, CubitError)
    assert issubclass(EmitAfterCloseError, CubitError)
    assert issubclass(CubitError, Exception)


def test_exceptions_instantiation(error_classes):
    CubitError, InvalidInitialStateError, EmitAfterCloseError = error_classes
    e = InvalidInitialStateError("Missing initial state")
    assert str(e) == "Missing initial state"
    e = EmitAfterCloseError("Closed")
    assert str(e) == "Closed"
