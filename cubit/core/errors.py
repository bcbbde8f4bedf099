# cubit/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


class CubitError(Exception):
    """
    Base exception class for errors raised by the cubit library.
    """


class InvalidInitialStateError(CubitError):
    """
    Raised when a stream or cubit is constructed without a defined initial state.
    """


class EmitAfterCloseError(CubitError):
    """
    Raised when a new state is emitted after the stream has been closed.
    """
