"""cubit: a minimal state-management primitive for reactive UIs

A cubit holds one current state, emits new states on demand and broadcasts
them to subscribers. Every emission passes through ``on_transition`` first,
so logging, persistence or analytics can observe changes without touching
the code that emits them.

Responsibilities:
    - Current-state holding and broadcast of later states
    - Transition hooks run before each change becomes visible
    - Listener, builder and provider lifecycles for UI layers

Cross-cutting Concerns:
    Thread Safety:
        - One re-entrant lock per stream guards state, closed flag and subscriptions
        - Nothing is delivered after close() or cancel() returns

    Error Handling:
        - Library errors derive from CubitError
        - Hook errors propagate and abort the emission
        - Subscriber errors are isolated per subscription

    Logging:
        - Standard library logging, one logger per module
        - The library never configures handlers
"""

import logging

from .core import (
    UNSET,
    Cubit,
    CubitError,
    CubitStream,
    EmitAfterCloseError,
    HookManager,
    InvalidInitialStateError,
    LoggingHook,
    RecordingHook,
    StreamStatus,
    Subscription,
    Transition,
    TransitionHook,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "UNSET",
    "Cubit",
    "CubitError",
    "CubitStream",
    "EmitAfterCloseError",
    "HookManager",
    "InvalidInitialStateError",
    "LoggingHook",
    "RecordingHook",
    "StreamStatus",
    "Subscription",
    "Transition",
    "TransitionHook",
]
