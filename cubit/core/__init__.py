"""
Core package providing the state holder and the cubit built on it.

Architecture:
- CubitStream owns the current state and the subscriber list
- Cubit adds the transition hook in front of every emission
- Transition records are built per emission and never stored

Design Patterns:
- Observer Pattern for subscribers
- Template Method for on_transition
- Strategy Pattern for hooks and delivery scheduling
"""

# Import order matters to avoid circular dependencies
from .errors import CubitError, EmitAfterCloseError, InvalidInitialStateError
from .status import StreamStatus
from .transition import Transition
from .hooks import HookManager, LoggingHook, RecordingHook, TransitionHook
from .stream import UNSET, CubitStream, Subscription
from .cubit import Cubit

__all__ = [
    # Errors
    "CubitError",
    "EmitAfterCloseError",
    "InvalidInitialStateError",
    # Hooks
    "HookManager",
    "LoggingHook",
    "RecordingHook",
    "TransitionHook",
    # Streams
    "UNSET",
    "Cubit",
    "CubitStream",
    "StreamStatus",
    "Subscription",
    "Transition",
]
