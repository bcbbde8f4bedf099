"""
Runtime package for delivery scheduling and async consumption.

Architecture:
- Schedulers decide when a stream's deliveries run
- Async support turns a stream into an async iterator
- Lock helpers back each stream's synchronization
"""

from .scheduler import (
    AsyncioScheduler,
    ImmediateScheduler,
    Scheduler,
    get_default_scheduler,
    set_default_scheduler,
)

__all__ = [
    "AsyncioScheduler",
    "ImmediateScheduler",
    "Scheduler",
    "get_default_scheduler",
    "set_default_scheduler",
]
