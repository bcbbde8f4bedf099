# cubit/runtime/concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading


class _LockFactory:
    """
    Internal factory for the lock guarding a stream's state, closed flag and
    subscriptions. Re-entrant, so hooks and subscribers running on the owning
    thread may read state or emit again while the lock is held.
    """

    def create_lock(self) -> threading.RLock:
        """
        Return a new re-entrant lock instance.
        """
        return threading.RLock()


def get_lock() -> threading.RLock:
    """
    Provide a new lock instance to be used for synchronization.
    """
    return _LockFactory().create_lock()
