# cubit/bindings/provider.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Callable, Generic, Optional, TypeVar

from cubit.core.errors import CubitError
from cubit.core.stream import CubitStream

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=CubitStream)


class CubitProvider(Generic[C]):
    """
    Owns the lifetime of a cubit for the scope that provides it.

    A cubit made by ``create`` belongs to the provider and is closed by
    ``dispose``. A cubit handed in through ``value`` belongs to the caller and
    is left open.
    """

    def __init__(
        self,
        create: Optional[Callable[[], C]] = None,
        *,
        value: Optional[C] = None,
        lazy: bool = True,
    ) -> None:
        """
        :param create: Factory for an owned cubit.
        :param value: An existing cubit to expose without owning it.
        :param lazy: Defer ``create`` until the cubit is first accessed.
        :raises ValueError: Unless exactly one of create and value is given.
        """
        if (create is None) == (value is None):
            raise ValueError("Provide exactly one of create or value")
        self._create = create
        self._cubit: Optional[C] = value
        self._owns = create is not None
        self._disposed = False
        if self._owns and not lazy:
            self._cubit = self._make()

    @property
    def cubit(self) -> C:
        """The provided cubit, created on first access when lazy."""
        if self._disposed:
            raise CubitError("CubitProvider has been disposed")
        if self._cubit is None:
            self._cubit = self._make()
        return self._cubit

    @property
    def is_created(self) -> bool:
        return self._cubit is not None

    @property
    def owns_cubit(self) -> bool:
        return self._owns

    def dispose(self) -> None:
        """Close an owned cubit, if one was created. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True
        if self._owns and self._cubit is not None:
            logger.debug("Closing provided %s", type(self._cubit).__name__)
            self._cubit.close()

    def __enter__(self) -> C:
        return self.cubit

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    def _make(self) -> C:
        cubit = self._create()
        if not isinstance(cubit, CubitStream):
            raise TypeError(f"create returned {type(cubit).__name__}, expected a cubit")
        return cubit
