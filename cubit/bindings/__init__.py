"""
Bindings package for UI layers.

Framework-agnostic lifecycles that subscribe a consumer to a cubit, keep the
previous/current bookkeeping and release the subscription on teardown.
"""

from .builder import CubitBuilder
from .filters import skip
from .listener import CubitListener
from .provider import CubitProvider

__all__ = ["CubitBuilder", "CubitListener", "CubitProvider", "skip"]
