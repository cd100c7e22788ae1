"""
Existence lookup capability and bundled implementations.
"""

from .base_lookup import ExistenceLookup
from .caching_lookup import CachingLookup
from .callable_lookup import CallableLookup
from .in_memory_lookup import InMemoryLookup

__all__ = [
    "ExistenceLookup",
    "InMemoryLookup",
    "CallableLookup",
    "CachingLookup",
]
