"""Adapters — bindings for the external tools genesis drives.

Public re-exports for convenient access.
"""

from genesis.adapters.base import Adapter, ExecutionContext
from genesis.adapters.mock import MockAdapter
from genesis.adapters.registry import AdapterRegistry, default_registry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
    "default_registry",
]
