"""Adapters — bindings for the build command, filesystem and code generator.

Public re-exports for convenient access.
"""

from typegen.adapters.base import Adapter, ExecutionContext
from typegen.adapters.mock import MockAdapter
from typegen.adapters.registry import AdapterRegistry, default_registry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
    "default_registry",
]
