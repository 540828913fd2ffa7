"""Database adapters -- the driver contract and its null implementation.

Architecture::

    DatabaseAdapter (base.py)        Abstract base: lifecycle + driver contract
        |-- NullDBAdapter            Records every operation, stores nothing

    AdapterRegistry (registry.py)    Singleton: adapter name -> adapter class
    AdapterConfig (types.py)         Configuration an adapter was built from
    AdapterType (types.py)           Enum of built-in adapter names

Modules
-------
base            Abstract DatabaseAdapter base class
types           AdapterType enum + AdapterConfig dataclass
null            NullDBAdapter and its NullResult execute handle
registry        AdapterRegistry singleton + get_adapter() factory

Tags:
    nulldb, database, adapters, registry-pattern

Doc-Types:
    package-overview, module-index
"""

from nulldb.core.protocols import ExecutionHandle, StorageDriver

from .base import DatabaseAdapter
from .null import ADAPTER_NAME, SCHEMA_INFO_TABLE, NullDBAdapter, NullResult
from .registry import AdapterRegistry, adapter_registry, get_adapter
from .types import AdapterConfig, AdapterType

__all__ = [
    # Types
    "AdapterType",
    "AdapterConfig",
    # Protocols / Abstractions
    "StorageDriver",
    "ExecutionHandle",
    "DatabaseAdapter",
    # Implementations
    "ADAPTER_NAME",
    "SCHEMA_INFO_TABLE",
    "NullDBAdapter",
    "NullResult",
    # Registry
    "AdapterRegistry",
    "adapter_registry",
    "get_adapter",
]
