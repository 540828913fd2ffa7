"""nulldb core -- a storage driver that records intent instead of storing data.

Architecture::

    Layer 1 -- Types & Errors
        errors.py             Narrow error hierarchy (NullDBError, ConfigError)
        protocols.py          StorageDriver / ExecutionHandle contracts
        timestamps.py         UTC helpers (stdlib-only)

    Layer 2 -- Core components
        schema.py             SchemaRegistry, Table, Column, constraint records
        identifiers.py        IdentifierGenerator (surrogate ids)
        statements.py         StatementLog, Statement, EntryPoint

    Layer 3 -- Adapter engine
        adapters/             DatabaseAdapter ABC, NullDBAdapter, registry

    Layer 4 -- Boundary glue
        schema_definition.py  Schema DSL replayed by schema scripts
        schema_loader.py      Schema file / SQLAlchemy MetaData replay
        switch.py             ConnectionSwitch (nullify / restore)

    Cross-cutting
        logging.py            structlog configuration
        settings.py           NullDBSettings (pydantic-settings)
"""

from nulldb.core.adapters import (
    ADAPTER_NAME,
    SCHEMA_INFO_TABLE,
    AdapterConfig,
    AdapterRegistry,
    AdapterType,
    DatabaseAdapter,
    NullDBAdapter,
    NullResult,
    adapter_registry,
    get_adapter,
)
from nulldb.core.errors import (
    AdapterStateError,
    ConfigError,
    ErrorCategory,
    ErrorContext,
    InvalidConfigError,
    MissingConfigError,
    NullDBError,
    SchemaLoadError,
)
from nulldb.core.identifiers import IdentifierGenerator
from nulldb.core.protocols import ExecutionHandle, StorageDriver
from nulldb.core.schema import (
    Column,
    ColumnType,
    ForeignKeyConstraint,
    PrimaryKeyConstraint,
    SchemaRegistry,
    Table,
)
from nulldb.core.schema_definition import SchemaDefinition, TableBuilder
from nulldb.core.schema_loader import SchemaLoader, load_metadata
from nulldb.core.settings import NullDBSettings
from nulldb.core.statements import EntryPoint, Statement, StatementLog
from nulldb.core.switch import ConnectionSwitch, default_switch

__all__ = [
    # adapters
    "ADAPTER_NAME",
    "SCHEMA_INFO_TABLE",
    "AdapterConfig",
    "AdapterRegistry",
    "AdapterType",
    "DatabaseAdapter",
    "NullDBAdapter",
    "NullResult",
    "adapter_registry",
    "get_adapter",
    # errors
    "AdapterStateError",
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "InvalidConfigError",
    "MissingConfigError",
    "NullDBError",
    "SchemaLoadError",
    # components
    "IdentifierGenerator",
    "ExecutionHandle",
    "StorageDriver",
    "Column",
    "ColumnType",
    "ForeignKeyConstraint",
    "PrimaryKeyConstraint",
    "SchemaRegistry",
    "Table",
    "SchemaDefinition",
    "TableBuilder",
    "SchemaLoader",
    "load_metadata",
    "NullDBSettings",
    "EntryPoint",
    "Statement",
    "StatementLog",
    "ConnectionSwitch",
    "default_switch",
]
