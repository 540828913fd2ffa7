"""Database adapter base class.

Manifesto:
    Every adapter -- the null adapter and any real driver a host
    registers next to it -- presents the same contract to the ORM layer:
    schema introspection, the data-operation entry points, and a
    connect/disconnect lifecycle.  The abstract base class spells that
    contract out so callers depend on the interface, not on runtime type
    checks against a concrete class.

Features:
    - Abstract metadata methods: ``columns()``, ``tables()``, ``primary_key()``
    - Abstract data operations: ``insert()``, ``update()``, ``delete()``,
      ``select_all()``, ``select_rows()``, ``select_value()``, ``execute()``
    - ``select_one()`` built on ``select_all()``
    - Context-manager protocol for connection lifecycle
    - Config-driven construction from ``AdapterConfig``

Tags:
    nulldb, database, abstract-base, adapter-pattern

Doc-Types:
    api-reference
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from nulldb.core.protocols import ExecutionHandle

from .types import AdapterConfig


class DatabaseAdapter(ABC):
    """
    Abstract base class for database adapters.

    Provides the connection lifecycle and defines the driver contract
    that all adapters must implement.
    """

    def __init__(self, config: AdapterConfig):
        self._config = config
        self._connected = False

    @property
    def config(self) -> AdapterConfig:
        """Configuration this adapter was established with."""
        return self._config

    @property
    def is_connected(self) -> bool:
        """Whether adapter is connected."""
        return self._connected

    @property
    @abstractmethod
    def adapter_name(self) -> str:
        """Constant identifying the adapter implementation."""
        ...

    @abstractmethod
    def supports_migrations(self) -> bool:
        """Whether schema-definition operations are accepted."""
        ...

    @abstractmethod
    def connect(self) -> None:
        """Establish connection to database."""
        ...

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to database."""
        ...

    @abstractmethod
    @contextmanager
    def transaction(self) -> Iterator[DatabaseAdapter]:
        """Context manager for a transaction."""
        ...

    # -- schema introspection -------------------------------------------------

    @abstractmethod
    def columns(self, table_name: str) -> Any:
        ...

    @abstractmethod
    def tables(self) -> list[str]:
        ...

    @abstractmethod
    def primary_key(self, table_name: str) -> str | None:
        ...

    # -- data operations ------------------------------------------------------

    @abstractmethod
    def insert(
        self,
        sql: Any,
        name: str | None = None,
        pk: str | None = None,
        id_value: Any = None,
        sequence_name: str | None = None,
    ) -> Any:
        """Execute an INSERT and return the new record's id."""
        ...

    @abstractmethod
    def update(self, sql: Any, name: str | None = None, binds: Any = None) -> int:
        """Execute an UPDATE and return the number of affected rows."""
        ...

    @abstractmethod
    def delete(self, sql: Any, name: str | None = None, binds: Any = None) -> int:
        """Execute a DELETE and return the number of affected rows."""
        ...

    @abstractmethod
    def select_all(self, sql: Any, name: str | None = None, binds: Any = None) -> list:
        """Execute a query and return all rows."""
        ...

    @abstractmethod
    def select_rows(self, sql: Any, name: str | None = None, binds: Any = None) -> list:
        """Execute a query and return rows as value sequences."""
        ...

    @abstractmethod
    def select_value(self, sql: Any, name: str | None = None, binds: Any = None) -> Any:
        """Execute a query and return a single scalar."""
        ...

    @abstractmethod
    def execute(self, sql: Any, name: str | None = None) -> ExecutionHandle:
        """Execute arbitrary SQL and return a result handle."""
        ...

    def select_one(self, sql: Any, name: str | None = None, binds: Any = None) -> Any:
        """Execute query and return single result."""
        rows = self.select_all(sql, name, binds)
        return rows[0] if rows else None

    def __enter__(self) -> DatabaseAdapter:
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.disconnect()


__all__ = [
    "DatabaseAdapter",
]
