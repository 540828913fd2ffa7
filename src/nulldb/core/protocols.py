"""
Canonical protocol definitions for nulldb.

Calling code depends on the *shape* of a storage driver, never on
runtime type checks against a concrete class. The null adapter and any
real adapter registered alongside it both satisfy ``StorageDriver``, so
a connection switch can swap one for the other without the caller
noticing anything but ``adapter_name``.

Architecture:
    ::

        StorageDriver Protocol:
        ┌────────────────────────────────────────────────────────────┐
        │ columns(table) / tables() / primary_key(table)  metadata   │
        │ insert(sql, name, pk, id_value, sequence_name)  → id       │
        │ update(sql, ...) / delete(sql, ...)             → rows     │
        │ select_all / select_rows(sql, ...)              → rows     │
        │ select_value(sql, ...)                          → scalar   │
        │ execute(sql, name)                              → handle   │
        │ adapter_name / supports_migrations()            identity   │
        └────────────────────────────────────────────────────────────┘

        ExecutionHandle Protocol:
        ┌────────────────────────────────────────────────────────────┐
        │ finish() / close()                              terminal   │
        │ fetchone() / fetchall()                         results    │
        └────────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: ``if type(conn).__name__ == "NullDBAdapter"``
    ✅ DO: ``if conn.adapter_name == ADAPTER_NAME``

Tags:
    protocol, driver, connection, nulldb, contracts

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ExecutionHandle(Protocol):
    """Result of ``execute()``; the terminal ``finish()`` must never raise."""

    def finish(self) -> None:
        ...

    def close(self) -> None:
        ...

    def fetchone(self) -> Any:
        ...

    def fetchall(self) -> list:
        ...


@runtime_checkable
class StorageDriver(Protocol):
    """
    The operations a storage driver presents to the ORM layer above it.

    Examples:
        >>> def save(driver: StorageDriver, sql: str) -> Any:
        ...     return driver.insert(sql, "Employee Create", "id")
    """

    @property
    def adapter_name(self) -> str:
        """Constant identifying the driver (e.g. ``"NullDB"``)."""
        ...

    def supports_migrations(self) -> bool:
        ...

    def columns(self, table_name: str) -> Any:
        ...

    def tables(self) -> list[str]:
        ...

    def primary_key(self, table_name: str) -> str | None:
        ...

    def insert(
        self,
        sql: Any,
        name: str | None = None,
        pk: str | None = None,
        id_value: Any = None,
        sequence_name: str | None = None,
    ) -> Any:
        ...

    def update(self, sql: Any, name: str | None = None, binds: Any = None) -> int:
        ...

    def delete(self, sql: Any, name: str | None = None, binds: Any = None) -> int:
        ...

    def select_all(self, sql: Any, name: str | None = None, binds: Any = None) -> list:
        ...

    def select_rows(self, sql: Any, name: str | None = None, binds: Any = None) -> list:
        ...

    def select_value(self, sql: Any, name: str | None = None, binds: Any = None) -> Any:
        ...

    def execute(self, sql: Any, name: str | None = None) -> ExecutionHandle:
        ...


__all__ = [
    "ExecutionHandle",
    "StorageDriver",
]
