"""Schema registry -- table and column metadata without storage.

Manifesto:
    Code written against a real driver asks it for columns, tables and
    primary keys long before it writes a row.  The registry answers those
    questions from definitions replayed during a schema-definition phase,
    so models see realistic metadata while nothing is ever stored.

    - **Explicit primary keys:** ``has_primary_key`` is authoritative, never
      guessed from the columns (habtm join tables answer ``None``)
    - **Total lookups:** unknown tables yield an empty column tuple
    - **Last write wins:** re-defining a table replaces it wholesale
    - **Constraints swallowed:** FK/PK registration is accepted and ignored

Architecture::

    SchemaRegistry
    ├── define_table(name, columns, has_primary_key)  → Table
    ├── drop_table(name)                               → Table | None
    ├── columns_for(name)                              → tuple[Column, ...]
    ├── primary_key_for(name)                          → "id" | None
    ├── add_foreign_key_constraint(*args, **kwargs)    → ForeignKeyConstraint
    └── add_primary_key_constraint(*args, **kwargs)    → PrimaryKeyConstraint

Examples:
    >>> registry = SchemaRegistry()
    >>> registry.define_table("employees", [("name", "string")])
    Table(name='employees', ...)
    >>> registry.primary_key_for("employees")
    'id'
    >>> registry.columns_for("unknown")
    ()

Tags:
    nulldb, schema, registry, metadata, habtm

Doc-Types:
    api-reference
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

PRIMARY_KEY_NAME = "id"


class ColumnType(str, Enum):
    """Declared column types understood by the schema DSL."""

    PRIMARY_KEY = "primary_key"
    STRING = "string"
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    TIME = "time"
    DATE = "date"
    BINARY = "binary"
    BOOLEAN = "boolean"
    JSON = "json"

    @classmethod
    def parse(cls, value: ColumnType | str) -> ColumnType | str:
        """Coerce ``value`` to a member; other type names are kept verbatim.

        Schema scripts written for a real engine declare types such as
        ``bigint`` or ``uuid``; those survive as plain strings.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return str(value)


@dataclass(frozen=True)
class Column:
    """A single column definition. Immutable once added to a table."""

    name: str
    type: ColumnType | str
    nullable: bool = True
    default: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", str(self.name))
        object.__setattr__(self, "type", ColumnType.parse(self.type))


@dataclass(frozen=True)
class Table:
    """A table definition: ordered columns plus an explicit primary-key flag."""

    name: str
    columns: tuple[Column, ...] = ()
    has_primary_key: bool = True

    @property
    def primary_key(self) -> str | None:
        return PRIMARY_KEY_NAME if self.has_primary_key else None

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    def column(self, name: str) -> Column | None:
        for col in self.columns:
            if col.name == name:
                return col
        return None


# =============================================================================
# Constraint records
# =============================================================================


@dataclass(frozen=True)
class ForeignKeyConstraint:
    """Foreign-key registration as written by a schema script.

    Every field is optional; ``from_args`` maps positional arguments onto
    the fields in order and keeps the overflow in ``extra``.
    """

    table: Any = None
    column: Any = None
    referenced_table: Any = None
    referenced_column: Any = None
    name: Any = None
    options: dict[str, Any] = field(default_factory=dict)
    extra: tuple[Any, ...] = ()

    _POSITIONAL = ("table", "column", "referenced_table", "referenced_column", "name")

    @classmethod
    def from_args(cls, *args: Any, **kwargs: Any) -> ForeignKeyConstraint:
        return cls(**_bind_constraint_args(cls._POSITIONAL, args, kwargs))


@dataclass(frozen=True)
class PrimaryKeyConstraint:
    """Composite primary-key registration as written by a schema script."""

    table: Any = None
    columns: Any = None
    name: Any = None
    options: dict[str, Any] = field(default_factory=dict)
    extra: tuple[Any, ...] = ()

    _POSITIONAL = ("table", "columns", "name")

    @classmethod
    def from_args(cls, *args: Any, **kwargs: Any) -> PrimaryKeyConstraint:
        return cls(**_bind_constraint_args(cls._POSITIONAL, args, kwargs))


def _bind_constraint_args(
    positional: tuple[str, ...], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> dict[str, Any]:
    """Spread loosely structured arguments over a constraint record.

    Never fails: a positional dict lands in ``options``, unknown keywords
    are kept as options and surplus positionals go to ``extra``.
    """
    bound: dict[str, Any] = {}
    options: dict[str, Any] = {}
    extra: list[Any] = []
    slots = iter(positional)

    for arg in args:
        if isinstance(arg, dict):
            options.update(arg)
            continue
        slot = next(slots, None)
        if slot is None:
            extra.append(arg)
        else:
            bound[slot] = arg

    for key, value in kwargs.items():
        if key in positional and key not in bound:
            bound[key] = value
        else:
            options[key] = value

    bound["options"] = options
    bound["extra"] = tuple(extra)
    return bound


# =============================================================================
# Registry
# =============================================================================


ColumnSpec = Column | tuple


def _to_column(entry: ColumnSpec) -> Column:
    if isinstance(entry, Column):
        return entry
    return Column(*entry)


class SchemaRegistry:
    """Mapping of table name to ``Table``, written during schema definition.

    Effectively write-once-at-startup, read-many afterwards; guarded by a
    re-entrant lock so one registry can be shared between workers.
    """

    def __init__(self) -> None:
        self._tables: dict[str, Table] = {}
        self._lock = threading.RLock()

    def define_table(
        self,
        name: str,
        columns: Iterable[ColumnSpec] = (),
        has_primary_key: bool = True,
    ) -> Table:
        """Register ``name``, replacing any previous definition."""
        table = Table(
            name=str(name),
            columns=tuple(_to_column(c) for c in columns),
            has_primary_key=bool(has_primary_key),
        )
        with self._lock:
            self._tables[table.name] = table
        return table

    def table(self, name: str) -> Table | None:
        with self._lock:
            return self._tables.get(str(name))

    def columns_for(self, table_name: str) -> tuple[Column, ...]:
        """Columns of ``table_name``; empty for tables never defined."""
        table = self.table(table_name)
        return table.columns if table is not None else ()

    def primary_key_for(self, table_name: str) -> str | None:
        """``"id"`` for tables with a primary key, ``None`` otherwise."""
        table = self.table(table_name)
        return table.primary_key if table is not None else None

    def table_names(self) -> list[str]:
        with self._lock:
            return list(self._tables)

    def has_table(self, name: str) -> bool:
        with self._lock:
            return str(name) in self._tables

    def drop_table(self, name: str) -> Table | None:
        """Forget ``name``; returns the removed definition, if any."""
        with self._lock:
            return self._tables.pop(str(name), None)

    def add_foreign_key_constraint(self, *args: Any, **kwargs: Any) -> ForeignKeyConstraint:
        """Accept and ignore a foreign-key registration."""
        return ForeignKeyConstraint.from_args(*args, **kwargs)

    def add_primary_key_constraint(self, *args: Any, **kwargs: Any) -> PrimaryKeyConstraint:
        """Accept and ignore a primary-key registration."""
        return PrimaryKeyConstraint.from_args(*args, **kwargs)

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_table(name)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)


__all__ = [
    "PRIMARY_KEY_NAME",
    "ColumnType",
    "Column",
    "Table",
    "ForeignKeyConstraint",
    "PrimaryKeyConstraint",
    "SchemaRegistry",
]
