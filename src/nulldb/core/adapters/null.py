"""NullDB adapter -- a storage driver that stores nothing.

Manifesto:
    Unit tests for code built on a database driver should run at full
    speed with zero I/O, yet still see realistic schema metadata and be
    able to assert what the code *tried* to write.  ``NullDBAdapter``
    presents the complete driver contract; every data operation is a
    recorded no-op with the return shape a real driver would produce.

    - **Never the reason a test fails:** no operation raises for a
      well-formed call; unknown tables degrade to empty results
    - **Driver-shaped results:** inserts return new ids, updates and
      deletes report 0 rows, selects return empty lists, ``execute``
      returns a finishable handle
    - **Everything is logged:** each intercepted call is appended to the
      execution log, tagged by entry point, scoped by checkpoints

Architecture::

    NullDBAdapter (façade)
    ├── SchemaRegistry       columns / tables / primary_key
    ├── IdentifierGenerator  insert → surrogate id
    ├── StatementLog         every data operation, checkpoints
    └── SchemaLoader         optional, replayed lazily once

Example::

    adapter = NullDBAdapter()
    with adapter.create_table("employees") as t:
        t.string("name")

    adapter.insert("INSERT INTO employees ...")     # 1
    adapter.checkpoint()
    adapter.update("UPDATE employees ...")          # 0
    adapter.contains_since_checkpoint("update")     # True

Tags:
    nulldb, adapter, test-double, null-object, execution-log

Doc-Types:
    api-reference
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from nulldb.core.errors import InvalidConfigError
from nulldb.core.identifiers import IdentifierGenerator
from nulldb.core.logging import get_logger
from nulldb.core.schema import (
    Column,
    ColumnSpec,
    ColumnType,
    ForeignKeyConstraint,
    PrimaryKeyConstraint,
    SchemaRegistry,
    Table,
)
from nulldb.core.schema_definition import SchemaDefinition, TableBuilder
from nulldb.core.schema_loader import SchemaLoader
from nulldb.core.settings import get_settings, is_configured
from nulldb.core.statements import EntryPoint, Statement, StatementLog

from .base import DatabaseAdapter
from .types import AdapterConfig, AdapterType

logger = get_logger(__name__)

ADAPTER_NAME = "NullDB"

# Bookkeeping table every real engine keeps for its migration version.
SCHEMA_INFO_TABLE = "schema_info"
SCHEMA_INFO_COLUMNS = (Column("version", ColumnType.STRING),)


class NullResult:
    """Handle returned by ``execute()``: no rows, nothing to release."""

    rowcount = 0
    lastrowid = None
    description = None

    def fetchone(self) -> None:
        return None

    def fetchall(self) -> list:
        return []

    def finish(self) -> None:
        pass

    def close(self) -> None:
        pass

    def __iter__(self) -> Iterator[Any]:
        return iter(())

    def __enter__(self) -> NullResult:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def _sql_text(sql: Any) -> str:
    # SQLAlchemy constructs render themselves through str()
    if sql is None:
        return ""
    return sql if isinstance(sql, str) else str(sql)


class NullDBAdapter(DatabaseAdapter):
    """
    Null storage adapter.

    Parameters
    ----------
    schema
        Schema file to replay on first metadata access; absolute or
        relative to ``project_root``.
    project_root
        Directory relative schema paths resolve against. Passing only a
        root loads the conventional ``db/schema.py`` below it.
    start_id
        Initial identifier floor; the first generated id is ``start_id + 1``.
        Must be a non-negative integer (``InvalidConfigError`` otherwise).
    **options
        Host-specific options, kept on ``config.options``.

    When neither ``schema`` nor ``project_root`` is given, the schema is
    loaded from the process-wide settings if ``nulldb.configure()`` was
    called, and otherwise not at all.
    """

    def __init__(
        self,
        *,
        schema: str | None = None,
        project_root: str | Path | None = None,
        start_id: int = 0,
        **options: Any,
    ):
        if isinstance(start_id, bool) or not isinstance(start_id, int) or start_id < 0:
            raise InvalidConfigError("start_id", start_id)
        config = AdapterConfig(
            adapter=AdapterType.NULLDB,
            schema=schema,
            project_root=project_root,
            start_id=start_id,
            options=options,
        )
        super().__init__(config)
        self._schema = SchemaRegistry()
        self._identifiers = IdentifierGenerator(start=start_id)
        self._log = StatementLog()
        self._loader = self._build_loader(config)
        self._schema_loaded = self._loader is None
        self._load_lock = threading.Lock()

        self._schema.define_table(SCHEMA_INFO_TABLE, SCHEMA_INFO_COLUMNS, has_primary_key=False)

    @staticmethod
    def _build_loader(config: AdapterConfig) -> SchemaLoader | None:
        if config.schema is not None or config.project_root is not None:
            return SchemaLoader(config.schema, config.project_root)
        if is_configured() and get_settings().project_root is not None:
            return SchemaLoader(None, None)
        return None

    # -- identity / lifecycle -------------------------------------------------

    @property
    def adapter_name(self) -> str:
        return ADAPTER_NAME

    def supports_migrations(self) -> bool:
        return True

    @property
    def schema(self) -> SchemaRegistry:
        return self._schema

    @property
    def identifiers(self) -> IdentifierGenerator:
        return self._identifiers

    @property
    def statement_log(self) -> StatementLog:
        return self._log

    def connect(self) -> None:
        self._connected = True

    def disconnect(self) -> None:
        self._connected = False

    @contextmanager
    def transaction(self) -> Iterator[NullDBAdapter]:
        """No isolation to provide; yields the adapter itself."""
        yield self

    # -- schema ---------------------------------------------------------------

    def load_schema(self) -> None:
        """Replay the configured schema file, once."""
        if self._schema_loaded:
            return
        with self._load_lock:
            if self._schema_loaded:
                return
            try:
                self._loader.load(self._schema)
            finally:
                self._schema_loaded = True

    def columns(self, table_name: str) -> tuple[Column, ...]:
        self.load_schema()
        if table_name == SCHEMA_INFO_TABLE and not self._schema.has_table(table_name):
            return SCHEMA_INFO_COLUMNS
        return self._schema.columns_for(table_name)

    def tables(self) -> list[str]:
        self.load_schema()
        names = self._schema.table_names()
        if SCHEMA_INFO_TABLE not in names:
            names.append(SCHEMA_INFO_TABLE)
        return names

    def primary_key(self, table_name: str) -> str | None:
        self.load_schema()
        return self._schema.primary_key_for(table_name)

    def define_table(
        self,
        name: str,
        columns: Iterable[ColumnSpec] = (),
        has_primary_key: bool = True,
    ) -> Table:
        return self._schema.define_table(name, columns, has_primary_key)

    def define_schema(self, *, verbose: bool = True) -> SchemaDefinition:
        """DSL bound to this adapter's registry."""
        return SchemaDefinition(self._schema, verbose=verbose)

    def create_table(self, name: str, *, id: bool = True, **options: Any) -> TableBuilder:
        return self.define_schema(verbose=False).create_table(name, id=id, **options)

    def add_foreign_key_constraint(self, *args: Any, **kwargs: Any) -> ForeignKeyConstraint:
        return self._schema.add_foreign_key_constraint(*args, **kwargs)

    def add_primary_key_constraint(self, *args: Any, **kwargs: Any) -> PrimaryKeyConstraint:
        return self._schema.add_primary_key_constraint(*args, **kwargs)

    # -- data operations ------------------------------------------------------

    def _record(self, entry_point: EntryPoint, sql: Any) -> Statement:
        statement = self._log.record(entry_point, _sql_text(sql))
        logger.debug(
            "nulldb.statement_recorded",
            entry_point=statement.entry_point.value,
            position=statement.position,
        )
        return statement

    def insert(
        self,
        sql: Any,
        name: str | None = None,
        pk: str | None = None,
        id_value: Any = None,
        sequence_name: str | None = None,
    ) -> Any:
        """Record the insert and return the record's surrogate id.

        An explicit ``id_value`` (an already-identified record) is returned
        unchanged; otherwise the next generated id is.
        """
        self._record(EntryPoint.INSERT, sql)
        return self._identifiers.next_id(id_value)

    def update(self, sql: Any, name: str | None = None, binds: Any = None) -> int:
        self._record(EntryPoint.UPDATE, sql)
        return 0

    def delete(self, sql: Any, name: str | None = None, binds: Any = None) -> int:
        self._record(EntryPoint.DELETE, sql)
        return 0

    def select_all(self, sql: Any, name: str | None = None, binds: Any = None) -> list:
        self._record(EntryPoint.SELECT_ALL, sql)
        return []

    def select_rows(self, sql: Any, name: str | None = None, binds: Any = None) -> list:
        self._record(EntryPoint.SELECT_ROWS, sql)
        return []

    def select_value(self, sql: Any, name: str | None = None, binds: Any = None) -> Any:
        self._record(EntryPoint.SELECT_VALUE, sql)
        return None

    def execute(self, sql: Any, name: str | None = None) -> NullResult:
        self._record(EntryPoint.EXECUTE, sql)
        return NullResult()

    # -- execution log --------------------------------------------------------

    def checkpoint(self) -> int:
        position = self._log.checkpoint()
        logger.debug("nulldb.checkpoint", position=position)
        return position

    def full_log(self) -> list[Statement]:
        return self._log.full_log()

    def log_since_checkpoint(self) -> list[Statement]:
        return self._log.log_since_checkpoint()

    def contains_since_checkpoint(self, entry_point: EntryPoint | str) -> bool:
        return self._log.contains_since_checkpoint(entry_point)

    def __repr__(self) -> str:
        return f"NullDBAdapter(tables={len(self._schema)}, statements={len(self._log)})"


__all__ = [
    "ADAPTER_NAME",
    "SCHEMA_INFO_TABLE",
    "NullDBAdapter",
    "NullResult",
]
