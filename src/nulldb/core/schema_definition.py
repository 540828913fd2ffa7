"""Schema definition DSL replayed against a ``SchemaRegistry``.

Schema scripts written for a real engine describe tables through a small
DSL; replaying the same script here fills the registry instead of
issuing DDL.  Scripts receive a ``SchemaDefinition`` bound to the
registry (the loader injects it as the global ``schema``)::

    with schema.create_table("employees") as t:
        t.string("name")
        t.date("hire_date")
        t.integer("employee_number")
        t.decimal("salary")

    with schema.create_table("employees_widgets", id=False) as t:
        t.integer("employee_id", "widget_id")

    schema.add_fk_constraint("foo", "bar", "baz", "buz", "bungle")

``create_table`` registers the table as soon as it is called, so it also
works without a ``with`` block; leaving the block re-registers it with
the collected columns.  A block that raises restores whatever definition
the table had before the call, or none at all.  Tables created with the
default ``id=True`` get an ``id`` integer column and answer ``"id"``.

With ``verbose=True`` every operation is announced through the logger,
the way migration output is printed by a real engine.  The schema
loader replays scripts with ``verbose=False``.
"""

from __future__ import annotations

from typing import Any

from nulldb.core.logging import get_logger
from nulldb.core.schema import (
    PRIMARY_KEY_NAME,
    Column,
    ColumnType,
    ForeignKeyConstraint,
    PrimaryKeyConstraint,
    SchemaRegistry,
    Table,
)

logger = get_logger(__name__)


def _typed(column_type: ColumnType):
    def add(self: TableBuilder, *names: str, **options: Any) -> TableBuilder:
        for name in names:
            self.column(name, column_type, **options)
        return self

    add.__name__ = column_type.value
    add.__doc__ = f"Add one ``{column_type.value}`` column per name."
    return add


class TableBuilder:
    """Collects columns for one ``create_table`` call."""

    def __init__(
        self,
        definition: SchemaDefinition,
        name: str,
        *,
        id: bool = True,
        previous: Table | None = None,
    ):
        self._definition = definition
        self.name = str(name)
        self._previous = previous
        self.has_primary_key = id
        self._columns: list[Column] = []
        if id:
            self._columns.append(Column(PRIMARY_KEY_NAME, ColumnType.INTEGER, nullable=False))

    @property
    def columns(self) -> tuple[Column, ...]:
        return tuple(self._columns)

    def column(
        self,
        name: str,
        type: ColumnType | str,
        *,
        null: bool = True,
        default: Any = None,
        **options: Any,
    ) -> TableBuilder:
        # limit/precision/scale and friends have no effect without storage
        self._columns.append(Column(name, type, nullable=null, default=default))
        return self

    string = _typed(ColumnType.STRING)
    text = _typed(ColumnType.TEXT)
    integer = _typed(ColumnType.INTEGER)
    float = _typed(ColumnType.FLOAT)
    decimal = _typed(ColumnType.DECIMAL)
    datetime = _typed(ColumnType.DATETIME)
    timestamp = _typed(ColumnType.TIMESTAMP)
    time = _typed(ColumnType.TIME)
    date = _typed(ColumnType.DATE)
    binary = _typed(ColumnType.BINARY)
    boolean = _typed(ColumnType.BOOLEAN)
    json = _typed(ColumnType.JSON)

    def timestamps(self, **options: Any) -> TableBuilder:
        """Add ``created_at`` and ``updated_at`` datetime columns."""
        return self.datetime("created_at", "updated_at", **options)

    def references(self, *names: str, **options: Any) -> TableBuilder:
        """Add an integer ``<name>_id`` column per referenced name."""
        return self.integer(*(f"{name}_id" for name in names), **options)

    def commit(self) -> Table:
        return self._definition.registry.define_table(
            self.name, self._columns, has_primary_key=self.has_primary_key
        )

    def __enter__(self) -> TableBuilder:
        return self

    def rollback(self) -> Table | None:
        """Put back the definition this table had before ``create_table``."""
        registry = self._definition.registry
        if self._previous is None:
            registry.drop_table(self.name)
            return None
        return registry.define_table(
            self.name, self._previous.columns, has_primary_key=self._previous.has_primary_key
        )

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.rollback()


class SchemaDefinition:
    """The DSL surface a schema script sees."""

    def __init__(self, registry: SchemaRegistry, *, verbose: bool = True):
        self.registry = registry
        self.verbose = verbose

    def _announce(self, event: str, **fields: Any) -> None:
        if self.verbose:
            logger.info(event, **fields)

    def create_table(self, name: str, *, id: bool = True, **options: Any) -> TableBuilder:
        """Register ``name`` now; use as a context manager to add columns."""
        self._announce("schema.create_table", table=str(name), id=id)
        builder = TableBuilder(self, name, id=id, previous=self.registry.table(name))
        builder.commit()
        return builder

    def add_foreign_key_constraint(self, *args: Any, **kwargs: Any) -> ForeignKeyConstraint:
        self._announce("schema.add_foreign_key_constraint")
        return self.registry.add_foreign_key_constraint(*args, **kwargs)

    def add_primary_key_constraint(self, *args: Any, **kwargs: Any) -> PrimaryKeyConstraint:
        self._announce("schema.add_primary_key_constraint")
        return self.registry.add_primary_key_constraint(*args, **kwargs)

    add_fk_constraint = add_foreign_key_constraint
    add_pk_constraint = add_primary_key_constraint

    def add_index(self, *args: Any, **kwargs: Any) -> None:
        """Accepted and ignored; there is nothing to index."""
        self._announce("schema.add_index")


__all__ = [
    "TableBuilder",
    "SchemaDefinition",
]
