"""Schema loading -- replay an external schema description into a registry.

A schema file is a Python module executed once with ``runpy``.  Inside
it, the global ``schema`` is a ``SchemaDefinition`` bound to the target
registry, and a module-level SQLAlchemy ``MetaData`` named ``metadata``
(for example ``Base.metadata`` of a declarative model package) is
replayed as well.  Replays run with ``verbose=False`` so the DSL's
announcements stay out of the test output.

Path resolution:
    - absolute schema path              → used as is
    - relative schema path              → ``project_root / schema``
    - no schema path                    → ``project_root / db/schema.py``
    - no project_root                   → process-wide settings, which
                                          raise ``MissingConfigError``
                                          when never configured

A missing *explicit* schema file raises ``SchemaLoadError``; a missing
*default* schema file only logs a warning and leaves the registry as it
is.

Example::

    from sqlalchemy.orm import DeclarativeBase

    registry = SchemaRegistry()
    load_metadata(registry, Base.metadata)
    registry.primary_key_for("employees")   # "id"
"""

from __future__ import annotations

import runpy
from pathlib import Path
from typing import Any

from sqlalchemy import MetaData
from sqlalchemy import types as sqltypes

from nulldb.core.errors import MissingConfigError, SchemaLoadError
from nulldb.core.logging import get_logger
from nulldb.core.schema import Column, ColumnType, SchemaRegistry
from nulldb.core.schema_definition import SchemaDefinition
from nulldb.core.settings import DEFAULT_SCHEMA_PATH, get_settings

logger = get_logger(__name__)

# Checked in order: subclasses before their bases (Text < String, Float < Numeric).
_TYPE_MAP: list[tuple[type, ColumnType]] = [
    (sqltypes.Boolean, ColumnType.BOOLEAN),
    (sqltypes.DateTime, ColumnType.DATETIME),
    (sqltypes.Date, ColumnType.DATE),
    (sqltypes.Time, ColumnType.TIME),
    (sqltypes.Float, ColumnType.FLOAT),
    (sqltypes.Numeric, ColumnType.DECIMAL),
    (sqltypes.Integer, ColumnType.INTEGER),
    (sqltypes.Text, ColumnType.TEXT),
    (sqltypes.String, ColumnType.STRING),
    (sqltypes.LargeBinary, ColumnType.BINARY),
    (sqltypes.JSON, ColumnType.JSON),
]


def column_type_for(sa_type: Any) -> ColumnType:
    """Map a SQLAlchemy column type onto a ``ColumnType``.

    Types without a counterpart (``Uuid``, dialect-specific types, ...)
    are reported as ``string``.
    """
    for sa_class, column_type in _TYPE_MAP:
        if isinstance(sa_type, sa_class):
            return column_type
    return ColumnType.STRING


def _scalar_default(sa_column: Any) -> Any:
    default = sa_column.default
    if default is not None and getattr(default, "is_scalar", False):
        return default.arg
    return None


def load_metadata(registry: SchemaRegistry, metadata: MetaData) -> list[str]:
    """Replay every table of a SQLAlchemy ``MetaData`` into ``registry``.

    Returns the table names in definition order.  ``sorted_tables`` is not
    used because it resolves every foreign key target.
    """
    loaded = []
    for sa_table in metadata.tables.values():
        columns = [
            Column(
                c.name,
                column_type_for(c.type),
                nullable=bool(c.nullable),
                default=_scalar_default(c),
            )
            for c in sa_table.columns
        ]
        registry.define_table(
            sa_table.name,
            columns,
            has_primary_key=len(sa_table.primary_key.columns) > 0,
        )
        for fk in sa_table.foreign_keys:
            # target_fullname avoids resolving tables absent from this metadata
            target_table, _, target_column = fk.target_fullname.rpartition(".")
            registry.add_foreign_key_constraint(
                sa_table.name, fk.parent.name, target_table, target_column, fk.name
            )
        loaded.append(sa_table.name)
    return loaded


class SchemaLoader:
    """Locates a schema file and replays it into a registry, once per call.

    Parameters
    ----------
    schema
        Schema file path; absolute, or relative to ``project_root``.
        ``None`` selects the conventional default.
    project_root
        Directory relative paths are resolved against. Falls back to the
        process-wide settings.
    """

    def __init__(self, schema: str | Path | None = None, project_root: str | Path | None = None):
        self.explicit = schema is not None
        self.path = self._resolve(schema, project_root)

    @staticmethod
    def _resolve(schema: str | Path | None, project_root: str | Path | None) -> Path:
        candidate = Path(schema) if schema is not None else None
        if candidate is not None and candidate.is_absolute():
            return candidate

        if project_root is None:
            settings = get_settings()
            project_root = settings.project_root
            if candidate is None:
                candidate = Path(settings.schema_path)
            if project_root is None:
                raise MissingConfigError(
                    "project_root",
                    f"Cannot resolve schema path {candidate}: no project_root configured",
                )

        return Path(project_root) / (candidate if candidate is not None else DEFAULT_SCHEMA_PATH)

    def load(self, registry: SchemaRegistry) -> list[str]:
        """Execute the schema file against ``registry``; return the names it added."""
        if not self.path.exists():
            if self.explicit:
                raise SchemaLoadError(str(self.path), f"Schema file not found: {self.path}")
            logger.warning("schema.default_missing", path=str(self.path))
            return []

        before = set(registry.table_names())
        definition = SchemaDefinition(registry, verbose=False)
        try:
            namespace = runpy.run_path(str(self.path), init_globals={"schema": definition})
        except Exception as e:
            raise SchemaLoadError(
                str(self.path), f"Schema file {self.path} failed: {e}", cause=e
            ) from e

        metadata = namespace.get("metadata")
        if isinstance(metadata, MetaData):
            load_metadata(registry, metadata)

        loaded = [name for name in registry.table_names() if name not in before]
        logger.info("schema.loaded", path=str(self.path), tables=len(loaded))
        return loaded


__all__ = [
    "SchemaLoader",
    "column_type_for",
    "load_metadata",
]
