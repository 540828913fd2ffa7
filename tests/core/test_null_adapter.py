"""
Tests for the NullDB adapter.

Covers the driver contract: schema metadata, data operations and their
return shapes, the execution log with checkpoints, and lazy schema
loading from a project root.
"""

from __future__ import annotations

from unittest.mock import ANY, patch

import pytest
import sqlalchemy as sa

from nulldb.core.adapters import (
    ADAPTER_NAME,
    SCHEMA_INFO_TABLE,
    AdapterConfig,
    AdapterType,
    DatabaseAdapter,
    NullDBAdapter,
    NullResult,
)
from nulldb.core.errors import InvalidConfigError, SchemaLoadError
from nulldb.core.protocols import ExecutionHandle, StorageDriver
from nulldb.core.schema import ColumnType
from nulldb.core.settings import configure
from nulldb.core.statements import EntryPoint, Statement


# =============================================================================
# Identity
# =============================================================================


class TestIdentity:
    def test_adapter_name(self, adapter):
        assert adapter.adapter_name == "NullDB" == ADAPTER_NAME

    def test_supports_migrations(self, adapter):
        assert adapter.supports_migrations() is True

    def test_config_reports_nulldb(self, adapter):
        assert isinstance(adapter.config, AdapterConfig)
        assert adapter.config.adapter == "nulldb"
        assert adapter.config.adapter is AdapterType.NULLDB

    def test_options_kept_on_config(self):
        cxn = NullDBAdapter(pool="tests", start_id=5)
        assert cxn.config.options == {"pool": "tests"}
        assert cxn.config.to_dict()["pool"] == "tests"
        assert cxn.config.to_dict()["start_id"] == 5

    def test_satisfies_driver_protocol(self, adapter):
        assert isinstance(adapter, DatabaseAdapter)
        assert isinstance(adapter, StorageDriver)

    def test_repr(self, adapter):
        adapter.insert("INSERT")
        assert repr(adapter) == "NullDBAdapter(tables=3, statements=1)"


class TestLifecycle:
    def test_context_manager_connects(self):
        cxn = NullDBAdapter()
        assert not cxn.is_connected
        with cxn as active:
            assert active is cxn
            assert cxn.is_connected
        assert not cxn.is_connected

    def test_transaction_yields_adapter(self, adapter):
        with adapter.transaction() as tx:
            assert tx is adapter
            tx.insert("INSERT INTO employees ...")
        assert adapter.contains_since_checkpoint("insert")

    @pytest.mark.parametrize("start_id", [-1, 1.5, "1", True])
    def test_rejects_invalid_start_id(self, start_id):
        with pytest.raises(InvalidConfigError) as exc_info:
            NullDBAdapter(start_id=start_id)
        assert exc_info.value.key == "start_id"


# =============================================================================
# Schema metadata
# =============================================================================


class TestSchemaMetadata:
    def test_columns(self, adapter):
        cols = adapter.columns("employees")
        assert [c.name for c in cols] == ["id", "name", "hire_date", "employee_number", "salary"]
        assert [c.type for c in cols[1:]] == [
            ColumnType.STRING,
            ColumnType.DATE,
            ColumnType.INTEGER,
            ColumnType.DECIMAL,
        ]

    def test_unknown_table_has_no_columns(self, adapter):
        assert adapter.columns("tableless_models") == ()

    def test_primary_key(self, adapter):
        assert adapter.primary_key("employees") == "id"

    def test_habtm_table_has_no_primary_key(self, adapter):
        assert adapter.primary_key("employees_widgets") is None

    def test_tables_include_schema_info(self, adapter):
        assert set(adapter.tables()) == {"employees", "employees_widgets", SCHEMA_INFO_TABLE}

    def test_schema_info_present_without_definitions(self):
        cxn = NullDBAdapter()
        assert cxn.tables() == [SCHEMA_INFO_TABLE]
        assert [c.name for c in cxn.columns(SCHEMA_INFO_TABLE)] == ["version"]

    def test_schema_info_survives_registry_clear(self, adapter):
        adapter.schema.clear()
        assert adapter.tables() == [SCHEMA_INFO_TABLE]
        assert [c.name for c in adapter.columns(SCHEMA_INFO_TABLE)] == ["version"]

    def test_define_table_directly(self):
        cxn = NullDBAdapter()
        cxn.define_table("widgets", [("name", "string")], has_primary_key=False)
        assert cxn.primary_key("widgets") is None
        assert [c.name for c in cxn.columns("widgets")] == ["name"]

    def test_create_table_shortcut(self):
        cxn = NullDBAdapter()
        with cxn.create_table("widgets") as t:
            t.string("name")
        assert cxn.primary_key("widgets") == "id"

    def test_constraints_are_accepted(self, adapter):
        adapter.add_foreign_key_constraint("employees", "widget_id", "widgets", "id")
        adapter.add_primary_key_constraint()
        assert "widgets" not in adapter.tables()


# =============================================================================
# Data operations
# =============================================================================


class TestInsert:
    def test_generates_sequential_ids(self, adapter):
        assert adapter.insert("INSERT INTO employees (name) VALUES ('John Smith')") == 1
        assert adapter.insert("INSERT INTO employees (name) VALUES ('Jane Doe')") == 2

    def test_full_driver_signature(self, adapter):
        assert adapter.insert("INSERT", "Employee Create", "id", None, "employees_id_seq") == 1

    def test_explicit_id(self, adapter):
        assert adapter.insert("INSERT", id_value=23) == 23
        assert adapter.insert("INSERT") == 24

    def test_infinite_explicit_id(self, adapter):
        assert adapter.insert("INSERT", id_value=float("inf")) == float("inf")
        assert adapter.insert("INSERT") == 1

    def test_start_id(self):
        assert NullDBAdapter(start_id=10).insert("INSERT") == 11

    def test_ids_are_per_adapter(self):
        first, second = NullDBAdapter(), NullDBAdapter()
        first.insert("INSERT")
        assert second.insert("INSERT") == 1

    def test_records_insert(self, adapter):
        adapter.insert("INSERT INTO employees ...")
        assert adapter.full_log() == [Statement(EntryPoint.INSERT)]
        assert adapter.full_log()[0].content == "INSERT INTO employees ..."


class TestNeutralResults:
    def test_update_affects_no_rows(self, adapter):
        assert adapter.update("UPDATE employees SET name = 'x'") == 0

    def test_delete_affects_no_rows(self, adapter):
        assert adapter.delete("DELETE FROM employees") == 0

    def test_select_all_is_empty_list(self, adapter):
        assert adapter.select_all("SELECT * FROM employees") == []

    def test_select_all_on_unknown_table(self, adapter):
        assert adapter.select_all("SELECT * FROM nowhere") == []

    def test_select_rows_is_empty_list(self, adapter):
        assert adapter.select_rows("SELECT name FROM employees") == []

    def test_select_value_is_none(self, adapter):
        assert adapter.select_value("SELECT COUNT(*) FROM employees") is None

    def test_select_one_is_none(self, adapter):
        assert adapter.select_one("SELECT * FROM employees LIMIT 1") is None
        assert adapter.contains_since_checkpoint("select_all")

    def test_execute_returns_finishable_handle(self, adapter):
        result = adapter.execute("VACUUM")
        assert isinstance(result, NullResult)
        assert isinstance(result, ExecutionHandle)
        result.finish()
        result.close()
        assert result.fetchone() is None
        assert result.fetchall() == []
        assert list(result) == []
        assert result.rowcount == 0

    def test_execute_handle_as_context_manager(self, adapter):
        with adapter.execute("SELECT 1") as result:
            assert result.fetchall() == []

    def test_each_operation_is_tagged(self, adapter):
        adapter.insert("i")
        adapter.update("u")
        adapter.delete("d")
        adapter.select_all("sa")
        adapter.select_rows("sr")
        adapter.select_value("sv")
        adapter.execute("e")
        assert [s.entry_point.value for s in adapter.full_log()] == [
            "insert",
            "update",
            "delete",
            "select_all",
            "select_rows",
            "select_value",
            "execute",
        ]

    def test_sqlalchemy_constructs_are_rendered(self, adapter):
        employees = sa.table("employees", sa.column("name"))
        adapter.insert(sa.insert(employees).values(name="John"))
        adapter.select_all(sa.select(employees.c.name))
        insert_stmt, select_stmt = adapter.full_log()
        assert insert_stmt.content.startswith("INSERT INTO employees")
        assert select_stmt.content.startswith("SELECT employees.name")


# =============================================================================
# Execution log
# =============================================================================


class TestExecutionLog:
    def test_log_before_any_checkpoint_is_whole_log(self, adapter):
        adapter.insert("INSERT")
        assert adapter.log_since_checkpoint() == adapter.full_log()

    def test_checkpoint_then_update_and_delete(self, adapter):
        adapter.insert("INSERT")
        adapter.checkpoint()
        adapter.update("UPDATE")
        adapter.delete("DELETE")

        since = adapter.log_since_checkpoint()
        assert len(since) == 2
        assert [s.entry_point for s in since] == [EntryPoint.UPDATE, EntryPoint.DELETE]
        assert len(adapter.full_log()) == 3

    def test_log_empty_right_after_checkpoint(self, adapter):
        adapter.checkpoint()
        assert adapter.log_since_checkpoint() == []
        adapter.insert("INSERT")
        assert adapter.log_since_checkpoint() == [Statement(EntryPoint.INSERT)]
        adapter.checkpoint()
        assert adapter.log_since_checkpoint() == []

    def test_contains_since_checkpoint(self, adapter):
        adapter.insert("INSERT")
        adapter.checkpoint()
        adapter.update("UPDATE")
        assert adapter.contains_since_checkpoint("update")
        assert not adapter.contains_since_checkpoint("insert")
        assert not adapter.contains_since_checkpoint("no_such_entry_point")

    def test_statement_log_exposed(self, adapter):
        adapter.delete("DELETE")
        assert len(adapter.statement_log) == 1


# =============================================================================
# Schema loading
# =============================================================================


EMPLOYEES_SCHEMA = """
    with schema.create_table("employees") as t:
        t.string("name")
        t.date("hire_date")
        t.integer("employee_number")
        t.decimal("salary")

    with schema.create_table("employees_widgets", id=False) as t:
        t.integer("employee_id", "widget_id")

    schema.add_fk_constraint("foo", "bar", "baz", "buz", "bungle")
    schema.add_pk_constraint("foo", "bar", {}, "baz", "buz")
"""


class TestSchemaLoading:
    def test_loads_default_schema_below_project_root(self, tmp_path, write_schema):
        write_schema(EMPLOYEES_SCHEMA)
        cxn = NullDBAdapter(project_root=tmp_path)
        assert cxn.primary_key("employees") == "id"
        assert cxn.primary_key("employees_widgets") is None

    def test_loads_alternate_schema_path(self, tmp_path, write_schema):
        write_schema(EMPLOYEES_SCHEMA, "foo/myschema.py")
        cxn = NullDBAdapter(schema="foo/myschema.py", project_root=tmp_path)
        assert "employees" in cxn.tables()

    def test_loads_absolute_schema_path(self, write_schema):
        path = write_schema(EMPLOYEES_SCHEMA, "elsewhere/schema.py")
        cxn = NullDBAdapter(schema=str(path))
        assert "employees_widgets" in cxn.tables()

    def test_uses_configured_project_root(self, tmp_path, write_schema):
        write_schema(EMPLOYEES_SCHEMA)
        configure(project_root=tmp_path)
        assert NullDBAdapter().primary_key("employees") == "id"

    def test_runs_default_schema_file(self, tmp_path, write_schema):
        path = write_schema("")
        cxn = NullDBAdapter(project_root=tmp_path)
        with patch("nulldb.core.schema_loader.runpy.run_path", return_value={}) as run_path:
            cxn.tables()
        run_path.assert_called_once_with(str(path), init_globals={"schema": ANY})

    def test_schema_loaded_once(self, tmp_path, write_schema):
        write_schema(EMPLOYEES_SCHEMA)
        cxn = NullDBAdapter(project_root=tmp_path)
        with patch("nulldb.core.schema_loader.runpy.run_path", return_value={}) as run_path:
            cxn.tables()
            cxn.columns("employees")
            cxn.primary_key("employees")
        assert run_path.call_count == 1

    def test_loading_is_lazy(self, tmp_path, write_schema):
        write_schema(EMPLOYEES_SCHEMA)
        with patch("nulldb.core.schema_loader.runpy.run_path", return_value={}) as run_path:
            cxn = NullDBAdapter(project_root=tmp_path)
            cxn.insert("INSERT")
            run_path.assert_not_called()
            cxn.tables()
            run_path.assert_called_once()

    def test_no_schema_without_configuration(self):
        with patch("nulldb.core.schema_loader.runpy.run_path") as run_path:
            NullDBAdapter().tables()
        run_path.assert_not_called()

    def test_missing_explicit_schema_raises_once(self, tmp_path):
        cxn = NullDBAdapter(schema="db/missing.py", project_root=tmp_path)
        with pytest.raises(SchemaLoadError):
            cxn.tables()
        assert cxn.tables() == [SCHEMA_INFO_TABLE]

    def test_missing_default_schema_is_tolerated(self, tmp_path):
        cxn = NullDBAdapter(project_root=tmp_path)
        assert cxn.tables() == [SCHEMA_INFO_TABLE]
