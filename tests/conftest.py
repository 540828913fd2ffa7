"""
Shared pytest fixtures and configuration for nulldb tests.

This module provides:
- Process-wide state cleanup (settings, connection switch, structlog)
- A NullDBAdapter pre-loaded with the employees schema
- A helper for writing schema files below a temporary project root

Usage:
    Fixtures are auto-discovered by pytest. Simply use them as function
    arguments (pytest injects them automatically).
"""

import sys
import textwrap
from pathlib import Path
from typing import Callable, Generator

import pytest
import structlog

# Ensure nulldb package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from nulldb.core.adapters.null import NullDBAdapter
from nulldb.core.settings import reset_settings
from nulldb.core.switch import default_switch


# =============================================================================
# Process-wide State Cleanup
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_process_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Reset settings, the default switch and structlog around every test."""
    for var in ("NULLDB_PROJECT_ROOT", "NULLDB_SCHEMA_PATH", "NULLDB_LOG_LEVEL", "NULLDB_JSON_LOGS"):
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    default_switch.reset()
    yield
    reset_settings()
    default_switch.reset()
    structlog.reset_defaults()


# =============================================================================
# Adapter Fixtures
# =============================================================================


@pytest.fixture
def adapter() -> NullDBAdapter:
    """NullDBAdapter with an ``employees`` table and a habtm join table."""
    cxn = NullDBAdapter()
    schema = cxn.define_schema(verbose=False)

    with schema.create_table("employees") as t:
        t.string("name")
        t.date("hire_date")
        t.integer("employee_number")
        t.decimal("salary")

    with schema.create_table("employees_widgets", id=False) as t:
        t.integer("employee_id")
        t.integer("widget_id")

    schema.add_fk_constraint("foo", "bar", "baz", "buz", "bungle")
    schema.add_pk_constraint("foo", "bar", {}, "baz", "buz")
    return cxn


@pytest.fixture
def write_schema(tmp_path: Path) -> Callable[..., Path]:
    """Write a schema file below ``tmp_path`` and return its path."""

    def _write(source: str, relative: str = "db/schema.py") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return _write
