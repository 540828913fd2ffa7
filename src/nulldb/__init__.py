"""
nulldb - a null database backend for exercising storage code in tests.

Schema metadata is real, every data operation is a recorded no-op, and
the execution log can be checkpointed to scope assertions to one test::

    import nulldb

    adapter = nulldb.nullify()
    with adapter.create_table("employees") as t:
        t.string("name")

    nulldb.checkpoint()
    adapter.insert("INSERT INTO employees (name) VALUES ('John')")
    assert adapter.contains_since_checkpoint("insert")
    nulldb.restore()
"""

from typing import Any

from nulldb.core import *  # noqa
from nulldb.core import __all__ as _core_all
from nulldb.core.adapters.base import DatabaseAdapter
from nulldb.core.logging import configure_logging, get_logger
from nulldb.core.settings import configure, get_settings, is_configured, reset_settings
from nulldb.core.switch import default_switch

__version__ = "0.1.0"


def nullify(**options: Any) -> DatabaseAdapter:
    """Switch the process-wide connection to a new ``NullDBAdapter``."""
    return default_switch.nullify(**options)


def restore() -> DatabaseAdapter | None:
    """Reinstate the connection that was active before ``nullify()``."""
    return default_switch.restore()


def checkpoint() -> int:
    """Checkpoint the execution log of the process-wide null connection."""
    return default_switch.checkpoint()


__all__ = [
    *_core_all,
    "configure",
    "get_settings",
    "is_configured",
    "reset_settings",
    "configure_logging",
    "get_logger",
    "nullify",
    "restore",
    "checkpoint",
    "__version__",
]
