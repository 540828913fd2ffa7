"""Connection switch -- swap the active connection to and from NullDB.

A host keeps one active adapter.  ``nullify()`` remembers it and installs
a fresh ``NullDBAdapter``; ``restore()`` puts the remembered adapter
back.  Calling code detects the null adapter through ``adapter_name``.

``default_switch`` is process-wide state with an explicit lifecycle
(``establish`` / ``nullify`` / ``restore`` / ``reset``); the package-level
``nulldb.nullify()``, ``nulldb.restore()`` and ``nulldb.checkpoint()``
delegate to it.  Hosts that prefer explicit wiring construct their own
``ConnectionSwitch``.

Example::

    switch = ConnectionSwitch()
    switch.establish(real_adapter)
    null = switch.nullify(schema="db/schema.py", project_root=".")
    ...
    switch.restore()          # real_adapter is active again
"""

from __future__ import annotations

import threading
from typing import Any

from nulldb.core.adapters.base import DatabaseAdapter
from nulldb.core.adapters.null import ADAPTER_NAME
from nulldb.core.adapters.registry import AdapterRegistry, adapter_registry
from nulldb.core.adapters.types import AdapterType
from nulldb.core.errors import AdapterStateError
from nulldb.core.logging import get_logger

logger = get_logger(__name__)


class ConnectionSwitch:
    """Holds the active adapter and the one it replaced."""

    def __init__(self, registry: AdapterRegistry = adapter_registry) -> None:
        self._registry = registry
        self._active: DatabaseAdapter | None = None
        self._previous: DatabaseAdapter | None = None
        self._lock = threading.Lock()

    @property
    def active(self) -> DatabaseAdapter | None:
        return self._active

    def establish(self, adapter: DatabaseAdapter | None) -> DatabaseAdapter | None:
        """Install ``adapter`` and return the adapter it replaced."""
        with self._lock:
            previous, self._active = self._active, adapter
        return previous

    def nullify(self, **options: Any) -> DatabaseAdapter:
        """Remember the active adapter and switch to a new null adapter."""
        adapter = self._registry.create(AdapterType.NULLDB.value, **options)
        with self._lock:
            if not self._is_null(self._active):
                self._previous = self._active
            self._active = adapter
        logger.debug("nulldb.nullified", previous=self._describe(self._previous))
        return adapter

    def restore(self) -> DatabaseAdapter | None:
        """Reinstate the adapter active before ``nullify()``, if any."""
        with self._lock:
            if self._previous is not None:
                self._active, self._previous = self._previous, None
            active = self._active
        logger.debug("nulldb.restored", active=self._describe(active))
        return active

    def is_nullified(self) -> bool:
        return self._is_null(self._active)

    def checkpoint(self) -> int:
        """Checkpoint the active null adapter's execution log."""
        active = self._active
        if not self._is_null(active):
            raise AdapterStateError(
                "Cannot checkpoint: the active connection is not a NullDB adapter"
            ).with_context(adapter=self._describe(active))
        return active.checkpoint()

    def reset(self) -> None:
        with self._lock:
            self._active = None
            self._previous = None

    @staticmethod
    def _is_null(adapter: DatabaseAdapter | None) -> bool:
        return adapter is not None and adapter.adapter_name == ADAPTER_NAME

    @staticmethod
    def _describe(adapter: DatabaseAdapter | None) -> str | None:
        return adapter.adapter_name if adapter is not None else None


default_switch = ConnectionSwitch()


__all__ = [
    "ConnectionSwitch",
    "default_switch",
]
