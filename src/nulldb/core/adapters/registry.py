"""Database adapter registry and factory.

Manifesto:
    A connection switch should never hard-code adapter class names.  The
    registry maps adapter names to classes and the ``get_adapter()``
    factory creates a configured instance from keyword options.  The null
    adapter is pre-registered; hosts register their real adapters next to
    it so the switch can move between them.

Features:
    - ``AdapterRegistry`` singleton with ``nulldb`` pre-registered
    - ``register()`` for host / third-party adapters
    - ``get_adapter()`` factory: name + options → adapter

Tags:
    nulldb, database, registry, factory, singleton

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Any

from nulldb.core.errors import ConfigError

from .base import DatabaseAdapter
from .null import NullDBAdapter
from .types import AdapterType


class AdapterRegistry:
    """
    Registry for database adapter factories.

    Pre-registered adapters:
    - ``nulldb``: :class:`NullDBAdapter`
    """

    def __init__(self):
        self._factories: dict[str, type[DatabaseAdapter]] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default adapters."""
        self._factories[AdapterType.NULLDB.value] = NullDBAdapter

    def register(self, name: str, adapter_class: type[DatabaseAdapter]) -> None:
        """Register an adapter factory."""
        self._factories[name.lower()] = adapter_class

    def unregister(self, name: str) -> None:
        self._factories.pop(name.lower(), None)

    def create(self, name: str, **kwargs: Any) -> DatabaseAdapter:
        """Create an adapter by name."""
        name = name.lower()
        if name not in self._factories:
            raise ConfigError(f"Unknown database adapter: {name}").with_context(adapter=name)
        return self._factories[name](**kwargs)

    def list_adapters(self) -> list[str]:
        """List registered adapter names."""
        return sorted(self._factories.keys())


# Global registry
adapter_registry = AdapterRegistry()


def get_adapter(
    adapter: AdapterType | str = AdapterType.NULLDB,
    **kwargs: Any,
) -> DatabaseAdapter:
    """
    Get a database adapter by name.

    Usage:
        adapter = get_adapter()                               # NullDBAdapter
        adapter = get_adapter("nulldb", schema="db/schema.py", project_root=".")
    """
    if isinstance(adapter, AdapterType):
        name = adapter.value
    else:
        name = adapter

    return adapter_registry.create(name, **kwargs)


__all__ = [
    "AdapterRegistry",
    "adapter_registry",
    "get_adapter",
]
