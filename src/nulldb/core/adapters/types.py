"""Adapter types and configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class AdapterType(str, Enum):
    """Adapter names known to nulldb out of the box."""

    NULLDB = "nulldb"


@dataclass
class AdapterConfig:
    """
    Configuration an adapter was established with.

    Plugins that assume a connection carries its config can read it back
    from ``adapter.config`` (``config.adapter == "nulldb"``).
    """

    adapter: AdapterType | str = AdapterType.NULLDB

    # Schema file, relative to project_root unless absolute
    schema: str | None = None
    project_root: Path | None = None

    # First generated id is start_id + 1
    start_id: int = 0

    # Extra options (host-specific, passed through untouched)
    options: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.project_root is not None:
            self.project_root = Path(self.project_root)

    def to_dict(self) -> dict[str, Any]:
        adapter = self.adapter.value if isinstance(self.adapter, AdapterType) else self.adapter
        return {
            "adapter": adapter,
            "schema": self.schema,
            "project_root": str(self.project_root) if self.project_root else None,
            "start_id": self.start_id,
            **self.options,
        }


__all__ = [
    "AdapterType",
    "AdapterConfig",
]
