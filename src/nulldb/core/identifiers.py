"""Surrogate identifier generation for simulated inserts."""

from __future__ import annotations

import threading
from typing import Any


class IdentifierGenerator:
    """
    Sequential surrogate keys, scoped to one adapter instance.

    The generator keeps a single floor. A generated id is ``floor + 1``;
    an explicitly supplied id is handed back unchanged and raises the floor
    when it is higher, so later generated ids never collide with it.

    Example::

        ids = IdentifierGenerator()
        ids.next_id()       # 1
        ids.next_id(23)     # 23
        ids.next_id()       # 24
    """

    def __init__(self, start: int = 0) -> None:
        self._floor = start
        self._lock = threading.Lock()

    @property
    def current(self) -> int:
        """Highest id generated or observed so far."""
        with self._lock:
            return self._floor

    def next_id(self, explicit_id: Any = None) -> Any:
        with self._lock:
            if explicit_id is not None:
                observed = _as_int(explicit_id)
                if observed is not None and observed > self._floor:
                    self._floor = observed
                return explicit_id

            self._floor += 1
            return self._floor

    def reset(self, start: int = 0) -> None:
        with self._lock:
            self._floor = start


def _as_int(value: Any) -> int | None:
    # bool is an int subclass but never a meaningful id
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


__all__ = ["IdentifierGenerator"]
