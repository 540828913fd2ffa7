"""Execution log -- an append-only record of every intercepted operation.

Manifesto:
    A null backend is only useful in tests if the test can ask what the
    code under test *tried* to do.  Every data operation the adapter
    intercepts is appended here, tagged by its entry point, and a
    checkpoint marker scopes assertions to the current test.

    - **Append-only:** statements are never reordered or dropped
    - **Checkpoints never delete:** they only move the marker to the tail
    - **Loose equality:** statements compare by entry point alone, so
      ``Statement("insert") in log`` asks "was any insert logged"

Architecture::

    full_log()                 [s0, s1, s2, s3, s4]
                                          ^
    checkpoint() ──────────────── marker = 2
    log_since_checkpoint()             [s2, s3, s4]

Examples:
    >>> log = StatementLog()
    >>> _ = log.record(EntryPoint.INSERT, "INSERT INTO employees ...")
    >>> log.checkpoint()
    1
    >>> log.log_since_checkpoint()
    []

Tags:
    nulldb, execution-log, checkpoint, statements, test-double

Doc-Types:
    api-reference
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from nulldb.core.timestamps import to_iso8601, utc_now


class EntryPoint(str, Enum):
    """The semantic category of an intercepted data operation."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    SELECT_ALL = "select_all"
    SELECT_VALUE = "select_value"
    SELECT_ROWS = "select_rows"
    EXECUTE = "execute"
    OTHER = "other"

    @classmethod
    def parse(cls, value: EntryPoint | str) -> EntryPoint:
        """Coerce ``value``; anything unrecognised becomes ``OTHER``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True, eq=False)
class Statement:
    """One intercepted operation.

    Equality and hashing consider ``entry_point`` only; content, position
    and timestamp are informational.
    """

    entry_point: EntryPoint
    content: str = ""
    position: int = -1
    recorded_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entry_point", EntryPoint.parse(self.entry_point))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Statement):
            return NotImplemented
        return self.entry_point == other.entry_point

    def __hash__(self) -> int:
        return hash(self.entry_point)

    def to_dict(self) -> dict[str, Any]:
        return {
            "entry_point": self.entry_point.value,
            "content": self.content,
            "position": self.position,
            "recorded_at": to_iso8601(self.recorded_at),
        }


class StatementLog:
    """Ordered, append-only statement history with a checkpoint marker.

    ``record`` and ``checkpoint`` share one lock, so each statement lands
    on exactly one side of any concurrent checkpoint.
    """

    def __init__(self) -> None:
        self._statements: list[Statement] = []
        self._checkpoint = 0
        self._lock = threading.Lock()

    def record(self, entry_point: EntryPoint | str, raw_text: Any = "") -> Statement:
        with self._lock:
            statement = Statement(
                entry_point=EntryPoint.parse(entry_point),
                content="" if raw_text is None else str(raw_text),
                position=len(self._statements),
            )
            self._statements.append(statement)
        return statement

    def full_log(self) -> list[Statement]:
        with self._lock:
            return list(self._statements)

    def checkpoint(self) -> int:
        """Move the marker to the current tail and return it."""
        with self._lock:
            self._checkpoint = len(self._statements)
            return self._checkpoint

    @property
    def checkpoint_position(self) -> int:
        with self._lock:
            return self._checkpoint

    def log_since_checkpoint(self) -> list[Statement]:
        with self._lock:
            return self._statements[self._checkpoint:]

    def contains_since_checkpoint(self, entry_point: EntryPoint | str) -> bool:
        return Statement(entry_point) in self.log_since_checkpoint()

    def reset(self) -> None:
        """Drop the whole history and the marker."""
        with self._lock:
            self._statements.clear()
            self._checkpoint = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._statements)


__all__ = [
    "EntryPoint",
    "Statement",
    "StatementLog",
]
