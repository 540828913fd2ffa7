"""
UTC timestamp utilities (stdlib-only).

Statements in the execution log carry the moment they were recorded.
Every module that needs "now" should import it from here so the whole
package agrees on timezone handling.

Features:
    - **utc_now():** Timezone-aware UTC datetime
    - **to_iso8601():** Serialization for ``Statement.to_dict()``

Tags:
    timestamps, utc, datetime, nulldb, stdlib-only

STDLIB ONLY - NO PYDANTIC.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def to_iso8601(dt: datetime | None) -> str | None:
    """Convert datetime to ISO 8601 string."""
    if dt is None:
        return None
    return dt.isoformat()


__all__ = [
    "utc_now",
    "to_iso8601",
]
