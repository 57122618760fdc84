"""ISO 8601 datetime conversion utilities.

This module centralizes all transformations between Python datetime objects
and ISO 8601 strings. All timestamp operations should use these functions
to ensure consistency and make usage clear across the codebase.

Timestamps always carry microseconds so that stored values compare
correctly as plain strings in SQL (e.g. expires_at <= ?).
"""

from datetime import datetime, UTC


def utcnow() -> datetime:
    """Get current time as an aware UTC datetime."""
    return datetime.now(UTC)


def to_timestamp(dt: datetime) -> str:
    """Convert datetime to ISO 8601 UTC timestamp string."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    else:
        dt = dt.astimezone(UTC)
    return dt.isoformat(timespec="microseconds").replace("+00:00", "Z")


def to_datetime(timestamp: str) -> datetime:
    """Convert ISO 8601 UTC timestamp string to datetime."""
    return datetime.fromisoformat(timestamp.replace('Z', '+00:00'))


def now() -> str:
    """Get current UTC timestamp as ISO 8601 string."""
    return to_timestamp(utcnow())
