"""Session store operations.

IMPORT CONVENTION:
- Core accesses these through core.session property

Rows are keyed by the opaque session id. The id and user_id columns are
written once on insert and never updated, so a session id maps to exactly
one user for its whole lifetime. Expiry is enforced by the session manager
(auth.session); this layer only stores and compares timestamps.
"""

import json
import sqlite3
from typing import Any


class SessionOperations:
    """Session store operations."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def create(
        self,
        session_id: str,
        user_id: str,
        created_at: str,
        expires_at: str,
        data: dict[str, Any] | None = None
    ) -> None:
        """Insert a new active session.

        Raises:
            sqlite3.IntegrityError: If session_id already exists or user_id is unknown
        """
        self._conn.execute(
            """INSERT INTO sessions (id, user_id, created_at, expires_at, last_seen_at, data)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (session_id, user_id, created_at, expires_at, created_at, json.dumps(data or {}))
        )

    def get_by_id(self, session_id: str) -> sqlite3.Row | None:
        """Get session row by ID, or None."""
        return self._conn.execute(
            "SELECT * FROM sessions WHERE id = ?",
            (session_id,)
        ).fetchone()

    def touch(self, session_id: str, expires_at: str, last_seen_at: str) -> bool:
        """Slide a session's expiry. Returns False if the session is gone."""
        cursor = self._conn.execute(
            "UPDATE sessions SET expires_at = ?, last_seen_at = ? WHERE id = ?",
            (expires_at, last_seen_at, session_id)
        )
        return cursor.rowcount > 0

    def delete(self, session_id: str) -> bool:
        """Delete a session. Returns False if it did not exist."""
        cursor = self._conn.execute(
            "DELETE FROM sessions WHERE id = ?",
            (session_id,)
        )
        return cursor.rowcount > 0

    def delete_expired(self, now: str) -> int:
        """Delete every session whose expires_at is at or before now."""
        cursor = self._conn.execute(
            "DELETE FROM sessions WHERE expires_at <= ?",
            (now,)
        )
        return cursor.rowcount

    def count_for_user(self, user_id: str) -> int:
        """Count stored sessions bound to a user."""
        return self._conn.execute(
            "SELECT COUNT(*) FROM sessions WHERE user_id = ?",
            (user_id,)
        ).fetchone()[0]
