"""User (credential store) operations.

IMPORT CONVENTION:
- Core accesses these through core.user property
- NO direct import needed when using Core API

Emails are normalized (stripped, lowercased) on every write and lookup, so
the UNIQUE index on users.email enforces case-insensitive uniqueness.
Rows returned here include password_hash; only auth.service should see them.
"""

import sqlite3

from ..utils import isodatetime, uid


def normalize_email(email: str) -> str:
    """Normalize an email for storage and lookup."""
    return email.strip().lower()


class UserOperations:
    """Credential store operations."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def create(self, email: str, name: str, password_hash: str) -> str:
        """Insert a user with an auto-generated UUID.

        Args:
            email: Email address (normalized before insert)
            name: Display name
            password_hash: bcrypt digest, never plaintext

        Returns:
            The new user ID

        Raises:
            sqlite3.IntegrityError: If the email is already registered
        """
        user_id = uid.generate_uuid()
        self._conn.execute(
            """INSERT INTO users (id, email, name, password_hash, created_at)
               VALUES (?, ?, ?, ?, ?)""",
            (user_id, normalize_email(email), name, password_hash, isodatetime.now())
        )
        return user_id

    def get_by_id(self, user_id: str) -> sqlite3.Row | None:
        """Get user row by ID, or None."""
        return self._conn.execute(
            "SELECT * FROM users WHERE id = ?",
            (user_id,)
        ).fetchone()

    def get_by_email(self, email: str) -> sqlite3.Row | None:
        """Get user row by email (case-insensitive), or None."""
        return self._conn.execute(
            "SELECT * FROM users WHERE email = ?",
            (normalize_email(email),)
        ).fetchone()

    def count(self) -> int:
        """Count registered users."""
        return self._conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]
