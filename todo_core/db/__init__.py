"""Database module for Todo Core.

This module provides the Core API for database operations.
Core encapsulates connection management and provides access to the
per-collection operations: users (credential store), sessions (session
store) and todos (owned resources).

ARCHITECTURE:
- Core owns its connection (no Flask g.db dependency)
- atomic=False: connection runs in autocommit mode, every statement is
  its own transaction
- atomic=True: Core MUST be used as a context manager; all statements
  commit together on exit or roll back on error
- Each collection gets an encapsulated operations class

    core = get_core()
    user = core.user.get_by_email("ann@x.com")

    with get_core(atomic=True) as core:
        user_id = core.user.create(...)
        core.session.create(...)

ID GENERATION POLICY:
User and todo ids are auto-generated UUIDs (utils.uid). Session ids are
opaque random tokens (utils.secret) generated by the session manager.
"""

from pathlib import Path
from typing import TYPE_CHECKING
import sqlite3

from ..config import settings
from ..exceptions import DatabaseError
from ..schema import load_schema

if TYPE_CHECKING:
    from .session import SessionOperations
    from .todo import TodoOperations
    from .user import UserOperations


class Core:
    """
    Database Core with collection operations.

    Maintains its own connection and transaction state.
    Provides access to operations through lazily created properties.
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
            atomic: If True, Core MUST be used as context manager.
                    If False, Core has autocommit semantics.
        """
        self._conn = connection
        self._atomic = atomic
        self._user_ops = None
        self._session_ops = None
        self._todo_ops = None

    @property
    def user(self) -> "UserOperations":
        """Credential store operations."""
        if self._user_ops is None:
            from .user import UserOperations
            self._user_ops = UserOperations(self._conn)
        return self._user_ops

    @property
    def session(self) -> "SessionOperations":
        """Session store operations."""
        if self._session_ops is None:
            from .session import SessionOperations
            self._session_ops = SessionOperations(self._conn)
        return self._session_ops

    @property
    def todo(self) -> "TodoOperations":
        """Todo operations. Every method is scoped to an owner id."""
        if self._todo_ops is None:
            from .todo import TodoOperations
            self._todo_ops = TodoOperations(self._conn)
        return self._todo_ops

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()

    def __enter__(self) -> "Core":
        """Enter context manager for atomic transaction.

        Raises:
            RuntimeError: If Core was not created with atomic=True
        """
        if not self._atomic:
            raise RuntimeError(
                "Core must be created with atomic=True for context manager use. "
                "Use: with db.get_core(atomic=True) as core:"
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back transaction."""
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            self._conn.close()

    def __del__(self):
        """Cleanup connection if not already closed.

        Called during garbage collection. Closing an already closed
        connection is a no-op in sqlite3.
        """
        if hasattr(self, "_conn") and self._conn:
            try:
                self._conn.close()
            except sqlite3.Error:
                pass


def _create_connection(autocommit: bool = True) -> sqlite3.Connection:
    """Create a fresh database connection.

    Args:
        autocommit: If True, each statement commits immediately
                    (isolation_level=None).

    Returns:
        SQLite connection with row_factory set to sqlite3.Row
        and foreign keys enabled.

    Raises:
        DatabaseError: If the database file cannot be opened
    """
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        conn = sqlite3.connect(str(db_path))
        conn.execute("PRAGMA foreign_keys = ON")
    except sqlite3.Error as e:
        raise DatabaseError("Could not open database") from e

    if autocommit:
        conn.isolation_level = None
    conn.row_factory = sqlite3.Row
    return conn


def get_core(atomic: bool = False) -> Core:
    """
    Get a database Core instance.

    Args:
        atomic: If True, returns a Core that MUST be used as context manager.
                Use for multi-operation writes that need to commit together.
                If False (default), every statement commits on its own.

    Returns:
        Core instance with user/session/todo operations
    """
    conn = _create_connection(autocommit=not atomic)
    return Core(conn, atomic=atomic)


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

def init_db():
    """Initialize database by running schema.sql if not already initialized."""
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with sqlite3.connect(str(db_path)) as db:
        cursor = db.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            return

        db.executescript(load_schema())
        db.commit()


def get_schema_version(core: Core) -> str:
    """Get current schema version from _schema_metadata table."""
    row = core._conn.execute(
        "SELECT value FROM _schema_metadata WHERE key = 'version'"
    ).fetchone()
    return row[0] if row else "unknown"
