"""Todo-specific operations.

IMPORT CONVENTION:
- Core accesses these through core.todo property

OWNERSHIP POLICY:
Every method takes the owner id and filters on it. A todo that exists but
belongs to another owner is reported exactly like a missing one
(ResourceNotFound with the same message), so callers cannot probe for
other users' ids.
"""

import sqlite3
from typing import Any

from . import query
from ..exceptions import ResourceNotFound
from ..utils import isodatetime, uid


def _not_found(todo_id: str) -> ResourceNotFound:
    return ResourceNotFound(
        f"Todo '{todo_id}' not found",
        {"todo_id": todo_id}
    )


class TodoOperations:
    """Todo operations, scoped to an owner."""

    def __init__(self, conn: sqlite3.Connection):
        """Initialize todo operations.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def get_by_id(self, todo_id: str, owner_id: str) -> sqlite3.Row:
        """Get a todo owned by owner_id.

        Raises:
            ResourceNotFound: If the todo doesn't exist or isn't owned by owner_id
        """
        row = self._conn.execute(
            "SELECT * FROM todos WHERE id = ? AND owner_id = ?",
            (todo_id, owner_id)
        ).fetchone()

        if not row:
            raise _not_found(todo_id)

        return row

    def create(
        self,
        owner_id: str,
        title: str,
        description: str | None = None,
        completed: bool = False
    ) -> str:
        """Create a todo with an auto-generated UUID.

        Returns:
            The new todo ID
        """
        todo_id = uid.generate_uuid()
        now = isodatetime.now()

        self._conn.execute(
            """INSERT INTO todos
               (id, owner_id, title, description, completed, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (todo_id, owner_id, title, description, int(completed), now, now)
        )

        return todo_id

    def list(
        self,
        owner_id: str,
        filters: dict[str, Any] | None = None,
        limit: int = 100,
        offset: int = 0
    ) -> list[sqlite3.Row]:
        """List an owner's todos, newest first.

        Args:
            owner_id: Only todos owned by this user are returned
            filters: Optional conditions:
                - completed: bool
            limit: Maximum number of results to return (default: 100)
            offset: Number of results to skip (default: 0)
        """
        conditions: dict[str, Any] = {"owner_id": owner_id}
        completed = (filters or {}).get("completed")
        if completed is not None:
            conditions["completed"] = int(completed)

        where_clause, params = query.build_where_clause(conditions)
        params.extend([limit, offset])

        return self._conn.execute(
            f"""SELECT * FROM todos
                WHERE {where_clause}
                ORDER BY created_at DESC, id
                LIMIT ? OFFSET ?""",
            params
        ).fetchall()

    def update(self, todo_id: str, owner_id: str, data: dict[str, Any]) -> None:
        """Update an owned todo with partial data.

        Note:
            - None values are skipped
            - id and owner_id can never be changed
            - updated_at is always refreshed

        Raises:
            ResourceNotFound: If the todo doesn't exist or isn't owned by owner_id
        """
        if "completed" in data and data["completed"] is not None:
            data = {**data, "completed": int(data["completed"])}

        update_clause, params = query.build_update_clause(
            data,
            exclude={"id", "owner_id", "created_at", "updated_at"}
        )

        if update_clause:
            update_clause += ", updated_at = ?"
        else:
            update_clause = "updated_at = ?"
        params.extend([isodatetime.now(), todo_id, owner_id])

        cursor = self._conn.execute(
            f"UPDATE todos SET {update_clause} WHERE id = ? AND owner_id = ?",
            params
        )
        if cursor.rowcount == 0:
            raise _not_found(todo_id)

    def delete(self, todo_id: str, owner_id: str) -> None:
        """Delete an owned todo.

        Raises:
            ResourceNotFound: If the todo doesn't exist or isn't owned by owner_id
        """
        cursor = self._conn.execute(
            "DELETE FROM todos WHERE id = ? AND owner_id = ?",
            (todo_id, owner_id)
        )
        if cursor.rowcount == 0:
            raise _not_found(todo_id)
