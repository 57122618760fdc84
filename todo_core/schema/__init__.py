"""Database schema for Todo Core.

schema.sql is the source of truth for the data model: users, sessions and
todos, plus the _schema_metadata table used to detect initialized databases.
"""

from pathlib import Path

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def load_schema() -> str:
    """Return the schema DDL as a single script."""
    return SCHEMA_PATH.read_text(encoding="utf-8")
