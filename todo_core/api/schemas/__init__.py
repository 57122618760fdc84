"""Pydantic schemas for the resource API.

Auth schemas live in todo_core.auth.schemas.
"""

from .todo import TodoBase, TodoCreate, TodoResponse, TodoUpdate

__all__ = [
    "TodoBase",
    "TodoCreate",
    "TodoUpdate",
    "TodoResponse",
]
