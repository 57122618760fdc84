"""Todo CRUD endpoints for Todo Core API.

This module implements RESTful endpoints for todo management:
- GET    /api/todos          - List the caller's todos
- POST   /api/todos          - Create todo owned by the caller
- GET    /api/todos/{id}     - Get single todo
- PUT    /api/todos/{id}     - Update todo (partial)
- DELETE /api/todos/{id}     - Delete todo

Architecture Notes:
- The api blueprint's before_request hook has already authenticated the
  request; the owner is always g.user_id, never a client-supplied value
- A todo owned by someone else returns the same 404 as a missing one
"""

from flask import Blueprint, g, jsonify, request

from ..db import get_core
from ..exceptions import ValidationError
from .schemas.todo import TodoCreate, TodoResponse, TodoUpdate
from .validation import validate_request


# Create Blueprint
todos_bp = Blueprint("todos", __name__)


def _row_to_todo_response(row) -> dict:
    """Convert a todos row to a TodoResponse dict."""
    return TodoResponse(
        id=row["id"],
        owner_id=row["owner_id"],
        title=row["title"],
        description=row["description"],
        completed=bool(row["completed"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    ).model_dump()


def _parse_bool(name: str, value: str | None) -> bool | None:
    if value is None:
        return None
    lowered = value.lower()
    if lowered in ("true", "1"):
        return True
    if lowered in ("false", "0"):
        return False
    raise ValidationError(
        f"Invalid value for '{name}'",
        {"errors": [{"field": name, "message": "Expected true or false", "expected_type": "bool"}]}
    )


def _parse_int(name: str, value: str | None, default: int, minimum: int, maximum: int) -> int:
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        parsed = None
    if parsed is None or not minimum <= parsed <= maximum:
        raise ValidationError(
            f"Invalid value for '{name}'",
            {"errors": [{
                "field": name,
                "message": f"Expected integer between {minimum} and {maximum}",
                "expected_type": "int",
            }]}
        )
    return parsed


@todos_bp.get("")
def list_todos():
    """
    List the caller's todos, newest first.

    Query Parameters:
        - completed: true|false - Filter by completion state
        - limit: int - Maximum results to return (default: 100, max: 500)
        - offset: int - Number of results to skip (default: 0)

    Returns:
        200: Array of TodoResponse objects
        400: Invalid query parameter
    """
    filters = {"completed": _parse_bool("completed", request.args.get("completed"))}
    limit = _parse_int("limit", request.args.get("limit"), 100, 1, 500)
    offset = _parse_int("offset", request.args.get("offset"), 0, 0, 2**31 - 1)

    core = get_core()
    try:
        rows = core.todo.list(g.user_id, filters, limit=limit, offset=offset)
    finally:
        core.close()

    return jsonify([_row_to_todo_response(row) for row in rows])


@todos_bp.post("")
@validate_request
def create_todo(data: TodoCreate):
    """
    Create a todo owned by the caller.

    Request Body (TodoCreate):
        - title: str (required)
        - description: str | None (default: None)
        - completed: bool (default: False)

    Returns:
        201: TodoResponse with created todo
        400: Validation error
    """
    core = get_core()
    try:
        todo_id = core.todo.create(
            owner_id=g.user_id,
            title=data.title,
            description=data.description,
            completed=data.completed
        )
        row = core.todo.get_by_id(todo_id, g.user_id)
    finally:
        core.close()

    return jsonify(_row_to_todo_response(row)), 201


@todos_bp.get("/<todo_id>")
def get_todo(todo_id: str):
    """
    Get a single todo by ID.

    Returns:
        200: TodoResponse
        404: Todo not found (or not owned by the caller)
    """
    core = get_core()
    try:
        row = core.todo.get_by_id(todo_id, g.user_id)
    finally:
        core.close()

    return jsonify(_row_to_todo_response(row))


@todos_bp.put("/<todo_id>")
@validate_request
def update_todo(todo_id: str, data: TodoUpdate):
    """
    Update a todo. Only provided fields are updated.

    Request Body (TodoUpdate):
        All fields optional:
        - title: str | None
        - description: str | None
        - completed: bool | None

    Returns:
        200: TodoResponse with updated todo
        400: Validation error
        404: Todo not found (or not owned by the caller)
    """
    with get_core(atomic=True) as core:
        core.todo.update(todo_id, g.user_id, data.model_dump(exclude_unset=True))
        row = core.todo.get_by_id(todo_id, g.user_id)

    return jsonify(_row_to_todo_response(row))


@todos_bp.delete("/<todo_id>")
def delete_todo(todo_id: str):
    """
    Delete a todo.

    Returns:
        204: No content (successful deletion)
        404: Todo not found (or not owned by the caller)
    """
    core = get_core()
    try:
        core.todo.delete(todo_id, g.user_id)
    finally:
        core.close()

    return "", 204
