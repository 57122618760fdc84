"""Request validation decorator.

@validate_request turns a JSON (or form) request body into the Pydantic
model named by a view function's annotation:

    @todos_bp.put("/<todo_id>")
    @validate_request
    def update_todo(todo_id: str, data: TodoUpdate):
        ...

Parameters that Flask fills from the URL (view_args) are passed through
unchanged. Every other parameter must be annotated with a BaseModel
subclass and is built from the request body. Pydantic errors become a
ValidationError whose details list each offending field.
"""

import inspect
from functools import wraps
from typing import Any

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

SENSITIVE_FIELDS = {"password"}


def _redact(body: Any) -> Any:
    """Hide sensitive values before echoing a body back in an error."""
    if not isinstance(body, dict):
        return body
    return {
        key: "********" if key in SENSITIVE_FIELDS else value
        for key, value in body.items()
    }


def _request_body() -> Any:
    body = request.get_json(silent=True)
    if body is None and request.form:
        body = request.form.to_dict()
    return {} if body is None else body


def _format_errors(error: PydanticValidationError) -> list[dict[str, str]]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "expected_type": err["type"],
        }
        for err in error.errors()
    ]


def validate_request(f):
    """Validate the request body against the view's Pydantic annotation.

    Raises:
        TypeError: At decoration time if the function has no parameters or
            an unannotated one; at request time if a body parameter is not
            annotated with a BaseModel subclass.
        ValidationError: If the body does not match the model.
    """
    signature = inspect.signature(f)
    params = list(signature.parameters.values())

    if not params:
        raise TypeError(f"{f.__name__} has no parameters to validate")
    for param in params:
        if param.annotation is inspect.Parameter.empty:
            raise TypeError(
                f"Parameter '{param.name}' of {f.__name__} lacks a type annotation"
            )

    @wraps(f)
    def wrapper(*args, **kwargs):
        view_args = request.view_args or {}

        for param in params:
            if param.name in view_args or param.name in kwargs:
                continue

            model = param.annotation
            if not (inspect.isclass(model) and issubclass(model, BaseModel)):
                raise TypeError(
                    f"Parameter '{param.name}' of {f.__name__} must be annotated "
                    f"with a Pydantic BaseModel subclass"
                )

            body = _request_body()
            if not isinstance(body, dict):
                raise ValidationError(
                    "Request body must be a JSON object",
                    {"model": model.__name__}
                )

            try:
                kwargs[param.name] = model.model_validate(body)
            except PydanticValidationError as e:
                raise ValidationError(
                    "Invalid request data",
                    {
                        "model": model.__name__,
                        "received": _redact(body),
                        "errors": _format_errors(e),
                    }
                )

        return f(*args, **kwargs)

    return wrapper
