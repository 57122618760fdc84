"""Resource API for Todo Core.

This module provides the api blueprint that aggregates the protected
resources (currently todos). Every endpoint registered under it passes
through the auth gate first; auth endpoints are registered separately in
main.py and are never gated here.
"""

from flask import Blueprint

from ..auth.decorators import _authenticate_request, refresh_session_cookie
from . import todos

# Create the api blueprint
api_bp = Blueprint("api", __name__)


# ============================================================================
# Authentication Middleware (api-level)
# ============================================================================


@api_bp.before_request
def authenticate():
    """
    Require a valid session for every resource endpoint.

    Runs before business logic so unauthenticated requests are rejected
    without touching the todo store.

    Raises:
        Unauthorized: If no valid session cookie is present
    """
    _authenticate_request()


# Keep the browser cookie in step with sliding expiry
api_bp.after_request(refresh_session_cookie)


# Full path: <api_prefix>/todos
api_bp.register_blueprint(todos.todos_bp, url_prefix="/todos")

__all__ = ["api_bp"]
