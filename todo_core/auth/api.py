"""Authentication API endpoints for Todo Core.

These endpoints handle registration and the session lifecycle:
- POST /api/auth/register - Create account and log in
- POST /api/auth/login    - Authenticate and start a session
- POST /api/auth/logout   - End the current session
- GET  /api/auth/me       - Current user info (session required)

Successful register/login responses set an HTTP-only cookie holding the
signed opaque session id. None of these endpoints sit behind the auth gate
except /me.
"""

import logging

from flask import Blueprint, g, jsonify, request

from ..api.validation import validate_request
from ..config import settings
from ..db import get_core
from ..exceptions import InvalidCredentials, Unauthorized
from . import service, session
from .decorators import (
    auth_required,
    clear_session_cookie,
    refresh_session_cookie,
    set_session_cookie,
)
from .schemas import MessageResponse, UserCreate, UserLogin

logger = logging.getLogger(__name__)


# Create blueprint
auth_bp = Blueprint("auth", __name__)

# Re-send the cookie when /me slides the session
auth_bp.after_request(refresh_session_cookie)


# ============================================================================
# Registration
# ============================================================================


@auth_bp.route("/register", methods=["POST"])
@validate_request
def register(data: UserCreate):
    """
    Create an account and log the new user in.

    Returns:
        201: UserResponse, with the session cookie set
        400: ValidationError listing offending fields
        409: DuplicateEmail

    Example request:
    ```json
    {
        "name": "Ann",
        "email": "ann@x.com",
        "password": "secret123"
    }
    ```

    Example response:
    ```json
    {
        "id": "550e8400-e29b-41d4-a716-446655440000",
        "email": "ann@x.com",
        "name": "Ann",
        "created_at": "2026-01-01T10:30:00.000000Z"
    }
    ```
    """
    # User and session commit together
    with get_core(atomic=True) as core:
        user = service.create_user(core, data)
        session_id = session.create_session(core, user.id, data={"origin": "register"})

    logger.info(f"User registered: {user.id}")

    response = jsonify(user.model_dump())
    response.status_code = 201
    return set_session_cookie(response, session_id)


# ============================================================================
# Authentication Endpoints
# ============================================================================


@auth_bp.route("/login", methods=["POST"])
@validate_request
def login(data: UserLogin):
    """
    Authenticate and start a new session.

    Unknown email and wrong password produce the same 401 response.

    Returns:
        200: UserResponse, with the session cookie set
        400: ValidationError (missing fields)
        401: InvalidCredentials
    """
    core = get_core()
    try:
        user = service.verify_credentials(core, data.email, data.password)
        if user is None:
            logger.warning("Failed login attempt")
            raise InvalidCredentials("Invalid email or password")

        session_id = session.create_session(core, user.id, data={"origin": "login"})
    finally:
        core.close()

    logger.info(f"Successful login: {user.id}")

    return set_session_cookie(jsonify(user.model_dump()), session_id)


@auth_bp.route("/logout", methods=["POST"])
def logout():
    """
    End the current session and clear the cookie.

    Always succeeds: a missing, tampered or already destroyed session is
    simply ignored.

    Example response:
    ```json
    {
        "message": "Logged out successfully"
    }
    ```
    """
    cookie_value = request.cookies.get(settings.session_cookie_name)
    session_id = session.unsign_session_id(cookie_value) if cookie_value else None

    if session_id:
        core = get_core()
        try:
            session.destroy_session(core, session_id)
        finally:
            core.close()

    response = jsonify(MessageResponse(message="Logged out successfully").model_dump())
    return clear_session_cookie(response)


# ============================================================================
# User Profile Endpoints
# ============================================================================


@auth_bp.route("/me", methods=["GET"])
@auth_required
def get_current_user():
    """
    Get the user bound to the current session.

    Returns:
        200: UserResponse
        401: Unauthorized
    """
    core = get_core()
    try:
        user = service.get_user_by_id(core, g.user_id)
    finally:
        core.close()

    if user is None:
        raise Unauthorized("Invalid or expired session")

    return jsonify(user.model_dump()), 200
