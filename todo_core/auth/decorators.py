"""Authentication decorators for protected endpoints.

This module provides the auth gate:
- _authenticate_request() - resolves the session cookie to a user id
- @auth_required - applies the gate to a single endpoint
- refresh_session_cookie() - after_request hook that re-sends the cookie
  once sliding expiry has moved the session's expires_at

The api blueprint applies the same gate to every todo route through its
before_request hook (see api/__init__.py).
"""

import logging
from functools import wraps

from flask import g, request

from ..config import settings
from ..db import get_core
from ..exceptions import AuthFailure, Unauthorized
from ..utils import isodatetime
from . import session

logger = logging.getLogger(__name__)


# ============================================================================
# Shared Authentication Logic
# ============================================================================


def _authenticate_request():
    """
    Shared authentication logic for requests.

    Reads the signed session cookie, resolves it through the session
    manager and stores the result in flask.g (request-scoped):
    - g.user_id: Authenticated user ID
    - g.session_id: Opaque session ID
    - g.session_expires_at: New expiry, only when sliding expiry is on

    Raises:
        Unauthorized: If the cookie is missing, tampered, or names a
            session that doesn't exist or has expired. All cases give the
            client the same error type.
    """
    cookie_value = request.cookies.get(settings.session_cookie_name)
    if not cookie_value:
        logger.warning("Unauthenticated request to protected endpoint")
        raise Unauthorized("Authentication required")

    session_id = session.unsign_session_id(cookie_value)
    if session_id is None:
        logger.warning("Session cookie failed signature check")
        raise Unauthorized("Invalid or expired session")

    core = get_core()
    try:
        user_id = session.resolve_session(core, session_id)
        expires_at = (
            session.get_session_expiry(core, session_id)
            if settings.session_sliding_expiry else None
        )
    except AuthFailure as e:
        logger.warning(f"Session rejected: {e.message}")
        raise Unauthorized("Invalid or expired session")
    finally:
        core.close()

    g.user_id = user_id
    g.session_id = session_id
    if expires_at is not None:
        g.session_expires_at = expires_at
    logger.debug(f"Session authentication successful for user {user_id}")


# ============================================================================
# Session Cookie
# ============================================================================


def set_session_cookie(response, session_id: str, max_age: int | None = None):
    """Attach the signed session cookie. max_age defaults to the session TTL."""
    response.set_cookie(
        settings.session_cookie_name,
        session.sign_session_id(session_id),
        max_age=settings.session_ttl_seconds if max_age is None else max_age,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="Lax",
        path="/",
    )
    return response


def clear_session_cookie(response):
    response.delete_cookie(
        settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="Lax",
        path="/",
    )
    return response


def refresh_session_cookie(response):
    """
    Re-send the session cookie with the session's remaining lifetime.

    Registered as an after_request hook on gated blueprints. Only acts when
    the gate ran for this request and recorded a slid expiry, so the
    browser keeps the cookie for as long as the server keeps the session.
    """
    expires_at = g.get("session_expires_at")
    if expires_at is None:
        return response

    max_age = int((expires_at - isodatetime.utcnow()).total_seconds())
    if max_age > 0:
        set_session_cookie(response, g.session_id, max_age=max_age)
    return response


# ============================================================================
# Auth Required Decorator
# ============================================================================


def auth_required(f):
    """
    Decorator to require a valid session for endpoint access.

    Example:
    ```python
    @auth_bp.get("/me")
    @auth_required
    def me():
        user_id = g.user_id
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        _authenticate_request()
        return f(*args, **kwargs)

    return wrapper
