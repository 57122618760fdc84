"""Custom exceptions for Todo Core.

Every exception carries a human-readable message and an optional details
dict. The Flask error handlers in main.py turn them into JSON responses of
the form {"error": {"type", "message", "details"?}}.

Session lookup failures (AuthFailure and subclasses) are internal to the
session layer. The auth gate converts them to Unauthorized so a client never
learns whether a session was missing or expired.
"""


class TodoCoreError(Exception):
    """Base exception for all Todo Core errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(TodoCoreError):
    """Request data failed validation (400)."""


class ResourceNotFound(TodoCoreError):
    """Resource does not exist or is not owned by the caller (404)."""


class DuplicateEmail(TodoCoreError):
    """Registration with an email that is already registered (409)."""


class DatabaseError(TodoCoreError):
    """Store failure (500). Message must not carry internal detail."""


class AuthenticationError(TodoCoreError):
    """Request could not be authenticated (401)."""


class Unauthorized(AuthenticationError):
    """No session, or the session is invalid or expired."""


class InvalidCredentials(AuthenticationError):
    """Login failed. Same error for unknown email and wrong password."""


class AuthFailure(TodoCoreError):
    """Session could not be resolved to a user."""


class SessionNotFound(AuthFailure):
    """No session with this identifier exists."""


class SessionExpired(AuthFailure):
    """Session existed but its TTL has elapsed."""
