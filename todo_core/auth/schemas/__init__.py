"""Authentication Pydantic schemas for API validation."""

from .auth import (
    MessageResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)

__all__ = [
    "MessageResponse",
    "UserCreate",
    "UserLogin",
    "UserResponse",
]
