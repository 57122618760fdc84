"""Password hashing and user service.

Password hashing uses bcrypt: every hash gets a fresh random salt that is
embedded in the 60-character digest, and checkpw compares in constant time.
Plaintext passwords are never logged, stored or returned.

User functions take a Core and return UserResponse objects, which never
carry the password hash.
"""

import logging
import sqlite3
from functools import lru_cache

import bcrypt

from ..config import settings
from ..db import Core
from ..exceptions import DuplicateEmail
from .schemas import UserCreate, UserResponse

logger = logging.getLogger(__name__)


# ============================================================================
# Password Hashing
# ============================================================================


def hash_password(password: str) -> str:
    """Hash a password with a per-call random salt."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_work_factor)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a bcrypt digest.

    A malformed or empty digest yields False rather than an exception.
    """
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


@lru_cache(maxsize=4)
def _dummy_hash(rounds: int) -> str:
    # Same cost as real hashes so unknown-email logins take as long as real ones
    return bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt(rounds=rounds)).decode("utf-8")


# ============================================================================
# User Operations
# ============================================================================


def _row_to_user(row: sqlite3.Row) -> UserResponse:
    return UserResponse(
        id=row["id"],
        email=row["email"],
        name=row["name"],
        created_at=row["created_at"],
    )


def create_user(core: Core, data: UserCreate) -> UserResponse:
    """
    Register a new user.

    Raises:
        DuplicateEmail: If the normalized email is already registered.
            Checked up front and again via the UNIQUE index, so two
            concurrent registrations still yield one user.
    """
    if core.user.get_by_email(data.email) is not None:
        logger.info("Registration rejected: email already registered")
        raise DuplicateEmail("Email already registered")

    try:
        user_id = core.user.create(
            email=data.email,
            name=data.name,
            password_hash=hash_password(data.password),
        )
    except sqlite3.IntegrityError:
        raise DuplicateEmail("Email already registered")

    return _row_to_user(core.user.get_by_id(user_id))


def get_user_by_id(core: Core, user_id: str) -> UserResponse | None:
    row = core.user.get_by_id(user_id)
    return _row_to_user(row) if row else None


def get_user_by_email(core: Core, email: str) -> UserResponse | None:
    row = core.user.get_by_email(email)
    return _row_to_user(row) if row else None


def verify_credentials(core: Core, email: str, password: str) -> UserResponse | None:
    """
    Verify login credentials.

    Returns the user on success and None otherwise. Unknown emails still run
    a bcrypt comparison so the two failure paths are indistinguishable.
    """
    row = core.user.get_by_email(email)
    if row is None:
        verify_password(password, _dummy_hash(settings.bcrypt_work_factor))
        return None

    if not verify_password(password, row["password_hash"]):
        return None

    return _row_to_user(row)
