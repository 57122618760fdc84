"""Server-side session manager.

Sessions live in the session store (core.session) keyed by an opaque random
identifier. The identifier is the only thing the client ever holds; it is
sent back in an HTTP-only cookie signed with itsdangerous so tampered
values are rejected before touching the store.

Lifecycle:
    Active --(expires_at passes)--> Expired --(resolve / sweep)--> Destroyed
    Active --(destroy / logout)--> Destroyed

Expiry policy (configurable in settings):
- Fixed TTL of session_ttl_seconds from creation.
- With session_sliding_expiry on, each successful resolve pushes expires_at
  to now + TTL, but never past created_at + session_max_age_seconds.
- resolve enforces expiry itself, so sweeping is housekeeping only.

All functions accept an optional `now` so they can be exercised without a
clock or an HTTP request.
"""

import json
import logging
from datetime import datetime, timedelta
from typing import Any

from itsdangerous import BadData, URLSafeSerializer

from ..config import settings
from ..db import Core
from ..exceptions import SessionExpired, SessionNotFound
from ..utils import isodatetime, secret

logger = logging.getLogger(__name__)

COOKIE_SALT = "todo-core.session"


def _short(session_id: str) -> str:
    # Log prefix only; the full id is a bearer credential
    return session_id[:8] + "..."


# ============================================================================
# Session Lifecycle
# ============================================================================


def create_session(
    core: Core,
    user_id: str,
    data: dict[str, Any] | None = None,
    now: datetime | None = None
) -> str:
    """
    Issue a new active session bound to user_id.

    Args:
        core: Database core
        user_id: User the session authenticates
        data: Optional small JSON-serializable payload
        now: Override for the current time

    Returns:
        The opaque session identifier
    """
    now = now or isodatetime.utcnow()
    session_id = secret.generate_session_id()

    core.session.create(
        session_id=session_id,
        user_id=user_id,
        created_at=isodatetime.to_timestamp(now),
        expires_at=isodatetime.to_timestamp(now + timedelta(seconds=settings.session_ttl_seconds)),
        data=data,
    )

    logger.debug(f"Session {_short(session_id)} created for user {user_id}")
    return session_id


def resolve_session(core: Core, session_id: str, now: datetime | None = None) -> str:
    """
    Resolve a session identifier to its user id.

    Returns:
        The bound user id

    Raises:
        SessionNotFound: If no such session exists (never issued or destroyed)
        SessionExpired: If the TTL has elapsed; the session is deleted
    """
    now = now or isodatetime.utcnow()

    row = core.session.get_by_id(session_id)
    if row is None:
        raise SessionNotFound("Session not found")

    expires_at = isodatetime.to_datetime(row["expires_at"])
    if expires_at <= now:
        core.session.delete(session_id)
        logger.info(f"Session {_short(session_id)} expired")
        raise SessionExpired("Session expired", {"expired_at": row["expires_at"]})

    if settings.session_sliding_expiry:
        created_at = isodatetime.to_datetime(row["created_at"])
        new_expiry = min(
            now + timedelta(seconds=settings.session_ttl_seconds),
            created_at + timedelta(seconds=settings.session_max_age_seconds),
        )
        if new_expiry > expires_at:
            # Only expiry columns change; a concurrent destroy just makes this a no-op
            core.session.touch(
                session_id,
                expires_at=isodatetime.to_timestamp(new_expiry),
                last_seen_at=isodatetime.to_timestamp(now),
            )

    return row["user_id"]


def destroy_session(core: Core, session_id: str) -> None:
    """Destroy a session. Destroying a missing session is not an error."""
    if core.session.delete(session_id):
        logger.debug(f"Session {_short(session_id)} destroyed")


def sweep_expired_sessions(core: Core, now: datetime | None = None) -> int:
    """Delete every expired session. Returns the number removed."""
    now = now or isodatetime.utcnow()
    removed = core.session.delete_expired(isodatetime.to_timestamp(now))
    if removed:
        logger.info(f"Swept {removed} expired session(s)")
    return removed


def get_session_expiry(core: Core, session_id: str) -> datetime | None:
    """Return when a session currently expires, or None if it is gone."""
    row = core.session.get_by_id(session_id)
    return isodatetime.to_datetime(row["expires_at"]) if row else None


def get_session_data(core: Core, session_id: str) -> dict[str, Any]:
    """Return the payload stored with a session.

    Raises:
        SessionNotFound: If no such session exists
    """
    row = core.session.get_by_id(session_id)
    if row is None:
        raise SessionNotFound("Session not found")
    return json.loads(row["data"])


# ============================================================================
# Cookie Codec
# ============================================================================


def _serializer() -> URLSafeSerializer:
    return URLSafeSerializer(settings.secret_key, salt=COOKIE_SALT)


def sign_session_id(session_id: str) -> str:
    """Sign a session id for use as the cookie value."""
    return _serializer().dumps(session_id)


def unsign_session_id(cookie_value: str) -> str | None:
    """Recover the session id from a cookie value, or None if tampered."""
    if not cookie_value:
        return None
    try:
        session_id = _serializer().loads(cookie_value)
    except BadData:
        return None
    return session_id if isinstance(session_id, str) and session_id else None
