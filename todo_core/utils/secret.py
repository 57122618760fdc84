"""Secret generation utilities.

This is the ONLY module that should import secrets for identifier
generation. Session identifiers are opaque: 32 random bytes, URL-safe
base64 encoded, with no embedded structure or user data.
"""

import secrets

SESSION_ID_BYTES = 32


def generate_session_id() -> str:
    """Generate an unguessable opaque session identifier."""
    return secrets.token_urlsafe(SESSION_ID_BYTES)
