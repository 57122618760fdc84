"""Utility functions for Todo Core.

This package provides centralized utilities for common operations.
Import convention: use module-level imports for clarity.

    from utils import isodatetime, uid, secret
    timestamp = isodatetime.now()
    expires = isodatetime.to_timestamp(isodatetime.utcnow() + ttl)
    uuid = uid.generate_uuid()
    session_id = secret.generate_session_id()
"""

from . import isodatetime, secret, uid

__all__ = ["isodatetime", "secret", "uid"]
