"""Authentication module for Todo Core.

This module provides session-based authentication:
- Schema validation for auth operations
- Password hashing and verification (bcrypt)
- Server-side session manager with signed session cookies
- Auth gate for protected endpoints

Auth endpoints (under <api_prefix>/auth):
- POST /register - Create account and start a session
- POST /login    - Authenticate and start a session
- POST /logout   - Destroy the current session
- GET  /me       - Get current user info
"""

from . import schemas, service, session

__all__ = ["schemas", "service", "session"]
