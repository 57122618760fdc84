"""Tests for uid and secret modules."""

import re

from todo_core.utils import secret, uid


# UUID v4 pattern: xxxxxxxx-xxxx-4xxx-yxxx-xxxxxxxxxxxx
UUID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$',
    re.IGNORECASE
)


class TestGenerateUuid:
    """Tests for uid.generate_uuid."""

    def test_returns_valid_uuid_v4(self):
        assert UUID_PATTERN.match(uid.generate_uuid()) is not None

    def test_returns_unique_values(self):
        results = {uid.generate_uuid() for _ in range(100)}
        assert len(results) == 100


class TestGenerateSessionId:
    """Tests for secret.generate_session_id."""

    def test_is_url_safe(self):
        """Session ids go into cookies, so only URL-safe characters."""
        session_id = secret.generate_session_id()
        assert re.fullmatch(r"[A-Za-z0-9_-]+", session_id)

    def test_has_256_bits_of_entropy(self):
        """32 random bytes encode to 43 base64 characters."""
        assert len(secret.generate_session_id()) == 43

    def test_returns_unique_values(self):
        results = {secret.generate_session_id() for _ in range(1000)}
        assert len(results) == 1000

