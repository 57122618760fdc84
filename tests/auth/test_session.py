"""Tests for the session manager.

Exercises create/resolve/destroy/sweep directly against the store, with an
explicit clock, and the signed cookie codec.
"""

from datetime import datetime, timedelta, UTC

import pytest

from todo_core.auth import session
from todo_core.config import settings
from todo_core.exceptions import SessionExpired, SessionNotFound
from todo_core.utils import isodatetime

T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)
TTL = timedelta(seconds=settings.session_ttl_seconds)


@pytest.fixture
def user_id(core):
    return core.user.create("ann@x.com", "Ann", "$2b$hash")


@pytest.fixture
def fixed_expiry():
    """Disable sliding expiry for the duration of a test."""
    original = settings.session_sliding_expiry
    settings.session_sliding_expiry = False
    yield
    settings.session_sliding_expiry = original


def _expires_at(core, session_id):
    return isodatetime.to_datetime(core.session.get_by_id(session_id)["expires_at"])


class TestCreateSession:

    def test_returns_opaque_identifier(self, core, user_id):
        session_id = session.create_session(core, user_id, now=T0)
        assert isinstance(session_id, str)
        assert user_id not in session_id
        assert len(session_id) >= 43

    def test_persists_active_session_with_ttl(self, core, user_id):
        session_id = session.create_session(core, user_id, now=T0)
        row = core.session.get_by_id(session_id)

        assert row["user_id"] == user_id
        assert isodatetime.to_datetime(row["created_at"]) == T0
        assert _expires_at(core, session_id) == T0 + TTL

    def test_each_login_gets_a_new_session(self, core, user_id):
        first = session.create_session(core, user_id, now=T0)
        second = session.create_session(core, user_id, now=T0)
        assert first != second
        assert core.session.count_for_user(user_id) == 2

    def test_stores_payload(self, core, user_id):
        session_id = session.create_session(core, user_id, data={"origin": "login"}, now=T0)
        assert session.get_session_data(core, session_id) == {"origin": "login"}


class TestResolveSession:

    def test_resolves_to_bound_user_repeatedly(self, core, user_id):
        session_id = session.create_session(core, user_id, now=T0)
        for minutes in (0, 1, 30, 60):
            assert session.resolve_session(core, session_id, now=T0 + timedelta(minutes=minutes)) == user_id

    def test_unknown_session_not_found(self, core):
        with pytest.raises(SessionNotFound):
            session.resolve_session(core, "never-issued", now=T0)

    def test_expired_session_is_rejected_and_deleted(self, core, user_id, fixed_expiry):
        session_id = session.create_session(core, user_id, now=T0)

        with pytest.raises(SessionExpired):
            session.resolve_session(core, session_id, now=T0 + TTL)

        assert core.session.get_by_id(session_id) is None
        with pytest.raises(SessionNotFound):
            session.resolve_session(core, session_id, now=T0 + TTL)

    def test_valid_just_before_expiry(self, core, user_id, fixed_expiry):
        session_id = session.create_session(core, user_id, now=T0)
        just_before = T0 + TTL - timedelta(microseconds=1)
        assert session.resolve_session(core, session_id, now=just_before) == user_id

    def test_fixed_expiry_does_not_slide(self, core, user_id, fixed_expiry):
        session_id = session.create_session(core, user_id, now=T0)
        session.resolve_session(core, session_id, now=T0 + timedelta(hours=1))
        assert _expires_at(core, session_id) == T0 + TTL

    def test_sliding_expiry_extends_on_use(self, core, user_id):
        session_id = session.create_session(core, user_id, now=T0)
        later = T0 + timedelta(hours=20)

        session.resolve_session(core, session_id, now=later)

        assert _expires_at(core, session_id) == later + TTL
        # Still valid past the original expiry because it was used
        assert session.resolve_session(core, session_id, now=T0 + TTL + timedelta(hours=1)) == user_id

    def test_sliding_expiry_capped_by_max_age(self, core, user_id):
        session_id = session.create_session(core, user_id, now=T0)
        max_age = timedelta(seconds=settings.session_max_age_seconds)

        # Keep the session alive by touching it just before each expiry
        now = T0
        while now + TTL < T0 + max_age:
            now = now + TTL - timedelta(minutes=1)
            session.resolve_session(core, session_id, now=now)

        assert _expires_at(core, session_id) == T0 + max_age
        with pytest.raises(SessionExpired):
            session.resolve_session(core, session_id, now=T0 + max_age)

    def test_idle_session_expires_even_with_sliding(self, core, user_id):
        session_id = session.create_session(core, user_id, now=T0)
        with pytest.raises(SessionExpired):
            session.resolve_session(core, session_id, now=T0 + TTL + timedelta(seconds=1))


class TestGetSessionExpiry:

    def test_reports_slid_expiry(self, core, user_id):
        session_id = session.create_session(core, user_id, now=T0)
        assert session.get_session_expiry(core, session_id) == T0 + TTL

        later = T0 + timedelta(hours=3)
        session.resolve_session(core, session_id, now=later)
        assert session.get_session_expiry(core, session_id) == later + TTL

    def test_missing_session(self, core):
        assert session.get_session_expiry(core, "never-issued") is None


class TestDestroySession:

    def test_destroyed_session_not_found(self, core, user_id):
        session_id = session.create_session(core, user_id, now=T0)
        session.destroy_session(core, session_id)

        for _ in range(3):
            with pytest.raises(SessionNotFound):
                session.resolve_session(core, session_id, now=T0)

    def test_destroy_is_idempotent(self, core, user_id):
        session_id = session.create_session(core, user_id, now=T0)
        session.destroy_session(core, session_id)
        session.destroy_session(core, session_id)
        session.destroy_session(core, "never-issued")

    def test_destroy_leaves_other_sessions(self, core, user_id):
        kept = session.create_session(core, user_id, now=T0)
        dropped = session.create_session(core, user_id, now=T0)
        session.destroy_session(core, dropped)
        assert session.resolve_session(core, kept, now=T0) == user_id


class TestSweepExpiredSessions:

    def test_removes_only_expired(self, core, user_id):
        old = session.create_session(core, user_id, now=T0 - TTL - timedelta(hours=1))
        fresh = session.create_session(core, user_id, now=T0)

        assert session.sweep_expired_sessions(core, now=T0) == 1
        assert core.session.get_by_id(old) is None
        assert core.session.get_by_id(fresh) is not None

    def test_nothing_to_sweep(self, core):
        assert session.sweep_expired_sessions(core, now=T0) == 0


class TestCookieCodec:

    def test_sign_and_unsign(self):
        signed = session.sign_session_id("abc")
        assert signed != "abc"
        assert session.unsign_session_id(signed) == "abc"

    def test_tampered_value_rejected(self):
        signed = session.sign_session_id("abc")
        assert session.unsign_session_id(signed + "x") is None
        assert session.unsign_session_id("abc") is None
        assert session.unsign_session_id("") is None

    def test_other_secret_rejected(self):
        signed = session.sign_session_id("abc")
        original = settings.secret_key
        settings.secret_key = "a-different-secret"
        try:
            assert session.unsign_session_id(signed) is None
        finally:
            settings.secret_key = original
