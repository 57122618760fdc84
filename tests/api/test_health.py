"""Tests for API health endpoint."""


class TestHealthEndpoint:
    """Test health check endpoint."""

    def test_health_returns_status_ok(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}

    def test_health_needs_no_session(self, client):
        """Health sits outside the api blueprint, so the auth gate never runs."""
        assert client.get_cookie("todo_session") is None
        assert client.get("/health").status_code == 200
