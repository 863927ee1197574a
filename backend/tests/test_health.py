"""
Tests for the health check endpoint and cross-cutting middleware.
"""


class TestHealthEndpoints:
    """Test health check API endpoints."""

    def test_health_check(self, client):
        """Health check pings the database and reports healthy."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "rest-api"
        assert data["database"] == "ok"


class TestMiddleware:

    def test_security_headers(self, client):
        response = client.get("/api/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_request_id_is_echoed(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    def test_request_id_is_generated(self, client):
        response = client.get("/api/health")
        assert response.headers["X-Request-ID"]

    def test_non_json_body_rejected(self, client, auth_headers):
        response = client.post(
            "/api/products/bulk-update-status",
            headers={**auth_headers, "Content-Type": "text/plain"},
            content="productIds=1",
        )
        assert response.status_code == 415
        assert response.json()["code"] == "UNSUPPORTED_MEDIA_TYPE"

    def test_unknown_route_uses_error_body(self, client):
        response = client.get("/api/does-not-exist")
        assert response.status_code == 404
        body = response.json()
        assert body["status"] == "error"
        assert body["code"] == "NOT_FOUND"
        assert body["path"] == "/api/does-not-exist"
