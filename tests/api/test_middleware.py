"""Tests for API middleware and error envelopes."""

from fastapi.testclient import TestClient


class TestRequestIdMiddleware:
    """Tests for request ID correlation middleware."""

    def test_generates_request_id_if_not_provided(self, client: TestClient) -> None:
        """Should generate request ID if not in request headers."""
        response = client.get("/health")
        assert response.status_code == 200
        assert "X-Request-ID" in response.headers
        # UUID format
        assert len(response.headers["X-Request-ID"]) == 36

    def test_uses_provided_request_id(self, client: TestClient) -> None:
        """Should use request ID from request headers."""
        custom_id = "custom-request-id-12345"
        response = client.get("/health", headers={"X-Request-ID": custom_id})
        assert response.headers["X-Request-ID"] == custom_id

    def test_error_responses_carry_request_id(self, client: TestClient) -> None:
        response = client.get("/api/products/missing", headers={"X-Request-ID": "req-1"})
        assert response.status_code == 404
        assert response.headers["X-Request-ID"] == "req-1"


class TestErrorEnvelope:
    """Tests for the error response format."""

    def test_unknown_route(self, client: TestClient) -> None:
        response = client.get("/api/unknown")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Not Found"}

    def test_method_not_allowed(self, client: TestClient) -> None:
        response = client.patch("/api/products")

        assert response.status_code == 405
        assert response.json()["success"] is False

    def test_cors_preflight(self, client: TestClient) -> None:
        response = client.options(
            "/api/products",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers
