"""
Tests for the shared application factory: CORS and error handlers.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from common.exceptions import AuthError, UpstreamError, register_exception_handlers
from common.fastapi import create_fastapi_app

ZAPIER_ORIGIN = "https://zapier.com"
LOCALHOST_ORIGIN = "http://localhost:3000"


def _preflight(client: TestClient, origin: str):
    return client.options(
        "/health",
        headers={"Origin": origin, "Access-Control-Request-Method": "GET"},
    )


@pytest.fixture
def app_for_environment(monkeypatch):
    """Return a factory building the app under a given ENVIRONMENT."""

    def build(environment: str) -> FastAPI:
        monkeypatch.setenv("ENVIRONMENT", environment)
        monkeypatch.delenv("CORS_ORIGINS", raising=False)
        return create_fastapi_app(service_name="reviews-service", description="test")

    return build


class TestCors:
    """Tests for the environment-aware CORS policy."""

    def test_production_allows_configured_origins(self, app_for_environment):
        client = TestClient(app_for_environment("production"))

        response = _preflight(client, ZAPIER_ORIGIN)

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == ZAPIER_ORIGIN
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_production_rejects_localhost(self, app_for_environment):
        client = TestClient(app_for_environment("production"))

        response = _preflight(client, LOCALHOST_ORIGIN)

        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    @pytest.mark.parametrize("origin", [ZAPIER_ORIGIN, LOCALHOST_ORIGIN])
    def test_dev_also_allows_localhost(self, app_for_environment, origin):
        client = TestClient(app_for_environment("DEV"))

        response = _preflight(client, origin)

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == origin

    def test_simple_request_echoes_allowed_origin(self, app_for_environment):
        client = TestClient(app_for_environment("production"))

        response = client.get("/health", headers={"Origin": ZAPIER_ORIGIN})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == ZAPIER_ORIGIN


class TestExceptionHandlers:
    """Tests for the JSON shapes produced by register_exception_handlers."""

    @pytest.fixture
    def client(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/auth")
        async def auth():
            raise AuthError()

        @app.get("/upstream")
        async def upstream():
            raise UpstreamError(status_code=403, detail={"error": {"message": "Denied"}}, upstream_message="Denied")

        @app.get("/network")
        async def network():
            raise UpstreamError(status_code=None, detail="Connection refused")

        @app.get("/boom")
        async def boom():
            raise RuntimeError("secret internals")

        return TestClient(app, raise_server_exceptions=False)

    def test_auth_error(self, client):
        response = client.get("/auth")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json() == {
            "success": False,
            "error": "Missing or invalid authentication token",
            "message": "Provide a Bearer token in the Authorization header",
        }

    def test_upstream_error_relays_status_and_body(self, client):
        response = client.get("/upstream")

        assert response.status_code == 403
        assert response.json() == {"success": False, "error": {"error": {"message": "Denied"}}}

    def test_upstream_error_without_status_is_500(self, client):
        response = client.get("/network")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Connection refused"}

    def test_unhandled_exception_is_generic_500(self, client):
        response = client.get("/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert "secret internals" not in body["error"]
