"""Tests for app factory, settings and basic middleware."""
import pytest
from pydantic import ValidationError

from fleet_monitor.api.config import ApiSettings
from fleet_monitor.api.deps.providers import get_settings
from fleet_monitor.api.main import create_app


def test_create_app():
    app = create_app(ApiSettings())
    assert app.title == "Fleet Monitor API"


def test_openapi_schema():
    schema = create_app(ApiSettings()).openapi()
    assert "/api/metrics" in schema["paths"]


def test_routes_registered():
    app = create_app(ApiSettings())
    paths = {r.path for r in app.routes}
    expected = {
        "/api/health",
        "/api/metrics",
        "/api/backends/{name}/connectivity",
    }
    for ep in expected:
        assert ep in paths, f"Missing route: {ep}"


def test_app_settings_override_dependency():
    settings = ApiSettings(report_timezone="Europe/Berlin")
    app = create_app(settings)
    assert app.dependency_overrides[get_settings]() is settings


def test_backend_url_from_bare_env_var(monkeypatch):
    monkeypatch.setenv("BACKEND_API_URL", "http://fleet.example/api")
    assert ApiSettings().backend_api_url == "http://fleet.example/api"


def test_unknown_timezone_rejected():
    with pytest.raises(ValidationError):
        ApiSettings(report_timezone="Mars/Olympus_Mons")


@pytest.mark.asyncio
async def test_404_wrapped(client):
    resp = await client.get("/api/nonexistent")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_cors_headers(client):
    resp = await client.options(
        "/api/health",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"},
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"
