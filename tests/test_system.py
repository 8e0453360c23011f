from main import app
from fastapi.testclient import TestClient


def test_root_is_plain_text_liveness():
    response = TestClient(app).get("/")
    assert response.status_code == 200
    assert "running" in response.text
    assert response.headers["content-type"].startswith("text/plain")


def test_health_reports_databases():
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] in ("healthy", "degraded")
    assert set(data["database_status"]) == {"events", "routing_table"}


def test_enabled_apps_are_mounted():
    paths = {route.path for route in app.routes}
    assert {"/remotecc", "/notify", "/events", "/calls", "/ws", "/", "/health"} <= paths
