"""Integration tests for root, health and metrics endpoints."""

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient


def test_root_reports_api_running(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"message": "Api is running"}


def test_health_returns_ok(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_healthz_reports_components(client: TestClient) -> None:
    """Test /healthz with the in-memory store and a configured collector."""
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "components": {"db": "in_memory", "audit": "configured"},
    }


def test_metrics_exposes_auth_and_audit_counters(client: TestClient) -> None:
    """Test counters appear after an auth failure and an audited request."""
    client.get("/api/client")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]
    assert 'auth_failures_total{reason="token_not_found"}' in response.text
    assert "audit_submissions_total" in response.text


def test_unknown_route_keeps_default_404(client: TestClient) -> None:
    assert client.get("/api/nope").status_code == 404


@patch("backend.app.api.routes.health.check_db")
def test_healthz_returns_503_when_db_fails(mock_check_db: MagicMock, client: TestClient) -> None:
    """Test /healthz returns 503 when the database check fails."""
    mock_check_db.return_value = (False, "error: OperationalError")

    response = client.get("/healthz")

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"
    assert response.json()["components"]["db"] == "error: OperationalError"
