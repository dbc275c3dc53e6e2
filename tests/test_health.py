"""Health endpoint tests."""

from elastic_transport import ConnectionError as TransportConnectionError
from fastapi.testclient import TestClient


def test_liveness_returns_200(client: TestClient) -> None:
    """Liveness endpoint returns 200 OK."""
    response = client.get("/api/v1/health/live")
    assert response.status_code == 200


def test_liveness_returns_status(client: TestClient) -> None:
    """Liveness endpoint returns alive status."""
    response = client.get("/api/v1/health/live")
    data = response.json()
    assert data["status"] == "alive"


def test_readiness_reports_engine_version(client: TestClient) -> None:
    """Readiness is green when the engine answers cluster info."""
    with client:
        response = client.get("/api/v1/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"][0]["name"] == "elasticsearch:test_items"
    assert data["checks"][0]["message"] == "8.13.4"


def test_readiness_fails_when_engine_down(client: TestClient, fake_es) -> None:
    """Readiness returns 503 when the engine is unreachable."""
    fake_es.error = TransportConnectionError("Connection refused")

    with client:
        response = client.get("/api/v1/health/ready")

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "not_ready"
    assert data["checks"][0]["status"] == "failed"
