import pytest
from fastapi.testclient import TestClient

from backend.api.deps import get_job_store
from backend.api.main import create_app
from backend.core.exceptions import ConnectivityError


@pytest.fixture
def client(test_settings, mock_job_store):
    app = create_app(test_settings)
    app.dependency_overrides[get_job_store] = lambda: mock_job_store
    return TestClient(app)


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_db(client, mock_job_store):
    response = client.get("/health/db")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Database connection OK"}
    mock_job_store.ping.assert_awaited_once()


def test_health_check_db_unavailable(client, mock_job_store):
    mock_job_store.ping.side_effect = ConnectivityError("Database unreachable")
    response = client.get("/health/db")
    assert response.status_code == 503
    assert response.json()["detail"] == "Database unavailable"
