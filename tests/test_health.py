"""
Tests for health check endpoints and error rendering.
"""


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_detailed_health_checks_database(client):
    response = client.get("/api/health/detailed")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["checks"]["database"]["status"] == "healthy"


def test_database_errors_are_not_leaked(client, employer, monkeypatch):
    from sqlalchemy.exc import OperationalError

    def failing_get_by_employer(db, employer_id):
        raise OperationalError("SELECT secret FROM jobs", {}, Exception("disk I/O error"))

    monkeypatch.setattr("app.crud.job.get_by_employer", failing_get_by_employer)

    response = client.get("/api/jobs/employer/my-jobs", headers=employer["headers"])

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
