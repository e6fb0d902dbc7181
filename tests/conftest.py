"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Captured notification emails (no Redis needed)
- Registered employer and candidate accounts
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
import app.models  # noqa: F401  (registers every table on Base.metadata)
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

API = "/api"
DEFAULT_PASSWORD = "password123"


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    """
    Capture notification emails instead of queueing them on the broker.

    Each entry is the kwargs the email task would have been queued with:
    {"to_email", "template_kind", "data"}.
    """
    captured = []

    def fake_queue_task_safely(task, *args, **kwargs):
        captured.append(kwargs)
        return True

    monkeypatch.setattr("app.services.notification_service.queue_task_safely", fake_queue_task_safely)
    return captured


def register_user(client, email, role="CANDIDATE", **profile):
    """Register through the API and return {"user", "token", "headers"}."""
    payload = {
        "email": email,
        "password": DEFAULT_PASSWORD,
        "role": role,
        "firstName": profile.pop("firstName", "Test"),
        "lastName": profile.pop("lastName", "User"),
        **profile,
    }
    response = client.post(f"{API}/auth/register", json=payload)
    assert response.status_code == 201, response.text
    data = response.json()
    return {
        "user": data["user"],
        "token": data["token"],
        "headers": {"Authorization": f"Bearer {data['token']}"},
    }


@pytest.fixture
def make_user(client):
    """Factory fixture: make_user(email, role="CANDIDATE", **profile)."""
    def _make(email, role="CANDIDATE", **profile):
        return register_user(client, email, role=role, **profile)
    return _make


@pytest.fixture
def employer(client):
    return register_user(
        client, "employer@example.com", role="EMPLOYER",
        firstName="Erin", lastName="Boss", companyName="Acme Corp"
    )


@pytest.fixture
def other_employer(client):
    return register_user(
        client, "other.employer@example.com", role="EMPLOYER",
        firstName="Oscar", lastName="Rival", companyName="Globex"
    )


@pytest.fixture
def candidate(client):
    return register_user(client, "candidate@example.com", firstName="Casey", lastName="Jones")


@pytest.fixture
def other_candidate(client):
    return register_user(client, "other.candidate@example.com", firstName="Dana", lastName="Smith")


@pytest.fixture
def sample_job_data():
    """Sample job data for testing"""
    return {
        "title": "Senior Python Developer",
        "description": "Build and run our FastAPI services on PostgreSQL.",
        "requirements": "5+ years of Python",
        "responsibilities": "Own the backend",
        "location": "San Francisco, CA",
        "salary": "$150k - $180k",
        "jobType": "FULL_TIME",
        "experienceLevel": "Senior",
        "industry": "Technology",
        "skills": ["Python", "FastAPI", "PostgreSQL"],
    }


@pytest.fixture
def job(client, employer, sample_job_data):
    """A job posted by `employer`."""
    response = client.post(f"{API}/jobs", json=sample_job_data, headers=employer["headers"])
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def application(client, candidate, job):
    """`candidate`'s application to `job`."""
    response = client.post(
        f"{API}/applications",
        json={"jobId": job["id"], "resumeUrl": "https://files.example.com/casey.pdf", "coverLetter": "Hi"},
        headers=candidate["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()
