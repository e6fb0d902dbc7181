"""
Tests for the HTTP client, driven against the app through TestClient.
"""

import pytest

from app.client import ApiError, JobBoardClient, SessionContext


@pytest.fixture
def api(client):
    return JobBoardClient(http_client=client, api_prefix="/api")


class TestSessionContext:

    def test_load_and_clear(self):
        session = SessionContext()
        assert not session.is_authenticated
        assert session.auth_headers() == {}

        session.load("tok", {"id": "1"})
        assert session.is_authenticated
        assert session.auth_headers() == {"Authorization": "Bearer tok"}

        session.clear()
        assert session.token is None
        assert session.user is None


class TestJobBoardClient:

    def test_employer_and_candidate_flow(self, client):
        employer = JobBoardClient(http_client=client, api_prefix="/api")
        employer.register(email="boss@example.com", password="password123", role="EMPLOYER",
                          firstName="Erin", lastName="Boss", companyName="Acme Corp")
        assert employer.session.is_authenticated

        job = employer.create_job(
            title="Python Developer", description="APIs", location="Remote", jobType="REMOTE",
            experienceLevel="Mid", industry="Technology", skills=["Python"]
        )

        candidate = JobBoardClient(http_client=client, api_prefix="/api")
        candidate.register(email="casey@example.com", password="password123", firstName="Casey", lastName="Jones")

        listing = candidate.list_jobs(search="python", job_type="REMOTE")
        assert [j["id"] for j in listing["jobs"]] == [job["id"]]

        application = candidate.apply_for_job(job["id"], "https://cv.example.com/casey.pdf", cover_letter="Hi")
        assert application["status"] == "PENDING"

        updated = employer.update_application_status(application["id"], "REVIEWED")
        assert updated["status"] == "REVIEWED"

        assert candidate.get_candidate_applications()[0]["status"] == "REVIEWED"
        assert len(employer.get_job_applications(job["id"])) == 1
        assert employer.get_employer_jobs()[0]["applicationCount"] == 1

        candidate.withdraw_application(application["id"])
        assert candidate.get_candidate_applications() == []

    def test_login_logout(self, api, candidate):
        api.login("candidate@example.com", "password123")
        assert api.get_me()["email"] == "candidate@example.com"

        api.logout()
        with pytest.raises(ApiError) as exc_info:
            api.get_me()
        assert exc_info.value.status_code == 401

    def test_error_details(self, api, candidate):
        api.login("candidate@example.com", "password123")

        with pytest.raises(ApiError) as exc_info:
            api.create_job(title="Nope")
        assert exc_info.value.status_code in (400, 403)

        with pytest.raises(ApiError) as exc_info:
            api.update_profile(firstName=None)
        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "Validation failed"
        assert exc_info.value.errors

    def test_profile_and_public_user(self, api, candidate):
        api.login("candidate@example.com", "password123")

        api.update_profile(bio="Hello")
        assert api.session.user["bio"] == "Hello"

        public = api.get_user(candidate["user"]["id"])
        assert public["bio"] == "Hello"
        assert "email" not in public

    def test_featured_flag_serialized(self, api, employer, sample_job_data, client):
        client.post("/api/jobs", json={**sample_job_data, "isFeatured": True}, headers=employer["headers"])
        client.post("/api/jobs", json=sample_job_data, headers=employer["headers"])

        assert api.list_jobs(featured=True)["pagination"]["total"] == 1
        assert api.list_jobs(featured=False)["pagination"]["total"] == 2
