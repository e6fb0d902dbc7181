"""
Tests for user profile endpoints.
"""

import uuid


class TestProfileUpdate:

    def test_update_own_profile(self, client, candidate):
        response = client.put(
            "/api/users/profile",
            json={"bio": "Backend engineer", "location": "Lisbon", "resumeUrl": "https://cv.example.com/c.pdf"},
            headers=candidate["headers"]
        )

        assert response.status_code == 200
        data = response.json()
        assert data["bio"] == "Backend engineer"
        assert data["location"] == "Lisbon"
        assert data["firstName"] == "Casey"

        me = client.get("/api/auth/me", headers=candidate["headers"]).json()
        assert me["resumeUrl"] == "https://cv.example.com/c.pdf"

    def test_email_and_role_not_editable(self, client, candidate):
        response = client.put(
            "/api/users/profile",
            json={"email": "new@example.com", "role": "EMPLOYER", "bio": "x"},
            headers=candidate["headers"]
        )

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "candidate@example.com"
        assert data["role"] == "CANDIDATE"

    def test_names_cannot_be_cleared(self, client, candidate):
        response = client.put("/api/users/profile", json={"firstName": None}, headers=candidate["headers"])

        assert response.status_code == 400

    def test_requires_authentication(self, client):
        response = client.put("/api/users/profile", json={"bio": "x"})

        assert response.status_code == 401


class TestPublicProfile:

    def test_public_profile_hides_private_fields(self, client, make_user):
        user = make_user("private@example.com", phoneNumber="555-0100", resumeUrl="https://cv.example.com/p.pdf",
                         bio="Hello")

        response = client.get(f"/api/users/{user['user']['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["bio"] == "Hello"
        assert "email" not in data
        assert "phoneNumber" not in data
        assert "resumeUrl" not in data

    def test_unknown_user(self, client):
        response = client.get(f"/api/users/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"
