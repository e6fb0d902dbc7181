"""
Unit tests for password hashing, tokens and the authorization policy.
"""

import uuid
from datetime import timedelta

import pytest

from app.core.exceptions import AuthError, ForbiddenError
from app.core.permissions import has_role, is_owner, require_ownership, require_role
from app.core.security import create_access_token, get_password_hash, verify_password, verify_token
from app.models.user import User, UserRole


def make_actor(role=UserRole.CANDIDATE):
    return User(id=uuid.uuid4(), email="actor@example.com", role=role, first_name="A", last_name="B")


class TestPasswords:

    def test_hash_and_verify(self):
        hashed = get_password_hash("correct horse")

        assert hashed != "correct horse"
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong horse", hashed)

    def test_hashes_are_salted(self):
        assert get_password_hash("same") != get_password_hash("same")


class TestTokens:

    def test_round_trip(self):
        user_id = uuid.uuid4()

        payload = verify_token(create_access_token(user_id, UserRole.EMPLOYER))

        assert payload.user_id == user_id
        assert payload.role == UserRole.EMPLOYER

    def test_expired(self):
        token = create_access_token(uuid.uuid4(), UserRole.CANDIDATE, expires_delta=timedelta(seconds=-5))

        with pytest.raises(AuthError):
            verify_token(token)

    def test_tampered(self):
        token = create_access_token(uuid.uuid4(), UserRole.CANDIDATE)
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        with pytest.raises(AuthError):
            verify_token(tampered)

    def test_garbage(self):
        with pytest.raises(AuthError):
            verify_token("garbage")


class TestPermissions:

    def test_has_role(self):
        actor = make_actor(UserRole.EMPLOYER)

        assert has_role(actor, [UserRole.EMPLOYER])
        assert not has_role(actor, [UserRole.CANDIDATE])

    def test_require_role(self):
        require_role(make_actor(UserRole.EMPLOYER), [UserRole.EMPLOYER, UserRole.ADMIN])

        with pytest.raises(ForbiddenError) as exc_info:
            require_role(make_actor(UserRole.CANDIDATE), [UserRole.EMPLOYER])
        assert "EMPLOYER" in exc_info.value.detail

    def test_ownership(self):
        actor = make_actor()

        assert is_owner(actor, actor.id)
        assert not is_owner(actor, uuid.uuid4())
        assert not is_owner(actor, None)

        require_ownership(actor, actor.id)
        with pytest.raises(ForbiddenError) as exc_info:
            require_ownership(actor, uuid.uuid4(), "Not authorized to update this job")
        assert exc_info.value.detail == "Not authorized to update this job"
        assert exc_info.value.status_code == 403
