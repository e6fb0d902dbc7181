"""
Tests for log redaction.
"""

import logging

from app.core.logging_config import RedactSecretsFilter, redact_secrets
from app.core.security import create_access_token
from app.models.user import UserRole
import uuid


def test_bearer_token_masked():
    assert redact_secrets("Authorization: Bearer abc.def.ghi") == "Authorization: Bearer [REDACTED]"


def test_bare_jwt_masked():
    token = create_access_token(uuid.uuid4(), UserRole.CANDIDATE)

    assert token not in redact_secrets(f"issued {token} to user")


def test_password_assignment_masked():
    assert "hunter22" not in redact_secrets('payload {"password": "hunter22"}')
    assert "hunter22" not in redact_secrets("password=hunter22 email=a@example.com")


def test_plain_messages_untouched():
    message = "Created job 42: Python Developer (employer 7)"

    assert redact_secrets(message) == message


def test_filter_rewrites_formatted_message():
    record = logging.LogRecord(
        "test", logging.INFO, __file__, 1, "token for %s is Bearer %s", ("casey", "secret-value"), None
    )

    assert RedactSecretsFilter().filter(record) is True
    assert record.getMessage() == "token for casey is Bearer [REDACTED]"
