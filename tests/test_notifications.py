"""
Tests for notification dispatch, email rendering and the email task.
"""

import threading

import pytest

from app.core.celery_utils import queue_task_safely
from app.core.config import settings
from app.services import notification_service
from app.services.email_service import (
    EmailService,
    TEMPLATE_APPLICATION_STATUS,
    TEMPLATE_NEW_APPLICATION,
    TEMPLATE_WELCOME,
    UnknownTemplateError,
)
from app.tasks.email_tasks import EmailDeliveryError, send_notification_email_task


class FakeSesClient:
    def __init__(self):
        self.sent = []

    def send_email(self, **kwargs):
        self.sent.append(kwargs)
        return {"MessageId": "msg-123"}


@pytest.fixture
def email_service(monkeypatch):
    service = EmailService()
    service.ses_client = FakeSesClient()
    monkeypatch.setattr(settings, "AWS_SES_FROM_EMAIL", "noreply@jobboard.example.com")
    return service


class TestRendering:

    def test_new_application(self, email_service):
        subject, content = email_service.render(TEMPLATE_NEW_APPLICATION, {
            "employer_name": "Acme Corp",
            "candidate_name": "Casey Jones",
            "job_title": "Python Developer",
            "application_id": "abc",
        })

        assert subject == "New Application for Python Developer"
        assert "Casey Jones" in content
        assert "Acme Corp" in content

    def test_status_accepted(self, email_service):
        subject, content = email_service.render(TEMPLATE_APPLICATION_STATUS, {
            "candidate_name": "Casey Jones",
            "job_title": "Python Developer",
            "company_name": "Acme Corp",
            "status": "ACCEPTED",
        })

        assert subject.startswith("Congratulations")
        assert "ACCEPTED" in content

    def test_status_rejected_encourages(self, email_service):
        _, content = email_service.render(TEMPLATE_APPLICATION_STATUS, {
            "candidate_name": "Casey Jones",
            "job_title": "Python Developer",
            "company_name": "Acme Corp",
            "status": "REJECTED",
        })

        assert "Keep applying" in content

    def test_welcome_by_role(self, email_service):
        _, employer_content = email_service.render(TEMPLATE_WELCOME, {"first_name": "Erin", "role": "EMPLOYER"})
        _, candidate_content = email_service.render(TEMPLATE_WELCOME, {"first_name": "Casey", "role": "CANDIDATE"})

        assert "Post Your First Job" in employer_content
        assert "Browse Jobs" in candidate_content

    def test_values_are_escaped(self, email_service):
        _, content = email_service.render(TEMPLATE_WELCOME, {"first_name": "<script>", "role": "CANDIDATE"})

        assert "<script>" not in content
        assert "&lt;script&gt;" in content

    def test_unknown_template(self, email_service):
        with pytest.raises(UnknownTemplateError):
            email_service.render("newsletter", {})


class TestSending:

    def test_send(self, email_service):
        sent = email_service.send("casey@example.com", TEMPLATE_WELCOME, {"first_name": "Casey", "role": "CANDIDATE"})

        assert sent is True
        message = email_service.ses_client.sent[0]
        assert message["Destination"] == {"ToAddresses": ["casey@example.com"]}
        assert message["Message"]["Subject"]["Data"] == "Welcome to JobBoard!"

    def test_send_without_sender_is_skipped(self, email_service, monkeypatch):
        monkeypatch.setattr(settings, "AWS_SES_FROM_EMAIL", "")

        assert email_service.send("casey@example.com", TEMPLATE_WELCOME, {"first_name": "C", "role": "CANDIDATE"}) is False
        assert email_service.ses_client.sent == []

    def test_send_with_missing_data_fails_quietly(self, email_service):
        assert email_service.send("casey@example.com", TEMPLATE_WELCOME, {}) is False


class TestDispatch:

    def test_dispatch_queues_task(self, sent_emails):
        queued = notification_service.dispatch("a@example.com", TEMPLATE_WELCOME, {"first_name": "A", "role": "CANDIDATE"})

        assert queued is True
        assert sent_emails == [{
            "to_email": "a@example.com",
            "template_kind": TEMPLATE_WELCOME,
            "data": {"first_name": "A", "role": "CANDIDATE"},
        }]

    def test_dispatch_disabled(self, sent_emails, monkeypatch):
        monkeypatch.setattr(settings, "NOTIFICATIONS_ENABLED", False)

        assert notification_service.dispatch("a@example.com", TEMPLATE_WELCOME, {}) is False
        assert sent_emails == []

    def test_dispatch_swallows_errors(self, monkeypatch):
        def broken_queue(task, *args, **kwargs):
            raise RuntimeError("broker down")

        monkeypatch.setattr("app.services.notification_service.queue_task_safely", broken_queue)

        assert notification_service.dispatch("a@example.com", TEMPLATE_WELCOME, {}) is False

    def test_dispatch_reports_unqueued(self, monkeypatch):
        monkeypatch.setattr("app.services.notification_service.queue_task_safely", lambda task, **kwargs: False)

        assert notification_service.dispatch("a@example.com", TEMPLATE_WELCOME, {}) is False


class TestEmailTask:

    def test_task_sends_email(self, monkeypatch):
        monkeypatch.setattr(settings, "AWS_SES_FROM_EMAIL", "noreply@jobboard.example.com")
        calls = []

        def fake_send(to_email, template_kind, data):
            calls.append((to_email, template_kind, data))
            return True

        monkeypatch.setattr("app.tasks.email_tasks.email_service.send", fake_send)

        result = send_notification_email_task.apply(
            kwargs={"to_email": "a@example.com", "template_kind": TEMPLATE_WELCOME, "data": {"first_name": "A"}}
        ).get()

        assert result == {"status": "success", "email": "a@example.com", "template_kind": TEMPLATE_WELCOME}
        assert calls == [("a@example.com", TEMPLATE_WELCOME, {"first_name": "A"})]

    def test_task_raises_for_retry_when_undelivered(self, monkeypatch):
        monkeypatch.setattr(settings, "AWS_SES_FROM_EMAIL", "noreply@jobboard.example.com")
        attempts = []

        def failing_send(to_email, template_kind, data):
            attempts.append(to_email)
            return False

        monkeypatch.setattr("app.tasks.email_tasks.email_service.send", failing_send)

        result = send_notification_email_task.apply(
            kwargs={"to_email": "a@example.com", "template_kind": TEMPLATE_WELCOME, "data": {"first_name": "A"}}
        )

        with pytest.raises(EmailDeliveryError):
            result.get()
        assert len(attempts) == send_notification_email_task.max_retries + 1

    def test_task_skips_without_sender(self, monkeypatch):
        monkeypatch.setattr(settings, "AWS_SES_FROM_EMAIL", "")
        attempts = []
        monkeypatch.setattr(
            "app.tasks.email_tasks.email_service.send",
            lambda to_email, template_kind, data: attempts.append(to_email) or False,
        )

        result = send_notification_email_task.apply(
            kwargs={"to_email": "a@example.com", "template_kind": TEMPLATE_WELCOME, "data": {"first_name": "A"}}
        ).get()

        assert result == {"status": "skipped", "email": "a@example.com", "template_kind": TEMPLATE_WELCOME}
        assert attempts == []


class TestQueueTaskSafely:

    def test_timeout_reports_failure(self, monkeypatch):
        release = threading.Event()

        def stuck_queue(task, args, kwargs):
            release.wait(timeout=5)
            return (True, "late-id", "")

        monkeypatch.setattr("app.core.celery_utils._queue_task_sync", stuck_queue)
        monkeypatch.setattr(settings, "NOTIFICATION_QUEUE_TIMEOUT_SECONDS", 0.05)

        try:
            assert queue_task_safely(send_notification_email_task, to_email="a@example.com") is False
        finally:
            release.set()

    def test_broker_error_reports_failure(self, monkeypatch):
        monkeypatch.setattr(
            "app.core.celery_utils._queue_task_sync",
            lambda task, args, kwargs: (False, "", "connection refused"),
        )

        assert queue_task_safely(send_notification_email_task, to_email="a@example.com") is False

    def test_queued(self, monkeypatch):
        monkeypatch.setattr(
            "app.core.celery_utils._queue_task_sync",
            lambda task, args, kwargs: (True, "task-1", ""),
        )

        assert queue_task_safely(send_notification_email_task, to_email="a@example.com") is True
