"""
Celery tasks for email operations.

Handles asynchronous notification sending with retry logic.
"""

import logging
from typing import Any, Dict
from celery import shared_task
from app.services.email_service import email_service

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised inside the task so Celery retries a failed send."""
    pass


@shared_task(
    bind=True,
    name="send_notification_email_task",
    max_retries=3,
    default_retry_delay=60,  # Retry after 60 seconds
    autoretry_for=(EmailDeliveryError,),
    retry_backoff=True,
    retry_backoff_max=600,  # Max 10 minutes between retries
    retry_jitter=True
)
def send_notification_email_task(
    self,
    to_email: str,
    template_kind: str,
    data: Dict[str, Any]
):
    """
    Celery task to send a notification email asynchronously.

    Args:
        to_email: Recipient email address
        template_kind: new_application, application_status or welcome
        data: Template variables (JSON-serializable)

    Raises:
        EmailDeliveryError: If sending fails (triggers a retry)
    """
    if not email_service.is_configured:
        logger.warning(f"Skipping {template_kind} email to {to_email}: no sender configured")
        return {"status": "skipped", "email": to_email, "template_kind": template_kind}

    logger.info(f"Sending {template_kind} email to {to_email} (attempt {self.request.retries + 1})")

    delivered = email_service.send(to_email, template_kind, data)

    if not delivered:
        if self.request.retries >= self.max_retries:
            logger.error(f"All retry attempts exhausted for {template_kind} email to {to_email}")
        raise EmailDeliveryError(f"Failed to send {template_kind} email to {to_email}")

    logger.info(f"{template_kind} email sent successfully to {to_email}")
    return {"status": "success", "email": to_email, "template_kind": template_kind}
