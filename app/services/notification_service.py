"""
Fire-and-forget notification dispatch.

Services call the notify_* helpers after their write has committed. The
helpers snapshot the template data from the ORM objects while the session is
still open, then hand a dispatch call to FastAPI's BackgroundTasks so it runs
after the response is sent. Dispatch queues a Celery email task; every
failure is logged and swallowed, never surfaced to the caller.
"""

import logging
from typing import Any, Dict, Optional
from fastapi import BackgroundTasks

from app.core.celery_utils import queue_task_safely
from app.core.config import settings
from app.models.application import Application
from app.models.user import User
from app.services.email_service import (
    TEMPLATE_APPLICATION_STATUS,
    TEMPLATE_NEW_APPLICATION,
    TEMPLATE_WELCOME,
)
from app.tasks.email_tasks import send_notification_email_task

logger = logging.getLogger(__name__)


def dispatch(to_email: str, template_kind: str, data: Dict[str, Any]) -> bool:
    """
    Queue a notification email. Never raises.

    Returns:
        bool: True if the email task was queued
    """
    if not settings.NOTIFICATIONS_ENABLED:
        logger.info(f"Notifications disabled; skipping {template_kind} email to {to_email}")
        return False

    try:
        queued = queue_task_safely(
            send_notification_email_task,
            to_email=to_email,
            template_kind=template_kind,
            data=data
        )
    except Exception as e:
        logger.error(f"Failed to queue {template_kind} email to {to_email}: {e}", exc_info=True)
        return False

    if not queued:
        logger.warning(f"{template_kind} email to {to_email} was not queued")
    return queued


def _schedule(
    background_tasks: Optional[BackgroundTasks],
    to_email: Optional[str],
    template_kind: str,
    data: Dict[str, Any]
) -> None:
    if not to_email:
        logger.info(f"No recipient for {template_kind} email; skipping")
        return

    if background_tasks is None:
        dispatch(to_email, template_kind, data)
    else:
        background_tasks.add_task(dispatch, to_email, template_kind, data)


def notify_new_application(application: Application, background_tasks: Optional[BackgroundTasks] = None) -> None:
    """Tell the job's employer that a candidate applied."""
    job = application.job
    employer = job.employer
    candidate = application.candidate

    data = {
        "employer_name": employer.display_name,
        "candidate_name": candidate.full_name,
        "job_title": job.title,
        "application_id": str(application.id),
    }
    _schedule(background_tasks, employer.email, TEMPLATE_NEW_APPLICATION, data)


def notify_status_change(application: Application, background_tasks: Optional[BackgroundTasks] = None) -> None:
    """Tell the candidate about their application's current status."""
    job = application.job
    candidate = application.candidate

    data = {
        "candidate_name": candidate.full_name,
        "job_title": job.title,
        "company_name": job.employer.company_name or "the employer",
        "status": application.status.value,
    }
    _schedule(background_tasks, candidate.email, TEMPLATE_APPLICATION_STATUS, data)


def notify_welcome(user: User, background_tasks: Optional[BackgroundTasks] = None) -> None:
    """Welcome a newly registered user."""
    data = {
        "first_name": user.first_name,
        "role": user.role.value,
    }
    _schedule(background_tasks, user.email, TEMPLATE_WELCOME, data)
