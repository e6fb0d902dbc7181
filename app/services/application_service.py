"""
Application aggregate service.

Enforces one application per (candidate, job) and the cross-aggregate
ownership rule: an application's status belongs to the employer who owns
the application's job, while withdrawal belongs to the candidate.
"""

import logging
from typing import List, Optional
from uuid import UUID
from fastapi import BackgroundTasks
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.permissions import require_ownership, require_role
from app.crud import application as application_crud
from app.crud import job as job_crud
from app.models.application import Application, ApplicationStatus
from app.models.user import User, UserRole
from app.schemas.application import ApplicationCreateRequest
from app.services import notification_service

logger = logging.getLogger(__name__)

ALREADY_APPLIED = "Already applied for this job"


def apply_for_job(
    db: Session,
    actor: User,
    request: ApplicationCreateRequest,
    background_tasks: Optional[BackgroundTasks] = None
) -> Application:
    """
    Submit the acting candidate's application to a job.

    The (candidate, job) pair is checked here for a clean error, and the
    unique constraint catches the race where two requests pass that check
    at the same time.

    Raises:
        ForbiddenError: If the actor is not a CANDIDATE
        NotFoundError: If the job does not exist
        ConflictError: If the candidate already applied to the job
    """
    require_role(actor, [UserRole.CANDIDATE])

    job = job_crud.get_by_id(db, request.job_id)
    if not job:
        raise NotFoundError("Job not found")

    if application_crud.get_by_candidate_and_job(db, actor.id, job.id):
        raise ConflictError(ALREADY_APPLIED)

    try:
        application = application_crud.create(
            db,
            candidate_id=actor.id,
            job_id=job.id,
            resume_url=request.resume_url,
            cover_letter=request.cover_letter,
        )
    except IntegrityError:
        db.rollback()
        logger.warning(f"Concurrent duplicate application by {actor.id} for job {job.id}")
        raise ConflictError(ALREADY_APPLIED)

    logger.info(f"Candidate {actor.id} applied for job {job.id} (application {application.id})")

    notification_service.notify_new_application(application, background_tasks)

    return application


def list_candidate_applications(db: Session, actor: User) -> List[Application]:
    """
    The acting candidate's applications with job summaries, newest first.

    Raises:
        ForbiddenError: If the actor is not a CANDIDATE
    """
    require_role(actor, [UserRole.CANDIDATE])
    return application_crud.get_by_candidate(db, actor.id)


def list_job_applications(db: Session, actor: User, job_id: UUID) -> List[Application]:
    """
    Applications to a job owned by the acting employer, with candidate
    profiles, newest first.

    Raises:
        NotFoundError: If the job does not exist
        ForbiddenError: If the actor does not own the job
    """
    job = job_crud.get_by_id(db, job_id)
    if not job:
        raise NotFoundError("Job not found")

    require_ownership(actor, job.employer_id, "Not authorized to view these applications")

    return application_crud.get_by_job(db, job.id)


def parse_status(value: str) -> ApplicationStatus:
    """
    Raises:
        ValidationError: If value is not one of the four statuses
    """
    try:
        return ApplicationStatus(value)
    except ValueError:
        raise ValidationError("Invalid status")


def update_application_status(
    db: Session,
    actor: User,
    application_id: UUID,
    status: str,
    background_tasks: Optional[BackgroundTasks] = None
) -> Application:
    """
    Set an application's status. Any status may follow any other.

    The candidate is notified on every call, including when the status does
    not change.

    Raises:
        ValidationError: If status is not a known value
        NotFoundError: If the application does not exist
        ForbiddenError: If the actor does not own the application's job
    """
    new_status = parse_status(status)

    application = application_crud.get_by_id(db, application_id)
    if not application:
        raise NotFoundError("Application not found")

    require_ownership(actor, application.job.employer_id, "Not authorized to update this application")

    previous = application.status
    application = application_crud.update_status(db, application, new_status)

    logger.info(f"Application {application.id} status {previous.value} -> {new_status.value}")

    notification_service.notify_status_change(application, background_tasks)

    return application


def withdraw_application(db: Session, actor: User, application_id: UUID) -> None:
    """
    Delete the acting candidate's application, whatever its status.

    Raises:
        NotFoundError: If the application does not exist
        ForbiddenError: If the actor is not the applicant
    """
    application = application_crud.get_by_id(db, application_id)
    if not application:
        raise NotFoundError("Application not found")

    require_ownership(actor, application.candidate_id, "Not authorized to delete this application")

    application_crud.delete(db, application)
    logger.info(f"Application {application_id} withdrawn by candidate {actor.id}")
