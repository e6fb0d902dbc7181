"""
API endpoints for job applications.

Candidates apply and withdraw; the employer who owns a job reviews its
applications and sets their status. Notification emails are queued after the
response is sent and never affect it.
"""

import logging
from typing import List
from uuid import UUID
from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_current_candidate, get_current_employer
from app.models.user import User
from app.schemas.application import (
    ApplicationCreateRequest,
    ApplicationResponse,
    ApplicationStatusUpdateRequest,
)
from app.schemas.common import MessageResponse
from app.services import application_service

router = APIRouter(prefix="/applications", tags=["Applications"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=ApplicationResponse)
def apply_for_job(
    request: ApplicationCreateRequest,
    background_tasks: BackgroundTasks,
    candidate: User = Depends(get_current_candidate),
    db: Session = Depends(get_db)
):
    """
    Apply to a job as the calling candidate.

    Returns 404 if the job does not exist and 409 if the candidate has
    already applied to it. The new application starts as PENDING.
    """
    return application_service.apply_for_job(db, candidate, request, background_tasks)


@router.get("/candidate/my-applications", response_model=List[ApplicationResponse])
def list_my_applications(
    candidate: User = Depends(get_current_candidate),
    db: Session = Depends(get_db)
):
    """List the calling candidate's applications, newest first."""
    return application_service.list_candidate_applications(db, candidate)


@router.get("/job/{job_id}", response_model=List[ApplicationResponse])
def list_job_applications(
    job_id: UUID,
    employer: User = Depends(get_current_employer),
    db: Session = Depends(get_db)
):
    """List applications to a job owned by the calling employer."""
    return application_service.list_job_applications(db, employer, job_id)


@router.put("/{application_id}/status", response_model=ApplicationResponse)
def update_application_status(
    application_id: UUID,
    request: ApplicationStatusUpdateRequest,
    background_tasks: BackgroundTasks,
    employer: User = Depends(get_current_employer),
    db: Session = Depends(get_db)
):
    """
    Set an application's status (PENDING, REVIEWED, ACCEPTED, REJECTED).

    Only the employer who owns the application's job may do this. The
    candidate is emailed about every change.
    """
    return application_service.update_application_status(
        db, employer, application_id, request.status, background_tasks
    )


@router.delete("/{application_id}", response_model=MessageResponse)
def withdraw_application(
    application_id: UUID,
    candidate: User = Depends(get_current_candidate),
    db: Session = Depends(get_db)
):
    """Withdraw the calling candidate's application, whatever its status."""
    application_service.withdraw_application(db, candidate, application_id)
    return MessageResponse(message="Application withdrawn successfully")
