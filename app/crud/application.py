"""
CRUD operations for Application model.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session, joinedload
from app.models.application import Application, ApplicationStatus
from app.models.job import Job


def create(
    db: Session,
    candidate_id: UUID,
    job_id: UUID,
    resume_url: str,
    cover_letter: Optional[str] = None
) -> Application:
    """
    Insert a new PENDING application.

    Args:
        db: Database session
        candidate_id: Applying candidate's user id
        job_id: Target job id
        resume_url: Link to the resume submitted with this application
        cover_letter: Optional cover letter text

    Returns:
        Created Application instance

    Raises:
        IntegrityError: If (candidate_id, job_id) already exists. The caller
            is responsible for rolling back the session.
    """
    db_application = Application(
        candidate_id=candidate_id,
        job_id=job_id,
        resume_url=resume_url,
        cover_letter=cover_letter,
        status=ApplicationStatus.PENDING,
    )

    db.add(db_application)
    db.commit()
    db.refresh(db_application)

    return db_application


def get_by_id(db: Session, application_id: UUID) -> Optional[Application]:
    """
    Retrieve an application with its job loaded (needed for the one-hop
    ownership check against the job's employer).
    """
    return (
        db.query(Application)
        .options(joinedload(Application.job))
        .filter(Application.id == application_id)
        .first()
    )


def get_by_candidate_and_job(db: Session, candidate_id: UUID, job_id: UUID) -> Optional[Application]:
    """Retrieve the application a candidate made to a job, if any."""
    return (
        db.query(Application)
        .filter(
            Application.candidate_id == candidate_id,
            Application.job_id == job_id
        )
        .first()
    )


def get_by_candidate(db: Session, candidate_id: UUID) -> List[Application]:
    """
    Retrieve a candidate's applications with job and employer joined,
    newest first.
    """
    return (
        db.query(Application)
        .options(joinedload(Application.job).joinedload(Job.employer))
        .filter(Application.candidate_id == candidate_id)
        .order_by(Application.applied_date.desc(), Application.id)
        .all()
    )


def get_by_job(db: Session, job_id: UUID) -> List[Application]:
    """
    Retrieve all applications to a job with candidate profiles joined,
    newest first.
    """
    return (
        db.query(Application)
        .options(joinedload(Application.candidate))
        .filter(Application.job_id == job_id)
        .order_by(Application.applied_date.desc(), Application.id)
        .all()
    )


def update_status(db: Session, application: Application, status: ApplicationStatus) -> Application:
    """
    Set an application's status.

    Args:
        db: Database session
        application: Application to update
        status: New status (any value; there is no ordering between statuses)

    Returns:
        Updated Application instance
    """
    application.status = status

    db.commit()
    db.refresh(application)

    return application


def delete(db: Session, application: Application) -> None:
    """Delete an application."""
    db.delete(application)
    db.commit()
