"""
Job aggregate service.

Role and ownership checks happen here, before any write. A missing job is
reported as NotFoundError before ownership is evaluated, so an employer
touching another employer's existing job gets ForbiddenError and one touching
a nonexistent job gets NotFoundError.
"""

import logging
import math
from dataclasses import dataclass
from typing import List
from uuid import UUID
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.core.permissions import require_ownership, require_role
from app.crud import job as job_crud
from app.models.job import Job
from app.models.user import User, UserRole
from app.schemas.job import JobCreateRequest, JobFilters, JobUpdateRequest

logger = logging.getLogger(__name__)


@dataclass
class JobPage:
    """One page of a job listing plus the totals for the whole result."""
    jobs: List[Job]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def create_job(db: Session, actor: User, request: JobCreateRequest) -> Job:
    """
    Post a new job owned by the acting employer.

    Raises:
        ForbiddenError: If the actor is not an EMPLOYER
    """
    require_role(actor, [UserRole.EMPLOYER])

    job = job_crud.create(db, actor.id, request)
    logger.info(f"Created job {job.id}: {job.title} (employer {actor.id})")
    return job


def list_jobs(db: Session, filters: JobFilters, page: int = 1, limit: int = settings.DEFAULT_PAGE_SIZE) -> JobPage:
    """
    List active jobs matching the filters, newest first, one page at a time.

    Raises:
        ValidationError: If page is outside 1..MAX_PAGE or limit is outside 1..MAX_PAGE_SIZE
    """
    if page < 1 or page > settings.MAX_PAGE:
        raise ValidationError(f"page must be between 1 and {settings.MAX_PAGE}")
    if limit < 1 or limit > settings.MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be between 1 and {settings.MAX_PAGE_SIZE}")

    skip = (page - 1) * limit
    jobs, total = job_crud.get_multi(db, filters, skip=skip, limit=limit)
    return JobPage(jobs=jobs, total=total, page=page, limit=limit)


def get_job(db: Session, job_id: UUID) -> Job:
    """
    Retrieve a job; its application_count is loaded with it.

    Raises:
        NotFoundError: If the job does not exist
    """
    job = job_crud.get_by_id(db, job_id)
    if not job:
        raise NotFoundError("Job not found")
    return job


def update_job(db: Session, actor: User, job_id: UUID, request: JobUpdateRequest) -> Job:
    """
    Merge the provided fields into a job owned by the actor.

    Raises:
        NotFoundError: If the job does not exist
        ForbiddenError: If the actor does not own the job
    """
    job = get_job(db, job_id)
    require_ownership(actor, job.employer_id, "Not authorized to update this job")

    fields = request.model_dump(exclude_unset=True)
    job = job_crud.update(db, job, fields)

    logger.info(f"Updated job {job.id} fields: {sorted(fields)}")
    return job


def delete_job(db: Session, actor: User, job_id: UUID) -> None:
    """
    Delete a job owned by the actor together with all its applications.

    Raises:
        NotFoundError: If the job does not exist
        ForbiddenError: If the actor does not own the job
    """
    job = get_job(db, job_id)
    require_ownership(actor, job.employer_id, "Not authorized to delete this job")

    application_count = job.application_count
    job_crud.delete(db, job)

    logger.info(f"Deleted job {job_id} and {application_count} application(s)")


def list_employer_jobs(db: Session, actor: User) -> List[Job]:
    """
    All jobs owned by the acting employer, active or not, newest first.

    Raises:
        ForbiddenError: If the actor is not an EMPLOYER
    """
    require_role(actor, [UserRole.EMPLOYER])
    return job_crud.get_by_employer(db, actor.id)
