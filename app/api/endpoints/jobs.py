import logging
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.deps import get_current_employer
from app.models.job import JobType
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.job import (
    JobCreateRequest,
    JobFilters,
    JobListResponse,
    JobResponse,
    JobUpdateRequest,
    PaginationMeta,
)
from app.services import job_service

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


def get_job_filters(
    search: Optional[str] = Query(None, max_length=200, description="Substring of title, description or industry"),
    job_type: Optional[JobType] = Query(None, alias="jobType"),
    location: Optional[str] = Query(None, max_length=200),
    industry: Optional[str] = Query(None, max_length=200),
    experience_level: Optional[str] = Query(None, alias="experienceLevel", max_length=100),
    featured: Optional[bool] = Query(None, description="true restricts the listing to featured jobs"),
) -> JobFilters:
    """Collect listing query parameters into a typed filter object."""
    return JobFilters(
        search=search,
        job_type=job_type,
        location=location,
        industry=industry,
        experience_level=experience_level,
        featured=featured,
    )


@router.get("", response_model=JobListResponse)
def list_jobs(
    filters: JobFilters = Depends(get_job_filters),
    page: int = Query(1, ge=1, le=settings.MAX_PAGE),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db)
):
    """
    List active jobs, newest first.

    Filters:
    - search: case-insensitive match on title, description or industry
    - jobType, experienceLevel: exact match
    - location, industry: case-insensitive substring
    - featured=true: featured jobs only
    """
    result = job_service.list_jobs(db, filters, page=page, limit=limit)

    return JobListResponse(
        jobs=[JobResponse.model_validate(job) for job in result.jobs],
        pagination=PaginationMeta(
            total=result.total,
            page=result.page,
            limit=result.limit,
            total_pages=result.total_pages,
        ),
    )


@router.get("/employer/my-jobs", response_model=List[JobResponse])
def list_my_jobs(
    employer: User = Depends(get_current_employer),
    db: Session = Depends(get_db)
):
    """List every job owned by the calling employer, including inactive ones."""
    return job_service.list_employer_jobs(db, employer)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: UUID, db: Session = Depends(get_db)):
    """Retrieve a job by ID, with employer details and application count."""
    return job_service.get_job(db, job_id)


@router.post("", status_code=201, response_model=JobResponse)
def create_job(
    request: JobCreateRequest,
    employer: User = Depends(get_current_employer),
    db: Session = Depends(get_db)
):
    """Post a new job owned by the calling employer."""
    return job_service.create_job(db, employer, request)


@router.put("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: UUID,
    request: JobUpdateRequest,
    employer: User = Depends(get_current_employer),
    db: Session = Depends(get_db)
):
    """
    Update a job owned by the calling employer.

    Only fields present in the body are changed. 404 if the job does not
    exist, 403 if it belongs to another employer.
    """
    return job_service.update_job(db, employer, job_id, request)


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(
    job_id: UUID,
    employer: User = Depends(get_current_employer),
    db: Session = Depends(get_db)
):
    """
    Delete a job owned by the calling employer, along with all of its
    applications.
    """
    job_service.delete_job(db, employer, job_id)
    return MessageResponse(message="Job deleted successfully")
