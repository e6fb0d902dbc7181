"""
CRUD operations for Job model.

Implements the Repository pattern to encapsulate all database operations
for jobs, providing a clean interface for the service layer.
"""

from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from app.models.job import Job
from app.schemas.job import JobCreateRequest, JobFilters


def _contains(term: str) -> str:
    """Build a LIKE pattern matching `term` anywhere, with wildcards escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def create(db: Session, employer_id: UUID, job_data: JobCreateRequest) -> Job:
    """
    Create a new job in the database.

    Args:
        db: Database session
        employer_id: Owning employer's user id
        job_data: Validated job creation data

    Returns:
        Created Job instance with id and posted_date
    """
    db_job = Job(
        title=job_data.title,
        description=job_data.description,
        requirements=job_data.requirements,
        responsibilities=job_data.responsibilities,
        location=job_data.location,
        salary=job_data.salary,
        job_type=job_data.job_type,
        experience_level=job_data.experience_level,
        industry=job_data.industry,
        skills=list(job_data.skills),
        is_featured=job_data.is_featured,
        is_active=job_data.is_active,
        closing_date=job_data.closing_date,
        employer_id=employer_id,
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return db_job


def get_by_id(db: Session, job_id: UUID) -> Optional[Job]:
    """
    Retrieve a job by its ID, with its employer loaded.

    Args:
        db: Database session
        job_id: Job ID to retrieve

    Returns:
        Job instance if found, None otherwise
    """
    return (
        db.query(Job)
        .options(joinedload(Job.employer))
        .filter(Job.id == job_id)
        .first()
    )


def get_multi(
    db: Session,
    filters: JobFilters,
    skip: int = 0,
    limit: int = 10
) -> Tuple[List[Job], int]:
    """
    Retrieve active jobs matching the filters, newest first.

    Args:
        db: Database session
        filters: Validated listing predicates
        skip: Number of records to skip (offset)
        limit: Maximum number of records to return

    Returns:
        Tuple of (jobs on this page, total number of matching jobs)
    """
    query = db.query(Job).filter(Job.is_active.is_(True))

    if filters.search:
        pattern = _contains(filters.search)
        query = query.filter(or_(
            Job.title.ilike(pattern, escape="\\"),
            Job.description.ilike(pattern, escape="\\"),
            Job.industry.ilike(pattern, escape="\\"),
        ))

    if filters.job_type:
        query = query.filter(Job.job_type == filters.job_type)

    if filters.location:
        query = query.filter(Job.location.ilike(_contains(filters.location), escape="\\"))

    if filters.industry:
        query = query.filter(Job.industry.ilike(_contains(filters.industry), escape="\\"))

    if filters.experience_level:
        query = query.filter(Job.experience_level == filters.experience_level)

    if filters.featured:
        query = query.filter(Job.is_featured.is_(True))

    total = query.count()
    jobs = (
        query.options(joinedload(Job.employer))
        .order_by(Job.posted_date.desc(), Job.id)
        .offset(skip)
        .limit(limit)
        .all()
    )

    return jobs, total


def get_by_employer(db: Session, employer_id: UUID) -> List[Job]:
    """
    Retrieve every job owned by an employer, active or not, newest first.
    """
    return (
        db.query(Job)
        .filter(Job.employer_id == employer_id)
        .order_by(Job.posted_date.desc(), Job.id)
        .all()
    )


def update(db: Session, job: Job, fields: Dict[str, Any]) -> Job:
    """
    Merge provided fields into a job.

    Args:
        db: Database session
        job: Job to update
        fields: Column name -> new value, only for fields the caller provided

    Returns:
        Updated Job instance
    """
    for name, value in fields.items():
        setattr(job, name, value)

    db.commit()
    db.refresh(job)

    return job


def delete(db: Session, job: Job) -> None:
    """
    Delete a job and, through the relationship cascade, all of its
    applications, in a single commit.

    Args:
        db: Database session
        job: Job to delete
    """
    db.delete(job)
    db.commit()
