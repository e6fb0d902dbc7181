"""
Pydantic schemas for job applications.
"""

from pydantic import Field, UUID4
from typing import Optional
from datetime import datetime

from app.models.application import ApplicationStatus
from app.models.job import JobType
from app.schemas.job import EmployerSummary
from app.schemas.user import CamelModel


class ApplicationCreateRequest(CamelModel):
    """Schema for applying to a job"""
    job_id: UUID4
    cover_letter: Optional[str] = None
    resume_url: str = Field(..., min_length=1)


class ApplicationStatusUpdateRequest(CamelModel):
    """
    Status change requested by the employer.

    Kept as a plain string so an unknown value is reported by the
    application service as "Invalid status".
    """
    status: str


class CandidateSummary(CamelModel):
    """Candidate profile shown to the employer reviewing applications"""
    id: UUID4
    first_name: str
    last_name: str
    email: str
    phone_number: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    resume_url: Optional[str] = None


class ApplicationJobSummary(CamelModel):
    """Job fields shown alongside an application"""
    id: UUID4
    title: str
    location: str
    salary: Optional[str] = None
    job_type: JobType
    experience_level: str
    industry: str
    is_active: bool
    posted_date: datetime
    closing_date: Optional[datetime] = None
    employer: Optional[EmployerSummary] = None


class ApplicationResponse(CamelModel):
    """Schema for application response"""
    id: UUID4
    cover_letter: Optional[str] = None
    resume_url: str
    status: ApplicationStatus
    applied_date: datetime
    candidate_id: UUID4
    job_id: UUID4
    job: Optional[ApplicationJobSummary] = None
    candidate: Optional[CandidateSummary] = None
