from pydantic import BaseModel, Field, UUID4, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime

from app.models.job import JobType
from app.schemas.user import CamelModel


class EmployerSummary(CamelModel):
    """Public employer fields embedded in job responses"""
    id: UUID4
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    bio: Optional[str] = None


class JobCreateRequest(CamelModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    requirements: Optional[str] = None
    responsibilities: Optional[str] = None
    location: str = Field(..., min_length=1)
    salary: Optional[str] = None
    job_type: JobType
    experience_level: str = Field(..., min_length=1)
    industry: str = Field(..., min_length=1)
    skills: List[str] = Field(default_factory=list)
    is_featured: bool = False
    is_active: bool = True
    closing_date: Optional[datetime] = None


# Columns that are NOT NULL in the jobs table; an update may omit them but not null them
_REQUIRED_JOB_FIELDS = (
    "title", "description", "location", "job_type", "experience_level",
    "industry", "skills", "is_featured", "is_active",
)


class JobUpdateRequest(CamelModel):
    """
    Partial job update. Only fields present in the request are merged.

    employer_id and posted_date are not part of this schema, so they cannot
    be changed through an update.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    requirements: Optional[str] = None
    responsibilities: Optional[str] = None
    location: Optional[str] = Field(None, min_length=1)
    salary: Optional[str] = None
    job_type: Optional[JobType] = None
    experience_level: Optional[str] = Field(None, min_length=1)
    industry: Optional[str] = Field(None, min_length=1)
    skills: Optional[List[str]] = None
    is_featured: Optional[bool] = None
    is_active: Optional[bool] = None
    closing_date: Optional[datetime] = None

    @model_validator(mode="after")
    def required_fields_not_null(self):
        for name in _REQUIRED_JOB_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self


class JobFilters(BaseModel):
    """
    Listing predicates, one optional field per supported filter.

    Blank strings are treated as absent. `featured` only narrows the result
    when true; false or absent means featured and non-featured jobs alike.
    """
    search: Optional[str] = Field(None, max_length=200)
    job_type: Optional[JobType] = None
    location: Optional[str] = Field(None, max_length=200)
    industry: Optional[str] = Field(None, max_length=200)
    experience_level: Optional[str] = Field(None, max_length=100)
    featured: Optional[bool] = None

    @field_validator("search", "location", "industry", "experience_level", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class JobResponse(CamelModel):
    """Schema for job response"""
    id: UUID4
    title: str
    description: str
    requirements: Optional[str] = None
    responsibilities: Optional[str] = None
    location: str
    salary: Optional[str] = None
    job_type: JobType
    experience_level: str
    industry: str
    skills: List[str] = Field(default_factory=list)
    is_featured: bool
    is_active: bool
    posted_date: datetime
    closing_date: Optional[datetime] = None
    employer_id: UUID4
    employer: Optional[EmployerSummary] = None
    application_count: int = 0


class PaginationMeta(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int


class JobListResponse(CamelModel):
    """Paginated job listing"""
    jobs: List[JobResponse]
    pagination: PaginationMeta
