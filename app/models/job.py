import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, Boolean, DateTime, Enum, ForeignKey, JSON, Uuid, func
from sqlalchemy.orm import relationship
from app.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobType(str, enum.Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    INTERNSHIP = "INTERNSHIP"
    REMOTE = "REMOTE"


class Job(Base):
    """
    Job posting owned by an employer.

    Deleting a job deletes its applications: the ORM cascade removes them in
    the same flush, and the foreign key carries ON DELETE CASCADE for
    deletes issued outside the ORM.
    """
    __tablename__ = "jobs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=True)
    responsibilities = Column(Text, nullable=True)
    location = Column(String, nullable=False)
    salary = Column(String, nullable=True)  # Free text, e.g. "$120k - $150k"
    job_type = Column(Enum(JobType), nullable=False, index=True)
    experience_level = Column(String, nullable=False)
    industry = Column(String, nullable=False)
    skills = Column(JSON, nullable=False, default=list)  # Ordered list of strings

    is_featured = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    # Python-side default keeps sub-second precision for ordering
    posted_date = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    closing_date = Column(DateTime(timezone=True), nullable=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    employer_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    employer = relationship("User", back_populates="jobs")
    applications = relationship(
        "Application",
        back_populates="job",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', job_type={self.job_type.value})>"
