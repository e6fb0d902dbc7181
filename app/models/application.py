"""
Application database model.

An Application links a candidate to a job. A candidate may apply to a given
job at most once; the unique constraint on (candidate_id, job_id) enforces
this atomically at the storage layer, so concurrent inserts for the same
pair cannot both succeed.
"""

import enum
import uuid
from sqlalchemy import (
    Column, String, Text, DateTime, Enum, ForeignKey, UniqueConstraint, Uuid,
    func, select,
)
from sqlalchemy.orm import relationship, column_property
from app.core.database import Base
from app.models.job import Job, utcnow


class ApplicationStatus(str, enum.Enum):
    """
    Review status of an application.

    Flat enum: an authorized employer may move an application from any
    status to any other status.
    """
    PENDING = "PENDING"
    REVIEWED = "REVIEWED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("candidate_id", "job_id", name="uq_applications_candidate_job"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    cover_letter = Column(Text, nullable=True)
    resume_url = Column(String, nullable=False)

    status = Column(
        Enum(ApplicationStatus),
        default=ApplicationStatus.PENDING,
        nullable=False,
        index=True
    )

    applied_date = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    candidate_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = Column(Uuid, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    candidate = relationship("User", back_populates="applications")
    job = relationship("Job", back_populates="applications")

    def __repr__(self):
        return f"<Application(id={self.id}, job_id={self.job_id}, status={self.status.value})>"


# Live application count, loaded with every Job row
Job.application_count = column_property(
    select(func.count(Application.id))
    .where(Application.job_id == Job.id)
    .correlate_except(Application)
    .scalar_subquery()
)
