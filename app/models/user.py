"""
User model for authentication and profiles.

A User is either a CANDIDATE (applies to jobs), an EMPLOYER (posts jobs)
or an ADMIN. Candidate-only and employer-only profile fields live on the
same row and are simply left empty for the other role.
"""

import enum
import uuid
from sqlalchemy import Column, String, Text, DateTime, Enum, Uuid, func
from sqlalchemy.orm import relationship
from app.core.database import Base


class UserRole(str, enum.Enum):
    CANDIDATE = "CANDIDATE"
    EMPLOYER = "EMPLOYER"
    ADMIN = "ADMIN"


class User(Base):
    """
    User account.

    Emails are stored lower-cased so the unique index is effectively
    case-insensitive. The hashed password is never serialized.
    """
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)

    # Authentication credentials
    email = Column(String, unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.CANDIDATE, index=True)

    # Shared profile
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    phone_number = Column(String, nullable=True)
    location = Column(String, nullable=True)
    bio = Column(Text, nullable=True)

    # Candidate profile
    resume_url = Column(String, nullable=True)

    # Employer profile
    company_name = Column(String, nullable=True)
    company_logo = Column(String, nullable=True)
    website = Column(String, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    jobs = relationship("Job", back_populates="employer", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="candidate", cascade="all, delete-orphan")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def display_name(self) -> str:
        """Company name for employers, personal name otherwise."""
        if self.role == UserRole.EMPLOYER and self.company_name:
            return self.company_name
        return self.full_name

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role={self.role.value})>"
