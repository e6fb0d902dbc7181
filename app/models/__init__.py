"""
Database models package.
"""

from app.models.user import User, UserRole
from app.models.job import Job, JobType
from app.models.application import Application, ApplicationStatus

__all__ = ["User", "UserRole", "Job", "JobType", "Application", "ApplicationStatus"]
