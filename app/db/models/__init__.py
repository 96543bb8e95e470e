"""
Database models module.

Imports every model so they are registered with SQLAlchemy's Base.metadata
before table creation or migration.
"""
from app.db.models.user import User, ExperienceLevel, Education
from app.db.models.job_application import (
    JobApplication,
    Interview,
    JobStatus,
    Priority,
    InterviewType,
    InterviewOutcome,
    JOB_STATUSES,
)

__all__ = [
    "User",
    "ExperienceLevel",
    "Education",
    "JobApplication",
    "Interview",
    "JobStatus",
    "Priority",
    "InterviewType",
    "InterviewOutcome",
    "JOB_STATUSES",
]
