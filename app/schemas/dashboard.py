"""
Pydantic schemas for the user dashboard.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import Field

from app.db.models.job_application import JobApplication
from app.schemas.auth import UserOut
from app.schemas.common import CamelModel
from app.schemas.job import InterviewOut


class JobSummary(CamelModel):
    id: int
    title: str
    company: str
    status: str
    updated_at: datetime
    follow_up_date: Optional[datetime] = None
    next_interview: Optional[InterviewOut] = None

    @classmethod
    def from_job(cls, job: JobApplication) -> "JobSummary":
        upcoming = job.next_interview
        return cls(
            id=job.id,
            title=job.title,
            company=job.company,
            status=job.status,
            updated_at=job.updated_at,
            follow_up_date=job.follow_up_date,
            next_interview=InterviewOut.model_validate(upcoming) if upcoming else None,
        )


class DashboardData(CamelModel):
    user: UserOut
    recent_jobs: List[JobSummary] = Field(default_factory=list)
    upcoming_interviews: List[JobSummary] = Field(default_factory=list)
    follow_up_reminders: List[JobSummary] = Field(default_factory=list)


class DashboardResponse(CamelModel):
    success: bool = True
    data: DashboardData
