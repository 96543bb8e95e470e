"""
Pydantic schemas for job application endpoints.
"""
from typing import Optional, List
from datetime import datetime, timezone
from pydantic import EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from app.db.models.job_application import JobApplication, Interview
from app.schemas.common import CamelModel

STATUS_PATTERN = "^(applied|interviewing|offered|rejected|withdrawn)$"
PRIORITY_PATTERN = "^(low|medium|high)$"
INTERVIEW_TYPE_PATTERN = "^(phone|video|onsite|technical|behavioral)$"
OUTCOME_PATTERN = "^(passed|failed|pending)$"
URL_PATTERN = r"^https?://.+"


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Store every timestamp as naive UTC."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class JobInput(CamelModel):
    """Fields shared by create and update payloads."""

    @field_validator("application_date", "follow_up_date", check_fields=False)
    @classmethod
    def normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)

    @field_validator("tags", check_fields=False)
    @classmethod
    def validate_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        cleaned = []
        for tag in v:
            tag = tag.strip()
            if len(tag) > 30:
                raise ValueError("Tag cannot exceed 30 characters")
            if tag and tag not in cleaned:
                cleaned.append(tag)
        return cleaned

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True


class AttachmentSchema(CamelModel):
    filename: Optional[str] = None
    original_name: Optional[str] = None
    mimetype: Optional[str] = None
    size: Optional[int] = Field(None, ge=0)
    url: Optional[str] = None
    uploaded_at: datetime = Field(default_factory=datetime.utcnow)


class JobCreate(JobInput):
    """Schema for creating a new job application."""
    title: str = Field(..., min_length=1, max_length=100, description="Job title")
    company: str = Field(..., min_length=1, max_length=100, description="Company name")
    location: Optional[str] = Field(None, max_length=100)
    status: str = Field("applied", pattern=STATUS_PATTERN)
    salary: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=1000)
    requirements: Optional[str] = Field(None, max_length=1000)
    application_date: datetime = Field(..., description="Date applied (ISO-8601)")
    job_url: Optional[str] = Field(None, pattern=URL_PATTERN)
    contact_person: Optional[str] = Field(None, max_length=100)
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(None, max_length=20)
    notes: Optional[str] = Field(None, max_length=1000)
    tags: List[str] = Field(default_factory=list)
    priority: str = Field("medium", pattern=PRIORITY_PATTERN)
    follow_up_date: Optional[datetime] = None
    attachments: List[AttachmentSchema] = Field(default_factory=list)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True
        json_schema_extra = {
            "example": {
                "title": "Backend Engineer",
                "company": "Acme",
                "location": "Berlin",
                "status": "applied",
                "applicationDate": "2026-01-15T10:00:00Z",
                "jobUrl": "https://acme.example/jobs/42",
                "tags": ["python", "remote"],
                "priority": "high"
            }
        }


class JobUpdate(JobInput):
    """Schema for updating an existing job; only provided fields change."""
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    company: Optional[str] = Field(None, min_length=1, max_length=100)
    location: Optional[str] = Field(None, max_length=100)
    status: Optional[str] = Field(None, pattern=STATUS_PATTERN)
    salary: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=1000)
    requirements: Optional[str] = Field(None, max_length=1000)
    application_date: Optional[datetime] = None
    job_url: Optional[str] = Field(None, pattern=URL_PATTERN)
    contact_person: Optional[str] = Field(None, max_length=100)
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(None, max_length=20)
    notes: Optional[str] = Field(None, max_length=1000)
    tags: Optional[List[str]] = None
    priority: Optional[str] = Field(None, pattern=PRIORITY_PATTERN)
    follow_up_date: Optional[datetime] = None
    attachments: Optional[List[AttachmentSchema]] = None


class StatusUpdate(CamelModel):
    status: str = Field(..., pattern=STATUS_PATTERN, description="New application status")


class InterviewCreate(CamelModel):
    date: datetime = Field(..., description="Interview date (ISO-8601)")
    type: str = Field(..., pattern=INTERVIEW_TYPE_PATTERN)
    notes: Optional[str] = Field(None, max_length=500)
    outcome: str = Field("pending", pattern=OUTCOME_PATTERN)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class InterviewOut(CamelModel):
    id: int
    date: datetime
    type: str
    notes: Optional[str] = None
    outcome: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class JobOut(CamelModel):
    id: int
    user: int = Field(..., description="Owner user ID")
    title: str
    company: str
    location: Optional[str] = None
    status: str
    salary: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    application_date: datetime
    job_url: Optional[str] = None
    contact_person: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    notes: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    priority: str
    follow_up_date: Optional[datetime] = None
    interview_dates: List[InterviewOut] = Field(default_factory=list)
    attachments: List[AttachmentSchema] = Field(default_factory=list)
    days_since_application: Optional[int] = None
    next_interview: Optional[InterviewOut] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_job(cls, job: JobApplication) -> "JobOut":
        next_interview: Optional[Interview] = job.next_interview
        return cls(
            id=job.id,
            user=job.user_id,
            title=job.title,
            company=job.company,
            location=job.location,
            status=job.status,
            salary=job.salary,
            description=job.description,
            requirements=job.requirements,
            application_date=job.application_date,
            job_url=job.job_url,
            contact_person=job.contact_person,
            contact_email=job.contact_email,
            contact_phone=job.contact_phone,
            notes=job.notes,
            tags=job.tags or [],
            priority=job.priority,
            follow_up_date=job.follow_up_date,
            interview_dates=[InterviewOut.model_validate(i) for i in job.interviews],
            attachments=[AttachmentSchema.model_validate(a) for a in job.attachments or []],
            days_since_application=job.days_since_application,
            next_interview=InterviewOut.model_validate(next_interview) if next_interview else None,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )


class JobData(CamelModel):
    job: JobOut


class JobResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    data: JobData

    @classmethod
    def build(cls, job: JobApplication, message: Optional[str] = None) -> "JobResponse":
        return cls(message=message, data=JobData(job=JobOut.from_job(job)))


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class JobListData(CamelModel):
    jobs: List[JobOut] = Field(default_factory=list)
    pagination: Pagination


class JobListResponse(CamelModel):
    success: bool = True
    data: JobListData
