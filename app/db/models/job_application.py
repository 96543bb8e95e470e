"""
Job application tracking models.

A JobApplication belongs to exactly one user; its interviews live in a child
table ordered by insertion.
"""
import enum
import math
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship

from app.core.config import FOLLOW_UP_DAYS
from app.db.base import Base


class JobStatus(str, enum.Enum):
    """Lifecycle stages of an application."""
    APPLIED = "applied"
    INTERVIEWING = "interviewing"
    OFFERED = "offered"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class Priority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class InterviewType(str, enum.Enum):
    PHONE = "phone"
    VIDEO = "video"
    ONSITE = "onsite"
    TECHNICAL = "technical"
    BEHAVIORAL = "behavioral"


class InterviewOutcome(str, enum.Enum):
    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"


JOB_STATUSES = [s.value for s in JobStatus]


class JobApplication(Base):
    __tablename__ = "job_applications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Posting details
    title = Column(String(100), nullable=False)
    company = Column(String(100), nullable=False, index=True)
    location = Column(String(100), nullable=True)
    status = Column(String, nullable=False, default=JobStatus.APPLIED.value)
    salary = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    requirements = Column(Text, nullable=True)
    application_date = Column(DateTime, nullable=False)
    job_url = Column(String, nullable=True)

    # Contact
    contact_person = Column(String(100), nullable=True)
    contact_email = Column(String, nullable=True)
    contact_phone = Column(String(20), nullable=True)

    notes = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    priority = Column(String, nullable=False, default=Priority.MEDIUM.value)
    follow_up_date = Column(DateTime, nullable=True)
    attachments = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", backref="job_applications")
    interviews = relationship(
        "Interview",
        back_populates="job",
        cascade="all, delete-orphan",
        order_by="Interview.id",
    )

    __table_args__ = (
        Index("idx_jobapp_user_status", "user_id", "status"),
        Index("idx_jobapp_user_appdate", "user_id", "application_date"),
        Index("idx_jobapp_user_company", "user_id", "company"),
    )

    @property
    def days_since_application(self) -> Optional[int]:
        if self.application_date is None:
            return None
        elapsed = abs((datetime.utcnow() - self.application_date).total_seconds())
        return math.ceil(elapsed / 86400)

    @property
    def next_interview(self) -> Optional["Interview"]:
        now = datetime.utcnow()
        upcoming = [i for i in self.interviews if i.date > now]
        return min(upcoming, key=lambda i: i.date) if upcoming else None

    def ensure_follow_up(self, now: Optional[datetime] = None) -> None:
        """Schedule a follow-up for interviewing applications that have none."""
        if self.status == JobStatus.INTERVIEWING.value and self.follow_up_date is None:
            self.follow_up_date = (now or datetime.utcnow()) + timedelta(days=FOLLOW_UP_DAYS)

    def update_status(self, new_status: str, now: Optional[datetime] = None) -> None:
        self.status = new_status
        self.updated_at = now or datetime.utcnow()
        self.ensure_follow_up(now)

    def add_interview(self, interview: "Interview") -> None:
        self.interviews.append(interview)
        if self.status == JobStatus.APPLIED.value:
            self.status = JobStatus.INTERVIEWING.value
        self.ensure_follow_up()

    def __repr__(self):
        return f"<JobApplication(id={self.id}, company='{self.company}', title='{self.title}', status='{self.status}')>"


class Interview(Base):
    __tablename__ = "job_interviews"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("job_applications.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(DateTime, nullable=False)
    type = Column(String, nullable=False)  # InterviewType value
    notes = Column(Text, nullable=True)
    outcome = Column(String, nullable=False, default=InterviewOutcome.PENDING.value)

    job = relationship("JobApplication", back_populates="interviews")

    __table_args__ = (
        Index("idx_interview_type_outcome", "type", "outcome"),
    )

    def __repr__(self):
        return f"<Interview(id={self.id}, job_id={self.job_id}, type='{self.type}', outcome='{self.outcome}')>"
