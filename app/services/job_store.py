"""
Owner-scoped data access for job applications.

Every query issued through a JobStore is filtered by the owning user's id,
so no caller can observe another user's records.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.errors import AuthorizationError, NotFoundError
from app.db.models.job_application import JobApplication, Interview
from app.services.job_query import JobFilter, SortSpec

logger = logging.getLogger(__name__)

GROUPABLE_FIELDS = ("status", "company", "location")


@dataclass
class GroupRow:
    """One group produced by JobStore.group_by()."""
    key: Any
    count: int = 0
    statuses: List[str] = field(default_factory=list)
    application_dates: List[datetime] = field(default_factory=list)


@dataclass(frozen=True)
class ApplicationPoint:
    application_date: datetime
    status: str


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class JobStore:
    """Record store bound to a single owner."""

    def __init__(self, db: Session, owner_id: int):
        self.db = db
        self.owner_id = owner_id

    def _owned(self):
        return self.db.query(JobApplication).filter(JobApplication.user_id == self.owner_id)

    def query(
        self,
        job_filter: JobFilter,
        sort: SortSpec,
        skip: int,
        limit: int,
    ) -> Tuple[List[JobApplication], int]:
        """
        Filtered, sorted, paginated retrieval.

        Returns:
            (records on the requested page, total matching records)
        """
        if job_filter.owner_id != self.owner_id:
            raise AuthorizationError("Not authorized to query these jobs")

        query = self._owned()

        if job_filter.status:
            query = query.filter(JobApplication.status == job_filter.status)

        if job_filter.search:
            term = f"%{_escape_like(job_filter.search)}%"
            query = query.filter(
                or_(
                    JobApplication.title.ilike(term, escape="\\"),
                    JobApplication.company.ilike(term, escape="\\"),
                    JobApplication.location.ilike(term, escape="\\"),
                    JobApplication.description.ilike(term, escape="\\"),
                )
            )

        total = query.count()

        column = getattr(JobApplication, sort.column)
        order = column.desc() if sort.descending else column.asc()
        # id as tie-breaker keeps pages stable
        tiebreak = JobApplication.id.desc() if sort.descending else JobApplication.id.asc()

        records = query.order_by(order, tiebreak).offset(skip).limit(limit).all()
        logger.debug(f"Jobs queried: user_id={self.owner_id}, total={total}, skip={skip}, limit={limit}")
        return records, total

    def get(self, job_id: int) -> JobApplication:
        """
        Fetch a single job owned by this store's user.

        Raises:
            NotFoundError: job does not exist
            AuthorizationError: job belongs to another user
        """
        job = self.db.query(JobApplication).filter(JobApplication.id == job_id).first()
        if job is None:
            raise NotFoundError("Job not found")
        if job.user_id != self.owner_id:
            raise AuthorizationError("Not authorized to access this job")
        return job

    def count(self) -> int:
        return self._owned().count()

    def group_by(self, field_name: str, match: Optional[Dict[str, Any]] = None) -> List[GroupRow]:
        """
        Group the owner's records by a column.

        Args:
            field_name: one of GROUPABLE_FIELDS
            match: optional extra equality filters {column: value}

        Returns:
            GroupRow per distinct key, in order of first appearance
        """
        if field_name not in GROUPABLE_FIELDS:
            raise ValueError(f"Cannot group by {field_name!r}")

        column = getattr(JobApplication, field_name)
        query = self.db.query(
            column,
            JobApplication.status,
            JobApplication.application_date,
        ).filter(JobApplication.user_id == self.owner_id)

        for name, value in (match or {}).items():
            query = query.filter(getattr(JobApplication, name) == value)

        groups: Dict[Any, GroupRow] = {}
        for key, status, application_date in query.order_by(JobApplication.id).all():
            row = groups.setdefault(key, GroupRow(key=key))
            row.count += 1
            row.statuses.append(status)
            row.application_dates.append(application_date)

        return list(groups.values())

    def status_counts(self) -> Dict[str, int]:
        rows = self.db.query(
            JobApplication.status,
            func.count(JobApplication.id),
        ).filter(
            JobApplication.user_id == self.owner_id
        ).group_by(JobApplication.status).all()
        return {status: int(count) for status, count in rows}

    def applications_between(self, start: datetime, end: datetime) -> List[ApplicationPoint]:
        """Application date and status of each record applied within [start, end]."""
        rows = self.db.query(
            JobApplication.application_date,
            JobApplication.status,
        ).filter(
            JobApplication.user_id == self.owner_id,
            JobApplication.application_date >= start,
            JobApplication.application_date <= end,
        ).order_by(JobApplication.application_date).all()
        return [ApplicationPoint(application_date=d, status=s) for d, s in rows]

    def interview_outcome_counts(self) -> List[Tuple[str, str, int]]:
        """(type, outcome, count) over every interview entry of the owner's jobs."""
        rows = self.db.query(
            Interview.type,
            Interview.outcome,
            func.count(Interview.id),
        ).join(
            JobApplication, Interview.job_id == JobApplication.id
        ).filter(
            JobApplication.user_id == self.owner_id
        ).group_by(
            Interview.type, Interview.outcome
        ).order_by(
            Interview.type, Interview.outcome
        ).all()
        return [(t, o, int(c)) for t, o, c in rows]

    def recent(self, limit: int = 5) -> List[JobApplication]:
        return self._owned().order_by(JobApplication.updated_at.desc(), JobApplication.id.desc()).limit(limit).all()

    def upcoming_interviews(self, now: datetime, limit: int = 5) -> List[JobApplication]:
        """Interviewing jobs with an interview after now, soonest first."""
        soonest = func.min(Interview.date).label("soonest")
        rows = self.db.query(JobApplication, soonest).join(
            Interview, Interview.job_id == JobApplication.id
        ).filter(
            JobApplication.user_id == self.owner_id,
            JobApplication.status == "interviewing",
            Interview.date >= now,
        ).group_by(JobApplication.id).order_by(soonest).limit(limit).all()
        return [job for job, _ in rows]

    def follow_ups(self, now: datetime, limit: int = 5) -> List[JobApplication]:
        return self._owned().filter(
            JobApplication.follow_up_date >= now
        ).order_by(JobApplication.follow_up_date.asc()).limit(limit).all()
