"""
Analytics endpoints for the job tracker.

Read-only aggregate views over the authenticated user's applications.
Query parameters are validated by FastAPI before any database access.
"""
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.db.models.user import User
from app.core.auth_dependency import get_current_user
from app.services.job_store import JobStore
from app.services import analytics_service
from app.schemas.analytics import (
    StatsResponse,
    TimelineResponse,
    CompaniesResponse,
    LocationsResponse,
    InterviewsResponse,
    TrendsResponse,
)
from app.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["Analytics"], responses={400: {"model": ErrorResponse}})


def _server_error(what: str, e: Exception) -> HTTPException:
    logger.error(f"Failed to compute {what}: {e}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to compute {what}"
    )


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=StatsResponse)
def get_stats(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Application count per status plus total."""
    try:
        counts = analytics_service.status_counts(JobStore(db, user.id).status_counts())
        logger.debug(f"Stats computed: user_id={user.id}, total={counts.total}")
        return StatsResponse.build(counts)
    except Exception as e:
        raise _server_error("stats", e)


@router.get("/timeline", status_code=status.HTTP_200_OK, response_model=TimelineResponse)
def get_timeline(
    months: int = Query(
        analytics_service.DEFAULT_TIMELINE_MONTHS, ge=1, le=24,
        description="Months to look back (1-24)"
    ),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Monthly application counts with per-status breakdown."""
    try:
        now = datetime.utcnow()
        start = analytics_service.subtract_months(now, months)
        points = JobStore(db, user.id).applications_between(start, now)
        return TimelineResponse.build(analytics_service.application_timeline(points, months, now))
    except Exception as e:
        raise _server_error("timeline", e)


@router.get("/companies", status_code=status.HTTP_200_OK, response_model=CompaniesResponse)
def get_companies(
    limit: int = Query(
        analytics_service.DEFAULT_COMPANY_LIMIT, ge=1, le=50,
        description="Number of companies to return (1-50)"
    ),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Companies with the most applications and their success rates."""
    try:
        groups = JobStore(db, user.id).group_by("company")
        insights = analytics_service.company_insights(groups, datetime.utcnow(), limit)
        return CompaniesResponse.build(insights)
    except Exception as e:
        raise _server_error("company insights", e)


@router.get("/locations", status_code=status.HTTP_200_OK, response_model=LocationsResponse)
def get_locations(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Success rate per location, ignoring applications without one."""
    try:
        groups = JobStore(db, user.id).group_by("location")
        return LocationsResponse.build(analytics_service.location_insights(groups))
    except Exception as e:
        raise _server_error("location insights", e)


@router.get("/interviews", status_code=status.HTTP_200_OK, response_model=InterviewsResponse)
def get_interviews(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Interview outcomes grouped by interview type."""
    try:
        rows = JobStore(db, user.id).interview_outcome_counts()
        return InterviewsResponse.build(analytics_service.interview_performance(rows))
    except Exception as e:
        raise _server_error("interview performance", e)


@router.get("/trends", status_code=status.HTTP_200_OK, response_model=TrendsResponse)
def get_trends(
    period: str = Query(
        "month", pattern="^(week|month|quarter|year)$",
        description="Bucket size and lookback: week, month, quarter or year"
    ),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Application funnel conversion rates per calendar bucket."""
    try:
        now = datetime.utcnow()
        start = analytics_service.trend_window_start(period, now)
        points = JobStore(db, user.id).applications_between(start, now)
        return TrendsResponse.build(period, analytics_service.application_trends(points, period, now))
    except Exception as e:
        raise _server_error("trends", e)
