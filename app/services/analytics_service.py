"""
Analytics aggregation for job applications.

Pure functions over JobStore output. Each takes ``now`` explicitly so the
result depends only on the owner's record snapshot and the request
parameters.

Rates are percentages rounded half away from zero to two decimals; every
division by zero yields 0.0.
"""
import calendar
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from app.db.models.job_application import JOB_STATUSES, JobStatus, InterviewOutcome
from app.services.job_store import ApplicationPoint, GroupRow

logger = logging.getLogger(__name__)

SUCCESS_STATUSES = (JobStatus.OFFERED.value, JobStatus.INTERVIEWING.value)
TREND_PERIODS = ("week", "month", "quarter", "year")
OUTCOMES = [o.value for o in InterviewOutcome]

DEFAULT_COMPANY_LIMIT = 10
DEFAULT_TIMELINE_MONTHS = 6

_TWO_PLACES = Decimal("0.01")


# ============================================
# Rate helpers
# ============================================

def round_rate(value: float) -> float:
    """Round to two decimals, halves away from zero."""
    return float(Decimal(str(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def safe_rate(numerator: int, denominator: int) -> float:
    """100 * numerator / denominator, rounded; 0.0 when denominator is 0."""
    if not denominator:
        return 0.0
    return round_rate(numerator / denominator * 100)


def status_breakdown(statuses: Iterable[str]) -> Dict[str, int]:
    """Count of each observed status, in lifecycle order."""
    counts = Counter(statuses)
    ordered = {s: counts[s] for s in JOB_STATUSES if counts.get(s)}
    # statuses outside the enum still show up rather than vanish
    for s, n in counts.items():
        if s not in ordered:
            ordered[s] = n
    return ordered


# ============================================
# Calendar helpers
# ============================================

def subtract_months(moment: datetime, months: int) -> datetime:
    """Step back whole calendar months, clamping the day to the target month."""
    index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def trend_window_start(period: str, now: datetime) -> datetime:
    """Start of the one-period lookback window ending at now."""
    if period == "week":
        return now - timedelta(days=7)
    if period == "month":
        return subtract_months(now, 1)
    if period == "quarter":
        return subtract_months(now, 3)
    if period == "year":
        return subtract_months(now, 12)
    raise ValueError(f"Unknown trend period: {period!r}")


def trend_bucket_key(moment: datetime, period: str) -> str:
    """
    Calendar bucket a date falls in.

    Weeks use ISO-8601 numbering (YYYY-Www, ISO year); months YYYY-MM;
    quarters YYYY-Qn; years YYYY. Keys sort chronologically as strings.
    """
    if period == "week":
        iso_year, iso_week, _ = moment.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"
    if period == "month":
        return f"{moment.year}-{moment.month:02d}"
    if period == "quarter":
        return f"{moment.year}-Q{(moment.month - 1) // 3 + 1}"
    if period == "year":
        return f"{moment.year}"
    raise ValueError(f"Unknown trend period: {period!r}")


# ============================================
# Aggregate views
# ============================================

@dataclass
class StatusCounts:
    total: int
    counts: Dict[str, int]


@dataclass
class GroupInsight:
    key: str
    total_applications: int
    success_rate: float
    status_breakdown: Dict[str, int]
    avg_days_since_application: Optional[float] = None


@dataclass
class InterviewStats:
    total: int = 0
    passed: int = 0
    failed: int = 0
    pending: int = 0
    success_rate: float = 0.0


@dataclass
class TrendBucket:
    period: str
    total_applications: int
    applied: int
    interviewing: int
    offered: int
    application_to_interview_rate: float
    interview_to_offer_rate: float
    overall_success_rate: float


@dataclass
class TimelinePoint:
    period: str
    total: int
    statuses: Dict[str, int] = field(default_factory=dict)


def status_counts(counts: Dict[str, int]) -> StatusCounts:
    """
    Per-status counts with every lifecycle status present.

    Args:
        counts: observed {status: count} from the store
    """
    full = {status: int(counts.get(status, 0)) for status in JOB_STATUSES}
    return StatusCounts(total=sum(full.values()), counts=full)


def _success_rate(statuses: Sequence[str]) -> float:
    successful = sum(1 for s in statuses if s in SUCCESS_STATUSES)
    return safe_rate(successful, len(statuses))


def _by_count(groups: Iterable[GroupRow]) -> List[GroupRow]:
    # most applications first, then alphabetical
    return sorted(groups, key=lambda g: (-g.count, str(g.key)))


def company_insights(
    groups: Sequence[GroupRow],
    now: datetime,
    limit: int = DEFAULT_COMPANY_LIMIT,
) -> List[GroupInsight]:
    """Top companies by application count with success rate and mean age."""
    insights = []
    for group in _by_count(groups)[:limit]:
        ages = [(now - d).total_seconds() / 86400 for d in group.application_dates if d is not None]
        avg_days = round_rate(sum(ages) / len(ages)) if ages else 0.0
        insights.append(GroupInsight(
            key=group.key,
            total_applications=group.count,
            success_rate=_success_rate(group.statuses),
            status_breakdown=status_breakdown(group.statuses),
            avg_days_since_application=avg_days,
        ))
    return insights


def location_insights(groups: Sequence[GroupRow]) -> List[GroupInsight]:
    """Every non-empty location by application count with success rate."""
    located = [g for g in groups if g.key is not None and str(g.key).strip()]
    return [
        GroupInsight(
            key=group.key,
            total_applications=group.count,
            success_rate=_success_rate(group.statuses),
            status_breakdown=status_breakdown(group.statuses),
        )
        for group in _by_count(located)
    ]


def interview_performance(rows: Iterable[Tuple[str, str, int]]) -> Dict[str, InterviewStats]:
    """
    Outcome breakdown per interview type.

    Args:
        rows: (type, outcome, count) where each unit is one interview entry
    """
    performance: Dict[str, InterviewStats] = {}
    for interview_type, outcome, count in rows:
        stats = performance.setdefault(interview_type, InterviewStats())
        stats.total += count
        if outcome in OUTCOMES:
            setattr(stats, outcome, getattr(stats, outcome) + count)
        else:
            logger.warning(f"Unknown interview outcome ignored in breakdown: type={interview_type}, outcome={outcome}")

    for stats in performance.values():
        stats.success_rate = safe_rate(stats.passed, stats.total)

    return dict(sorted(performance.items()))


def application_trends(
    points: Iterable[ApplicationPoint],
    period: str,
    now: datetime,
) -> List[TrendBucket]:
    """Conversion funnel per calendar bucket over the last period."""
    start = trend_window_start(period, now)
    buckets: Dict[str, List[str]] = {}
    for point in points:
        if not start <= point.application_date <= now:
            continue
        buckets.setdefault(trend_bucket_key(point.application_date, period), []).append(point.status)

    trends = []
    for key in sorted(buckets):
        statuses = buckets[key]
        total = len(statuses)
        applied = statuses.count(JobStatus.APPLIED.value)
        interviewing = statuses.count(JobStatus.INTERVIEWING.value)
        offered = statuses.count(JobStatus.OFFERED.value)
        trends.append(TrendBucket(
            period=key,
            total_applications=total,
            applied=applied,
            interviewing=interviewing,
            offered=offered,
            application_to_interview_rate=safe_rate(interviewing, total),
            interview_to_offer_rate=safe_rate(offered, interviewing),
            overall_success_rate=safe_rate(offered, total),
        ))
    return trends


def application_timeline(
    points: Iterable[ApplicationPoint],
    months: int,
    now: datetime,
) -> List[TimelinePoint]:
    """Monthly application counts and status mix over the last N months."""
    start = subtract_months(now, months)
    grouped: Dict[Tuple[int, int], List[str]] = {}
    for point in points:
        if not start <= point.application_date <= now:
            continue
        key = (point.application_date.year, point.application_date.month)
        grouped.setdefault(key, []).append(point.status)

    return [
        TimelinePoint(
            period=f"{year}-{month:02d}",
            total=len(statuses),
            statuses=status_breakdown(statuses),
        )
        for (year, month), statuses in sorted(grouped.items())
    ]
