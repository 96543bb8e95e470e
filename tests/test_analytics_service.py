"""
Unit tests for the analytics aggregation functions.
"""
import pytest
from datetime import datetime, timedelta

from app.services.analytics_service import (
    round_rate,
    safe_rate,
    status_counts,
    company_insights,
    location_insights,
    interview_performance,
    application_trends,
    application_timeline,
    subtract_months,
    trend_bucket_key,
    trend_window_start,
)
from app.services.job_store import ApplicationPoint, GroupRow


NOW = datetime(2026, 10, 19, 12, 0)


def point(year, month, day, status):
    return ApplicationPoint(application_date=datetime(year, month, day, 9, 0), status=status)


def test_round_rate_rounds_half_away_from_zero():
    assert round_rate(2 / 3 * 100) == 66.67
    assert round_rate(0.125) == 0.13
    assert round_rate(-0.125) == -0.13
    assert round_rate(50) == 50.0


def test_safe_rate_guards_zero_denominator():
    assert safe_rate(0, 0) == 0.0
    assert safe_rate(5, 0) == 0.0
    assert safe_rate(1, 2) == 50.0
    assert safe_rate(1, 3) == 33.33


def test_status_counts_fills_every_status():
    counts = status_counts({"applied": 1, "interviewing": 1, "offered": 1})

    assert counts.total == 3
    assert counts.counts == {
        "applied": 1,
        "interviewing": 1,
        "offered": 1,
        "rejected": 0,
        "withdrawn": 0,
    }
    assert sum(counts.counts.values()) == counts.total


def test_status_counts_empty():
    counts = status_counts({})
    assert counts.total == 0
    assert all(v == 0 for v in counts.counts.values())
    assert len(counts.counts) == 5


def test_company_insights_success_rate_and_average_age():
    groups = [
        GroupRow(
            key="Acme",
            count=2,
            statuses=["offered", "rejected"],
            application_dates=[NOW - timedelta(days=10), NOW - timedelta(days=20)],
        ),
        GroupRow(
            key="Beta",
            count=3,
            statuses=["applied", "applied", "interviewing"],
            application_dates=[NOW - timedelta(days=1)] * 3,
        ),
    ]

    insights = company_insights(groups, NOW, limit=10)

    assert [i.key for i in insights] == ["Beta", "Acme"]
    acme = insights[1]
    assert acme.total_applications == 2
    assert acme.success_rate == 50.0
    assert acme.avg_days_since_application == 15.0
    assert acme.status_breakdown == {"offered": 1, "rejected": 1}
    assert insights[0].success_rate == 33.33


def test_company_insights_respects_limit_and_ties():
    groups = [
        GroupRow(key="Zeta", count=1, statuses=["applied"], application_dates=[NOW]),
        GroupRow(key="Alpha", count=1, statuses=["applied"], application_dates=[NOW]),
        GroupRow(key="Mid", count=2, statuses=["applied", "applied"], application_dates=[NOW, NOW]),
    ]

    insights = company_insights(groups, NOW, limit=2)

    assert [i.key for i in insights] == ["Mid", "Alpha"]


def test_location_insights_skips_missing_locations():
    groups = [
        GroupRow(key=None, count=4, statuses=["applied"] * 4),
        GroupRow(key="", count=2, statuses=["applied"] * 2),
        GroupRow(key="Berlin", count=1, statuses=["interviewing"]),
        GroupRow(key="Remote", count=2, statuses=["rejected", "offered"]),
    ]

    insights = location_insights(groups)

    assert [i.key for i in insights] == ["Remote", "Berlin"]
    assert insights[0].success_rate == 50.0
    assert insights[1].success_rate == 100.0
    assert insights[0].avg_days_since_application is None


def test_interview_performance_counts_each_entry():
    rows = [
        ("phone", "passed", 2),
        ("phone", "pending", 1),
        ("video", "failed", 1),
    ]

    performance = interview_performance(rows)

    phone = performance["phone"]
    assert (phone.total, phone.passed, phone.failed, phone.pending) == (3, 2, 0, 1)
    assert phone.success_rate == 66.67
    assert performance["video"].success_rate == 0.0
    assert sum(s.total for s in performance.values()) == 4


def test_interview_performance_empty():
    assert interview_performance([]) == {}


def test_trends_month_conversion_rates():
    points = [
        point(2026, 8, 1, "offered"),  # outside the one-month window
        point(2026, 9, 25, "applied"),
        point(2026, 10, 2, "interviewing"),
        point(2026, 10, 10, "offered"),
        point(2026, 10, 11, "interviewing"),
    ]

    trends = application_trends(points, "month", NOW)

    assert [t.period for t in trends] == ["2026-09", "2026-10"]
    september, october = trends
    assert september.total_applications == 1
    assert september.interview_to_offer_rate == 0.0
    assert october.total_applications == 3
    assert (october.applied, october.interviewing, october.offered) == (0, 2, 1)
    assert october.application_to_interview_rate == 66.67
    assert october.interview_to_offer_rate == 50.0
    assert october.overall_success_rate == 33.33


def test_trends_empty_input():
    assert application_trends([], "year", NOW) == []


def test_trend_window_start():
    assert trend_window_start("week", NOW) == NOW - timedelta(days=7)
    assert trend_window_start("month", NOW) == datetime(2026, 9, 19, 12, 0)
    assert trend_window_start("quarter", NOW) == datetime(2026, 7, 19, 12, 0)
    assert trend_window_start("year", NOW) == datetime(2025, 10, 19, 12, 0)
    with pytest.raises(ValueError):
        trend_window_start("decade", NOW)


def test_trend_bucket_keys_use_iso_weeks():
    assert trend_bucket_key(datetime(2021, 1, 3), "week") == "2020-W53"
    assert trend_bucket_key(datetime(2021, 1, 4), "week") == "2021-W01"
    assert trend_bucket_key(datetime(2026, 5, 15), "month") == "2026-05"
    assert trend_bucket_key(datetime(2026, 5, 15), "quarter") == "2026-Q2"
    assert trend_bucket_key(datetime(2026, 12, 31), "quarter") == "2026-Q4"
    assert trend_bucket_key(datetime(2026, 5, 15), "year") == "2026"


def test_timeline_groups_by_calendar_month():
    points = [
        point(2026, 7, 1, "applied"),  # before the three-month window
        point(2026, 7, 20, "applied"),
        point(2026, 8, 5, "rejected"),
        point(2026, 8, 6, "applied"),
        point(2026, 10, 1, "offered"),
    ]

    timeline = application_timeline(points, 3, NOW)

    assert [t.period for t in timeline] == ["2026-07", "2026-08", "2026-10"]
    assert [t.total for t in timeline] == [1, 2, 1]
    assert timeline[1].statuses == {"applied": 1, "rejected": 1}
    assert timeline[2].statuses == {"offered": 1}


def test_timeline_periods_strictly_ascending_across_years():
    points = [
        point(2026, 1, 3, "applied"),
        point(2025, 12, 30, "applied"),
        point(2025, 11, 2, "withdrawn"),
    ]

    timeline = application_timeline(points, 24, NOW)
    periods = [t.period for t in timeline]

    assert periods == ["2025-11", "2025-12", "2026-01"]
    assert periods == sorted(set(periods))


def test_subtract_months_clamps_day():
    assert subtract_months(datetime(2026, 3, 31), 1) == datetime(2026, 2, 28)
    assert subtract_months(datetime(2024, 3, 31), 1) == datetime(2024, 2, 29)
    assert subtract_months(datetime(2026, 1, 15), 3) == datetime(2025, 10, 15)
    assert subtract_months(datetime(2026, 10, 19), 24) == datetime(2024, 10, 19)
