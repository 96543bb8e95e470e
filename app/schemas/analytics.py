"""
Pydantic schemas for analytics endpoints.

Field names are snake_case in Python and camelCase on the wire. The
``build`` classmethods convert aggregator results into the response envelope so
every numeric field is present even when the user has no records.
"""
from typing import Dict, List
from pydantic import Field
from pydantic.alias_generators import to_camel

from app.schemas.common import CamelModel
from app.services.analytics_service import (
    GroupInsight,
    InterviewStats,
    StatusCounts,
    TimelinePoint,
    TrendBucket,
)


class StatsOut(CamelModel):
    total: int = Field(0, description="Total applications")
    applied: int = 0
    interviewing: int = 0
    offered: int = 0
    rejected: int = 0
    withdrawn: int = 0

    @classmethod
    def from_counts(cls, counts: StatusCounts) -> "StatsOut":
        return cls(total=counts.total, **counts.counts)


class StatsData(CamelModel):
    stats: StatsOut


class StatsResponse(CamelModel):
    success: bool = True
    data: StatsData

    @classmethod
    def build(cls, counts: StatusCounts) -> "StatsResponse":
        return cls(data=StatsData(stats=StatsOut.from_counts(counts)))

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "success": True,
                "data": {
                    "stats": {
                        "total": 3,
                        "applied": 1,
                        "interviewing": 1,
                        "offered": 1,
                        "rejected": 0,
                        "withdrawn": 0
                    }
                }
            }
        }


class TimelineEntry(CamelModel):
    period: str = Field(..., description="Calendar month in YYYY-MM format")
    total: int = 0
    statuses: Dict[str, int] = Field(default_factory=dict)


class TimelineData(CamelModel):
    timeline: List[TimelineEntry] = Field(default_factory=list)


class TimelineResponse(CamelModel):
    success: bool = True
    data: TimelineData

    @classmethod
    def build(cls, points: List[TimelinePoint]) -> "TimelineResponse":
        return cls(data=TimelineData(timeline=[
            TimelineEntry(period=p.period, total=p.total, statuses=p.statuses) for p in points
        ]))


class CompanyInsightOut(CamelModel):
    company: str
    total_applications: int = 0
    success_rate: float = 0.0
    avg_days_since_application: float = 0.0
    status_breakdown: Dict[str, int] = Field(default_factory=dict)


class CompaniesData(CamelModel):
    companies: List[CompanyInsightOut] = Field(default_factory=list)


class CompaniesResponse(CamelModel):
    success: bool = True
    data: CompaniesData

    @classmethod
    def build(cls, insights: List[GroupInsight]) -> "CompaniesResponse":
        return cls(data=CompaniesData(companies=[
            CompanyInsightOut(
                company=i.key,
                total_applications=i.total_applications,
                success_rate=i.success_rate,
                avg_days_since_application=i.avg_days_since_application or 0.0,
                status_breakdown=i.status_breakdown,
            )
            for i in insights
        ]))


class LocationInsightOut(CamelModel):
    location: str
    total_applications: int = 0
    success_rate: float = 0.0
    status_breakdown: Dict[str, int] = Field(default_factory=dict)


class LocationsData(CamelModel):
    locations: List[LocationInsightOut] = Field(default_factory=list)


class LocationsResponse(CamelModel):
    success: bool = True
    data: LocationsData

    @classmethod
    def build(cls, insights: List[GroupInsight]) -> "LocationsResponse":
        return cls(data=LocationsData(locations=[
            LocationInsightOut(
                location=i.key,
                total_applications=i.total_applications,
                success_rate=i.success_rate,
                status_breakdown=i.status_breakdown,
            )
            for i in insights
        ]))


class InterviewStatsOut(CamelModel):
    total: int = 0
    passed: int = 0
    failed: int = 0
    pending: int = 0
    success_rate: float = 0.0


class InterviewsData(CamelModel):
    interview_performance: Dict[str, InterviewStatsOut] = Field(default_factory=dict)


class InterviewsResponse(CamelModel):
    success: bool = True
    data: InterviewsData

    @classmethod
    def build(cls, performance: Dict[str, InterviewStats]) -> "InterviewsResponse":
        return cls(data=InterviewsData(interview_performance={
            interview_type: InterviewStatsOut(
                total=s.total,
                passed=s.passed,
                failed=s.failed,
                pending=s.pending,
                success_rate=s.success_rate,
            )
            for interview_type, s in performance.items()
        }))


class TrendOut(CamelModel):
    period: str = Field(..., description="Bucket key: YYYY-Www, YYYY-MM, YYYY-Qn or YYYY")
    total_applications: int = 0
    applied: int = 0
    interviewing: int = 0
    offered: int = 0
    application_to_interview_rate: float = 0.0
    interview_to_offer_rate: float = 0.0
    overall_success_rate: float = 0.0


class TrendsData(CamelModel):
    period: str
    trends: List[TrendOut] = Field(default_factory=list)


class TrendsResponse(CamelModel):
    success: bool = True
    data: TrendsData

    @classmethod
    def build(cls, period: str, buckets: List[TrendBucket]) -> "TrendsResponse":
        return cls(data=TrendsData(period=period, trends=[
            TrendOut(
                period=b.period,
                total_applications=b.total_applications,
                applied=b.applied,
                interviewing=b.interviewing,
                offered=b.offered,
                application_to_interview_rate=b.application_to_interview_rate,
                interview_to_offer_rate=b.interview_to_offer_rate,
                overall_success_rate=b.overall_success_rate,
            )
            for b in buckets
        ]))

