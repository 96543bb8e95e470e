"""
Pydantic schemas for user profile extras: preferences, education, resume.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import Field, field_validator
from pydantic.alias_generators import to_camel

from app.schemas.common import CamelModel

JOB_TYPES = ("full-time", "part-time", "contract", "internship", "freelance")
REMOTE_PREFERENCE_PATTERN = "^(remote|hybrid|onsite)$"
MIN_EDUCATION_YEAR = 1900


class SalaryRange(CamelModel):
    min: Optional[float] = None
    max: Optional[float] = None
    currency: Optional[str] = Field(None, min_length=3, max_length=3, description="ISO-4217 code")


class Preferences(CamelModel):
    """Job search preferences. A PUT replaces the whole document."""
    job_types: List[str] = Field(default_factory=list)
    remote_preference: Optional[str] = Field(None, pattern=REMOTE_PREFERENCE_PATTERN)
    salary_range: Optional[SalaryRange] = None
    locations: List[str] = Field(default_factory=list)
    industries: List[str] = Field(default_factory=list)

    @field_validator("job_types")
    @classmethod
    def validate_job_types(cls, v: List[str]) -> List[str]:
        for job_type in v:
            if job_type not in JOB_TYPES:
                raise ValueError(f"Invalid job type: {job_type}")
        return v

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True
        json_schema_extra = {
            "example": {
                "jobTypes": ["full-time", "contract"],
                "remotePreference": "hybrid",
                "salaryRange": {"min": 70000, "max": 90000, "currency": "EUR"},
                "locations": ["Berlin"],
                "industries": ["fintech"]
            }
        }


def _check_year(v: Optional[int]) -> Optional[int]:
    if v is not None and not MIN_EDUCATION_YEAR <= v <= datetime.utcnow().year:
        raise ValueError("Valid year is required")
    return v


class EducationCreate(CamelModel):
    degree: str = Field(..., min_length=1, max_length=100)
    institution: str = Field(..., min_length=1, max_length=100)
    year: int
    gpa: Optional[float] = Field(None, ge=0, le=4.0)

    @field_validator("year")
    @classmethod
    def validate_year(cls, v: int) -> int:
        return _check_year(v)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True


class EducationUpdate(CamelModel):
    degree: Optional[str] = Field(None, min_length=1, max_length=100)
    institution: Optional[str] = Field(None, min_length=1, max_length=100)
    year: Optional[int] = None
    gpa: Optional[float] = Field(None, ge=0, le=4.0)

    @field_validator("year")
    @classmethod
    def validate_year(cls, v: Optional[int]) -> Optional[int]:
        return _check_year(v)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True


class EducationOut(CamelModel):
    id: int
    degree: str
    institution: str
    year: int
    gpa: Optional[float] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ResumeUpload(CamelModel):
    """Metadata of a resume already stored elsewhere."""
    filename: str = Field(..., min_length=1)
    original_name: str = Field(..., min_length=1)
    mimetype: str = Field(..., min_length=1)
    size: int = Field(..., gt=0)
    url: str = Field(..., pattern=r"^https?://.+")


class ResumeOut(CamelModel):
    filename: str
    original_name: str
    mimetype: str
    size: int
    url: str
    uploaded_at: datetime
