"""
Pydantic schemas for authentication and profile endpoints.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.core.security import MAX_PASSWORD_BYTES
from app.db.models.user import User
from app.schemas.common import CamelModel
from app.schemas.user import Preferences, EducationOut, ResumeOut

EXPERIENCE_PATTERN = "^(entry|junior|mid|senior|lead|executive)$"


def _check_password_bytes(v: str) -> str:
    """bcrypt only looks at the first 72 bytes."""
    if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError("Password must be 72 bytes or fewer")
    return v


class RegisterRequest(CamelModel):
    """Request schema for user registration."""
    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    confirm_password: str = Field(..., description="Must match password")
    phone: Optional[str] = Field(None, max_length=20)
    location: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = Field(None, max_length=500)
    skills: Optional[str] = Field(None, description="Comma-separated skills")
    experience: Optional[str] = Field(None, pattern=EXPERIENCE_PATTERN)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        return _check_password_bytes(v)

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Password confirmation does not match password")
        return self

    def skill_list(self) -> List[str]:
        if not self.skills:
            return []
        return [s.strip() for s in self.skills.split(",") if s.strip()]

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True
        json_schema_extra = {
            "example": {
                "firstName": "Jane",
                "lastName": "Doe",
                "email": "jane.doe@example.com",
                "password": "SecurePass123",
                "confirmPassword": "SecurePass123",
                "skills": "python, sql"
            }
        }


class LoginRequest(CamelModel):
    """Request schema for user login."""
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class ProfileUpdate(CamelModel):
    first_name: Optional[str] = Field(None, min_length=2, max_length=50)
    last_name: Optional[str] = Field(None, min_length=2, max_length=50)
    phone: Optional[str] = Field(None, max_length=20)
    location: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = Field(None, max_length=500)
    skills: Optional[List[str]] = None
    experience: Optional[str] = Field(None, pattern=EXPERIENCE_PATTERN)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8)
    confirm_password: str

    @field_validator("new_password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        return _check_password_bytes(v)

    @model_validator(mode="after")
    def passwords_match(self) -> "ChangePasswordRequest":
        if self.new_password != self.confirm_password:
            raise ValueError("Password confirmation does not match new password")
        return self


class UserOut(CamelModel):
    id: int
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    experience: Optional[str] = None
    preferences: Preferences = Field(default_factory=Preferences)
    education: List[EducationOut] = Field(default_factory=list)
    resume: Optional[ResumeOut] = None
    is_active: bool = True
    last_login: Optional[datetime] = None
    created_at: datetime
    job_count: Optional[int] = None

    @classmethod
    def from_user(cls, user: User, job_count: Optional[int] = None) -> "UserOut":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=user.full_name,
            email=user.email,
            phone=user.phone,
            location=user.location,
            bio=user.bio,
            skills=user.skills or [],
            experience=user.experience,
            preferences=Preferences.model_validate(user.preferences or {}),
            education=[EducationOut.model_validate(e) for e in user.education],
            resume=ResumeOut.model_validate(user.resume) if user.resume else None,
            is_active=user.is_active,
            last_login=user.last_login,
            created_at=user.created_at,
            job_count=job_count,
        )


class UserData(CamelModel):
    user: UserOut
    token: Optional[str] = None


class UserResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    data: UserData
