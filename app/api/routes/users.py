"""
User profile and dashboard endpoints.

Profile, job search preferences, education history, resume metadata, and a
dashboard summary of the authenticated user's applications.
"""
import logging
from typing import Optional
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_current_user
from app.db.session import get_db
from app.db.models.user import User
from app.services.job_store import JobStore
from app.services import user_service
from app.schemas.auth import ProfileUpdate, UserOut, UserData, UserResponse
from app.schemas.common import ErrorResponse
from app.schemas.dashboard import DashboardData, DashboardResponse, JobSummary
from app.schemas.user import Preferences, EducationCreate, EducationUpdate, ResumeUpload

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)

DASHBOARD_LIST_SIZE = 5


def _user_response(user: User, message: Optional[str] = None, job_count: Optional[int] = None) -> UserResponse:
    return UserResponse(message=message, data=UserData(user=UserOut.from_user(user, job_count=job_count)))


@router.get("/profile", response_model=UserResponse)
def get_profile(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _user_response(user, job_count=JobStore(db, user.id).count())


@router.put("/profile", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    user_service.update_profile(db, user, payload.model_dump(exclude_unset=True))
    return _user_response(user, "Profile updated successfully")


@router.put("/preferences", response_model=UserResponse)
def update_preferences(
    payload: Preferences,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Replace job search preferences; omitted keys are reset."""
    user_service.set_preferences(db, user, payload)
    return _user_response(user, "Preferences updated successfully")


@router.post("/education", response_model=UserResponse)
def add_education(
    payload: EducationCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    user_service.add_education(db, user, payload)
    return _user_response(user, "Education added successfully")


@router.put("/education/{education_id}", response_model=UserResponse)
def update_education(
    education_id: int,
    payload: EducationUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    user_service.update_education(db, user, education_id, payload)
    return _user_response(user, "Education updated successfully")


@router.delete("/education/{education_id}", response_model=UserResponse)
def delete_education(
    education_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    user_service.delete_education(db, user, education_id)
    return _user_response(user, "Education deleted successfully")


@router.post("/resume", response_model=UserResponse)
def upload_resume(
    payload: ResumeUpload,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Attach resume metadata to the profile.

    The file is uploaded to storage by the client; only its description is kept.
    """
    user_service.set_resume(db, user, payload)
    return _user_response(user, "Resume uploaded successfully")


@router.delete("/resume", response_model=UserResponse)
def delete_resume(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    user_service.clear_resume(db, user)
    return _user_response(user, "Resume deleted successfully")


@router.get("/dashboard", status_code=status.HTTP_200_OK, response_model=DashboardResponse)
def get_dashboard(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Dashboard summary for the authenticated user.

    Returns:
    - user: profile with job count
    - recentJobs: last 5 updated applications
    - upcomingInterviews: up to 5 interviewing applications, soonest interview first
    - followUpReminders: up to 5 future follow-ups, soonest first
    """
    try:
        store = JobStore(db, user.id)
        now = datetime.utcnow()

        return DashboardResponse(data=DashboardData(
            user=UserOut.from_user(user, job_count=store.count()),
            recent_jobs=[JobSummary.from_job(j) for j in store.recent(DASHBOARD_LIST_SIZE)],
            upcoming_interviews=[
                JobSummary.from_job(j) for j in store.upcoming_interviews(now, DASHBOARD_LIST_SIZE)
            ],
            follow_up_reminders=[
                JobSummary.from_job(j) for j in store.follow_ups(now, DASHBOARD_LIST_SIZE)
            ],
        ))
    except Exception as e:
        logger.error(f"Failed to build dashboard: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to build dashboard"
        )
