"""
Profile maintenance for the authenticated user: profile fields,
job search preferences, education history and resume metadata.

Functions mutate the given User and commit; callers own the session.
"""
import logging
from datetime import datetime
from typing import Any, Dict

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.models.user import User, Education
from app.schemas.user import Preferences, EducationCreate, EducationUpdate, ResumeUpload

logger = logging.getLogger(__name__)

# profile fields a null in the payload leaves untouched
REQUIRED_PROFILE_FIELDS = ("first_name", "last_name")


def _commit(db: Session, user: User) -> User:
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(user)
    return user


def update_profile(db: Session, user: User, update_data: Dict[str, Any]) -> User:
    for field, value in update_data.items():
        if field in REQUIRED_PROFILE_FIELDS and value is None:
            continue
        if field == "skills":
            value = value or []
        setattr(user, field, value)

    _commit(db, user)
    logger.info(f"Profile updated: user_id={user.id}, fields={sorted(update_data)}")
    return user


def set_preferences(db: Session, user: User, preferences: Preferences) -> User:
    """Replace the user's preferences document."""
    user.preferences = preferences.model_dump(mode="json")
    _commit(db, user)
    logger.info(f"Preferences updated: user_id={user.id}")
    return user


def _get_education(db: Session, user: User, education_id: int) -> Education:
    entry = db.query(Education).filter(
        Education.id == education_id,
        Education.user_id == user.id,
    ).first()
    if entry is None:
        raise NotFoundError("Education record not found")
    return entry


def add_education(db: Session, user: User, payload: EducationCreate) -> User:
    user.education.append(Education(**payload.model_dump()))
    _commit(db, user)
    logger.info(f"Education added: user_id={user.id}, entries={len(user.education)}")
    return user


def update_education(db: Session, user: User, education_id: int, payload: EducationUpdate) -> User:
    entry = _get_education(db, user, education_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field != "gpa":
            continue
        setattr(entry, field, value)

    _commit(db, user)
    logger.info(f"Education updated: user_id={user.id}, education_id={education_id}")
    return user


def delete_education(db: Session, user: User, education_id: int) -> User:
    entry = _get_education(db, user, education_id)
    user.education.remove(entry)
    _commit(db, user)
    logger.info(f"Education deleted: user_id={user.id}, education_id={education_id}")
    return user


def set_resume(db: Session, user: User, payload: ResumeUpload) -> User:
    resume = payload.model_dump(mode="json")
    resume["uploaded_at"] = datetime.utcnow().isoformat()
    user.resume = resume
    _commit(db, user)
    logger.info(f"Resume attached: user_id={user.id}, filename={payload.filename}")
    return user


def clear_resume(db: Session, user: User) -> User:
    user.resume = None
    _commit(db, user)
    logger.info(f"Resume removed: user_id={user.id}")
    return user
