"""
Authentication endpoints: registration, login, and profile management.
"""
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_current_user
from app.core.logging_config import sanitize_log_data
from app.core.rate_limit import rate_limiter
from app.core.security import hash_password, verify_password, create_access_token
from app.db.session import get_db
from app.db.models.user import User
from app.services.job_store import JobStore
from app.services import user_service
from app.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    ProfileUpdate,
    ChangePasswordRequest,
    UserOut,
    UserData,
    UserResponse,
)
from app.schemas.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    dependencies=[Depends(rate_limiter("register"))],
)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account and return it with an access token."""
    logger.debug(f"Register request: {sanitize_log_data(payload.model_dump())}")

    existing_user = db.query(User).filter(User.email == payload.email).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User with this email already exists"
        )

    try:
        user = User(
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            password_hash=hash_password(payload.password),
            phone=payload.phone,
            location=payload.location,
            bio=payload.bio,
            skills=payload.skill_list(),
            experience=payload.experience,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to register user: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register user"
        )

    logger.info(f"User registered: user_id={user.id}")

    return UserResponse(
        message="User registered successfully",
        data=UserData(
            user=UserOut.from_user(user),
            token=create_access_token({"sub": user.email}),
        ),
    )


@router.post(
    "/login",
    response_model=UserResponse,
    dependencies=[Depends(rate_limiter("login"))],
)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == payload.email).first()

    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Login failed: invalid credentials")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Your account has been deactivated. Please contact support."
        )

    user.last_login = datetime.utcnow()
    db.commit()
    db.refresh(user)

    logger.info(f"User logged in: user_id={user.id}")

    return UserResponse(
        message="Login successful",
        data=UserData(
            user=UserOut.from_user(user),
            token=create_access_token({"sub": user.email}),
        ),
    )


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Current user with their job count."""
    job_count = JobStore(db, user.id).count()
    return UserResponse(data=UserData(user=UserOut.from_user(user, job_count=job_count)))


@router.put("/profile", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    user_service.update_profile(db, user, payload.model_dump(exclude_unset=True))
    return UserResponse(message="Profile updated successfully", data=UserData(user=UserOut.from_user(user)))


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    payload: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if not verify_password(payload.current_password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")

    user.password_hash = hash_password(payload.new_password)
    db.commit()

    logger.info(f"Password changed: user_id={user.id}")

    return MessageResponse(message="Password changed successfully")


@router.post("/logout", response_model=MessageResponse)
def logout(user: User = Depends(get_current_user)):
    """Tokens are stateless; the client discards its copy."""
    logger.info(f"User logged out: user_id={user.id}")
    return MessageResponse(message="Logged out successfully")
