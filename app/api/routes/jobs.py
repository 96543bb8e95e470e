"""
Job endpoints for the job tracker.

CRUD operations, status changes, and interview logging for the
authenticated user's job applications.
"""
import logging
import math
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.core.errors import ValidationFailed, validation_error
from app.db.session import get_db
from app.db.models.user import User
from app.db.models.job_application import JobApplication, Interview
from app.core.auth_dependency import get_current_user
from app.services.job_query import build_job_query
from app.services.job_store import JobStore
from app.schemas.job import (
    JobCreate,
    JobUpdate,
    StatusUpdate,
    InterviewCreate,
    JobOut,
    JobResponse,
    JobListResponse,
    JobListData,
    Pagination,
)
from app.schemas.common import ErrorResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/jobs",
    tags=["Jobs"],
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)

# columns that cannot be cleared by an update
NON_NULLABLE_FIELDS = ("title", "company", "status", "application_date", "priority", "tags", "attachments")


@router.get("", status_code=status.HTTP_200_OK, response_model=JobListResponse)
def list_jobs(
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
    search: Optional[str] = Query(None, description="Search in title, company, location and description"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="createdAt, updatedAt, applicationDate, title or company"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc or desc"),
    page: Optional[str] = Query(None, description="Page number"),
    limit: Optional[str] = Query(None, description="Items per page (1-100)"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List job applications for the authenticated user.

    Supports filtering by status, free-text search, sorting and pagination.
    """
    job_query = build_job_query(
        owner_id=user.id,
        status=status_filter,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )

    try:
        window = job_query.window
        jobs, total = JobStore(db, user.id).query(
            job_query.filter, job_query.sort, window.offset, window.limit
        )

        logger.debug(f"Jobs listed: user_id={user.id}, total={total}, page={window.page}")

        return JobListResponse(data=JobListData(
            jobs=[JobOut.from_job(job) for job in jobs],
            pagination=Pagination(
                page=window.page,
                limit=window.limit,
                total=total,
                pages=math.ceil(total / window.limit),
            ),
        ))

    except Exception as e:
        logger.error(f"Failed to list jobs: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list jobs"
        )


@router.get("/{job_id}", status_code=status.HTTP_200_OK, response_model=JobResponse)
def get_job(
    job_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a specific job by ID."""
    job = JobStore(db, user.id).get(job_id)
    return JobResponse.build(job)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobResponse)
def create_job(
    job_data: JobCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a new job application entry.

    The job is associated with the authenticated user.
    """
    try:
        fields = job_data.model_dump(exclude={"attachments"})
        job = JobApplication(
            user_id=user.id,
            attachments=[a.model_dump(mode="json", by_alias=True) for a in job_data.attachments],
            **fields
        )
        job.ensure_follow_up()

        db.add(job)
        db.commit()
        db.refresh(job)

        logger.info(f"Job created: job_id={job.id}, user_id={user.id}, company={job.company}")

        return JobResponse.build(job, message="Job created successfully")

    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create job: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create job"
        )


@router.put("/{job_id}", status_code=status.HTTP_200_OK, response_model=JobResponse)
def update_job(
    job_id: int,
    job_data: JobUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update an existing job.

    Only updates provided fields.
    """
    update_data = job_data.model_dump(exclude_unset=True)

    cleared = [name for name in NON_NULLABLE_FIELDS if name in update_data and update_data[name] is None]
    if cleared:
        raise ValidationFailed([validation_error(name, f"{name} cannot be null") for name in cleared])

    job = JobStore(db, user.id).get(job_id)

    try:
        if "attachments" in update_data:
            update_data["attachments"] = [
                a.model_dump(mode="json", by_alias=True) for a in job_data.attachments
            ]

        for field, value in update_data.items():
            setattr(job, field, value)
        job.ensure_follow_up()

        db.commit()
        db.refresh(job)

        logger.info(f"Job updated: job_id={job.id}, user_id={user.id}")

        return JobResponse.build(job, message="Job updated successfully")

    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update job: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update job"
        )


@router.delete("/{job_id}", status_code=status.HTTP_200_OK, response_model=MessageResponse)
def delete_job(
    job_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a job and its interviews."""
    job = JobStore(db, user.id).get(job_id)

    try:
        db.delete(job)
        db.commit()

        logger.info(f"Job deleted: job_id={job_id}, user_id={user.id}")

        return MessageResponse(message="Job deleted successfully")

    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete job: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete job"
        )


@router.patch("/{job_id}/status", status_code=status.HTTP_200_OK, response_model=JobResponse)
def update_job_status(
    job_id: int,
    payload: StatusUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Change a job's status; moving to interviewing schedules a follow-up."""
    job = JobStore(db, user.id).get(job_id)

    try:
        previous = job.status
        job.update_status(payload.status)
        db.commit()
        db.refresh(job)

        logger.info(f"Job status changed: job_id={job.id}, {previous} -> {job.status}")

        return JobResponse.build(job, message="Job status updated successfully")

    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update job status: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update job status"
        )


@router.post("/{job_id}/interviews", status_code=status.HTTP_200_OK, response_model=JobResponse)
def add_interview(
    job_id: int,
    payload: InterviewCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Log an interview; an application still marked applied moves to interviewing."""
    job = JobStore(db, user.id).get(job_id)

    try:
        job.add_interview(Interview(
            date=payload.date,
            type=payload.type,
            notes=payload.notes,
            outcome=payload.outcome,
        ))
        db.commit()
        db.refresh(job)

        logger.info(f"Interview added: job_id={job.id}, type={payload.type}, interviews={len(job.interviews)}")

        return JobResponse.build(job, message="Interview added successfully")

    except Exception as e:
        db.rollback()
        logger.error(f"Failed to add interview: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add interview"
        )
