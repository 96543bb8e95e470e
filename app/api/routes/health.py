"""
Health check endpoint for deployment monitoring.
"""
import logging
from fastapi import APIRouter, Depends
from datetime import datetime
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])

API_VERSION = "1.0.0"


@router.get("")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for deployment monitoring.
    
    Reports "degraded" when the database cannot be reached.
    """
    status = "healthy"
    
    try:
        db.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception as e:
        logger.warning(f"Health check database probe failed: {e}")
        db_status = "disconnected"
        status = "degraded"
    
    return {
        "status": status,
        "message": "Job Tracker API is running",
        "timestamp": datetime.utcnow().isoformat(),
        "database": db_status,
        "version": API_VERSION,
    }
