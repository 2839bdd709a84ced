"""
Health check and diagnostics endpoints.

``/health`` is always mounted. The diagnostics router exposes row samples
and is only mounted when DEBUG_ENDPOINTS_ENABLED is set.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import StorageError, UserNotFound
from app.crud import profile as profile_crud
from app.crud import user as user_crud
from app.models.job import Job
from app.models.otp_verification import OtpVerification
from app.models.profile import DeveloperProfile, EmployerProfile
from app.schemas.common import normalize_email

router = APIRouter(tags=["Health"])
diagnostics_router = APIRouter(tags=["Diagnostics"])
logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", status_code=status.HTTP_200_OK)
def health_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Health check with database connectivity.

    Returns 200 when the database answers a trivial query, 500 otherwise.
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Database connection failed",
                "database": "Disconnected",
                "error": str(e),
                "timestamp": _timestamp()
            }
        )

    return {
        "success": True,
        "message": "ConnectHire API is running",
        "database": "Connected",
        "timestamp": _timestamp()
    }


@diagnostics_router.get("/test-db")
def test_db(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Check that the jobs and employer_profiles tables are readable."""
    try:
        jobs = db.query(Job).limit(1).all()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Jobs table error: {e}")

    try:
        employers = db.query(EmployerProfile).limit(1).all()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Employer profiles table error: {e}")

    return {
        "success": True,
        "message": "Database tables are accessible",
        "jobs_count": len(jobs),
        "employers_count": len(employers)
    }


@diagnostics_router.get("/test-otp")
def test_otp(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Sample up to five OTP rows."""
    try:
        records = db.query(OtpVerification).order_by(OtpVerification.created_at.desc()).limit(5).all()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(str(e))

    return {
        "success": True,
        "message": "OTP table is accessible",
        "count": len(records),
        "data": [record.to_dict() for record in records]
    }


@diagnostics_router.get("/debug/user/{email}")
def debug_user(email: str, db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Raw user row plus both profile rows, whatever the user's role."""
    email = normalize_email(email)
    logger.info(f"Debug: checking user state for {email}")

    try:
        user = user_crud.get_by_email(db, email)
        if not user:
            raise UserNotFound("User not found")

        developer = profile_crud.get_by_user_id(db, DeveloperProfile, user.id)
        employer = profile_crud.get_by_user_id(db, EmployerProfile, user.id)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(str(e))

    return {
        "success": True,
        "user": user.to_dict(),
        "developerProfile": developer.to_dict() if developer else None,
        "employerProfile": employer.to_dict() if employer else None,
        "hasDeveloperProfile": developer is not None,
        "hasEmployerProfile": employer is not None
    }
