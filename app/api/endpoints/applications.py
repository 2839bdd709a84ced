"""
Job application endpoints.

Listings are single joined queries; each row is projected to a fixed set of
job, employer and developer fields before it is returned.
"""

import logging
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import AlreadyApplied, NotFound, StorageError, ValidationError
from app.crud import application as application_crud
from app.crud import job as job_crud
from app.crud import profile as profile_crud
from app.models.profile import DeveloperProfile
from app.schemas.application import (
    ApplicationCreateRequest,
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationStatusUpdate,
)
from app.services.enrichment import summarize_for_developer, summarize_for_employer, summarize_for_job

router = APIRouter(prefix="/applications", tags=["Applications"])
logger = logging.getLogger(__name__)


@router.post("", response_model=ApplicationResponse)
def create_application(request: ApplicationCreateRequest, db: Session = Depends(get_db)):
    """
    Apply to a job as a developer.

    A developer can apply to a given job only once. The check and the insert
    are separate queries, so two simultaneous submissions can both succeed.
    """
    try:
        if not job_crud.get_by_id(db, request.job_id):
            raise ValidationError("Invalid job")
        if not profile_crud.get_by_id(db, DeveloperProfile, request.developer_id):
            raise ValidationError("Invalid developer profile")

        if application_crud.get_for_job_and_developer(db, request.job_id, request.developer_id):
            raise AlreadyApplied()

        application = application_crud.create(
            db,
            job_id=request.job_id,
            developer_id=request.developer_id,
            cover_letter=request.cover_letter
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating application: {e}")
        raise StorageError(f"Failed to create application: {e}")

    logger.info(f"Developer {request.developer_id} applied to job {request.job_id}")
    return ApplicationResponse(application=application.to_dict())


@router.get("/developer/{developer_id}", response_model=ApplicationListResponse)
def list_developer_applications(developer_id: UUID, db: Session = Depends(get_db)):
    """A developer's applications, newest first, each with its job and employer summary."""
    try:
        applications = application_crud.get_by_developer(db, developer_id)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to list applications: {e}")

    return ApplicationListResponse(applications=[summarize_for_developer(a) for a in applications])


@router.get("/employer/{employer_id}", response_model=ApplicationListResponse)
def list_employer_applications(employer_id: UUID, db: Session = Depends(get_db)):
    """Applications to every job of an employer, with job and developer summaries."""
    try:
        applications = application_crud.get_by_employer(db, employer_id)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to list applications: {e}")

    return ApplicationListResponse(applications=[summarize_for_employer(a) for a in applications])


@router.get("/{job_id}", response_model=ApplicationListResponse)
def list_job_applications(job_id: UUID, db: Session = Depends(get_db)):
    """Applicants for one job, with a developer summary each."""
    try:
        applications = application_crud.get_by_job(db, job_id)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to list applications: {e}")

    return ApplicationListResponse(applications=[summarize_for_job(a) for a in applications])


@router.put("/{application_id}/status", response_model=ApplicationResponse)
def update_application_status(
    application_id: UUID,
    request: ApplicationStatusUpdate,
    db: Session = Depends(get_db)
):
    """Record the employer's decision and stamp reviewed_at."""
    try:
        application = application_crud.update_status(db, application_id, request.status, request.notes)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to update application: {e}")

    if not application:
        raise NotFound("Application not found")

    logger.info(f"Application {application_id} set to {request.status.value}")
    return ApplicationResponse(application=application.to_dict())
