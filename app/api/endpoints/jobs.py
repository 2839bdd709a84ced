import logging
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import StorageError, ValidationError
from app.crud import job as job_crud
from app.crud import profile as profile_crud
from app.crud.filters import parse_csv
from app.models.profile import EmployerProfile
from app.schemas.job import JobCreateRequest, JobListResponse, JobResponse
from app.services.enrichment import attach_employer_detail, attach_employer_summaries

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


@router.post("", response_model=JobResponse)
def create_job(request: JobCreateRequest, db: Session = Depends(get_db)):
    """
    Create a job posting for an employer profile.

    The employer is looked up first and the job inserted in a second
    round-trip.
    """
    if not request.employer_id:
        raise ValidationError("Employer ID is required")

    try:
        employer = profile_crud.get_by_id(db, EmployerProfile, request.employer_id)
        if not employer:
            raise ValidationError("Invalid employer profile")

        new_job = job_crud.create(db, employer.id, request.supplied_fields("employer_id"))
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating job: {e}")
        raise StorageError(f"Failed to create job: {str(e)}")

    logger.info(f"Created job {new_job.id}: {new_job.title} for employer {employer.id}")
    return JobResponse(job=new_job.to_dict())


@router.get("", response_model=JobListResponse)
def list_jobs(
    location: Optional[str] = None,
    skills: Optional[str] = None,
    limit: int = Query(50, ge=1),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    """
    List jobs newest first, each with a summary of its employer.

    Args:
        location: Case-insensitive substring of the job location
        skills: Comma-separated; jobs requiring any of them match
        limit: Maximum number of records to return (default: 50, max: 100)
        offset: Number of records to skip (default: 0)
    """
    if limit > MAX_PAGE_SIZE:
        limit = MAX_PAGE_SIZE

    try:
        jobs = job_crud.get_multi(db, skip=offset, limit=limit, location=location, skills=parse_csv(skills))
        enriched = attach_employer_summaries(db, jobs)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to list jobs: {e}")

    return JobListResponse(jobs=enriched)


@router.get("/employer/{employer_id}", response_model=JobListResponse)
def list_employer_jobs(employer_id: UUID, db: Session = Depends(get_db)):
    """All jobs posted by one employer profile, newest first."""
    try:
        jobs = job_crud.get_by_employer(db, employer_id)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to list employer jobs: {e}")

    return JobListResponse(jobs=[job.to_dict() for job in jobs])


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: UUID, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID with its employer summary.

    A missing job is reported as ``job: null``, not as an error.
    """
    try:
        job = job_crud.get_by_id(db, job_id)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to fetch job: {e}")

    if not job:
        return JobResponse(job=None)

    return JobResponse(job=attach_employer_detail(db, job))
