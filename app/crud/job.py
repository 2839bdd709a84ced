"""
CRUD operations for Job model.

Implements the Repository pattern to encapsulate all database operations
for jobs, providing a clean interface for the API layer.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy.orm import Session

from app.crud.filters import contains_text, overlaps
from app.models.job import Job


def create(db: Session, employer_id: UUID, fields: Dict[str, Any]) -> Job:
    """
    Create a new job in the database.

    Args:
        db: Database session
        employer_id: Owning employer profile (existence checked by the caller)
        fields: Posting fields supplied by the client

    Returns:
        Created Job instance with id
    """
    db_job = Job(employer_id=employer_id)
    db_job.apply_fields(fields)

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return db_job


def get_by_id(db: Session, job_id: UUID) -> Optional[Job]:
    return db.query(Job).filter(Job.id == job_id).first()


def get_multi(
    db: Session,
    skip: int = 0,
    limit: int = 50,
    location: Optional[str] = None,
    skills: Optional[List[str]] = None
) -> List[Job]:
    """
    Retrieve jobs newest first with pagination and optional filtering.

    Args:
        db: Database session
        skip: Number of records to skip (offset)
        limit: Maximum number of records to return
        location: Case-insensitive substring filter on location
        skills: Keep jobs whose skills_required shares at least one entry

    Returns:
        List of Job instances
    """
    query = db.query(Job)

    if location:
        query = query.filter(contains_text(Job.location, location))
    if skills:
        query = query.filter(overlaps(db, Job.skills_required, skills))

    return query.order_by(Job.created_at.desc()).offset(skip).limit(limit).all()


def get_by_employer(db: Session, employer_id: UUID) -> List[Job]:
    return (
        db.query(Job)
        .filter(Job.employer_id == employer_id)
        .order_by(Job.created_at.desc())
        .all()
    )
