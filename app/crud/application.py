"""
CRUD operations for job applications.

Listing functions load the related job, employer and developer rows in the
same query (eager joins) so the API layer can project summaries without
further round-trips.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session, contains_eager, joinedload

from app.models.application import Application, ApplicationStatus
from app.models.columns import utcnow
from app.models.job import Job


def get_by_id(db: Session, application_id: UUID) -> Optional[Application]:
    return db.query(Application).filter(Application.id == application_id).first()


def get_for_job_and_developer(db: Session, job_id: UUID, developer_id: UUID) -> Optional[Application]:
    return db.query(Application).filter(
        Application.job_id == job_id,
        Application.developer_id == developer_id
    ).first()


def create(
    db: Session,
    job_id: UUID,
    developer_id: UUID,
    cover_letter: Optional[str] = None
) -> Application:
    application = Application(
        job_id=job_id,
        developer_id=developer_id,
        cover_letter=cover_letter,
        status=ApplicationStatus.PENDING
    )

    db.add(application)
    db.commit()
    db.refresh(application)

    return application


def update_status(
    db: Session,
    application_id: UUID,
    status: ApplicationStatus,
    notes: Optional[str] = None
) -> Optional[Application]:
    """
    Set the review status and notes and stamp reviewed_at.

    Returns:
        Updated Application if found, None otherwise
    """
    application = get_by_id(db, application_id)
    if not application:
        return None

    application.status = status
    application.notes = notes
    application.reviewed_at = utcnow()

    db.commit()
    db.refresh(application)

    return application


def get_by_job(db: Session, job_id: UUID) -> List[Application]:
    return (
        db.query(Application)
        .options(joinedload(Application.job), joinedload(Application.developer))
        .filter(Application.job_id == job_id)
        .order_by(Application.applied_at.desc())
        .all()
    )


def get_by_developer(db: Session, developer_id: UUID) -> List[Application]:
    return (
        db.query(Application)
        .options(joinedload(Application.job).joinedload(Job.employer))
        .filter(Application.developer_id == developer_id)
        .order_by(Application.applied_at.desc())
        .all()
    )


def get_by_employer(db: Session, employer_id: UUID) -> List[Application]:
    """Applications to any job posted by the employer."""
    return (
        db.query(Application)
        .join(Application.job)
        .options(
            contains_eager(Application.job).joinedload(Job.employer),
            joinedload(Application.developer)
        )
        .filter(Job.employer_id == employer_id)
        .order_by(Application.applied_at.desc())
        .all()
    )
