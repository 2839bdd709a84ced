"""
Attach summaries of related rows onto jobs and applications.

Jobs are enriched with a batched lookup: collect the employer ids of the
page, fetch them in one query, merge by id. Applications arrive with their
relations already joined and are only projected down to fixed field sets,
so unrelated profile columns never leave the API.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.application import Application
from app.models.columns import project
from app.models.job import Job
from app.models.profile import EmployerProfile

logger = logging.getLogger(__name__)

EMPLOYER_LISTING_FIELDS = ("id", "name", "company_name", "company_location", "company_logo_url")
EMPLOYER_DETAIL_FIELDS = ("name", "company_name", "company_location", "company_logo_url", "company_description")
EMPLOYER_APPLICATION_FIELDS = ("company_name", "company_location", "company_logo_url", "name")
DEVELOPER_APPLICATION_FIELDS = ("name", "photo_url", "skills", "experience", "short_description")


def attach_employer_summaries(db: Session, jobs: List[Job]) -> List[Dict[str, Any]]:
    """
    Serialize jobs with an ``employer_profiles`` summary each.

    One query for all distinct employers on the page, whatever the page size.
    """
    employer_ids = {job.employer_id for job in jobs if job.employer_id}

    employers_by_id = {}
    if employer_ids:
        employers = db.query(EmployerProfile).filter(EmployerProfile.id.in_(list(employer_ids))).all()
        employers_by_id = {employer.id: employer for employer in employers}

    return [
        {
            **job.to_dict(),
            "employer_profiles": project(employers_by_id.get(job.employer_id), EMPLOYER_LISTING_FIELDS),
        }
        for job in jobs
    ]


def attach_employer_detail(db: Session, job: Job) -> Dict[str, Any]:
    """
    Serialize a single job with its employer summary.

    Best effort: a failed employer lookup leaves the summary null.
    """
    # Rollback expires the job, so serialize it before the lookup
    data = job.to_dict()

    summary = None
    try:
        employer = db.query(EmployerProfile).filter(EmployerProfile.id == data["employer_id"]).first()
        summary = project(employer, EMPLOYER_DETAIL_FIELDS)
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(f"Could not load employer {data['employer_id']} for job {data['id']}: {e}")

    data["employer_profiles"] = summary
    return data


def _job_with_employer(job: Job) -> Optional[Dict[str, Any]]:
    if job is None:
        return None
    return {
        **job.to_dict(),
        "employer_profiles": project(job.employer, EMPLOYER_APPLICATION_FIELDS),
    }


def summarize_for_job(application: Application) -> Dict[str, Any]:
    """Application as seen on a job's applicant list."""
    return {
        **application.to_dict(),
        "jobs": application.job.to_dict() if application.job else None,
        "developer_profiles": project(application.developer, DEVELOPER_APPLICATION_FIELDS),
    }


def summarize_for_developer(application: Application) -> Dict[str, Any]:
    """Application as seen by the developer who submitted it."""
    return {
        **application.to_dict(),
        "jobs": _job_with_employer(application.job),
    }


def summarize_for_employer(application: Application) -> Dict[str, Any]:
    """Application as seen by the employer across all their jobs."""
    return {
        **application.to_dict(),
        "jobs": _job_with_employer(application.job),
        "developer_profiles": project(application.developer, DEVELOPER_APPLICATION_FIELDS),
    }
