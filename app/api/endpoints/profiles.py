"""
Developer and employer profile endpoints.

POST creates or updates the caller's profile, PUT only updates. Reads are
public: any caller may fetch or list any profile.
"""

import logging
from typing import Optional, Type
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import NotFound, StorageError, UserNotFound
from app.crud import profile as profile_crud
from app.crud import user as user_crud
from app.crud.filters import parse_csv
from app.crud.profile import ROLE_BY_MODEL, ProfileModel
from app.models.profile import DeveloperProfile, EmployerProfile
from app.schemas.profile import (
    DeveloperListResponse,
    DeveloperProfilePayload,
    EmployerListResponse,
    EmployerProfilePayload,
    ProfilePayload,
    ProfileResponse,
)

router = APIRouter(tags=["Profiles"])
logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def _with_role(profile: ProfileModel, model: Type[ProfileModel]) -> dict:
    return {**profile.to_dict(), "role": ROLE_BY_MODEL[model].value}


def _upsert_profile(db: Session, model: Type[ProfileModel], payload: ProfilePayload) -> ProfileResponse:
    kind = ROLE_BY_MODEL[model].value
    try:
        user = user_crud.get_by_id(db, payload.user_id)
        if not user:
            raise UserNotFound()

        profile = profile_crud.upsert(db, model, user, payload.supplied_fields("user_id"))
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{kind.capitalize()} profile error for user {payload.user_id}: {e}")
        raise StorageError(f"Failed to save {kind} profile: {e}")

    logger.info(f"Saved {kind} profile {profile.id} for user {payload.user_id}")
    return ProfileResponse(profile=profile.to_dict())


def _update_profile(db: Session, model: Type[ProfileModel], payload: ProfilePayload) -> ProfileResponse:
    kind = ROLE_BY_MODEL[model].value
    try:
        profile = profile_crud.update(db, model, payload.user_id, payload.supplied_fields("user_id"))
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{kind.capitalize()} profile update error for user {payload.user_id}: {e}")
        raise StorageError(f"Failed to update {kind} profile: {e}")

    if profile is None:
        raise NotFound("Profile not found")

    return ProfileResponse(profile=profile.to_dict())


def _get_profile(db: Session, model: Type[ProfileModel], user_id: UUID) -> ProfileResponse:
    try:
        profile = profile_crud.get_by_user_id(db, model, user_id)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to fetch profile: {e}")

    if profile is None:
        return ProfileResponse(profile=None)

    return ProfileResponse(profile=_with_role(profile, model))


@router.post("/developer-profile", response_model=ProfileResponse)
def save_developer_profile(payload: DeveloperProfilePayload, db: Session = Depends(get_db)):
    """Create the developer profile for ``userId``, or update it if it exists."""
    return _upsert_profile(db, DeveloperProfile, payload)


@router.put("/developer-profile", response_model=ProfileResponse)
def update_developer_profile(payload: DeveloperProfilePayload, db: Session = Depends(get_db)):
    return _update_profile(db, DeveloperProfile, payload)


@router.get("/developer-profile/{user_id}", response_model=ProfileResponse)
def get_developer_profile(user_id: UUID, db: Session = Depends(get_db)):
    """Developer profile owned by ``user_id``; ``profile`` is null if there is none."""
    return _get_profile(db, DeveloperProfile, user_id)


@router.post("/employer-profile", response_model=ProfileResponse)
def save_employer_profile(payload: EmployerProfilePayload, db: Session = Depends(get_db)):
    """Create the employer profile for ``userId``, or update it if it exists."""
    return _upsert_profile(db, EmployerProfile, payload)


@router.put("/employer-profile", response_model=ProfileResponse)
def update_employer_profile(payload: EmployerProfilePayload, db: Session = Depends(get_db)):
    return _update_profile(db, EmployerProfile, payload)


@router.get("/employer-profile/{user_id}", response_model=ProfileResponse)
def get_employer_profile(user_id: UUID, db: Session = Depends(get_db)):
    """Employer profile owned by ``user_id``; ``profile`` is null if there is none."""
    return _get_profile(db, EmployerProfile, user_id)


def _list_developers(
    db: Session,
    location_column: str,
    location: Optional[str],
    skills: Optional[str],
    experience: Optional[str],
    limit: int,
    offset: int
) -> DeveloperListResponse:
    try:
        developers = profile_crud.get_developers(
            db,
            location_column=location_column,
            location=location,
            skills=parse_csv(skills),
            experience=experience,
            skip=offset,
            limit=min(limit, MAX_PAGE_SIZE)
        )
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to list developers: {e}")

    return DeveloperListResponse(developers=[developer.to_dict() for developer in developers])


@router.get("/developer-profiles", response_model=DeveloperListResponse)
def list_developer_profiles(
    location: Optional[str] = None,
    skills: Optional[str] = None,
    experience: Optional[str] = None,
    limit: int = Query(50, ge=1),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    """
    List developer profiles, newest first.

    Args:
        location: Substring of the preferred job location (case-insensitive)
        skills: Comma-separated; profiles sharing any of them match
        experience: Exact experience value
        limit: Page size (default 50, max 100)
        offset: Number of profiles to skip
    """
    return _list_developers(db, "preferred_job_location", location, skills, experience, limit, offset)


@router.get("/developers", response_model=DeveloperListResponse)
def search_developers(
    skills: Optional[str] = None,
    location: Optional[str] = None,
    experience: Optional[str] = None,
    limit: int = Query(50, ge=1),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    """Same as /developer-profiles, but ``location`` matches where the developer lives."""
    return _list_developers(db, "location", location, skills, experience, limit, offset)


@router.get("/employer-profiles", response_model=EmployerListResponse)
def list_employer_profiles(
    location: Optional[str] = None,
    industry: Optional[str] = None,
    limit: int = Query(50, ge=1),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    """List employer profiles, newest first, filtered by company location and industry substrings."""
    try:
        employers = profile_crud.get_employers(
            db,
            location=location,
            industry=industry,
            skip=offset,
            limit=min(limit, MAX_PAGE_SIZE)
        )
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to list employers: {e}")

    return EmployerListResponse(employers=[employer.to_dict() for employer in employers])
