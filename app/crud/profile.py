"""
CRUD operations for developer and employer profiles.

Both profile types share the same upsert/fetch logic; the model class is
passed in by the caller.
"""

from typing import Any, Dict, List, Optional, Type, Union
from uuid import UUID
from sqlalchemy.orm import Session

from app.crud import user as user_crud
from app.crud.filters import contains_text, overlaps
from app.models.profile import DeveloperProfile, EmployerProfile
from app.models.user import Role, User

ProfileModel = Union[DeveloperProfile, EmployerProfile]

ROLE_BY_MODEL = {
    DeveloperProfile: Role.DEVELOPER,
    EmployerProfile: Role.EMPLOYER,
}


def get_by_user_id(db: Session, model: Type[ProfileModel], user_id: UUID) -> Optional[ProfileModel]:
    return db.query(model).filter(model.user_id == user_id).first()


def get_by_id(db: Session, model: Type[ProfileModel], profile_id: UUID) -> Optional[ProfileModel]:
    return db.query(model).filter(model.id == profile_id).first()


def upsert(
    db: Session,
    model: Type[ProfileModel],
    user: User,
    fields: Dict[str, Any]
) -> ProfileModel:
    """
    Update the user's profile with ``fields``, creating it if absent.

    A user without a role takes the role of the first profile they create.

    Args:
        db: Database session
        model: DeveloperProfile or EmployerProfile
        user: Owner of the profile
        fields: Client-supplied profile fields, persisted as-is

    Returns:
        The created or updated profile
    """
    profile = get_by_user_id(db, model, user.id)

    if profile is None:
        profile = model(user_id=user.id)
        db.add(profile)
        user_crud.assign_role(user, ROLE_BY_MODEL[model])

    profile.apply_fields(fields)

    db.commit()
    db.refresh(profile)

    return profile


def update(
    db: Session,
    model: Type[ProfileModel],
    user_id: UUID,
    fields: Dict[str, Any]
) -> Optional[ProfileModel]:
    """Update an existing profile. Returns None if the user has no profile."""
    profile = get_by_user_id(db, model, user_id)
    if not profile:
        return None

    profile.apply_fields(fields)

    db.commit()
    db.refresh(profile)

    return profile


def get_developers(
    db: Session,
    location_column: str = "preferred_job_location",
    location: Optional[str] = None,
    skills: Optional[List[str]] = None,
    experience: Optional[str] = None,
    skip: int = 0,
    limit: int = 50
) -> List[DeveloperProfile]:
    """
    Developer profiles, newest first.

    Args:
        location_column: Which location field the ``location`` filter matches
            ("preferred_job_location" for the profiles listing, "location"
            for the developer search)
        location: Case-insensitive substring filter
        skills: Keep profiles sharing at least one skill
        experience: Exact experience match
    """
    query = db.query(DeveloperProfile)

    if location:
        query = query.filter(contains_text(getattr(DeveloperProfile, location_column), location))
    if skills:
        query = query.filter(overlaps(db, DeveloperProfile.skills, skills))
    if experience:
        query = query.filter(DeveloperProfile.experience == experience)

    return query.order_by(DeveloperProfile.created_at.desc()).offset(skip).limit(limit).all()


def get_employers(
    db: Session,
    location: Optional[str] = None,
    industry: Optional[str] = None,
    skip: int = 0,
    limit: int = 50
) -> List[EmployerProfile]:
    """Employer profiles, newest first, with substring filters on location and industry."""
    query = db.query(EmployerProfile)

    if location:
        query = query.filter(contains_text(EmployerProfile.company_location, location))
    if industry:
        query = query.filter(contains_text(EmployerProfile.industry, industry))

    return query.order_by(EmployerProfile.created_at.desc()).offset(skip).limit(limit).all()
