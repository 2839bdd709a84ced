import logging
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import StorageError, ValidationError
from app.crud import profile as profile_crud
from app.crud import user as user_crud
from app.models.profile import DeveloperProfile, EmployerProfile
from app.models.user import Role
from app.schemas.auth import AuthStatusResponse, AuthUser, MessageResponse
from app.schemas.common import normalize_email

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger(__name__)

PROFILE_MODEL_BY_ROLE = {
    Role.DEVELOPER: DeveloperProfile,
    Role.EMPLOYER: EmployerProfile,
}


@router.get("/status", response_model=AuthStatusResponse)
def auth_status(email: Optional[str] = None, db: Session = Depends(get_db)):
    """
    Resolve the account state for an email address.

    There are no sessions or tokens: the client re-sends the email it
    verified. The profile returned is the one matching the user's role.
    """
    if not email:
        raise ValidationError("Email is required")
    email = normalize_email(email)

    try:
        user = user_crud.get_by_email(db, email)
        if not user:
            return AuthStatusResponse(authenticated=False)

        profile = None
        if user.role is not None:
            model = PROFILE_MODEL_BY_ROLE[user.role]
            row = profile_crud.get_by_user_id(db, model, user.id)
            if row is not None:
                profile = {**row.to_dict(), "role": user.role.value}

    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Auth status check error: {e}")
        raise StorageError(f"Failed to check auth status: {e}")

    return AuthStatusResponse(
        authenticated=True,
        user=AuthUser.model_validate(user),
        profile=profile
    )


@router.post("/logout", response_model=MessageResponse)
def logout():
    """Nothing is held server-side, so logging out only acknowledges."""
    return MessageResponse(message="Logged out successfully")
