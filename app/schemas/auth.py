from typing import Any, Dict, Optional
from uuid import UUID
from pydantic import BaseModel

from app.models.user import Role


class AuthUser(BaseModel):
    id: UUID
    email: str
    role: Optional[Role] = None

    class Config:
        from_attributes = True


class AuthStatusResponse(BaseModel):
    """
    Current account state for an email address.

    ``profile`` is null for an account that has not created a profile yet.
    """
    success: bool = True
    authenticated: bool
    user: Optional[AuthUser] = None
    profile: Optional[Dict[str, Any]] = None


class MessageResponse(BaseModel):
    success: bool = True
    message: str
