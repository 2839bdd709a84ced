"""
Pydantic schemas for one-time password endpoints.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field

from app.models.otp_verification import Purpose


class SendOtpRequest(BaseModel):
    """Request a code for signup or signin"""
    email: EmailStr
    purpose: Purpose


class SendOtpResponse(BaseModel):
    """
    Response after issuing a code.

    ``error`` and ``otp`` are only present when email delivery failed in
    development mode.
    """
    success: bool = True
    message: str
    expires_at: datetime = Field(..., alias="expiresAt")
    error: Optional[str] = None
    otp: Optional[str] = None

    class Config:
        populate_by_name = True


class VerifyOtpRequest(BaseModel):
    """Submit a received code"""
    email: EmailStr
    otp: str = Field(..., min_length=1, max_length=6)
    purpose: Purpose


class UserSummary(BaseModel):
    id: UUID
    email: str

    class Config:
        from_attributes = True


class VerifyOtpResponse(BaseModel):
    success: bool = True
    message: str
    user: UserSummary
