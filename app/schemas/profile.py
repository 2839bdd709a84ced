"""
Pydantic schemas for developer and employer profiles.

Profile payloads are open: besides the typed fields below, any extra key the
client sends is accepted and stored with the profile.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID
from pydantic import BaseModel, Field

from app.schemas.common import OpenPayload


class ProfilePayload(OpenPayload):
    """Common part of profile submissions"""
    user_id: UUID = Field(..., alias="userId")
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class DeveloperProfilePayload(ProfilePayload):
    photo_url: Optional[str] = None
    location: Optional[str] = None
    preferred_job_location: Optional[str] = None
    experience: Optional[str] = None
    skills: Optional[List[str]] = None
    short_description: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    resume_url: Optional[str] = None


class EmployerProfilePayload(ProfilePayload):
    company_name: Optional[str] = None
    company_location: Optional[str] = None
    company_logo_url: Optional[str] = None
    company_description: Optional[str] = None
    company_website: Optional[str] = None
    company_size: Optional[str] = None
    industry: Optional[str] = None


class ProfileResponse(BaseModel):
    success: bool = True
    profile: Optional[Dict[str, Any]] = None


class DeveloperListResponse(BaseModel):
    success: bool = True
    developers: List[Dict[str, Any]]


class EmployerListResponse(BaseModel):
    success: bool = True
    employers: List[Dict[str, Any]]
