from typing import Any, Dict, List, Optional
from uuid import UUID
from pydantic import BaseModel, Field

from app.models.application import ApplicationStatus


class ApplicationCreateRequest(BaseModel):
    """A developer applying to a job"""
    job_id: UUID = Field(..., alias="jobId")
    developer_id: UUID = Field(..., alias="developerId")
    cover_letter: Optional[str] = Field(None, alias="coverLetter")

    class Config:
        populate_by_name = True


class ApplicationStatusUpdate(BaseModel):
    """Employer review decision"""
    status: ApplicationStatus
    notes: Optional[str] = None


class ApplicationResponse(BaseModel):
    success: bool = True
    application: Dict[str, Any]


class ApplicationListResponse(BaseModel):
    success: bool = True
    applications: List[Dict[str, Any]]
