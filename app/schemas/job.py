from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from uuid import UUID

from app.schemas.common import OpenPayload


class JobCreateRequest(OpenPayload):
    """
    Schema for creating a new job.

    ``employerId`` is checked by the endpoint so a missing value gets the
    same error as an unknown one. Extra posting fields are accepted.
    """
    employer_id: Optional[UUID] = Field(None, alias="employerId")
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[str] = None
    experience_level: Optional[str] = None
    salary_min: Optional[int] = Field(None, ge=0)
    salary_max: Optional[int] = Field(None, ge=0)
    skills_required: Optional[List[str]] = None


class JobResponse(BaseModel):
    success: bool = True
    job: Optional[Dict[str, Any]] = None


class JobListResponse(BaseModel):
    success: bool = True
    jobs: List[Dict[str, Any]]
