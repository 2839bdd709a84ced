from typing import Any, Dict, List
from pydantic import BaseModel


class SkillListResponse(BaseModel):
    success: bool = True
    skills: List[Dict[str, Any]]
