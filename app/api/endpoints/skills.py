from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import StorageError
from app.crud import skill as skill_crud
from app.schemas.skill import SkillListResponse

router = APIRouter(prefix="/skills", tags=["Skills"])


@router.get("", response_model=SkillListResponse)
def list_skills(category: Optional[str] = None, db: Session = Depends(get_db)):
    """Reference list of skills, alphabetical, optionally for one category."""
    try:
        skills = skill_crud.get_multi(db, category=category)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Failed to list skills: {e}")

    return SkillListResponse(skills=[skill.to_dict() for skill in skills])
