from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.skill import Skill


def get_multi(db: Session, category: Optional[str] = None) -> List[Skill]:
    """All skills ordered by name, optionally restricted to one category."""
    query = db.query(Skill)

    if category:
        query = query.filter(Skill.category == category)

    return query.order_by(Skill.name).all()
