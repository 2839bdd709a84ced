from sqlalchemy import Column, Integer, String
from app.core.database import Base
from app.models.columns import SerializableMixin


class Skill(SerializableMixin, Base):
    """Static reference list of skills, seeded by migration."""
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    category = Column(String, nullable=True, index=True)

    def __repr__(self):
        return f"<Skill(name='{self.name}', category='{self.category}')>"
