"""
User model.

A User is created the first time an email address completes signup OTP
verification. The account's role is fixed when its first profile is created.
"""

import enum
import uuid
from sqlalchemy import Column, String, DateTime
from sqlalchemy.dialects.postgresql import UUID
from app.core.database import Base
from app.models.columns import SerializableMixin, utcnow, value_enum


class Role(str, enum.Enum):
    """Which side of the board a user is on."""
    DEVELOPER = "developer"
    EMPLOYER = "employer"


class User(SerializableMixin, Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    email = Column(String, unique=True, nullable=False, index=True)

    # Null until the user creates a developer or employer profile
    role = Column(value_enum(Role, "user_role"), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role={self.role})>"
