"""
Developer and employer profile models.

Each user holds at most one profile of each type, keyed on ``user_id``.
Profiles accept free-form fields: known ones are real columns, the rest are
kept in ``extra_fields``.
"""

import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.columns import FlexibleFieldsMixin, StringList, utcnow


class DeveloperProfile(FlexibleFieldsMixin, Base):
    __tablename__ = "developer_profiles"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True)

    name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    photo_url = Column(String, nullable=True)

    location = Column(String, nullable=True)
    preferred_job_location = Column(String, nullable=True)
    experience = Column(String, nullable=True)  # e.g. "0-1", "2-5", "5+"
    skills = Column(StringList, nullable=True)
    short_description = Column(Text, nullable=True)

    github_url = Column(String, nullable=True)
    linkedin_url = Column(String, nullable=True)
    portfolio_url = Column(String, nullable=True)
    resume_url = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    applications = relationship("Application", back_populates="developer")

    def __repr__(self):
        return f"<DeveloperProfile(id={self.id}, user_id={self.user_id}, name='{self.name}')>"


class EmployerProfile(FlexibleFieldsMixin, Base):
    __tablename__ = "employer_profiles"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True)

    # Contact person
    name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)

    company_name = Column(String, nullable=True)
    company_location = Column(String, nullable=True)
    company_logo_url = Column(String, nullable=True)
    company_description = Column(Text, nullable=True)
    company_website = Column(String, nullable=True)
    company_size = Column(String, nullable=True)
    industry = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    jobs = relationship("Job", back_populates="employer")

    def __repr__(self):
        return f"<EmployerProfile(id={self.id}, user_id={self.user_id}, company_name='{self.company_name}')>"
