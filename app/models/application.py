"""
Application model: a developer applying to a job.
"""

import enum
import uuid
from sqlalchemy import Column, Text, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.columns import SerializableMixin, utcnow, value_enum


class ApplicationStatus(str, enum.Enum):
    """
    Review status set by the employer.

    Every application starts PENDING; the employer may move it to any other
    value, in any order.
    """
    PENDING = "pending"
    REVIEWED = "reviewed"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Application(SerializableMixin, Base):
    __tablename__ = "applications"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    job_id = Column(UUID(as_uuid=True), ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    developer_id = Column(UUID(as_uuid=True), ForeignKey("developer_profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    cover_letter = Column(Text, nullable=True)
    status = Column(value_enum(ApplicationStatus, "application_status"), nullable=False, default=ApplicationStatus.PENDING)
    notes = Column(Text, nullable=True)

    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    applied_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    # No unique constraint on (job_id, developer_id): duplicates are rejected
    # by a lookup before insert, which concurrent requests can both pass.

    job = relationship("Job", back_populates="applications")
    developer = relationship("DeveloperProfile", back_populates="applications")

    def __repr__(self):
        return f"<Application(id={self.id}, job_id={self.job_id}, developer_id={self.developer_id}, status={self.status})>"
