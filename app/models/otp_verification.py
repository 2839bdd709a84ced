"""
One-time password model for email verification at signup and signin.

Each code is a 6-digit number valid for 15 minutes. Rows are never deleted;
a successful verification only flips ``is_used``.
"""

import enum
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Index
from sqlalchemy.dialects.postgresql import UUID
from app.core.database import Base
from app.models.columns import SerializableMixin, utcnow, value_enum


class Purpose(str, enum.Enum):
    """What the code is proving control of the email address for."""
    SIGNUP = "signup"
    SIGNIN = "signin"


class OtpVerification(SerializableMixin, Base):
    __tablename__ = "otp_verification"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String, nullable=False, index=True)

    otp_code = Column(String(6), nullable=False)
    purpose = Column(value_enum(Purpose, "otp_purpose"), nullable=False)

    expires_at = Column(DateTime(timezone=True), nullable=False)
    is_used = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Lookups always filter on email + code + purpose
    __table_args__ = (
        Index('ix_otp_verification_lookup', 'email', 'otp_code', 'purpose'),
    )

    def __repr__(self):
        return f"<OtpVerification(email={self.email}, purpose={self.purpose}, expires_at={self.expires_at})>"
