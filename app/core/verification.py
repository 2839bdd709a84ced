"""
Core one-time password logic.

Handles generation, storage and verification of 6-digit codes used to
sign up and sign in, and resolves the user once a code checks out.
"""

import logging
import secrets
from datetime import timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import Expired, InvalidCode, UserNotFound
from app.crud import user as user_crud
from app.models.columns import as_utc, utcnow
from app.models.otp_verification import OtpVerification, Purpose
from app.models.user import User

logger = logging.getLogger(__name__)

CODE_MIN = 100000
CODE_MAX = 999999


def generate_otp_code() -> str:
    """
    Generate a 6-digit code, uniform over 100000-999999.

    Uses the secrets module so codes cannot be predicted from earlier ones.
    """
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


def issue_otp(db: Session, email: str, purpose: Purpose) -> OtpVerification:
    """
    Store a new code for ``email``.

    Earlier unused codes for the same email and purpose stay valid until
    they expire.

    Args:
        db: Database session
        email: Address the code will be sent to
        purpose: SIGNUP or SIGNIN

    Returns:
        OtpVerification: The newly created record
    """
    otp = OtpVerification(
        email=email,
        otp_code=generate_otp_code(),
        purpose=purpose,
        expires_at=utcnow() + timedelta(minutes=settings.OTP_EXPIRATION_MINUTES),
        is_used=False
    )

    db.add(otp)
    db.commit()
    db.refresh(otp)

    logger.info(f"Issued {purpose.value} OTP for {email}")
    return otp


def find_unused_codes(db: Session, email: str, code: str, purpose: Purpose) -> List[OtpVerification]:
    """Unused records matching email, code and purpose, newest first."""
    return db.query(OtpVerification).filter(
        OtpVerification.email == email,
        OtpVerification.otp_code == code,
        OtpVerification.purpose == purpose,
        OtpVerification.is_used == False  # noqa: E712
    ).order_by(OtpVerification.created_at.desc()).all()


def select_unexpired(candidates: List[OtpVerification]) -> Optional[OtpVerification]:
    """First candidate (newest) whose expiry is still in the future."""
    now = utcnow()
    for record in candidates:
        if as_utc(record.expires_at) > now:
            return record
    return None


def verify_otp(db: Session, email: str, code: str, purpose: Purpose) -> User:
    """
    Verify a code and resolve the user it authenticates.

    - No unused record matches → InvalidCode
    - Every match has expired → Expired
    - The chosen record is marked used before the user is resolved
    - SIGNUP creates the user on first verification
    - SIGNIN for an unknown email → UserNotFound

    Args:
        db: Database session
        email: Email address the code was sent to
        code: Code supplied by the client
        purpose: SIGNUP or SIGNIN

    Returns:
        User: The existing or newly created user

    Raises:
        InvalidCode, Expired, UserNotFound
    """
    candidates = find_unused_codes(db, email, code, purpose)
    if not candidates:
        raise InvalidCode()

    record = select_unexpired(candidates)
    if record is None:
        raise Expired()

    record.is_used = True
    db.commit()

    user = user_crud.get_by_email(db, email)
    if user is None:
        if purpose == Purpose.SIGNIN:
            raise UserNotFound()
        user = user_crud.create(db, email)
        logger.info(f"Created user {user.id} for {email}")

    logger.info(f"Verified {purpose.value} OTP for {email}")
    return user
