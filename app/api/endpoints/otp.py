"""
One-time password endpoints.

Handles sending and verifying the 6-digit codes used for signup and signin.
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.deps import get_email_service
from app.core.exceptions import MailError, StorageError
from app.core.verification import issue_otp, verify_otp
from app.models.columns import as_utc
from app.schemas.otp import (
    SendOtpRequest,
    SendOtpResponse,
    UserSummary,
    VerifyOtpRequest,
    VerifyOtpResponse,
)
from app.services.email_service import EmailService

router = APIRouter(tags=["OTP"])
logger = logging.getLogger(__name__)


@router.post("/send-otp", response_model=SendOtpResponse, response_model_exclude_none=True)
def send_otp(
    request: SendOtpRequest,
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service)
):
    """
    Generate, store and email a one-time code.

    A new code is stored on every call. If the email cannot be sent, the
    request still succeeds in development mode and the code is returned in
    the response so local work is not blocked.

    Raises:
        StorageError: The code could not be stored
        MailError: The email could not be sent (outside development)
    """
    try:
        otp = issue_otp(db, request.email, request.purpose)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error when storing OTP: {e}")
        raise StorageError(f"Failed to store OTP: {e}")

    expires_at = as_utc(otp.expires_at)

    try:
        email_service.send_otp_email(request.email, otp.otp_code, request.purpose)
    except MailError as e:
        logger.error(f"Email sending error for {request.email}: {e.message}")

        if not settings.is_development:
            raise MailError(f"Failed to send email: {e.message}. Please try again.")

        return SendOtpResponse(
            message="OTP stored successfully (email failed)",
            expires_at=expires_at,
            error=e.message,
            otp=otp.otp_code
        )

    return SendOtpResponse(message="OTP sent successfully", expires_at=expires_at)


@router.post("/verify-otp", response_model=VerifyOtpResponse)
def verify_otp_code(request: VerifyOtpRequest, db: Session = Depends(get_db)):
    """
    Verify a code and return the user it signs in.

    Signup verification creates the user on first success. Signin
    verification requires the user to exist already.

    Raises:
        InvalidCode: No unused code matches
        Expired: Every matching code has expired
        UserNotFound: Signin for an email without an account
    """
    try:
        user = verify_otp(db, request.email, request.otp, request.purpose)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error when verifying OTP: {e}")
        raise StorageError("Database error when verifying OTP")

    return VerifyOtpResponse(
        message="OTP verified successfully",
        user=UserSummary.model_validate(user)
    )
