"""
AWS SES Email Service for sending one-time password emails.

Handles email formatting, template rendering, and AWS SES integration.
"""

import logging
from typing import Tuple
import boto3
from botocore.exceptions import ClientError, BotoCoreError
from app.core.config import settings
from app.core.exceptions import MailError
from app.models.otp_verification import Purpose

logger = logging.getLogger(__name__)

SUBJECTS = {
    Purpose.SIGNUP: "Welcome to ConnectHire - Verify Your Email",
    Purpose.SIGNIN: "ConnectHire - Sign In Verification",
}


class EmailService:
    """
    Service for sending emails via AWS SES.

    Built once at application startup and injected into endpoints.
    """

    def __init__(self):
        """Initialize AWS SES client"""
        session_kwargs = {
            'region_name': settings.AWS_REGION,
        }

        # Add credentials if provided (otherwise uses IAM role)
        if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
            session_kwargs['aws_access_key_id'] = settings.AWS_ACCESS_KEY_ID
            session_kwargs['aws_secret_access_key'] = settings.AWS_SECRET_ACCESS_KEY

        self.ses_client = boto3.client('ses', **session_kwargs)

    @property
    def sender(self) -> str:
        return f'"{settings.AWS_SES_FROM_NAME}" <{settings.AWS_SES_FROM_EMAIL}>'

    def send_otp_email(self, to_email: str, otp_code: str, purpose: Purpose) -> None:
        """
        Send a one-time password email.

        Args:
            to_email: Recipient email address
            otp_code: 6-digit code
            purpose: SIGNUP or SIGNIN; selects subject and wording

        Raises:
            MailError: If SES rejects or fails to send the message
        """
        subject, html_body, text_body = build_otp_email(otp_code, purpose)

        try:
            response = self.ses_client.send_email(
                Source=self.sender,
                Destination={'ToAddresses': [to_email]},
                Message={
                    'Subject': {'Data': subject, 'Charset': 'UTF-8'},
                    'Body': {
                        'Html': {'Data': html_body, 'Charset': 'UTF-8'},
                        'Text': {'Data': text_body, 'Charset': 'UTF-8'}
                    }
                }
            )

        except ClientError as e:
            error_code = e.response['Error']['Code']
            error_message = e.response['Error']['Message']
            logger.error(f"AWS SES ClientError: {error_code} - {error_message}")

            if error_code == 'MailFromDomainNotVerified':
                logger.error("Sender email not verified in SES")

            raise MailError(error_message) from e

        except BotoCoreError as e:
            logger.error(f"AWS BotoCoreError: {str(e)}")
            raise MailError(str(e)) from e

        message_id = response.get('MessageId')
        logger.info(f"OTP email sent to {to_email} (MessageId: {message_id})")


def build_otp_email(code: str, purpose: Purpose) -> Tuple[str, str, str]:
    """
    Build the subject, HTML body and plain-text body for an OTP email.

    Returns:
        Tuple[str, str, str]: (subject, html, text)
    """
    subject = SUBJECTS[purpose]

    if purpose == Purpose.SIGNUP:
        heading = "Welcome to ConnectHire!"
        intro = "Thank you for joining ConnectHire! To complete your registration, please use the verification code below:"
    else:
        heading = "Sign In to ConnectHire"
        intro = "To sign in to your account, please use the verification code below:"

    html = f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>ConnectHire Verification</title>
</head>
<body style="margin: 0; padding: 0; font-family: Arial, sans-serif; background-color: #f4f4f4;">
    <table role="presentation" style="width: 100%; border-collapse: collapse;">
        <tr>
            <td align="center" style="padding: 40px 0;">
                <table role="presentation" style="width: 600px; border-collapse: collapse; background-color: #ffffff; border-radius: 10px;">
                    <!-- Header -->
                    <tr>
                        <td style="padding: 30px; text-align: center; background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: #ffffff; border-radius: 10px 10px 0 0;">
                            <h1 style="margin: 0; font-size: 28px;">ConnectHire</h1>
                            <p style="margin: 8px 0 0 0;">Connect Developers with Employers</p>
                        </td>
                    </tr>

                    <!-- Body -->
                    <tr>
                        <td style="padding: 30px 40px;">
                            <h2 style="margin: 0 0 20px 0; color: #333333;">{heading}</h2>
                            <p style="margin: 0 0 30px 0; color: #666666; font-size: 16px; line-height: 1.5;">
                                {intro}
                            </p>

                            <!-- Verification Code -->
                            <div style="background-color: #667eea; border-radius: 10px; padding: 20px; text-align: center; margin: 0 0 30px 0;">
                                <div style="font-size: 32px; font-weight: 700; letter-spacing: 5px; color: #ffffff;">
                                    {code}
                                </div>
                            </div>

                            <p style="margin: 0 0 20px 0; color: #666666; font-size: 14px;">
                                <strong>This code will expire in {settings.OTP_EXPIRATION_MINUTES} minutes.</strong>
                            </p>

                            <p style="margin: 0; color: #999999; font-size: 13px;">
                                If you didn't request this code, please ignore this email.
                            </p>
                        </td>
                    </tr>

                    <!-- Footer -->
                    <tr>
                        <td style="padding: 20px 40px; background-color: #f8f9fa; border-radius: 0 0 10px 10px;">
                            <p style="margin: 0; color: #999999; font-size: 12px; text-align: center;">
                                This is an automated email, please do not reply.
                            </p>
                        </td>
                    </tr>
                </table>
            </td>
        </tr>
    </table>
</body>
</html>
"""

    text = f"""{heading}

{intro}

{code}

This code will expire in {settings.OTP_EXPIRATION_MINUTES} minutes.

If you didn't request this code, please ignore this email.

---
The ConnectHire Team
"""
    return subject, html, text
