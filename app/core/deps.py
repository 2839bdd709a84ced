"""
FastAPI dependencies for the clients built at startup.

The database session factory and the email service are created once in the
application lifespan and stored on ``app.state``; endpoints receive them
through these dependencies, which tests override with fakes.
"""

from fastapi import Request

from app.services.email_service import EmailService


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service
