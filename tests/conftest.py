"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- A fake email service that records sends instead of calling SES
- Factories for users, profiles, jobs and OTP records
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.deps import get_email_service
from app.core.exceptions import MailError
from app.models.columns import utcnow
from app.models.job import Job
from app.models.otp_verification import OtpVerification, Purpose
from app.models.profile import DeveloperProfile, EmployerProfile
from app.models.user import Role, User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeEmailService:
    """Records OTP emails; raises MailError when ``fail`` is set."""

    def __init__(self):
        self.sent = []
        self.fail = False

    def send_otp_email(self, to_email, otp_code, purpose):
        if self.fail:
            raise MailError("Email address is not verified")
        self.sent.append({"to": to_email, "code": otp_code, "purpose": purpose})


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def email_service():
    return FakeEmailService()


@pytest.fixture
def client(db_session, email_service):
    """
    FastAPI test client with overridden database and email dependencies.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: email_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Factory for users; role is left unset unless given."""
    def _make_user(email="dev@example.com", role=None):
        user = User(email=email, role=role)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


@pytest.fixture
def make_developer(db_session, make_user):
    """Factory for developer profiles, each with its own user."""
    def _make_developer(email="dev@example.com", created_at=None, **fields):
        user = make_user(email=email, role=Role.DEVELOPER)
        profile = DeveloperProfile(user_id=user.id, email=email)
        profile.apply_fields(fields)
        if created_at is not None:
            profile.created_at = created_at
        db_session.add(profile)
        db_session.commit()
        db_session.refresh(profile)
        return profile
    return _make_developer


@pytest.fixture
def make_employer(db_session, make_user):
    """Factory for employer profiles, each with its own user."""
    def _make_employer(email="hr@acme.com", created_at=None, **fields):
        user = make_user(email=email, role=Role.EMPLOYER)
        profile = EmployerProfile(user_id=user.id, email=email)
        profile.apply_fields(fields)
        if created_at is not None:
            profile.created_at = created_at
        db_session.add(profile)
        db_session.commit()
        db_session.refresh(profile)
        return profile
    return _make_employer


@pytest.fixture
def make_job(db_session):
    """Factory for jobs owned by an existing employer profile."""
    def _make_job(employer, created_at=None, **fields):
        job = Job(employer_id=employer.id)
        job.apply_fields(fields)
        if created_at is not None:
            job.created_at = created_at
        db_session.add(job)
        db_session.commit()
        db_session.refresh(job)
        return job
    return _make_job


@pytest.fixture
def make_otp(db_session):
    """Factory for OTP records; ``expires_in`` is in minutes and may be negative."""
    def _make_otp(email="dev@example.com", code="123456", purpose=Purpose.SIGNUP, expires_in=15, is_used=False, created_at=None):
        otp = OtpVerification(
            email=email,
            otp_code=code,
            purpose=purpose,
            expires_at=utcnow() + timedelta(minutes=expires_in),
            is_used=is_used
        )
        if created_at is not None:
            otp.created_at = created_at
        db_session.add(otp)
        db_session.commit()
        db_session.refresh(otp)
        return otp
    return _make_otp


@pytest.fixture
def sample_job_data():
    """Sample job posting for testing"""
    return {
        "title": "Senior Python Developer",
        "description": "Build and run our hiring platform APIs with FastAPI and PostgreSQL.",
        "location": "San Francisco, CA (Remote)",
        "job_type": "full-time",
        "experience_level": "senior",
        "salary_min": 150000,
        "salary_max": 190000,
        "skills_required": ["Python", "FastAPI", "PostgreSQL"]
    }
