"""
Database models package.
"""

from app.models.user import User, Role
from app.models.otp_verification import OtpVerification, Purpose
from app.models.profile import DeveloperProfile, EmployerProfile
from app.models.job import Job
from app.models.application import Application, ApplicationStatus
from app.models.skill import Skill

__all__ = [
    "User",
    "Role",
    "OtpVerification",
    "Purpose",
    "DeveloperProfile",
    "EmployerProfile",
    "Job",
    "Application",
    "ApplicationStatus",
    "Skill",
]
