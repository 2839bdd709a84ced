"""initial_job_board_schema

Creates users, OTP, profile, job, application and skill tables and seeds
the skills reference list.

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


SEED_SKILLS = [
    ("JavaScript", "Programming Languages"),
    ("TypeScript", "Programming Languages"),
    ("Python", "Programming Languages"),
    ("Java", "Programming Languages"),
    ("Go", "Programming Languages"),
    ("Rust", "Programming Languages"),
    ("C#", "Programming Languages"),
    ("React", "Frontend"),
    ("Vue.js", "Frontend"),
    ("Angular", "Frontend"),
    ("HTML/CSS", "Frontend"),
    ("Node.js", "Backend"),
    ("Django", "Backend"),
    ("FastAPI", "Backend"),
    ("Spring Boot", "Backend"),
    ("PostgreSQL", "Databases"),
    ("MySQL", "Databases"),
    ("MongoDB", "Databases"),
    ("Redis", "Databases"),
    ("AWS", "Cloud & DevOps"),
    ("Docker", "Cloud & DevOps"),
    ("Kubernetes", "Cloud & DevOps"),
    ("Terraform", "Cloud & DevOps"),
    ("React Native", "Mobile"),
    ("Flutter", "Mobile"),
    ("Machine Learning", "Data"),
    ("Data Analysis", "Data"),
]


def upgrade() -> None:
    """Create the job board schema."""
    user_role = postgresql.ENUM('developer', 'employer', name='user_role')
    otp_purpose = postgresql.ENUM('signup', 'signin', name='otp_purpose')
    application_status = postgresql.ENUM('pending', 'reviewed', 'accepted', 'rejected', name='application_status')

    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('role', user_role, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'otp_verification',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('otp_code', sa.String(length=6), nullable=False),
        sa.Column('purpose', otp_purpose, nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_used', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_otp_verification_email', 'otp_verification', ['email'])
    op.create_index('ix_otp_verification_lookup', 'otp_verification', ['email', 'otp_code', 'purpose'])

    op.create_table(
        'developer_profiles',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('photo_url', sa.String(), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('preferred_job_location', sa.String(), nullable=True),
        sa.Column('experience', sa.String(), nullable=True),
        sa.Column('skills', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('short_description', sa.Text(), nullable=True),
        sa.Column('github_url', sa.String(), nullable=True),
        sa.Column('linkedin_url', sa.String(), nullable=True),
        sa.Column('portfolio_url', sa.String(), nullable=True),
        sa.Column('resume_url', sa.String(), nullable=True),
        sa.Column('extra_fields', postgresql.JSONB(), server_default='{}', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_developer_profiles_user_id', 'developer_profiles', ['user_id'], unique=True)
    op.create_index('ix_developer_profiles_created_at', 'developer_profiles', ['created_at'])
    op.create_index('ix_developer_profiles_skills', 'developer_profiles', ['skills'], postgresql_using='gin')

    op.create_table(
        'employer_profiles',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('company_name', sa.String(), nullable=True),
        sa.Column('company_location', sa.String(), nullable=True),
        sa.Column('company_logo_url', sa.String(), nullable=True),
        sa.Column('company_description', sa.Text(), nullable=True),
        sa.Column('company_website', sa.String(), nullable=True),
        sa.Column('company_size', sa.String(), nullable=True),
        sa.Column('industry', sa.String(), nullable=True),
        sa.Column('extra_fields', postgresql.JSONB(), server_default='{}', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_employer_profiles_user_id', 'employer_profiles', ['user_id'], unique=True)
    op.create_index('ix_employer_profiles_created_at', 'employer_profiles', ['created_at'])

    op.create_table(
        'jobs',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('employer_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('employer_profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('job_type', sa.String(), nullable=True),
        sa.Column('experience_level', sa.String(), nullable=True),
        sa.Column('salary_min', sa.Integer(), nullable=True),
        sa.Column('salary_max', sa.Integer(), nullable=True),
        sa.Column('skills_required', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('extra_fields', postgresql.JSONB(), server_default='{}', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_jobs_employer_id', 'jobs', ['employer_id'])
    op.create_index('ix_jobs_title', 'jobs', ['title'])
    op.create_index('ix_jobs_created_at', 'jobs', ['created_at'])
    op.create_index('ix_jobs_skills_required', 'jobs', ['skills_required'], postgresql_using='gin')

    op.create_table(
        'applications',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('job_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('developer_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('developer_profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('cover_letter', sa.Text(), nullable=True),
        sa.Column('status', application_status, server_default='pending', nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('applied_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_applications_job_id', 'applications', ['job_id'])
    op.create_index('ix_applications_developer_id', 'applications', ['developer_id'])
    op.create_index('ix_applications_applied_at', 'applications', ['applied_at'])

    skills = op.create_table(
        'skills',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('name', sa.String(), nullable=False, unique=True),
        sa.Column('category', sa.String(), nullable=True),
    )
    op.create_index('ix_skills_id', 'skills', ['id'])
    op.create_index('ix_skills_category', 'skills', ['category'])

    op.bulk_insert(skills, [{"name": name, "category": category} for name, category in SEED_SKILLS])


def downgrade() -> None:
    """Drop the job board schema."""
    op.drop_table('skills')
    op.drop_table('applications')
    op.drop_table('jobs')
    op.drop_table('employer_profiles')
    op.drop_table('developer_profiles')
    op.drop_table('otp_verification')
    op.drop_table('users')

    op.execute("DROP TYPE IF EXISTS application_status")
    op.execute("DROP TYPE IF EXISTS otp_purpose")
    op.execute("DROP TYPE IF EXISTS user_role")
