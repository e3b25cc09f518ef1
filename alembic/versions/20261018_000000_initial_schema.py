"""Initial schema for Job Fair Hub

Revision ID: 20261018_000000
Revises: None
Create Date: 2026-10-18 00:00:00.000000

This is the initial migration that creates all tables used by the Job Fair
Hub service:
- Accounts and profiles (users, job seekers, employers, security personnel)
- Events, checkpoints, job openings, booths and interview slots
- Check-in records, booth assignments, shortlists and candidate interactions
- Security incidents, notifications and the admin audit log

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import List, Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261018_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id(length: int = 64) -> sa.Column:
    return sa.Column("id", sa.String(length), nullable=False)


def _timestamps(updated: bool = True) -> List[sa.Column]:
    columns = [sa.Column("created_at", sa.DateTime(), nullable=False)]
    if updated:
        columns.append(sa.Column("updated_at", sa.DateTime(), nullable=False))
    return columns


def _indexes(table: str, *columns: str, unique: Sequence[str] = ()) -> None:
    for column in columns:
        op.create_index(f"ix_{table}_{column}", table, [column], unique=column in unique)


def _fk(column: str, table: str, ondelete: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint([column], [f"{table}.id"], ondelete=ondelete)


def upgrade() -> None:
    """Create all tables."""

    # Create users table
    op.create_table(
        "users",
        _id(),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("email_verified", sa.DateTime(), nullable=True),
        sa.Column("image", sa.String(), nullable=True),
        sa.Column("role", sa.String(32), nullable=False),
        sa.Column("phone_number", sa.String(32), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("last_active", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    _indexes("users", "email", "role", "created_at", unique=("email",))

    # Create job_seekers table
    op.create_table(
        "job_seekers",
        _id(),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("bio", sa.String(), nullable=True),
        sa.Column("cv_url", sa.String(), nullable=True),
        sa.Column("skills", JSONB(), nullable=False, server_default="[]"),
        sa.Column("experience", sa.String(), nullable=True),
        sa.Column("education", sa.String(), nullable=True),
        sa.Column("pin", sa.String(6), nullable=True),
        sa.Column("ticket_number", sa.String(32), nullable=True),
        sa.Column("pin_generated_at", sa.DateTime(), nullable=True),
        sa.Column("pin_expires_at", sa.DateTime(), nullable=True),
        sa.Column("registration_status", sa.String(32), nullable=False),
        sa.Column("assignment_status", sa.String(32), nullable=False),
        sa.Column("priority_level", sa.String(32), nullable=False),
        sa.Column("interest_categories", JSONB(), nullable=False, server_default="[]"),
        sa.Column("linkedin_url", sa.String(), nullable=True),
        sa.Column("portfolio_url", sa.String(), nullable=True),
        *_timestamps(),
        _fk("user_id", "users", "CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _indexes(
        "job_seekers",
        "user_id",
        "pin",
        "ticket_number",
        "registration_status",
        "assignment_status",
        "created_at",
        unique=("pin", "ticket_number"),
    )

    # Create employers table
    op.create_table(
        "employers",
        _id(),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("company_name", sa.String(255), nullable=False),
        sa.Column("company_description", sa.String(), nullable=True),
        sa.Column("industry", sa.String(128), nullable=True),
        sa.Column("company_size", sa.String(32), nullable=True),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("logo_url", sa.String(), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("contact_person", sa.String(255), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("contact_phone", sa.String(32), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        _fk("user_id", "users", "CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _indexes("employers", "user_id", "is_verified", "created_at")

    # Create security_personnel table
    op.create_table(
        "security_personnel",
        _id(),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("badge_number", sa.String(64), nullable=False),
        sa.Column("department", sa.String(128), nullable=True),
        sa.Column("clearance_level", sa.String(32), nullable=False),
        sa.Column("assigned_checkpoints", JSONB(), nullable=False, server_default="[]"),
        sa.Column("is_on_duty", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("shift_start", sa.DateTime(), nullable=True),
        sa.Column("shift_end", sa.DateTime(), nullable=True),
        *_timestamps(),
        _fk("user_id", "users", "CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _indexes("security_personnel", "user_id", "badge_number", unique=("badge_number",))

    # Create events table
    op.create_table(
        "events",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("start_date", sa.DateTime(), nullable=False),
        sa.Column("end_date", sa.DateTime(), nullable=False),
        sa.Column("venue", sa.String(255), nullable=False),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("max_attendees", sa.Integer(), nullable=True),
        sa.Column("registration_deadline", sa.DateTime(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("event_type", sa.String(32), nullable=False),
        sa.Column("created_by", sa.String(64), nullable=True),
        *_timestamps(),
        _fk("created_by", "users", "SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    _indexes("events", "start_date", "is_active")

    # Create checkpoints table
    op.create_table(
        "checkpoints",
        _id(128),
        sa.Column("event_id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("checkpoint_type", sa.String(32), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("requires_verification", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("max_capacity", sa.Integer(), nullable=True),
        sa.Column("current_occupancy", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        _fk("event_id", "events", "CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _indexes("checkpoints", "event_id")

    # Create booths table
    op.create_table(
        "booths",
        _id(),
        sa.Column("event_id", sa.String(64), nullable=False),
        sa.Column("employer_id", sa.String(64), nullable=True),
        sa.Column("booth_number", sa.String(32), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("size", sa.String(32), nullable=True),
        sa.Column("equipment", JSONB(), nullable=False, server_default="[]"),
        sa.Column("special_requirements", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        _fk("event_id", "events", "CASCADE"),
        _fk("employer_id", "employers", "CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _indexes("booths", "event_id", "employer_id")

    # Create jobs table
    op.create_table(
        "jobs",
        _id(),
        sa.Column("employer_id", sa.String(64), nullable=False),
        sa.Column("event_id", sa.String(64), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("requirements", JSONB(), nullable=False, server_default="[]"),
        sa.Column("benefits", JSONB(), nullable=False, server_default="[]"),
        sa.Column("salary_range", sa.String(128), nullable=True),
        sa.Column("job_type", sa.String(32), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("category", sa.String(128), nullable=True),
        sa.Column("experience_level", sa.String(32), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("application_deadline", sa.DateTime(), nullable=True),
        *_timestamps(),
        _fk("employer_id", "employers", "CASCADE"),
        _fk("event_id", "events", "CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _indexes("jobs", "employer_id", "event_id", "category", "is_active")

    # Create interview_slots table
    op.create_table(
        "interview_slots",
        _id(),
        sa.Column("booth_id", sa.String(64), nullable=False),
        sa.Column("job_id", sa.String(64), nullable=True),
        sa.Column("start_time", sa.DateTime(), nullable=False),
        sa.Column("end_time", sa.DateTime(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("is_booked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("interviewer_name", sa.String(255), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        *_timestamps(),
        _fk("booth_id", "booths", "CASCADE"),
        _fk("job_id", "jobs", "SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    _indexes("interview_slots", "booth_id", "start_time")

    # Create attendance_records table
    op.create_table(
        "attendance_records",
        _id(),
        sa.Column("job_seeker_id", sa.String(64), nullable=False),
        sa.Column("event_id", sa.String(64), nullable=False),
        sa.Column("checkpoint_id", sa.String(128), nullable=True),
        sa.Column("verified_by", sa.String(64), nullable=True),
        sa.Column("check_in_time", sa.DateTime(), nullable=False),
        sa.Column("check_out_time", sa.DateTime(), nullable=True),
        sa.Column("verification_method", sa.String(32), nullable=False),
        sa.Column("verification_data", sa.String(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("ip_address", sa.String(64), nullable=True),
        sa.Column("device_info", sa.String(), nullable=True),
        *_timestamps(updated=False),
        _fk("job_seeker_id", "job_seekers", "CASCADE"),
        _fk("event_id", "events", "CASCADE"),
        _fk("checkpoint_id", "checkpoints", "SET NULL"),
        _fk("verified_by", "security_personnel", "SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    _indexes("attendance_records", "job_seeker_id", "event_id", "verified_by", "check_in_time", "status")

    # Create booth_assignments table
    op.create_table(
        "booth_assignments",
        _id(),
        sa.Column("job_seeker_id", sa.String(64), nullable=False),
        sa.Column("booth_id", sa.String(64), nullable=False),
        sa.Column("interview_slot_id", sa.String(64), nullable=True),
        sa.Column("assigned_by", sa.String(64), nullable=False),
        sa.Column("assigned_at", sa.DateTime(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("interview_date", sa.DateTime(), nullable=True),
        sa.Column("interview_time", sa.String(16), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("priority", sa.String(16), nullable=False),
        sa.Column("notification_sent", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        _fk("job_seeker_id", "job_seekers", "CASCADE"),
        _fk("booth_id", "booths", "CASCADE"),
        _fk("interview_slot_id", "interview_slots", "SET NULL"),
        _fk("assigned_by", "users", "CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _indexes("booth_assignments", "job_seeker_id", "booth_id", "status")

    # Create shortlists table
    op.create_table(
        "shortlists",
        _id(),
        sa.Column("employer_id", sa.String(64), nullable=False),
        sa.Column("job_id", sa.String(64), nullable=True),
        sa.Column("event_id", sa.String(64), nullable=True),
        sa.Column("job_seeker_id", sa.String(64), nullable=False),
        sa.Column("list_name", sa.String(255), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("priority", sa.String(16), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("tags", JSONB(), nullable=False, server_default="[]"),
        sa.Column("added_by", sa.String(64), nullable=False),
        *_timestamps(),
        _fk("employer_id", "employers", "CASCADE"),
        _fk("job_id", "jobs", "CASCADE"),
        _fk("event_id", "events", "CASCADE"),
        _fk("job_seeker_id", "job_seekers", "CASCADE"),
        _fk("added_by", "users", "CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _indexes("shortlists", "employer_id", "job_seeker_id")

    # Create candidate_interactions table
    op.create_table(
        "candidate_interactions",
        _id(),
        sa.Column("employer_id", sa.String(64), nullable=False),
        sa.Column("job_seeker_id", sa.String(64), nullable=False),
        sa.Column("event_id", sa.String(64), nullable=True),
        sa.Column("interaction_type", sa.String(32), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.Column("details", JSONB(), nullable=False, server_default="{}"),
        sa.Column("performed_by", sa.String(64), nullable=False),
        *_timestamps(updated=False),
        _fk("employer_id", "employers", "CASCADE"),
        _fk("job_seeker_id", "job_seekers", "CASCADE"),
        _fk("event_id", "events", "CASCADE"),
        _fk("performed_by", "users", "CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _indexes("candidate_interactions", "employer_id", "job_seeker_id", "created_at")

    # Create security_incidents table
    op.create_table(
        "security_incidents",
        _id(),
        sa.Column("event_id", sa.String(64), nullable=False),
        sa.Column("reported_by", sa.String(64), nullable=False),
        sa.Column("incident_type", sa.String(32), nullable=False),
        sa.Column("severity", sa.String(32), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("involved_persons", JSONB(), nullable=False, server_default="[]"),
        sa.Column("action_taken", sa.String(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("resolved_by", sa.String(64), nullable=True),
        sa.Column("resolved_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        _fk("event_id", "events", "CASCADE"),
        _fk("reported_by", "security_personnel", "CASCADE"),
        _fk("resolved_by", "users", "SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    _indexes("security_incidents", "event_id", "status", "created_at")

    # Create notifications table
    op.create_table(
        "notifications",
        _id(),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.String(), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("action_url", sa.String(), nullable=True),
        sa.Column("details", JSONB(), nullable=False, server_default="{}"),
        sa.Column("expires_at", sa.DateTime(), nullable=True),
        *_timestamps(updated=False),
        _fk("user_id", "users", "CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _indexes("notifications", "user_id", "is_read", "created_at")

    # Create system_logs table
    op.create_table(
        "system_logs",
        _id(),
        sa.Column("user_id", sa.String(64), nullable=True),
        sa.Column("action", sa.String(128), nullable=False),
        sa.Column("resource", sa.String(128), nullable=False),
        sa.Column("resource_id", sa.String(128), nullable=True),
        sa.Column("details", JSONB(), nullable=False, server_default="{}"),
        sa.Column("ip_address", sa.String(64), nullable=True),
        sa.Column("user_agent", sa.String(), nullable=True),
        sa.Column("success", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("error_message", sa.String(), nullable=True),
        *_timestamps(updated=False),
        _fk("user_id", "users", "SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    _indexes("system_logs", "user_id", "created_at")


def downgrade() -> None:
    """Drop all tables."""
    for table in (
        "system_logs",
        "notifications",
        "security_incidents",
        "candidate_interactions",
        "shortlists",
        "booth_assignments",
        "attendance_records",
        "interview_slots",
        "jobs",
        "booths",
        "checkpoints",
        "events",
        "security_personnel",
        "employers",
        "job_seekers",
        "users",
    ):
        op.drop_table(table)
