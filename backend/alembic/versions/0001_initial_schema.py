"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("org_id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=150), nullable=False),
        sa.Column("fullname", sa.String(length=255), nullable=False),
        sa.Column("user_type", sa.String(length=50), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
    )
    op.create_index("ix_users_org_id", "users", ["org_id"])
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "employee",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("org_id", sa.Integer(), nullable=False),
        sa.Column("fullname", sa.String(length=255), nullable=False),
        sa.Column("gender", sa.String(length=20), nullable=True),
        sa.Column("dob", sa.Date(), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("mobile", sa.String(length=30), nullable=True),
        sa.Column("joining_date", sa.Date(), nullable=True),
        sa.Column("emp_code", sa.String(length=50), nullable=True),
        sa.Column("department", sa.String(length=100), nullable=True),
        sa.Column("position", sa.String(length=100), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("blood_group", sa.String(length=10), nullable=True),
        sa.Column("marital_status", sa.String(length=20), nullable=True),
        sa.Column("reporting_manager", sa.String(length=255), nullable=True),
        sa.Column("cityfrom", sa.String(length=100), nullable=True),
        sa.Column("profile_photo", sa.String(), nullable=True),
        sa.Column("about", sa.String(), nullable=True),
        sa.Column("hobbies", sa.String(), nullable=True),
        sa.Column("linkedin", sa.String(length=255), nullable=True),
    )
    op.create_index("ix_employee_user_id", "employee", ["user_id"], unique=True)
    op.create_index("ix_employee_org_id", "employee", ["org_id"])

    op.create_table(
        "employee_manager",
        sa.Column("manager_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("employee_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.PrimaryKeyConstraint("manager_id", "employee_id"),
    )
    op.create_index("ix_employee_manager_manager_id", "employee_manager", ["manager_id"])

    op.create_table(
        "leave_master",
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("fy_casual", sa.Numeric(5, 1), nullable=False),
        sa.Column("fy_sick", sa.Numeric(5, 1), nullable=False),
        sa.Column("fy_earned", sa.Numeric(5, 1), nullable=False),
        sa.Column("pending_casual", sa.Numeric(5, 1), nullable=False),
        sa.Column("pending_sick", sa.Numeric(5, 1), nullable=False),
        sa.Column("pending_earned", sa.Numeric(5, 1), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("pending_casual >= 0", name="ck_leave_master_pending_casual"),
        sa.CheckConstraint("pending_sick >= 0", name="ck_leave_master_pending_sick"),
        sa.CheckConstraint("pending_earned >= 0", name="ck_leave_master_pending_earned"),
    )

    op.create_table(
        "leave_requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("username", sa.String(length=150), nullable=False),
        sa.Column("leave_wfh", sa.String(length=10), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=True),
        sa.Column("duration", sa.String(length=20), nullable=True),
        sa.Column("from_date", sa.Date(), nullable=False),
        sa.Column("to_date", sa.Date(), nullable=False),
        sa.Column("reason", sa.String(), nullable=False),
        sa.Column("status", sa.String(length=20), server_default="Pending", nullable=False),
        sa.Column("decided_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("decided_by", sa.Integer(), nullable=True),
    )
    op.create_index("ix_leave_requests_user_id", "leave_requests", ["user_id"])
    op.create_index("ix_leave_requests_status", "leave_requests", ["status"])
    op.create_index("ix_leave_requests_user_created", "leave_requests", ["user_id", "created_at"])

    op.create_table(
        "job_postings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("org_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("department", sa.String(length=100), nullable=True),
        sa.Column("work_type", sa.String(length=50), nullable=True),
        sa.Column("job_mode", sa.String(length=50), nullable=True),
        sa.Column("salary_min", sa.Numeric(12, 2), nullable=True),
        sa.Column("salary_max", sa.Numeric(12, 2), nullable=True),
        sa.Column("job_summary", sa.String(), nullable=True),
        sa.Column("about_team", sa.String(), nullable=True),
        sa.Column("reporting_to", sa.String(length=255), nullable=True),
        sa.Column("responsibilities", sa.String(), nullable=True),
        sa.Column("skills", sa.String(), nullable=True),
        sa.Column("education_experience", sa.String(), nullable=True),
        sa.Column("about_us", sa.String(), nullable=True),
        sa.Column("status", sa.String(length=20), server_default="Active", nullable=False),
        sa.Column("applications", sa.Integer(), server_default="0", nullable=False),
    )
    op.create_index("ix_job_postings_org_id", "job_postings", ["org_id"])
    op.create_index("ix_job_postings_org_created", "job_postings", ["org_id", "created_at"])

    op.create_table(
        "job_applications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("job_id", sa.Integer(), sa.ForeignKey("job_postings.id", ondelete="CASCADE"), nullable=False),
        sa.Column("org_id", sa.Integer(), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=False),
        sa.Column("current_location", sa.String(length=255), nullable=True),
        sa.Column("current_company", sa.String(length=255), nullable=True),
        sa.Column("linkedin", sa.String(length=255), nullable=True),
        sa.Column("portfolio", sa.String(length=255), nullable=True),
        sa.Column("cover_letter", sa.String(), nullable=True),
        sa.Column("additional_info", sa.String(), nullable=True),
        sa.Column("resume_link", sa.String(length=500), nullable=False),
        sa.Column("status", sa.String(length=20), server_default="Applied", nullable=False),
    )
    op.create_index("ix_job_applications_job_id", "job_applications", ["job_id"])
    op.create_index("ix_job_applications_org_id", "job_applications", ["org_id"])

    op.create_table(
        "audit_log",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("org_id", sa.Integer(), nullable=True),
        sa.Column("actor_id", sa.Integer(), nullable=True),
        sa.Column("entity_type", sa.String(length=50), nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("before_json", sa.JSON(), nullable=True),
        sa.Column("after_json", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_audit_log_org_id", "audit_log", ["org_id"])
    op.create_index("ix_audit_log_created_at", "audit_log", ["created_at"])
    op.create_index("ix_audit_entity", "audit_log", ["entity_type", "entity_id"])


def downgrade() -> None:
    op.drop_table("audit_log")
    op.drop_table("job_applications")
    op.drop_table("job_postings")
    op.drop_table("leave_requests")
    op.drop_table("leave_master")
    op.drop_table("employee_manager")
    op.drop_table("employee")
    op.drop_table("users")
