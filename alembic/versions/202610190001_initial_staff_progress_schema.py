"""Initial schema for staff, onboarding documents, training and activity

Revision ID: 202610190001
Revises:
Create Date: 2026-10-19 00:01:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "202610190001"
down_revision = None
branch_labels = None
depends_on = None

user_role_enum = sa.Enum("staff", "admin", name="user_role")
document_type_enum = sa.Enum(
    "onboarding",
    "handbook",
    "hr_records",
    "training",
    "policy",
    "other",
    name="document_type",
)
PROGRESS_STATUSES = ("pending", "submitted", "approved", "completed", "in_progress", "expired")
progress_status_enum = sa.Enum(*PROGRESS_STATUSES, name="progress_status")


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=None if nullable else sa.func.now(),
        nullable=nullable,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("first_name", sa.String(length=128), nullable=False),
        sa.Column("last_name", sa.String(length=128), nullable=False),
        sa.Column("role", user_role_enum, nullable=False, server_default="staff"),
        sa.Column("department", sa.String(length=128), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            "onboarding_completed", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        _timestamp("created_at"),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "onboarding_documents",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("document_type", document_type_enum, nullable=False),
        sa.Column("is_required", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
    )

    op.create_table(
        "document_acknowledgments",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "document_id",
            sa.String(length=36),
            sa.ForeignKey("onboarding_documents.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "user_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("status", progress_status_enum, nullable=False, server_default="pending"),
        sa.Column("signature_url", sa.String(length=1024), nullable=True),
        sa.Column("form_data", sa.JSON(), nullable=True),
        _timestamp("acknowledged_at", nullable=True),
        _timestamp("completed_at", nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )

    op.create_table(
        "training_modules",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_mandatory", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("youtube_video_id", sa.String(length=64), nullable=True),
        sa.Column("expiry_months", sa.Integer(), nullable=True),
        _timestamp("created_at"),
    )

    op.create_table(
        "training_assignments",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "module_id",
            sa.String(length=36),
            sa.ForeignKey("training_modules.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "user_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "status",
            postgresql.ENUM(*PROGRESS_STATUSES, name="progress_status", create_type=False),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("is_mandatory", sa.Boolean(), nullable=False, server_default=sa.false()),
        _timestamp("deadline", nullable=True),
        sa.Column("score", sa.Float(), nullable=True),
        sa.Column("watched_percentage", sa.Float(), nullable=True),
        _timestamp("completed_at", nullable=True),
        _timestamp("assigned_at"),
        _timestamp("updated_at"),
        sa.UniqueConstraint("module_id", "user_id", name="uq_training_assignment"),
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), nullable=True, index=True),
        sa.Column("action", sa.String(length=64), nullable=False),
        sa.Column("changes", sa.JSON(), nullable=True),
        _timestamp("created_at"),
    )
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"])

    op.create_table(
        "hr_records",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("record_type", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=True),
        _timestamp("acknowledged_at", nullable=True),
        _timestamp("created_at"),
    )

    op.create_table(
        "contact_inquiries",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False, index=True),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("subject", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="new"),
        _timestamp("created_at"),
    )


def downgrade() -> None:
    op.drop_table("contact_inquiries")
    op.drop_table("hr_records")
    op.drop_index("ix_audit_logs_created_at", table_name="audit_logs")
    op.drop_table("audit_logs")
    op.drop_table("training_assignments")
    op.drop_table("training_modules")
    op.drop_table("document_acknowledgments")
    op.drop_table("onboarding_documents")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    progress_status_enum.drop(op.get_bind(), checkfirst=True)
    document_type_enum.drop(op.get_bind(), checkfirst=True)
    user_role_enum.drop(op.get_bind(), checkfirst=True)
