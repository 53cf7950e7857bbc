"""initial schema: accounts, specialties, videos, selections, acceptances

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

Creates every table of the service. The unique constraints on
school_selections, acceptances and videos back the ON CONFLICT statements
used by the repositories.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create enum types and all tables."""
    bind = op.get_bind()

    gender_enum = postgresql.ENUM("male", "female", name="gender", create_type=False)
    flight_ticket_enum = postgresql.ENUM(
        "full", "half", "none", name="flight_ticket_provision", create_type=False
    )
    acceptance_status_enum = postgresql.ENUM(
        "pending", "approved", "rejected", name="acceptance_status", create_type=False
    )
    gender_enum.create(bind, checkfirst=True)
    flight_ticket_enum.create(bind, checkfirst=True)
    acceptance_status_enum.create(bind, checkfirst=True)

    op.create_table(
        "admins",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("full_name", sa.String(length=200), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_admins_email", "admins", ["email"], unique=True)

    op.create_table(
        "specialties",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("name_ar", sa.String(length=100), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "teachers",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        sa.Column("full_name", sa.String(length=200), nullable=False),
        sa.Column("phone_number", sa.String(length=20), nullable=False),
        sa.Column("national_id", sa.String(length=50), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("gender", gender_enum, nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("academic_qualification", sa.String(length=200), nullable=False),
        sa.Column("diploma", sa.String(length=200), nullable=True),
        sa.Column(
            "courses",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column(
            "taught_stages",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column(
            "worked_in_oman_before", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("age >= 18", name="ck_teachers_age_adult"),
    )
    op.create_index("ix_teachers_phone_number", "teachers", ["phone_number"], unique=True)
    op.create_index("ix_teachers_national_id", "teachers", ["national_id"], unique=True)

    op.create_table(
        "teacher_specialties",
        sa.Column("teacher_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("specialty_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(["teacher_id"], ["teachers.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["specialty_id"], ["specialties.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("teacher_id", "specialty_id"),
    )

    op.create_table(
        "schools",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        sa.Column("manager_name", sa.String(length=200), nullable=False),
        sa.Column("whatsapp_phone", sa.String(length=20), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("school_name", sa.String(length=200), nullable=False),
        sa.Column("school_location", sa.String(length=300), nullable=False),
        sa.Column(
            "stages_needed",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column(
            "specialties_needed",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("expected_salary_range", sa.String(length=100), nullable=False),
        sa.Column("flight_ticket_provided", flight_ticket_enum, nullable=False),
        sa.Column("housing_provided", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("housing_allowance", sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_schools_whatsapp_phone", "schools", ["whatsapp_phone"], unique=True)
    op.create_index("ix_schools_school_name", "schools", ["school_name"], unique=False)

    op.create_table(
        "videos",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        sa.Column("teacher_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("specialty_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("video_url", sa.String(length=1000), nullable=False),
        sa.Column(
            "uploaded_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["teacher_id"], ["teachers.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["specialty_id"], ["specialties.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("teacher_id", "specialty_id", name="uq_videos_teacher_specialty"),
    )
    op.create_index("ix_videos_teacher_id", "videos", ["teacher_id"], unique=False)
    op.create_index("ix_videos_uploaded_at", "videos", ["uploaded_at"], unique=False)

    op.create_table(
        "school_selections",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        sa.Column("school_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("teacher_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "selected_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["teacher_id"], ["teachers.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "school_id", "teacher_id", name="uq_school_selections_school_teacher"
        ),
    )
    op.create_index(
        "ix_school_selections_school_selected_at",
        "school_selections",
        ["school_id", "selected_at"],
        unique=False,
    )

    op.create_table(
        "acceptances",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        sa.Column("school_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("teacher_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "accepted_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "status",
            acceptance_status_enum,
            nullable=False,
            server_default="pending",
        ),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["teacher_id"], ["teachers.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("school_id", "teacher_id", name="uq_acceptances_school_teacher"),
    )
    op.create_index("ix_acceptances_status", "acceptances", ["status"], unique=False)
    op.create_index("ix_acceptances_accepted_at", "acceptances", ["accepted_at"], unique=False)


def downgrade() -> None:
    """Drop all tables and enum types."""
    op.drop_index("ix_acceptances_accepted_at", table_name="acceptances")
    op.drop_index("ix_acceptances_status", table_name="acceptances")
    op.drop_table("acceptances")

    op.drop_index("ix_school_selections_school_selected_at", table_name="school_selections")
    op.drop_table("school_selections")

    op.drop_index("ix_videos_uploaded_at", table_name="videos")
    op.drop_index("ix_videos_teacher_id", table_name="videos")
    op.drop_table("videos")

    op.drop_index("ix_schools_school_name", table_name="schools")
    op.drop_index("ix_schools_whatsapp_phone", table_name="schools")
    op.drop_table("schools")

    op.drop_table("teacher_specialties")

    op.drop_index("ix_teachers_national_id", table_name="teachers")
    op.drop_index("ix_teachers_phone_number", table_name="teachers")
    op.drop_table("teachers")

    op.drop_table("specialties")

    op.drop_index("ix_admins_email", table_name="admins")
    op.drop_table("admins")

    bind = op.get_bind()
    postgresql.ENUM(name="acceptance_status").drop(bind, checkfirst=True)
    postgresql.ENUM(name="flight_ticket_provision").drop(bind, checkfirst=True)
    postgresql.ENUM(name="gender").drop(bind, checkfirst=True)
