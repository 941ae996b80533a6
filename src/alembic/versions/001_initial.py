"""Initial migration

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # 1. Profiles (rows are created by the identity provider sync)
    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("full_name", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("role", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column("department", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=True),
        sa.Column("roll_number", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column("skills", sa.JSON(), nullable=False),
        sa.Column("avatar_url", sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_profiles_email", "profiles", ["email"], unique=True)

    # 2. Projects
    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(length=5000), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("status", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column("initiator_id", sa.Uuid(), nullable=False),
        sa.Column("final_mentor_id", sa.Uuid(), nullable=True),
        sa.Column("github_link", sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["initiator_id"], ["profiles.id"]),
        sa.ForeignKeyConstraint(["final_mentor_id"], ["profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_initiator_id", "projects", ["initiator_id"], unique=False)
    op.create_index("ix_projects_final_mentor_id", "projects", ["final_mentor_id"], unique=False)
    op.create_index(
        "ix_projects_status_created", "projects", ["status", "created_at"], unique=False
    )

    # 3. Memberships
    op.create_table(
        "project_members",
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("is_lead", sa.Boolean(), nullable=False),
        sa.Column("joined_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"]),
        sa.PrimaryKeyConstraint("project_id", "user_id"),
    )
    op.create_index(
        "ix_project_members_user_id", "project_members", ["user_id"], unique=False
    )

    # 4. Applications
    op.create_table(
        "project_applications",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("applicant_id", sa.Uuid(), nullable=False),
        sa.Column("message", sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=False),
        sa.Column("status", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("decided_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.ForeignKeyConstraint(["applicant_id"], ["profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_project_applications_project_id", "project_applications", ["project_id"], unique=False
    )
    op.create_index(
        "ix_project_applications_applicant_id",
        "project_applications",
        ["applicant_id"],
        unique=False,
    )
    op.create_index(
        "ix_project_applications_project_status",
        "project_applications",
        ["project_id", "status"],
        unique=False,
    )
    # At most one pending application per (project, applicant)
    op.create_index(
        "uq_project_applications_one_pending",
        "project_applications",
        ["project_id", "applicant_id"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
        sqlite_where=sa.text("status = 'pending'"),
    )

    # 5. File records
    op.create_table(
        "project_files",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("uploaded_by", sa.Uuid(), nullable=False),
        sa.Column("file_name", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("storage_path", sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=False),
        sa.Column("file_url", sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column("uploaded_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.ForeignKeyConstraint(["uploaded_by"], ["profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_project_files_project_id", "project_files", ["project_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_project_files_project_id", table_name="project_files")
    op.drop_table("project_files")

    op.drop_index("uq_project_applications_one_pending", table_name="project_applications")
    op.drop_index("ix_project_applications_project_status", table_name="project_applications")
    op.drop_index("ix_project_applications_applicant_id", table_name="project_applications")
    op.drop_index("ix_project_applications_project_id", table_name="project_applications")
    op.drop_table("project_applications")

    op.drop_index("ix_project_members_user_id", table_name="project_members")
    op.drop_table("project_members")

    op.drop_index("ix_projects_status_created", table_name="projects")
    op.drop_index("ix_projects_final_mentor_id", table_name="projects")
    op.drop_index("ix_projects_initiator_id", table_name="projects")
    op.drop_table("projects")

    op.drop_index("ix_profiles_email", table_name="profiles")
    op.drop_table("profiles")
