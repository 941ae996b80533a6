"""Project, membership, application and file models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, Index, text
from sqlmodel import Field, SQLModel

from src.projecthub.models.base import utc_now
from src.projecthub.models.enums import ApplicationStatus, ProjectStatus, UserRole


class Project(SQLModel, table=True):
    """Project posted by a student (the initiator, who owns it)."""

    __tablename__ = "projects"
    __table_args__ = (Index("ix_projects_status_created", "status", "created_at"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=200)
    description: str = Field(default="", max_length=5000)
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    status: str = Field(default=ProjectStatus.OPEN.value, max_length=20)
    initiator_id: UUID = Field(foreign_key="profiles.id", index=True)
    final_mentor_id: UUID | None = Field(default=None, foreign_key="profiles.id", index=True)
    github_link: str | None = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def status_enum(self) -> ProjectStatus:
        """Get status as ProjectStatus enum."""
        return ProjectStatus(self.status)

    @property
    def is_open(self) -> bool:
        return self.status == ProjectStatus.OPEN.value


class ProjectMember(SQLModel, table=True):
    """Accepted participant of a project."""

    __tablename__ = "project_members"

    project_id: UUID = Field(foreign_key="projects.id", primary_key=True)
    user_id: UUID = Field(foreign_key="profiles.id", primary_key=True, index=True)
    is_lead: bool = Field(default=False)
    joined_at: datetime = Field(default_factory=utc_now)


class ProjectApplication(SQLModel, table=True):
    """Join request for a project.

    The partial unique index allows any number of decided applications per
    (project, applicant) but at most one pending one. applicant_role is the
    applicant's platform role when they applied; it decides whether acceptance
    adds a member or assigns the mentor.
    """

    __tablename__ = "project_applications"
    __table_args__ = (
        Index(
            "uq_project_applications_one_pending",
            "project_id",
            "applicant_id",
            unique=True,
            postgresql_where=text("status = 'pending'"),
            sqlite_where=text("status = 'pending'"),
        ),
        Index("ix_project_applications_project_status", "project_id", "status"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    applicant_id: UUID = Field(foreign_key="profiles.id", index=True)
    applicant_role: str = Field(default=UserRole.STUDENT.value, max_length=20)
    message: str = Field(default="", max_length=2000)
    status: str = Field(default=ApplicationStatus.PENDING.value, max_length=20)
    created_at: datetime = Field(default_factory=utc_now)
    decided_at: datetime | None = Field(default=None)

    @property
    def status_enum(self) -> ApplicationStatus:
        """Get status as ApplicationStatus enum."""
        return ApplicationStatus(self.status)

    @property
    def applicant_role_enum(self) -> UserRole:
        """Get applicant_role as UserRole enum."""
        return UserRole(self.applicant_role)


class ProjectFile(SQLModel, table=True):
    """Metadata of a file stored in external object storage."""

    __tablename__ = "project_files"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    uploaded_by: UUID = Field(foreign_key="profiles.id")
    file_name: str = Field(max_length=255)
    storage_path: str = Field(max_length=1000)
    file_url: str | None = Field(default=None, max_length=1000)
    uploaded_at: datetime = Field(default_factory=utc_now)
