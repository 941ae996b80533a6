"""Project schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.projecthub.models import ProjectStatus
from src.projecthub.schemas.application import ApplicationWithApplicant
from src.projecthub.schemas.file import ProjectFileRead
from src.projecthub.schemas.profile import ProfileSummary


def _normalize_tags(v: list[str] | str | None) -> list[str] | None:
    """Accept a list or a comma-separated string; drop blanks and duplicates."""
    if v is None:
        return None
    raw = v.split(",") if isinstance(v, str) else v
    tags: list[str] = []
    for tag in raw:
        tag = tag.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)
    tags: list[str] = Field(default_factory=list)
    github_link: str | None = Field(default=None, max_length=500)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project title cannot be empty or whitespace only")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return v.strip()

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v: list[str] | str | None) -> list[str]:
        return _normalize_tags(v) or []


class ProjectUpdate(BaseModel):
    """Schema for editing a project. Ownership is never editable."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    tags: list[str] | None = None
    github_link: str | None = Field(default=None, max_length=500)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Project title cannot be empty or whitespace only")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v: list[str] | str | None) -> list[str] | None:
        return _normalize_tags(v)


class ProjectStatusUpdate(BaseModel):
    """Schema for moving a project to another lifecycle status."""

    status: ProjectStatus


class MentorAssign(BaseModel):
    """Schema for setting (or clearing, with null) the project's mentor."""

    mentor_id: UUID | None


class MemberAdd(BaseModel):
    """Schema for adding a user to the team directly."""

    user_id: UUID
    is_lead: bool = False


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: UUID
    title: str
    description: str
    tags: list[str]
    status: ProjectStatus
    initiator_id: UUID
    final_mentor_id: UUID | None
    github_link: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MemberRead(BaseModel):
    """A project member with their public profile."""

    user_id: UUID
    is_lead: bool
    joined_at: datetime
    profile: ProfileSummary | None = None


class ViewerRoleRead(BaseModel):
    """The caller's relationship to a project."""

    is_owner: bool
    is_mentor: bool
    is_member: bool
    has_applied: bool
    application_status: str | None = None

    model_config = {"from_attributes": True}


class ProjectDetailsRead(BaseModel):
    """Full project view: team, files, and what the caller may do."""

    project: ProjectRead
    initiator: ProfileSummary | None = None
    final_mentor: ProfileSummary | None = None
    members: list[MemberRead]
    files: list[ProjectFileRead]
    applications: list[ApplicationWithApplicant]
    user_role: ViewerRoleRead
