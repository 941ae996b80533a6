"""Application schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.projecthub.models import ApplicationStatus, UserRole
from src.projecthub.schemas.profile import ProfileSummary


class ApplicationCreate(BaseModel):
    """Schema for applying to a project."""

    message: str = Field(default="", max_length=2000)

    @field_validator("message")
    @classmethod
    def validate_message(cls, v: str) -> str:
        return v.strip()


class ApplicationRead(BaseModel):
    """Schema for reading an application."""

    id: UUID
    project_id: UUID
    applicant_id: UUID
    applicant_role: UserRole
    message: str
    status: ApplicationStatus
    created_at: datetime
    decided_at: datetime | None

    model_config = {"from_attributes": True}


class ApplicationWithApplicant(ApplicationRead):
    """Application as shown to the project owner."""

    applicant: ProfileSummary | None = None
