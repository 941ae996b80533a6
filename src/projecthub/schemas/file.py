"""Project file schemas.

Uploads go straight to object storage; the API only records where they landed.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class ProjectFileCreate(BaseModel):
    """Schema for registering an uploaded file."""

    file_name: str = Field(min_length=1, max_length=255)
    storage_path: str = Field(min_length=1, max_length=1000)
    file_url: str | None = Field(default=None, max_length=1000)

    @field_validator("file_name", "storage_path")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Value cannot be empty or whitespace only")
        return v


class ProjectFileRead(BaseModel):
    """Schema for reading a file record."""

    id: UUID
    project_id: UUID
    uploaded_by: UUID
    file_name: str
    storage_path: str
    file_url: str | None
    uploaded_at: datetime

    model_config = {"from_attributes": True}
