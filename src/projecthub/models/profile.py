"""Profile model - public projection of users managed by the identity provider."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from src.projecthub.models.base import utc_now
from src.projecthub.models.enums import UserRole


class Profile(SQLModel, table=True):
    """User profile.

    Rows are written by onboarding flows outside this service; the workflow
    engine only reads them (role checks, applicant summaries).
    """

    __tablename__ = "profiles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    full_name: str = Field(max_length=100)
    role: str = Field(default=UserRole.STUDENT.value, max_length=20)
    department: str | None = Field(default=None, max_length=20)
    roll_number: str | None = Field(default=None, max_length=50)
    skills: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    avatar_url: str | None = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def role_enum(self) -> UserRole:
        """Get role as UserRole enum."""
        return UserRole(self.role)
