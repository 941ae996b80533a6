"""Profile projections exposed to other users."""

from uuid import UUID

from pydantic import BaseModel


class ProfileSummary(BaseModel):
    """Public summary shown next to members, applicants and owners."""

    id: UUID
    full_name: str
    roll_number: str | None = None
    avatar_url: str | None = None
    skills: list[str] = []

    model_config = {"from_attributes": True}
