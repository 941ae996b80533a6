"""Repository for Profile entity (read-only projection)."""

from src.projecthub.models import Profile
from src.projecthub.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """Repository for user profiles."""

    model = Profile
