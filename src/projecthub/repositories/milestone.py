"""Repository for Milestone entity."""

from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import select

from src.projecthub.models import Milestone
from src.projecthub.repositories.base import BaseRepository


class MilestoneRepository(BaseRepository[Milestone]):
    """Repository for project milestones."""

    model = Milestone

    async def list_by_project(self, project_id: UUID) -> list[Milestone]:
        """List milestones of a project by due date, earliest first."""
        result = await self.session.execute(
            select(Milestone)
            .where(Milestone.project_id == project_id)
            .order_by(Milestone.due_date, Milestone.position)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

    async def next_position(self, project_id: UUID) -> int:
        """Position after the last milestone of the project."""
        result = await self.session.execute(
            select(func.max(Milestone.position)).where(Milestone.project_id == project_id)
        )
        return (result.scalar_one_or_none() or 0) + 1

    async def delete_by_project(self, project_id: UUID) -> int:
        """Delete all milestones of a project."""
        result = await self.session.execute(
            delete(Milestone).where(Milestone.project_id == project_id)  # type: ignore[arg-type]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
