"""Repository for Task entity."""

from uuid import UUID

from sqlalchemy import delete, func, update
from sqlmodel import select

from src.projecthub.models import Task, TaskStatus
from src.projecthub.repositories.base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Repository for the project task board."""

    model = Task

    async def list_by_project(self, project_id: UUID) -> list[Task]:
        """List tasks of a project by board position, newest first within a position."""
        result = await self.session.execute(
            select(Task)
            .where(Task.project_id == project_id)
            .order_by(Task.position, Task.created_at.desc())  # type: ignore[arg-type, attr-defined]
        )
        return list(result.scalars().all())

    async def next_position(self, project_id: UUID, status: TaskStatus) -> int:
        """Position after the last task in one status column."""
        result = await self.session.execute(
            select(func.max(Task.position)).where(
                Task.project_id == project_id,
                Task.status == status.value,
            )
        )
        return (result.scalar_one_or_none() or 0) + 1

    async def shift_column(
        self, project_id: UUID, status: TaskStatus, from_position: int
    ) -> int:
        """Move every task at or below from_position in a column one slot down."""
        result = await self.session.execute(
            update(Task)
            .where(
                Task.project_id == project_id,  # type: ignore[arg-type]
                Task.status == status.value,  # type: ignore[arg-type]
                Task.position >= from_position,  # type: ignore[operator]
            )
            .values(position=Task.position + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def count_by_status(self, project_id: UUID) -> dict[str, int]:
        """Number of tasks per status column."""
        result = await self.session.execute(
            select(Task.status, func.count())
            .where(Task.project_id == project_id)
            .group_by(Task.status)
        )
        return {status: count for status, count in result.all()}

    async def delete_by_project(self, project_id: UUID) -> int:
        """Delete all tasks of a project."""
        result = await self.session.execute(
            delete(Task).where(Task.project_id == project_id)  # type: ignore[arg-type]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
