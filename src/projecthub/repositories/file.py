"""Repository for ProjectFile entity."""

from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from src.projecthub.models import ProjectFile
from src.projecthub.repositories.base import BaseRepository


class ProjectFileRepository(BaseRepository[ProjectFile]):
    """Repository for project file records."""

    model = ProjectFile

    async def list_by_project(self, project_id: UUID) -> list[ProjectFile]:
        """List file records of a project, newest first."""
        result = await self.session.execute(
            select(ProjectFile)
            .where(ProjectFile.project_id == project_id)
            .order_by(ProjectFile.uploaded_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def delete_by_project(self, project_id: UUID) -> int:
        """Delete all file records of a project."""
        result = await self.session.execute(
            delete(ProjectFile).where(ProjectFile.project_id == project_id)  # type: ignore[arg-type]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
