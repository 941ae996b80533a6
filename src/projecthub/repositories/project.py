"""Repository for Project entity."""

from uuid import UUID

from sqlalchemy import ColumnElement, delete, or_, text, update
from sqlmodel import select

from src.projecthub.models import Project, ProjectMember, ProjectStatus
from src.projecthub.models.base import utc_now
from src.projecthub.repositories.base import BaseRepository

# Tags are a JSON array; each backend has its own way to unnest one
_TAG_FILTERS = {
    "sqlite": (
        "EXISTS (SELECT 1 FROM json_each(projects.tags) "
        "WHERE lower(json_each.value) = :tag)"
    ),
    "postgresql": (
        "EXISTS (SELECT 1 FROM json_array_elements_text(projects.tags) AS project_tag(value) "
        "WHERE lower(project_tag.value) = :tag)"
    ),
}


class ProjectRepository(BaseRepository[Project]):
    """Repository for projects."""

    model = Project

    def _has_tag(self, tag: str) -> ColumnElement[bool]:
        """Case-insensitive membership test of tag in Project.tags."""
        dialect = self.session.get_bind().dialect.name
        clause = _TAG_FILTERS.get(dialect, _TAG_FILTERS["postgresql"])
        return text(clause).bindparams(tag=tag.strip().lower())  # type: ignore[return-value]

    async def list_open(
        self,
        cursor: str | None = None,
        limit: int = 20,
        tag: str | None = None,
    ) -> tuple[list[Project], str | None, bool]:
        """List open projects with cursor-based pagination, newest first."""
        query = select(Project).where(Project.status == ProjectStatus.OPEN.value)
        if tag and tag.strip():
            query = query.where(self._has_tag(tag))
        return await self.paginate(query, cursor, limit, Project.created_at)

    async def list_for_user(self, user_id: UUID) -> list[Project]:
        """List projects the user owns, mentors or is a member of."""
        member_project_ids = select(ProjectMember.project_id).where(
            ProjectMember.user_id == user_id
        )
        result = await self.session.execute(
            select(Project)
            .where(
                or_(
                    Project.initiator_id == user_id,
                    Project.final_mentor_id == user_id,
                    Project.id.in_(member_project_ids),  # type: ignore[attr-defined]
                )
            )
            .order_by(Project.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def delete_by_id(self, project_id: UUID) -> int:
        """Delete the project row itself. Dependent rows must be removed first."""
        result = await self.session.execute(delete(Project).where(Project.id == project_id))  # type: ignore[arg-type]
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def set_mentor_if_vacant(self, project_id: UUID, mentor_id: UUID) -> bool:
        """Assign the mentor only while the project has none.

        Conditional UPDATE, so of two concurrent assignments at most one wins.
        """
        result = await self.session.execute(
            update(Project)
            .where(
                Project.id == project_id,  # type: ignore[arg-type]
                Project.final_mentor_id.is_(None),  # type: ignore[union-attr]
            )
            .values(final_mentor_id=mentor_id, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        return (result.rowcount or 0) == 1  # type: ignore[attr-defined]
