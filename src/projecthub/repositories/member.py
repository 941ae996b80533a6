"""Repository for ProjectMember entity (the membership ledger)."""

from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from src.projecthub.models import Profile, ProjectMember
from src.projecthub.repositories.base import BaseRepository


class MemberRepository(BaseRepository[ProjectMember]):
    """Repository for project memberships."""

    model = ProjectMember

    # Postgres names the primary key, SQLite lists its columns
    unique_key_markers = (
        "project_members_pkey",
        "project_members.project_id, project_members.user_id",
    )

    async def list_by_project(self, project_id: UUID) -> list[ProjectMember]:
        """List all members of a project, earliest first."""
        result = await self.session.execute(
            select(ProjectMember)
            .where(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.joined_at)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

    async def list_with_profiles(
        self, project_id: UUID
    ) -> list[tuple[ProjectMember, Profile | None]]:
        """List members of a project joined with their profiles."""
        result = await self.session.execute(
            select(ProjectMember, Profile)
            .join(Profile, Profile.id == ProjectMember.user_id, isouter=True)  # type: ignore[arg-type]
            .where(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.joined_at)  # type: ignore[arg-type]
        )
        return [(member, profile) for member, profile in result.all()]

    async def get_membership(self, project_id: UUID, user_id: UUID) -> ProjectMember | None:
        """Get a single membership row."""
        result = await self.session.execute(
            select(ProjectMember).where(
                ProjectMember.project_id == project_id,
                ProjectMember.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def is_member(self, project_id: UUID, user_id: UUID) -> bool:
        """Check if user is a member of the project."""
        return await self.get_membership(project_id, user_id) is not None

    def create_membership(
        self,
        project_id: UUID,
        user_id: UUID,
        is_lead: bool = False,
    ) -> ProjectMember:
        """Create a new membership (add to session, no commit)."""
        member = ProjectMember(project_id=project_id, user_id=user_id, is_lead=is_lead)
        self.session.add(member)
        return member

    async def remove_membership(self, project_id: UUID, user_id: UUID) -> int:
        """Delete one membership row. Returns number of rows removed."""
        result = await self.session.execute(
            delete(ProjectMember).where(
                ProjectMember.project_id == project_id,  # type: ignore[arg-type]
                ProjectMember.user_id == user_id,  # type: ignore[arg-type]
            )
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def delete_by_project(self, project_id: UUID) -> int:
        """Delete all memberships of a project."""
        result = await self.session.execute(
            delete(ProjectMember).where(ProjectMember.project_id == project_id)  # type: ignore[arg-type]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
