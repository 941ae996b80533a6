"""Team membership management outside the application workflow."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.exceptions import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ProjectHubError,
)
from src.projecthub.core.logging import get_logger
from src.projecthub.models import Profile, ProjectMember
from src.projecthub.repositories import MemberRepository, ProfileRepository, ProjectRepository
from src.projecthub.services.project_context import (
    load_owned_project,
    load_visible_project,
    require_caller,
)

logger = get_logger(__name__)


class MembershipService:
    """Direct adds and removals by the owner, and members leaving on their own."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        member_repo: MemberRepository,
        profile_repo: ProfileRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.member_repo = member_repo
        self.profile_repo = profile_repo
        self.session = session

    async def list_members(
        self, project_id: UUID, caller_id: UUID | None
    ) -> list[tuple[ProjectMember, Profile | None]]:
        """List the team of a project the caller can see."""
        await load_visible_project(self.project_repo, self.member_repo, project_id, caller_id)
        return await self.member_repo.list_with_profiles(project_id)

    async def add_member(
        self,
        project_id: UUID,
        caller_id: UUID | None,
        user_id: UUID,
        is_lead: bool = False,
    ) -> ProjectMember:
        """Add a user to the team directly. Owner only.

        Raises:
            NotFoundError: No profile for user_id
            InvalidStateError: user_id is the owner
            ConflictError: User is already a member
        """
        try:
            await load_owned_project(self.project_repo, self.member_repo, project_id, caller_id)

            if await self.profile_repo.get_by_id(user_id) is None:
                raise NotFoundError("User profile not found")
            if user_id == caller_id:
                raise InvalidStateError("The project owner cannot be added as a member")
            if await self.member_repo.is_member(project_id, user_id):
                raise ConflictError("User is already a member of this project")

            member = self.member_repo.create_membership(project_id, user_id, is_lead=is_lead)
            await self.session.commit()
            await self.session.refresh(member)
        except ProjectHubError:
            await self.session.rollback()
            raise
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("User is already a member of this project") from e
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to add member", project_id=str(project_id), error=str(e))
            raise

        logger.info("Member added", project_id=str(project_id), user_id=str(user_id))
        return member

    async def remove_member(
        self, project_id: UUID, caller_id: UUID | None, user_id: UUID
    ) -> None:
        """Remove a user from the team. Owner only."""
        try:
            await load_owned_project(self.project_repo, self.member_repo, project_id, caller_id)

            removed = await self.member_repo.remove_membership(project_id, user_id)
            if removed == 0:
                raise NotFoundError("Member not found")
            await self.session.commit()
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to remove member", project_id=str(project_id), error=str(e))
            raise

        logger.info("Member removed", project_id=str(project_id), user_id=str(user_id))

    async def leave_project(self, project_id: UUID, caller_id: UUID | None) -> None:
        """Leave a project the caller belongs to. Owners cannot leave their own project."""
        caller_id = require_caller(caller_id)

        try:
            ctx = await load_visible_project(
                self.project_repo, self.member_repo, project_id, caller_id
            )
            if ctx.role.is_owner:
                raise InvalidStateError("The project owner cannot leave the project")
            if not ctx.role.is_member:
                raise NotFoundError("You are not a member of this project")

            await self.member_repo.remove_membership(project_id, caller_id)
            await self.session.commit()
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to leave project", project_id=str(project_id), error=str(e))
            raise

        logger.info("Member left project", project_id=str(project_id))
