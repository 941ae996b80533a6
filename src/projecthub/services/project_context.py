"""Per-request loading of a project together with the caller's role."""

from dataclasses import dataclass
from uuid import UUID

from src.projecthub.core.exceptions import (
    ForbiddenError,
    ProjectNotFoundError,
    UnauthorizedError,
)
from src.projecthub.models import Project, ProjectMember
from src.projecthub.repositories import MemberRepository, ProjectRepository
from src.projecthub.services.access import ViewerRole, can_view, resolve_viewer_role


@dataclass
class ProjectContext:
    """A project, its members and the caller's derived role, read in one request."""

    project: Project
    members: list[ProjectMember]
    role: ViewerRole

    def has_on_team(self, user_id: UUID) -> bool:
        """Whether user_id is the owner, the mentor or a member of this project."""
        return (
            user_id == self.project.initiator_id
            or user_id == self.project.final_mentor_id
            or any(m.user_id == user_id for m in self.members)
        )


def require_caller(caller_id: UUID | None) -> UUID:
    """Return the caller id or raise UnauthorizedError for anonymous callers."""
    if caller_id is None:
        raise UnauthorizedError()
    return caller_id


async def load_visible_project(
    project_repo: ProjectRepository,
    member_repo: MemberRepository,
    project_id: UUID,
    caller_id: UUID | None,
) -> ProjectContext:
    """Load a project the caller is allowed to see.

    Raises:
        ProjectNotFoundError: If the project does not exist or is hidden from
            the caller. The two cases are indistinguishable on purpose.
    """
    project = await project_repo.get_by_id(project_id)
    if project is None:
        raise ProjectNotFoundError()

    members = await member_repo.list_by_project(project_id)
    role = resolve_viewer_role(project, members, caller_id)
    if not can_view(project, role):
        raise ProjectNotFoundError()

    return ProjectContext(project=project, members=members, role=role)


async def load_owned_project(
    project_repo: ProjectRepository,
    member_repo: MemberRepository,
    project_id: UUID,
    caller_id: UUID | None,
) -> ProjectContext:
    """Load a project the caller owns.

    Callers who cannot see the project get NotFound; callers who can see it but
    do not own it get Forbidden.
    """
    caller_id = require_caller(caller_id)
    ctx = await load_visible_project(project_repo, member_repo, project_id, caller_id)
    if not ctx.role.is_owner:
        raise ForbiddenError("Only the project owner can perform this action")
    return ctx


async def load_team_project(
    project_repo: ProjectRepository,
    member_repo: MemberRepository,
    project_id: UUID,
    caller_id: UUID | None,
) -> ProjectContext:
    """Load a project the caller works on as owner, mentor or member.

    Outsiders who can see an open project get Forbidden.
    """
    caller_id = require_caller(caller_id)
    ctx = await load_visible_project(project_repo, member_repo, project_id, caller_id)
    if not ctx.role.is_team:
        raise ForbiddenError("Only the project team can perform this action")
    return ctx
