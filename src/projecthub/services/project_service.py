"""Project service - visibility, details, lifecycle and deletion."""

from dataclasses import dataclass, field, replace
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.exceptions import (
    InvalidStateError,
    NotFoundError,
    ProjectHubError,
)
from src.projecthub.core.logging import get_logger
from src.projecthub.models import (
    ApplicationStatus,
    Profile,
    Project,
    ProjectApplication,
    ProjectFile,
    ProjectMember,
    ProjectStatus,
    UserRole,
)
from src.projecthub.models.base import utc_now
from src.projecthub.repositories import (
    ApplicationRepository,
    MemberRepository,
    MilestoneRepository,
    ProfileRepository,
    ProjectFileRepository,
    ProjectRepository,
    TaskRepository,
)
from src.projecthub.schemas.project import ProjectCreate, ProjectUpdate
from src.projecthub.services.access import ViewerRole, should_lookup_own_application
from src.projecthub.services.project_context import (
    load_owned_project,
    load_visible_project,
    require_caller,
)

logger = get_logger(__name__)

# Columns that are NOT NULL; an explicit null in an update leaves them unchanged
_REQUIRED_FIELDS = ("title", "description", "tags")


@dataclass
class ProjectDetails:
    """Everything the project page shows, already filtered for the caller."""

    project: Project
    role: ViewerRole
    initiator: Profile | None = None
    final_mentor: Profile | None = None
    members: list[tuple[ProjectMember, Profile | None]] = field(default_factory=list)
    files: list[ProjectFile] = field(default_factory=list)
    applications: list[tuple[ProjectApplication, Profile | None]] = field(default_factory=list)


class ProjectService:
    """Project read and owner-side lifecycle operations."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        member_repo: MemberRepository,
        application_repo: ApplicationRepository,
        file_repo: ProjectFileRepository,
        profile_repo: ProfileRepository,
        milestone_repo: MilestoneRepository,
        task_repo: TaskRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.member_repo = member_repo
        self.application_repo = application_repo
        self.file_repo = file_repo
        self.profile_repo = profile_repo
        self.milestone_repo = milestone_repo
        self.task_repo = task_repo
        self.session = session

    async def create_project(self, caller_id: UUID | None, data: ProjectCreate) -> Project:
        """Create an open project owned by the caller."""
        caller_id = require_caller(caller_id)

        project = Project(
            title=data.title,
            description=data.description,
            tags=data.tags,
            github_link=data.github_link,
            initiator_id=caller_id,
            status=ProjectStatus.OPEN.value,
        )
        self.project_repo.add(project)

        try:
            await self.session.commit()
            await self.session.refresh(project)
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create project", error=str(e))
            raise

        logger.info("Project created", project_id=str(project.id))
        return project

    async def get_project_details(
        self, project_id: UUID, caller_id: UUID | None
    ) -> ProjectDetails:
        """Load the project page for the caller.

        Owners additionally see pending applications with applicant summaries.
        Authenticated outsiders see the status of their own latest application.

        Raises:
            ProjectNotFoundError: If the project is missing or hidden from the caller
        """
        ctx = await load_visible_project(
            self.project_repo, self.member_repo, project_id, caller_id
        )
        project, role = ctx.project, ctx.role

        details = ProjectDetails(project=project, role=role)
        details.initiator = await self.profile_repo.get_by_id(project.initiator_id)
        if project.final_mentor_id is not None:
            details.final_mentor = await self.profile_repo.get_by_id(project.final_mentor_id)
        details.members = await self.member_repo.list_with_profiles(project_id)
        details.files = await self.file_repo.list_by_project(project_id)

        if role.is_owner:
            details.applications = await self.application_repo.list_with_applicants(
                project_id, ApplicationStatus.PENDING
            )
        elif caller_id is not None and should_lookup_own_application(role):
            own = await self.application_repo.get_latest_by_applicant(project_id, caller_id)
            if own is not None:
                details.role = replace(role, has_applied=True, application_status=own.status)

        return details

    async def list_open_projects(
        self, cursor: str | None, limit: int, tag: str | None = None
    ) -> tuple[list[Project], str | None, bool]:
        """List open projects with cursor-based pagination.

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        return await self.project_repo.list_open(cursor=cursor, limit=limit, tag=tag)

    async def list_my_projects(self, caller_id: UUID | None) -> list[Project]:
        """List projects the caller owns, mentors or belongs to, in any status."""
        caller_id = require_caller(caller_id)
        return await self.project_repo.list_for_user(caller_id)

    async def update_project(
        self, project_id: UUID, caller_id: UUID | None, data: ProjectUpdate
    ) -> Project:
        """Edit title, description, tags or link. Owner only."""
        try:
            ctx = await load_owned_project(
                self.project_repo, self.member_repo, project_id, caller_id
            )
            project = ctx.project

            update_data = data.model_dump(exclude_unset=True)
            for name, value in update_data.items():
                if name in _REQUIRED_FIELDS and value is None:
                    continue
                setattr(project, name, value)
            project.updated_at = utc_now()

            await self.session.commit()
            await self.session.refresh(project)
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to update project", project_id=str(project_id), error=str(e))
            raise

        logger.info("Project updated", project_id=str(project_id), fields=sorted(update_data))
        return project

    async def update_status(
        self, project_id: UUID, caller_id: UUID | None, status: ProjectStatus
    ) -> Project:
        """Move the project to another lifecycle status. Owner only.

        Leaving OPEN hides the project from everyone outside the team and stops
        new applications; pending ones stay decidable by the owner.
        """
        try:
            ctx = await load_owned_project(
                self.project_repo, self.member_repo, project_id, caller_id
            )
            project = ctx.project
            previous = project.status

            if project.status_enum == status:
                return project

            project.status = status.value
            project.updated_at = utc_now()
            await self.session.commit()
            await self.session.refresh(project)
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to update project status", project_id=str(project_id), error=str(e)
            )
            raise

        logger.info(
            "Project status changed",
            project_id=str(project_id),
            from_status=previous,
            to_status=status.value,
        )
        return project

    async def assign_mentor(
        self, project_id: UUID, caller_id: UUID | None, mentor_id: UUID | None
    ) -> Project:
        """Set or clear the project's mentor. Owner only; target must be a mentor profile."""
        try:
            ctx = await load_owned_project(
                self.project_repo, self.member_repo, project_id, caller_id
            )
            project = ctx.project

            if mentor_id is not None:
                mentor = await self.profile_repo.get_by_id(mentor_id)
                if mentor is None:
                    raise NotFoundError("Mentor profile not found")
                if mentor.role_enum != UserRole.MENTOR:
                    raise InvalidStateError("Only a mentor profile can be assigned as mentor")

            project.final_mentor_id = mentor_id
            project.updated_at = utc_now()
            await self.session.commit()
            await self.session.refresh(project)
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to assign mentor", project_id=str(project_id), error=str(e))
            raise

        logger.info(
            "Project mentor assigned",
            project_id=str(project_id),
            mentor_id=str(mentor_id) if mentor_id else None,
        )
        return project

    async def delete_project(self, project_id: UUID, caller_id: UUID | None) -> None:
        """Delete a project with everything attached to it. Owner only.

        Tasks, milestones, files, applications, members and the project go in one
        transaction; any failure rolls back the whole unit so no row is left
        pointing at a deleted project.
        """
        try:
            await load_owned_project(self.project_repo, self.member_repo, project_id, caller_id)

            tasks = await self.task_repo.delete_by_project(project_id)
            milestones = await self.milestone_repo.delete_by_project(project_id)
            files = await self.file_repo.delete_by_project(project_id)
            applications = await self.application_repo.delete_by_project(project_id)
            members = await self.member_repo.delete_by_project(project_id)
            await self.project_repo.delete_by_id(project_id)

            await self.session.commit()
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to delete project", project_id=str(project_id), error=str(e))
            raise

        logger.info(
            "Project deleted",
            project_id=str(project_id),
            tasks=tasks,
            milestones=milestones,
            files=files,
            applications=applications,
            members=members,
        )
