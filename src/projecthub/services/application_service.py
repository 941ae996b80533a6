"""Application workflow - apply, accept, reject."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.db import violates_unique
from src.projecthub.core.exceptions import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ProjectHubError,
)
from src.projecthub.core.logging import get_logger
from src.projecthub.models import ApplicationStatus, ProjectApplication, UserRole
from src.projecthub.repositories import (
    ApplicationRepository,
    MemberRepository,
    ProfileRepository,
    ProjectRepository,
)
from src.projecthub.services.project_context import (
    load_owned_project,
    load_visible_project,
    require_caller,
)

logger = get_logger(__name__)


class ApplicationService:
    """Join requests and the owner's decisions on them.

    Every decision goes through a conditional status UPDATE, so two concurrent
    decisions on the same application cannot both succeed. Accepting a student
    writes the status change and the membership row in the same transaction;
    accepting a mentor assigns them as the project's mentor instead.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        member_repo: MemberRepository,
        application_repo: ApplicationRepository,
        profile_repo: ProfileRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.member_repo = member_repo
        self.application_repo = application_repo
        self.profile_repo = profile_repo
        self.session = session

    async def apply(
        self, project_id: UUID, caller_id: UUID | None, message: str = ""
    ) -> ProjectApplication:
        """Submit a join request to an open project.

        The applicant's platform role is recorded with the application.

        Raises:
            UnauthorizedError: Anonymous caller
            ProjectNotFoundError: Project missing or hidden from the caller
            InvalidStateError: Caller owns, mentors or already belongs to the
                project, or the project is not open
            ConflictError: Caller already has a pending application
            NotFoundError: Caller has no profile
        """
        caller_id = require_caller(caller_id)

        try:
            ctx = await load_visible_project(
                self.project_repo, self.member_repo, project_id, caller_id
            )
            if ctx.role.is_owner:
                raise InvalidStateError("You cannot apply to your own project")
            if ctx.role.is_member:
                raise InvalidStateError("You are already a member of this project")
            if ctx.role.is_mentor:
                raise InvalidStateError("You already mentor this project")
            if not ctx.project.is_open:
                raise InvalidStateError("Project is not accepting applications")

            existing = await self.application_repo.get_pending_by_applicant(
                project_id, caller_id
            )
            if existing is not None:
                raise ConflictError("You already have a pending application for this project")

            profile = await self.profile_repo.get_by_id(caller_id)
            if profile is None:
                raise NotFoundError("Profile not found")

            application = self.application_repo.create_application(
                project_id, caller_id, message, applicant_role=profile.role_enum
            )
            await self.session.commit()
            await self.session.refresh(application)
        except ProjectHubError:
            await self.session.rollback()
            raise
        except IntegrityError as e:
            await self.session.rollback()
            if violates_unique(e, *self.application_repo.one_pending_markers):
                # Concurrent apply won the one-pending-per-applicant index
                raise ConflictError(
                    "You already have a pending application for this project"
                ) from e
            logger.error("Failed to submit application", project_id=str(project_id), error=str(e))
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to submit application", project_id=str(project_id), error=str(e))
            raise

        logger.info(
            "Application submitted",
            project_id=str(project_id),
            application_id=str(application.id),
            applicant_role=application.applicant_role,
        )
        return application

    async def list_applications(
        self,
        project_id: UUID,
        caller_id: UUID | None,
        status: ApplicationStatus | None = None,
    ) -> list[ProjectApplication]:
        """List applications of a project, optionally by status. Owner only."""
        await load_owned_project(self.project_repo, self.member_repo, project_id, caller_id)
        return await self.application_repo.list_by_project(project_id, status)

    async def accept(
        self, project_id: UUID, application_id: UUID, caller_id: UUID | None
    ) -> ProjectApplication:
        """Accept a pending application.

        Student applicants join the team; mentor applicants become the project's mentor.
        """
        return await self._decide(
            project_id, application_id, caller_id, ApplicationStatus.ACCEPTED
        )

    async def reject(
        self, project_id: UUID, application_id: UUID, caller_id: UUID | None
    ) -> ProjectApplication:
        """Reject a pending application. The applicant may apply again later."""
        return await self._decide(
            project_id, application_id, caller_id, ApplicationStatus.REJECTED
        )

    async def _decide(
        self,
        project_id: UUID,
        application_id: UUID,
        caller_id: UUID | None,
        decision: ApplicationStatus,
    ) -> ProjectApplication:
        """Move a pending application to a terminal status.

        Raises:
            UnauthorizedError: Anonymous caller
            ProjectNotFoundError: Project missing or hidden from the caller
            ForbiddenError: Caller is not the owner
            NotFoundError: Application missing or belongs to another project
            ConflictError: Application already decided, applicant already a
                member, or a mentor applicant while the project has a mentor
        """
        try:
            ctx = await load_owned_project(
                self.project_repo, self.member_repo, project_id, caller_id
            )

            application = await self.application_repo.get_by_id(application_id)
            if application is None or application.project_id != project_id:
                raise NotFoundError("Application not found")
            if application.status_enum != ApplicationStatus.PENDING:
                raise ConflictError("Application has already been decided")

            accepting = decision == ApplicationStatus.ACCEPTED
            as_mentor = application.applicant_role_enum == UserRole.MENTOR

            if accepting and as_mentor and ctx.project.final_mentor_id is not None:
                raise ConflictError("Project already has a mentor")
            if (
                accepting
                and not as_mentor
                and await self.member_repo.is_member(project_id, application.applicant_id)
            ):
                raise ConflictError("Applicant is already a member of this project")

            transitioned = await self.application_repo.transition_status(
                application_id, ApplicationStatus.PENDING, decision
            )
            if not transitioned:
                raise ConflictError("Application has already been decided")

            if accepting and as_mentor:
                assigned = await self.project_repo.set_mentor_if_vacant(
                    project_id, application.applicant_id
                )
                if not assigned:
                    raise ConflictError("Project already has a mentor")
            elif accepting:
                self.member_repo.create_membership(project_id, application.applicant_id)
                await self.session.flush()

            await self.session.commit()
            await self.session.refresh(application)
        except ProjectHubError:
            await self.session.rollback()
            raise
        except IntegrityError as e:
            await self.session.rollback()
            if violates_unique(e, *self.member_repo.unique_key_markers):
                # Membership inserted concurrently by another path
                raise ConflictError("Applicant is already a member of this project") from e
            logger.error(
                "Failed to decide application",
                application_id=str(application_id),
                decision=decision.value,
                error=str(e),
            )
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to decide application",
                application_id=str(application_id),
                decision=decision.value,
                error=str(e),
            )
            raise

        logger.info(
            "Application decided",
            project_id=str(project_id),
            application_id=str(application_id),
            decision=decision.value,
            applicant_role=application.applicant_role,
        )
        return application
