"""Repository for ProjectApplication entity (the application ledger)."""

from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select

from src.projecthub.models import ApplicationStatus, Profile, ProjectApplication, UserRole
from src.projecthub.models.base import utc_now
from src.projecthub.repositories.base import BaseRepository


class ApplicationRepository(BaseRepository[ProjectApplication]):
    """Repository for project join requests."""

    model = ProjectApplication

    # Postgres names the partial index, SQLite lists its columns
    one_pending_markers = (
        "uq_project_applications_one_pending",
        "project_applications.project_id, project_applications.applicant_id",
    )

    async def list_by_project(
        self,
        project_id: UUID,
        status: ApplicationStatus | None = None,
    ) -> list[ProjectApplication]:
        """List applications of a project, oldest first, optionally by status."""
        query = select(ProjectApplication).where(ProjectApplication.project_id == project_id)
        if status is not None:
            query = query.where(ProjectApplication.status == status.value)
        result = await self.session.execute(
            query.order_by(ProjectApplication.created_at)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

    async def list_with_applicants(
        self,
        project_id: UUID,
        status: ApplicationStatus,
    ) -> list[tuple[ProjectApplication, Profile | None]]:
        """List applications of a project in one status, joined with applicant profiles."""
        result = await self.session.execute(
            select(ProjectApplication, Profile)
            .join(Profile, Profile.id == ProjectApplication.applicant_id, isouter=True)  # type: ignore[arg-type]
            .where(
                ProjectApplication.project_id == project_id,
                ProjectApplication.status == status.value,
            )
            .order_by(ProjectApplication.created_at)  # type: ignore[arg-type]
        )
        return [(application, profile) for application, profile in result.all()]

    async def get_latest_by_applicant(
        self, project_id: UUID, applicant_id: UUID
    ) -> ProjectApplication | None:
        """Get the most recent application of a user for a project, any status."""
        result = await self.session.execute(
            select(ProjectApplication)
            .where(
                ProjectApplication.project_id == project_id,
                ProjectApplication.applicant_id == applicant_id,
            )
            .order_by(ProjectApplication.created_at.desc())  # type: ignore[attr-defined]
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_pending_by_applicant(
        self, project_id: UUID, applicant_id: UUID
    ) -> ProjectApplication | None:
        """Get the pending application of a user for a project, if any."""
        result = await self.session.execute(
            select(ProjectApplication).where(
                ProjectApplication.project_id == project_id,
                ProjectApplication.applicant_id == applicant_id,
                ProjectApplication.status == ApplicationStatus.PENDING.value,
            )
        )
        return result.scalar_one_or_none()

    def create_application(
        self,
        project_id: UUID,
        applicant_id: UUID,
        message: str,
        applicant_role: UserRole = UserRole.STUDENT,
    ) -> ProjectApplication:
        """Create a pending application (add to session, no commit)."""
        application = ProjectApplication(
            project_id=project_id,
            applicant_id=applicant_id,
            applicant_role=applicant_role.value,
            message=message,
            status=ApplicationStatus.PENDING.value,
        )
        self.session.add(application)
        return application

    async def transition_status(
        self,
        application_id: UUID,
        from_status: ApplicationStatus,
        to_status: ApplicationStatus,
    ) -> bool:
        """Conditionally move an application between statuses.

        The UPDATE only matches while the row is still in from_status, so of two
        concurrent transitions at most one reports True.
        """
        result = await self.session.execute(
            update(ProjectApplication)
            .where(
                ProjectApplication.id == application_id,  # type: ignore[arg-type]
                ProjectApplication.status == from_status.value,  # type: ignore[arg-type]
            )
            .values(status=to_status.value, decided_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        return (result.rowcount or 0) == 1  # type: ignore[attr-defined]

    async def delete_by_project(self, project_id: UUID) -> int:
        """Delete all applications of a project."""
        result = await self.session.execute(
            delete(ProjectApplication).where(ProjectApplication.project_id == project_id)  # type: ignore[arg-type]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
