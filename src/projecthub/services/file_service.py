"""Project file records."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.exceptions import ForbiddenError, NotFoundError, ProjectHubError
from src.projecthub.core.logging import get_logger
from src.projecthub.models import ProjectFile
from src.projecthub.repositories import MemberRepository, ProjectFileRepository, ProjectRepository
from src.projecthub.schemas.file import ProjectFileCreate
from src.projecthub.services.project_context import load_visible_project, require_caller

logger = get_logger(__name__)


class FileService:
    """Registers and removes file metadata; the bytes live in object storage."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        member_repo: MemberRepository,
        file_repo: ProjectFileRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.member_repo = member_repo
        self.file_repo = file_repo
        self.session = session

    async def add_file(
        self, project_id: UUID, caller_id: UUID | None, data: ProjectFileCreate
    ) -> ProjectFile:
        """Register an uploaded file. Owner, mentor and members only."""
        caller_id = require_caller(caller_id)

        try:
            ctx = await load_visible_project(
                self.project_repo, self.member_repo, project_id, caller_id
            )
            if not ctx.role.is_team:
                raise ForbiddenError("Only the project team can upload files")

            record = ProjectFile(
                project_id=project_id,
                uploaded_by=caller_id,
                file_name=data.file_name,
                storage_path=data.storage_path,
                file_url=data.file_url,
            )
            self.file_repo.add(record)
            await self.session.commit()
            await self.session.refresh(record)
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to register file", project_id=str(project_id), error=str(e))
            raise

        logger.info("File registered", project_id=str(project_id), file_id=str(record.id))
        return record

    async def delete_file(self, project_id: UUID, file_id: UUID, caller_id: UUID | None) -> None:
        """Remove a file record. The owner or the uploader may delete it."""
        caller_id = require_caller(caller_id)

        try:
            ctx = await load_visible_project(
                self.project_repo, self.member_repo, project_id, caller_id
            )
            record = await self.file_repo.get_by_id(file_id)
            if record is None or record.project_id != project_id:
                raise NotFoundError("File not found")
            if not ctx.role.is_owner and record.uploaded_by != caller_id:
                raise ForbiddenError("Only the owner or the uploader can delete this file")

            await self.session.delete(record)
            await self.session.commit()
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to delete file", file_id=str(file_id), error=str(e))
            raise

        logger.info("File deleted", project_id=str(project_id), file_id=str(file_id))
