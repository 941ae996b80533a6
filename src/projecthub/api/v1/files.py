"""Project file record endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.projecthub.api.dependencies import FileServiceDep, OptionalUserId
from src.projecthub.schemas import ProjectFileCreate, ProjectFileRead

router = APIRouter(prefix="/projects/{project_id}/files", tags=["files"])


@router.post(
    "",
    response_model=ProjectFileRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register file",
    description="Record a file already uploaded to object storage. Team only.",
    responses={
        201: {"description": "File registered"},
        403: {"description": "Caller is not on the team"},
        404: {"description": "Project not found"},
    },
)
async def add_file(
    project_id: UUID,
    request: ProjectFileCreate,
    service: FileServiceDep,
    user_id: OptionalUserId,
) -> ProjectFileRead:
    record = await service.add_file(project_id, user_id, request)
    return ProjectFileRead.model_validate(record)


@router.delete(
    "/{file_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete file",
    description="Remove a file record. Owner or uploader only.",
    responses={
        204: {"description": "File removed"},
        403: {"description": "Not the owner or uploader"},
        404: {"description": "Project or file not found"},
    },
)
async def delete_file(
    project_id: UUID,
    file_id: UUID,
    service: FileServiceDep,
    user_id: OptionalUserId,
) -> None:
    await service.delete_file(project_id, file_id, user_id)
