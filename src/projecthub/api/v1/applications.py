"""Application endpoints - join requests and owner decisions."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Request, status

from src.projecthub.api.dependencies import ApplicationServiceDep, OptionalUserId
from src.projecthub.core.config import get_settings
from src.projecthub.core.rate_limit import limiter
from src.projecthub.models import ApplicationStatus
from src.projecthub.schemas import ApplicationCreate, ApplicationRead

router = APIRouter(prefix="/projects/{project_id}/applications", tags=["applications"])


@router.post(
    "",
    response_model=ApplicationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Apply to project",
    description="Request to join an open project.",
    responses={
        201: {"description": "Application submitted"},
        401: {"description": "Authentication required"},
        404: {"description": "Project not found"},
        409: {"description": "A pending application already exists"},
        422: {"description": "Caller is the owner or a member, or project is not open"},
        429: {"description": "Too many applications"},
    },
)
@limiter.limit(get_settings().apply_rate_limit)
async def apply_to_project(
    request: Request,
    project_id: UUID,
    service: ApplicationServiceDep,
    user_id: OptionalUserId,
    data: ApplicationCreate | None = None,
) -> ApplicationRead:
    """Submit a join request. The message is optional."""
    message = data.message if data is not None else ""
    application = await service.apply(project_id, user_id, message)
    return ApplicationRead.model_validate(application)


@router.get(
    "",
    response_model=list[ApplicationRead],
    summary="List applications",
    description="All applications of a project, optionally filtered by status. Owner only.",
    responses={
        200: {"description": "Applications, oldest first"},
        403: {"description": "Not the project owner"},
        404: {"description": "Project not found"},
    },
)
async def list_applications(
    project_id: UUID,
    service: ApplicationServiceDep,
    user_id: OptionalUserId,
    status_filter: Annotated[
        ApplicationStatus | None, Query(alias="status", description="Filter by status")
    ] = None,
) -> list[ApplicationRead]:
    applications = await service.list_applications(project_id, user_id, status_filter)
    return [ApplicationRead.model_validate(a) for a in applications]


@router.post(
    "/{application_id}/accept",
    response_model=ApplicationRead,
    summary="Accept application",
    description="Accept a pending application; the applicant joins the team atomically.",
    responses={
        200: {"description": "Application accepted"},
        403: {"description": "Not the project owner"},
        404: {"description": "Project or application not found"},
        409: {"description": "Application already decided or applicant already a member"},
    },
)
async def accept_application(
    project_id: UUID,
    application_id: UUID,
    service: ApplicationServiceDep,
    user_id: OptionalUserId,
) -> ApplicationRead:
    application = await service.accept(project_id, application_id, user_id)
    return ApplicationRead.model_validate(application)


@router.post(
    "/{application_id}/reject",
    response_model=ApplicationRead,
    summary="Reject application",
    description="Reject a pending application.",
    responses={
        200: {"description": "Application rejected"},
        403: {"description": "Not the project owner"},
        404: {"description": "Project or application not found"},
        409: {"description": "Application already decided"},
    },
)
async def reject_application(
    project_id: UUID,
    application_id: UUID,
    service: ApplicationServiceDep,
    user_id: OptionalUserId,
) -> ApplicationRead:
    application = await service.reject(project_id, application_id, user_id)
    return ApplicationRead.model_validate(application)
