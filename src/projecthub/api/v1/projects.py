"""Project endpoints - listing, details and owner-side lifecycle."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.projecthub.api.dependencies import CurrentUserId, OptionalUserId, ProjectServiceDep
from src.projecthub.core.config import get_settings
from src.projecthub.schemas import (
    ApplicationWithApplicant,
    MemberRead,
    MentorAssign,
    PaginatedResponse,
    ProfileSummary,
    ProjectCreate,
    ProjectDetailsRead,
    ProjectFileRead,
    ProjectRead,
    ProjectStatusUpdate,
    ProjectUpdate,
    ViewerRoleRead,
)
from src.projecthub.services import ProjectDetails

router = APIRouter(prefix="/projects", tags=["projects"])


def _to_details_read(details: ProjectDetails) -> ProjectDetailsRead:
    return ProjectDetailsRead(
        project=ProjectRead.model_validate(details.project),
        initiator=ProfileSummary.model_validate(details.initiator) if details.initiator else None,
        final_mentor=(
            ProfileSummary.model_validate(details.final_mentor) if details.final_mentor else None
        ),
        members=[
            MemberRead(
                user_id=member.user_id,
                is_lead=member.is_lead,
                joined_at=member.joined_at,
                profile=ProfileSummary.model_validate(profile) if profile else None,
            )
            for member, profile in details.members
        ],
        files=[ProjectFileRead.model_validate(f) for f in details.files],
        applications=[
            ApplicationWithApplicant.model_validate(application).model_copy(
                update={"applicant": ProfileSummary.model_validate(profile) if profile else None}
            )
            for application, profile in details.applications
        ],
        user_role=ViewerRoleRead.model_validate(details.role),
    )


@router.get(
    "",
    response_model=PaginatedResponse[ProjectRead],
    summary="List open projects",
    description="Browse open projects, newest first, with cursor-based pagination.",
    responses={
        200: {"description": "Paginated list of open projects"},
    },
)
async def list_open_projects(
    service: ProjectServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int | None, Query(ge=1, description="Max items to return")] = None,
    tag: Annotated[str | None, Query(description="Only projects carrying this tag")] = None,
) -> PaginatedResponse[ProjectRead]:
    """List open projects. No authentication required."""
    settings = get_settings()
    page_size = min(limit or settings.default_page_size, settings.max_page_size)
    projects, next_cursor, has_more = await service.list_open_projects(
        cursor=cursor, limit=page_size, tag=tag
    )
    return PaginatedResponse(
        items=[ProjectRead.model_validate(p) for p in projects],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.get(
    "/mine",
    response_model=list[ProjectRead],
    summary="List my projects",
    description="Projects the caller owns, mentors or belongs to, in any status.",
    responses={
        200: {"description": "Projects of the caller"},
        401: {"description": "Authentication required"},
    },
)
async def list_my_projects(
    service: ProjectServiceDep,
    user_id: CurrentUserId,
) -> list[ProjectRead]:
    projects = await service.list_my_projects(user_id)
    return [ProjectRead.model_validate(p) for p in projects]


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description="Post a new open project owned by the caller.",
    responses={
        201: {"description": "Project created"},
        401: {"description": "Authentication required"},
    },
)
async def create_project(
    request: ProjectCreate,
    service: ProjectServiceDep,
    user_id: CurrentUserId,
) -> ProjectRead:
    project = await service.create_project(user_id, request)
    return ProjectRead.model_validate(project)


@router.get(
    "/{project_id}",
    response_model=ProjectDetailsRead,
    summary="Get project details",
    description=(
        "Project with team, files and the caller's role. The owner also sees pending "
        "applications. Non-open projects are only visible to their team."
    ),
    responses={
        200: {"description": "Project details"},
        404: {"description": "Project not found"},
    },
)
async def get_project_details(
    project_id: UUID,
    service: ProjectServiceDep,
    user_id: OptionalUserId,
) -> ProjectDetailsRead:
    details = await service.get_project_details(project_id, user_id)
    return _to_details_read(details)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    description="Edit title, description, tags or link. Owner only.",
    responses={
        200: {"description": "Project updated"},
        403: {"description": "Not the project owner"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: UUID,
    request: ProjectUpdate,
    service: ProjectServiceDep,
    user_id: OptionalUserId,
) -> ProjectRead:
    project = await service.update_project(project_id, user_id, request)
    return ProjectRead.model_validate(project)


@router.patch(
    "/{project_id}/status",
    response_model=ProjectRead,
    summary="Change project status",
    description="Move the project to another lifecycle status. Owner only.",
    responses={
        200: {"description": "Status changed"},
        403: {"description": "Not the project owner"},
        404: {"description": "Project not found"},
    },
)
async def update_project_status(
    project_id: UUID,
    request: ProjectStatusUpdate,
    service: ProjectServiceDep,
    user_id: OptionalUserId,
) -> ProjectRead:
    project = await service.update_status(project_id, user_id, request.status)
    return ProjectRead.model_validate(project)


@router.put(
    "/{project_id}/mentor",
    response_model=ProjectRead,
    summary="Assign mentor",
    description="Set or clear the project's mentor. Owner only.",
    responses={
        200: {"description": "Mentor assigned"},
        403: {"description": "Not the project owner"},
        404: {"description": "Project or mentor not found"},
        422: {"description": "Target profile is not a mentor"},
    },
)
async def assign_mentor(
    project_id: UUID,
    request: MentorAssign,
    service: ProjectServiceDep,
    user_id: OptionalUserId,
) -> ProjectRead:
    project = await service.assign_mentor(project_id, user_id, request.mentor_id)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    description="Delete a project with its files, applications and members. Owner only.",
    responses={
        204: {"description": "Project deleted"},
        403: {"description": "Not the project owner"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(
    project_id: UUID,
    service: ProjectServiceDep,
    user_id: OptionalUserId,
) -> None:
    await service.delete_project(project_id, user_id)
