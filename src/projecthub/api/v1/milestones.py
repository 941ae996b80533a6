"""Project timeline endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.projecthub.api.dependencies import MilestoneServiceDep, OptionalUserId
from src.projecthub.models import Milestone
from src.projecthub.models.base import utc_now
from src.projecthub.schemas import (
    MilestoneCreate,
    MilestoneProgressUpdate,
    MilestoneRead,
    MilestoneStatusUpdate,
    MilestoneUpdate,
    TimelineStats,
)

router = APIRouter(prefix="/projects/{project_id}/milestones", tags=["milestones"])


def _to_read(milestone: Milestone) -> MilestoneRead:
    return MilestoneRead.model_validate(milestone).model_copy(
        update={"is_overdue": milestone.is_overdue(utc_now())}
    )


@router.get(
    "",
    response_model=list[MilestoneRead],
    summary="List milestones",
    responses={
        200: {"description": "Milestones ordered by due date"},
        404: {"description": "Project not found"},
    },
)
async def list_milestones(
    project_id: UUID,
    service: MilestoneServiceDep,
    user_id: OptionalUserId,
) -> list[MilestoneRead]:
    return [_to_read(m) for m in await service.list_milestones(project_id, user_id)]


@router.get(
    "/stats",
    response_model=TimelineStats,
    summary="Timeline statistics",
    description="Milestone counts, average progress, deadlines in the next 14 days "
    "and the latest completions.",
    responses={
        200: {"description": "Timeline summary"},
        404: {"description": "Project not found"},
    },
)
async def timeline_stats(
    project_id: UUID,
    service: MilestoneServiceDep,
    user_id: OptionalUserId,
) -> TimelineStats:
    return await service.timeline_stats(project_id, user_id)


@router.post(
    "",
    response_model=MilestoneRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create milestone",
    description="Add a milestone to the timeline. Team only.",
    responses={
        201: {"description": "Milestone created"},
        403: {"description": "Caller is not on the team"},
        404: {"description": "Project not found"},
        422: {"description": "Assignee is not on the team"},
    },
)
async def create_milestone(
    project_id: UUID,
    request: MilestoneCreate,
    service: MilestoneServiceDep,
    user_id: OptionalUserId,
) -> MilestoneRead:
    return _to_read(await service.create_milestone(project_id, user_id, request))


@router.patch(
    "/{milestone_id}",
    response_model=MilestoneRead,
    summary="Update milestone",
    description="Edit title, description, due date or assignee. Team only.",
    responses={
        200: {"description": "Milestone updated"},
        403: {"description": "Caller is not on the team"},
        404: {"description": "Project or milestone not found"},
    },
)
async def update_milestone(
    project_id: UUID,
    milestone_id: UUID,
    request: MilestoneUpdate,
    service: MilestoneServiceDep,
    user_id: OptionalUserId,
) -> MilestoneRead:
    milestone = await service.update_milestone(project_id, milestone_id, user_id, request)
    return _to_read(milestone)


@router.patch(
    "/{milestone_id}/progress",
    response_model=MilestoneRead,
    summary="Update milestone progress",
    responses={
        200: {"description": "Progress recorded"},
        403: {"description": "Caller is not on the team"},
        404: {"description": "Project or milestone not found"},
    },
)
async def update_progress(
    project_id: UUID,
    milestone_id: UUID,
    request: MilestoneProgressUpdate,
    service: MilestoneServiceDep,
    user_id: OptionalUserId,
) -> MilestoneRead:
    milestone = await service.update_progress(
        project_id, milestone_id, user_id, request.progress
    )
    return _to_read(milestone)


@router.patch(
    "/{milestone_id}/status",
    response_model=MilestoneRead,
    summary="Change milestone status",
    description="Owner or mentor only. Completing sets progress to 100.",
    responses={
        200: {"description": "Status changed"},
        403: {"description": "Not the project owner or mentor"},
        404: {"description": "Project or milestone not found"},
    },
)
async def update_status(
    project_id: UUID,
    milestone_id: UUID,
    request: MilestoneStatusUpdate,
    service: MilestoneServiceDep,
    user_id: OptionalUserId,
) -> MilestoneRead:
    milestone = await service.update_status(project_id, milestone_id, user_id, request.status)
    return _to_read(milestone)


@router.delete(
    "/{milestone_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete milestone",
    responses={
        204: {"description": "Milestone removed"},
        403: {"description": "Caller is not on the team"},
        404: {"description": "Project or milestone not found"},
    },
)
async def delete_milestone(
    project_id: UUID,
    milestone_id: UUID,
    service: MilestoneServiceDep,
    user_id: OptionalUserId,
) -> None:
    await service.delete_milestone(project_id, milestone_id, user_id)
