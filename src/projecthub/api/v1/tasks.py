"""Project task board endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.projecthub.api.dependencies import OptionalUserId, TaskServiceDep
from src.projecthub.schemas import TaskCreate, TaskMove, TaskRead, TaskStats, TaskUpdate

router = APIRouter(prefix="/projects/{project_id}/tasks", tags=["tasks"])


@router.get(
    "",
    response_model=list[TaskRead],
    summary="List tasks",
    responses={
        200: {"description": "Tasks in board order"},
        404: {"description": "Project not found"},
    },
)
async def list_tasks(
    project_id: UUID,
    service: TaskServiceDep,
    user_id: OptionalUserId,
) -> list[TaskRead]:
    return [TaskRead.model_validate(t) for t in await service.list_tasks(project_id, user_id)]


@router.get(
    "/stats",
    response_model=TaskStats,
    summary="Task statistics",
    responses={
        200: {"description": "Task counts per status"},
        404: {"description": "Project not found"},
    },
)
async def task_stats(
    project_id: UUID,
    service: TaskServiceDep,
    user_id: OptionalUserId,
) -> TaskStats:
    return await service.task_stats(project_id, user_id)


@router.get(
    "/{task_id}",
    response_model=TaskRead,
    summary="Get task",
    responses={
        200: {"description": "Task"},
        404: {"description": "Project or task not found"},
    },
)
async def get_task(
    project_id: UUID,
    task_id: UUID,
    service: TaskServiceDep,
    user_id: OptionalUserId,
) -> TaskRead:
    return TaskRead.model_validate(await service.get_task(project_id, task_id, user_id))


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
    description="Add a task at the bottom of its status column. Team only.",
    responses={
        201: {"description": "Task created"},
        403: {"description": "Caller is not on the team"},
        404: {"description": "Project not found"},
        422: {"description": "Assignee is not on the team"},
    },
)
async def create_task(
    project_id: UUID,
    request: TaskCreate,
    service: TaskServiceDep,
    user_id: OptionalUserId,
) -> TaskRead:
    return TaskRead.model_validate(await service.create_task(project_id, user_id, request))


@router.patch(
    "/{task_id}",
    response_model=TaskRead,
    summary="Update task",
    responses={
        200: {"description": "Task updated"},
        403: {"description": "Caller is not on the team"},
        404: {"description": "Project or task not found"},
    },
)
async def update_task(
    project_id: UUID,
    task_id: UUID,
    request: TaskUpdate,
    service: TaskServiceDep,
    user_id: OptionalUserId,
) -> TaskRead:
    task = await service.update_task(project_id, task_id, user_id, request)
    return TaskRead.model_validate(task)


@router.patch(
    "/{task_id}/move",
    response_model=TaskRead,
    summary="Move task",
    description="Place a task in a status column at a position. Team only.",
    responses={
        200: {"description": "Task moved"},
        403: {"description": "Caller is not on the team"},
        404: {"description": "Project or task not found"},
    },
)
async def move_task(
    project_id: UUID,
    task_id: UUID,
    request: TaskMove,
    service: TaskServiceDep,
    user_id: OptionalUserId,
) -> TaskRead:
    task = await service.move_task(project_id, task_id, user_id, request.status, request.position)
    return TaskRead.model_validate(task)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete task",
    responses={
        204: {"description": "Task removed"},
        403: {"description": "Caller is not on the team"},
        404: {"description": "Project or task not found"},
    },
)
async def delete_task(
    project_id: UUID,
    task_id: UUID,
    service: TaskServiceDep,
    user_id: OptionalUserId,
) -> None:
    await service.delete_task(project_id, task_id, user_id)
