"""Project task board."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.exceptions import InvalidStateError, NotFoundError, ProjectHubError
from src.projecthub.core.logging import get_logger
from src.projecthub.models import Task, TaskPriority, TaskStatus
from src.projecthub.models.base import utc_now
from src.projecthub.repositories import MemberRepository, ProjectRepository, TaskRepository
from src.projecthub.schemas.planning import TaskCreate, TaskStats, TaskUpdate
from src.projecthub.services.project_context import (
    ProjectContext,
    load_team_project,
    load_visible_project,
    require_caller,
)

logger = get_logger(__name__)


def _stamp_completion(task: Task, status: TaskStatus) -> None:
    if status == TaskStatus.COMPLETED:
        task.completed_at = task.completed_at or utc_now()
    else:
        task.completed_at = None


class TaskService:
    """Tasks are visible with the project and managed by its team."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        member_repo: MemberRepository,
        task_repo: TaskRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.member_repo = member_repo
        self.task_repo = task_repo
        self.session = session

    async def list_tasks(self, project_id: UUID, caller_id: UUID | None) -> list[Task]:
        await load_visible_project(self.project_repo, self.member_repo, project_id, caller_id)
        return await self.task_repo.list_by_project(project_id)

    async def get_task(self, project_id: UUID, task_id: UUID, caller_id: UUID | None) -> Task:
        await load_visible_project(self.project_repo, self.member_repo, project_id, caller_id)
        return await self._get_in_project(project_id, task_id)

    async def task_stats(self, project_id: UUID, caller_id: UUID | None) -> TaskStats:
        """Count tasks per board column."""
        await load_visible_project(self.project_repo, self.member_repo, project_id, caller_id)
        counts = await self.task_repo.count_by_status(project_id)
        return TaskStats(
            todo=counts.get(TaskStatus.TODO.value, 0),
            in_progress=counts.get(TaskStatus.IN_PROGRESS.value, 0),
            review=counts.get(TaskStatus.REVIEW.value, 0),
            completed=counts.get(TaskStatus.COMPLETED.value, 0),
            total=sum(counts.values()),
        )

    async def create_task(
        self, project_id: UUID, caller_id: UUID | None, data: TaskCreate
    ) -> Task:
        """Add a task at the bottom of its status column. Team only."""
        caller_id = require_caller(caller_id)

        try:
            ctx = await load_team_project(
                self.project_repo, self.member_repo, project_id, caller_id
            )
            self._check_assignee(ctx, data.assigned_to)

            task = Task(
                project_id=project_id,
                title=data.title,
                description=data.description,
                status=data.status.value,
                priority=data.priority.value,
                assigned_to=data.assigned_to,
                due_date=data.due_date,
                created_by=caller_id,
                position=await self.task_repo.next_position(project_id, data.status),
            )
            _stamp_completion(task, data.status)
            self.task_repo.add(task)
            await self.session.commit()
            await self.session.refresh(task)
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create task", project_id=str(project_id), error=str(e))
            raise

        logger.info("Task created", project_id=str(project_id), task_id=str(task.id))
        return task

    async def update_task(
        self, project_id: UUID, task_id: UUID, caller_id: UUID | None, data: TaskUpdate
    ) -> Task:
        """Edit a task's details. Team only."""
        try:
            ctx = await load_team_project(
                self.project_repo, self.member_repo, project_id, caller_id
            )
            task = await self._get_in_project(project_id, task_id)

            update_data = data.model_dump(exclude_unset=True)
            if "assigned_to" in update_data:
                self._check_assignee(ctx, update_data["assigned_to"])
            for name, value in update_data.items():
                if name in ("title", "priority") and value is None:
                    continue
                if isinstance(value, TaskPriority):
                    value = value.value
                setattr(task, name, value)
            task.updated_at = utc_now()

            await self.session.commit()
            await self.session.refresh(task)
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to update task", task_id=str(task_id), error=str(e))
            raise

        logger.info("Task updated", task_id=str(task_id), fields=sorted(update_data))
        return task

    async def move_task(
        self,
        project_id: UUID,
        task_id: UUID,
        caller_id: UUID | None,
        status: TaskStatus,
        position: int,
    ) -> Task:
        """Drop a task into a column at a position. Team only.

        Tasks already at or below that position in the target column move down
        one slot.
        """
        try:
            await load_team_project(self.project_repo, self.member_repo, project_id, caller_id)
            task = await self._get_in_project(project_id, task_id)
            previous = task.status

            await self.task_repo.shift_column(project_id, status, position)
            task.status = status.value
            task.position = position
            _stamp_completion(task, status)
            task.updated_at = utc_now()

            await self.session.commit()
            await self.session.refresh(task)
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to move task", task_id=str(task_id), error=str(e))
            raise

        logger.info(
            "Task moved",
            task_id=str(task_id),
            from_status=previous,
            to_status=status.value,
            position=position,
        )
        return task

    async def delete_task(self, project_id: UUID, task_id: UUID, caller_id: UUID | None) -> None:
        """Remove a task. Team only."""
        try:
            await load_team_project(self.project_repo, self.member_repo, project_id, caller_id)
            task = await self._get_in_project(project_id, task_id)

            await self.session.delete(task)
            await self.session.commit()
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to delete task", task_id=str(task_id), error=str(e))
            raise

        logger.info("Task deleted", project_id=str(project_id), task_id=str(task_id))

    async def _get_in_project(self, project_id: UUID, task_id: UUID) -> Task:
        task = await self.task_repo.get_by_id(task_id)
        if task is None or task.project_id != project_id:
            raise NotFoundError("Task not found")
        return task

    @staticmethod
    def _check_assignee(ctx: ProjectContext, assignee_id: UUID | None) -> None:
        if assignee_id is not None and not ctx.has_on_team(assignee_id):
            raise InvalidStateError("Tasks can only be assigned to the project team")
