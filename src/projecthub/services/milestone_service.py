"""Project timeline - milestones and their progress."""

import math
from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.exceptions import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ProjectHubError,
)
from src.projecthub.core.logging import get_logger
from src.projecthub.models import Milestone, MilestoneStatus
from src.projecthub.models.base import utc_now
from src.projecthub.repositories import MemberRepository, MilestoneRepository, ProjectRepository
from src.projecthub.schemas.planning import (
    MilestoneCreate,
    MilestoneUpdate,
    RecentCompletion,
    TimelineStats,
    UpcomingDeadline,
)
from src.projecthub.services.project_context import (
    ProjectContext,
    load_team_project,
    load_visible_project,
    require_caller,
)

logger = get_logger(__name__)

UPCOMING_WINDOW_DAYS = 14
RECENT_COMPLETIONS = 3


def _days_until(due: datetime, now: datetime) -> int:
    return math.ceil((due - now) / timedelta(days=1))


def build_timeline_stats(milestones: list[Milestone], now: datetime) -> TimelineStats:
    """Summarize a project timeline as of now."""
    if not milestones:
        return TimelineStats()

    completed = [m for m in milestones if m.status == MilestoneStatus.COMPLETED.value]
    in_progress = [m for m in milestones if m.status == MilestoneStatus.IN_PROGRESS.value]
    overdue = [m for m in milestones if m.is_overdue(now)]

    upcoming = sorted(
        (
            UpcomingDeadline(
                id=m.id,
                title=m.title,
                due_date=m.due_date,
                days_until_due=_days_until(m.due_date, now),
            )
            for m in milestones
            if m.status != MilestoneStatus.COMPLETED.value
            and 0 <= _days_until(m.due_date, now) <= UPCOMING_WINDOW_DAYS
        ),
        key=lambda d: d.days_until_due,
    )
    recent = sorted(
        (m for m in completed if m.completed_at is not None),
        key=lambda m: m.completed_at,  # type: ignore[arg-type, return-value]
        reverse=True,
    )[:RECENT_COMPLETIONS]

    return TimelineStats(
        total_milestones=len(milestones),
        completed_milestones=len(completed),
        in_progress_milestones=len(in_progress),
        overdue_milestones=len(overdue),
        overall_progress=round(sum(m.progress for m in milestones) / len(milestones)),
        upcoming_deadlines=upcoming,
        recent_completions=[
            RecentCompletion(id=m.id, title=m.title, completed_at=m.completed_at)  # type: ignore[arg-type]
            for m in recent
        ],
    )


class MilestoneService:
    """Milestones are read by anyone who can see the project and edited by its team.

    Only the owner and the mentor move a milestone between statuses.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        member_repo: MemberRepository,
        milestone_repo: MilestoneRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.member_repo = member_repo
        self.milestone_repo = milestone_repo
        self.session = session

    async def list_milestones(self, project_id: UUID, caller_id: UUID | None) -> list[Milestone]:
        """List milestones by due date."""
        await load_visible_project(self.project_repo, self.member_repo, project_id, caller_id)
        return await self.milestone_repo.list_by_project(project_id)

    async def timeline_stats(self, project_id: UUID, caller_id: UUID | None) -> TimelineStats:
        await load_visible_project(self.project_repo, self.member_repo, project_id, caller_id)
        milestones = await self.milestone_repo.list_by_project(project_id)
        return build_timeline_stats(milestones, utc_now())

    async def create_milestone(
        self, project_id: UUID, caller_id: UUID | None, data: MilestoneCreate
    ) -> Milestone:
        """Append a milestone to the timeline. Team only."""
        caller_id = require_caller(caller_id)

        try:
            ctx = await load_team_project(
                self.project_repo, self.member_repo, project_id, caller_id
            )
            self._check_assignee(ctx, data.assigned_to)

            milestone = Milestone(
                project_id=project_id,
                title=data.title,
                description=data.description,
                due_date=data.due_date,
                assigned_to=data.assigned_to,
                created_by=caller_id,
                position=await self.milestone_repo.next_position(project_id),
            )
            self.milestone_repo.add(milestone)
            await self.session.commit()
            await self.session.refresh(milestone)
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create milestone", project_id=str(project_id), error=str(e))
            raise

        logger.info("Milestone created", project_id=str(project_id), milestone_id=str(milestone.id))
        return milestone

    async def update_milestone(
        self,
        project_id: UUID,
        milestone_id: UUID,
        caller_id: UUID | None,
        data: MilestoneUpdate,
    ) -> Milestone:
        """Edit title, description, due date or assignee. Team only."""
        try:
            ctx = await load_team_project(
                self.project_repo, self.member_repo, project_id, caller_id
            )
            milestone = await self._get_in_project(project_id, milestone_id)

            update_data = data.model_dump(exclude_unset=True)
            if "assigned_to" in update_data:
                self._check_assignee(ctx, update_data["assigned_to"])
            for name, value in update_data.items():
                if name in ("title", "due_date") and value is None:
                    continue
                setattr(milestone, name, value)
            milestone.updated_at = utc_now()

            await self.session.commit()
            await self.session.refresh(milestone)
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to update milestone", milestone_id=str(milestone_id), error=str(e))
            raise

        logger.info("Milestone updated", milestone_id=str(milestone_id), fields=sorted(update_data))
        return milestone

    async def update_progress(
        self, project_id: UUID, milestone_id: UUID, caller_id: UUID | None, progress: int
    ) -> Milestone:
        """Record progress (0-100). Team only."""
        try:
            await load_team_project(self.project_repo, self.member_repo, project_id, caller_id)
            milestone = await self._get_in_project(project_id, milestone_id)

            milestone.progress = progress
            milestone.updated_at = utc_now()
            await self.session.commit()
            await self.session.refresh(milestone)
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to update milestone progress", milestone_id=str(milestone_id), error=str(e)
            )
            raise

        logger.info("Milestone progress updated", milestone_id=str(milestone_id), progress=progress)
        return milestone

    async def update_status(
        self,
        project_id: UUID,
        milestone_id: UUID,
        caller_id: UUID | None,
        status: MilestoneStatus,
    ) -> Milestone:
        """Move a milestone to another status. Owner or mentor only.

        Completing stamps completed_at and sets progress to 100; any other
        status clears completed_at.
        """
        try:
            ctx = await load_team_project(
                self.project_repo, self.member_repo, project_id, caller_id
            )
            if not (ctx.role.is_owner or ctx.role.is_mentor):
                raise ForbiddenError("Only the project owner or mentor can change milestone status")
            milestone = await self._get_in_project(project_id, milestone_id)
            previous = milestone.status

            milestone.status = status.value
            if status == MilestoneStatus.COMPLETED:
                milestone.completed_at = utc_now()
                milestone.progress = 100
            else:
                milestone.completed_at = None
            milestone.updated_at = utc_now()

            await self.session.commit()
            await self.session.refresh(milestone)
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to update milestone status", milestone_id=str(milestone_id), error=str(e)
            )
            raise

        logger.info(
            "Milestone status changed",
            milestone_id=str(milestone_id),
            from_status=previous,
            to_status=status.value,
        )
        return milestone

    async def delete_milestone(
        self, project_id: UUID, milestone_id: UUID, caller_id: UUID | None
    ) -> None:
        """Remove a milestone. Team only."""
        try:
            await load_team_project(self.project_repo, self.member_repo, project_id, caller_id)
            milestone = await self._get_in_project(project_id, milestone_id)

            await self.session.delete(milestone)
            await self.session.commit()
        except ProjectHubError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to delete milestone", milestone_id=str(milestone_id), error=str(e))
            raise

        logger.info("Milestone deleted", project_id=str(project_id), milestone_id=str(milestone_id))

    async def _get_in_project(self, project_id: UUID, milestone_id: UUID) -> Milestone:
        milestone = await self.milestone_repo.get_by_id(milestone_id)
        if milestone is None or milestone.project_id != project_id:
            raise NotFoundError("Milestone not found")
        return milestone

    @staticmethod
    def _check_assignee(ctx: ProjectContext, assignee_id: UUID | None) -> None:
        if assignee_id is not None and not ctx.has_on_team(assignee_id):
            raise InvalidStateError("Milestones can only be assigned to the project team")
