"""Milestone and task models - the team's planning board for a project."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from src.projecthub.models.base import utc_now
from src.projecthub.models.enums import MilestoneStatus, TaskPriority, TaskStatus


class Milestone(SQLModel, table=True):
    """Dated checkpoint on the project timeline."""

    __tablename__ = "milestones"
    __table_args__ = (Index("ix_milestones_project_due", "project_id", "due_date"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    due_date: datetime
    status: str = Field(default=MilestoneStatus.PENDING.value, max_length=20)
    progress: int = Field(default=0, ge=0, le=100)
    assigned_to: UUID | None = Field(default=None, foreign_key="profiles.id")
    created_by: UUID = Field(foreign_key="profiles.id")
    completed_at: datetime | None = Field(default=None)
    position: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def status_enum(self) -> MilestoneStatus:
        """Get status as MilestoneStatus enum."""
        return MilestoneStatus(self.status)

    def is_overdue(self, now: datetime) -> bool:
        return self.due_date < now and self.status != MilestoneStatus.COMPLETED.value


class Task(SQLModel, table=True):
    """Card on the project task board. position orders cards within a status column."""

    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_project_status_position", "project_id", "status", "position"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    status: str = Field(default=TaskStatus.TODO.value, max_length=20)
    priority: str = Field(default=TaskPriority.MEDIUM.value, max_length=20)
    assigned_to: UUID | None = Field(default=None, foreign_key="profiles.id")
    created_by: UUID = Field(foreign_key="profiles.id")
    due_date: datetime | None = Field(default=None)
    completed_at: datetime | None = Field(default=None)
    position: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def status_enum(self) -> TaskStatus:
        """Get status as TaskStatus enum."""
        return TaskStatus(self.status)
