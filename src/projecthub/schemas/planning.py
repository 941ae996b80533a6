"""Milestone and task schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.projecthub.models import MilestoneStatus, TaskPriority, TaskStatus


def _strip_title(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            raise ValueError("Title cannot be empty or whitespace only")
    return v


class MilestoneCreate(BaseModel):
    """Schema for adding a milestone to the project timeline."""

    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    due_date: datetime
    assigned_to: UUID | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _strip_title(v) or v


class MilestoneUpdate(BaseModel):
    """Schema for editing a milestone. Send assigned_to: null to unassign."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    due_date: datetime | None = None
    assigned_to: UUID | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return _strip_title(v)


class MilestoneProgressUpdate(BaseModel):
    progress: int = Field(ge=0, le=100)


class MilestoneStatusUpdate(BaseModel):
    status: MilestoneStatus


class MilestoneRead(BaseModel):
    """Schema for reading a milestone.

    status is the stored status; is_overdue is derived when the milestone is
    read (past due and not completed).
    """

    id: UUID
    project_id: UUID
    title: str
    description: str | None
    due_date: datetime
    status: MilestoneStatus
    is_overdue: bool = False
    progress: int
    assigned_to: UUID | None
    created_by: UUID
    completed_at: datetime | None
    position: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UpcomingDeadline(BaseModel):
    id: UUID
    title: str
    due_date: datetime
    days_until_due: int


class RecentCompletion(BaseModel):
    id: UUID
    title: str
    completed_at: datetime


class TimelineStats(BaseModel):
    """Progress summary of a project's milestones."""

    total_milestones: int = 0
    completed_milestones: int = 0
    in_progress_milestones: int = 0
    overdue_milestones: int = 0
    overall_progress: int = Field(default=0, description="Average progress, 0-100")
    upcoming_deadlines: list[UpcomingDeadline] = Field(default_factory=list)
    recent_completions: list[RecentCompletion] = Field(default_factory=list)


class TaskCreate(BaseModel):
    """Schema for adding a task to the board."""

    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to: UUID | None = None
    due_date: datetime | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _strip_title(v) or v


class TaskUpdate(BaseModel):
    """Schema for editing a task. Moving between columns goes through TaskMove."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    priority: TaskPriority | None = None
    assigned_to: UUID | None = None
    due_date: datetime | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return _strip_title(v)


class TaskMove(BaseModel):
    """Drop a task into a status column at a position (1 is the top)."""

    status: TaskStatus
    position: int = Field(ge=1)


class TaskRead(BaseModel):
    """Schema for reading a task."""

    id: UUID
    project_id: UUID
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    assigned_to: UUID | None
    created_by: UUID
    due_date: datetime | None
    completed_at: datetime | None
    position: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TaskStats(BaseModel):
    """Number of tasks per board column."""

    todo: int = 0
    in_progress: int = 0
    review: int = 0
    completed: int = 0
    total: int = 0
