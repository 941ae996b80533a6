"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """Platform role of a profile."""

    STUDENT = "student"
    MENTOR = "mentor"
    ADMIN = "admin"


class ProjectStatus(str, Enum):
    """Project lifecycle status. Only OPEN projects are visible outside the team."""

    DRAFT = "draft"
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CLOSED = "closed"
    ARCHIVED = "archived"


class ApplicationStatus(str, Enum):
    """Join request status. ACCEPTED and REJECTED are terminal."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class MilestoneStatus(str, Enum):
    """Stored milestone status. "Overdue" is derived on read, never stored."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskStatus(str, Enum):
    """Board column of a task."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"
