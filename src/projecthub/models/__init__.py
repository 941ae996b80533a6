"""Model exports.

Import from here: `from src.projecthub.models import Project, Profile`
"""

# Enums
from src.projecthub.models.enums import (
    ApplicationStatus,
    MilestoneStatus,
    ProjectStatus,
    TaskPriority,
    TaskStatus,
    UserRole,
)

# Tables
from src.projecthub.models.planning import Milestone, Task
from src.projecthub.models.profile import Profile
from src.projecthub.models.project import (
    Project,
    ProjectApplication,
    ProjectFile,
    ProjectMember,
)

__all__ = [
    # Enums
    "ApplicationStatus",
    "MilestoneStatus",
    "ProjectStatus",
    "TaskPriority",
    "TaskStatus",
    "UserRole",
    # Tables
    "Milestone",
    "Profile",
    "Project",
    "ProjectApplication",
    "ProjectFile",
    "ProjectMember",
    "Task",
]
