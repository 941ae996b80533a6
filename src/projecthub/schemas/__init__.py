from src.projecthub.schemas.application import (
    ApplicationCreate,
    ApplicationRead,
    ApplicationWithApplicant,
)
from src.projecthub.schemas.file import ProjectFileCreate, ProjectFileRead
from src.projecthub.schemas.pagination import PaginatedResponse
from src.projecthub.schemas.planning import (
    MilestoneCreate,
    MilestoneProgressUpdate,
    MilestoneRead,
    MilestoneStatusUpdate,
    MilestoneUpdate,
    TaskCreate,
    TaskMove,
    TaskRead,
    TaskStats,
    TaskUpdate,
    TimelineStats,
)
from src.projecthub.schemas.profile import ProfileSummary
from src.projecthub.schemas.project import (
    MemberAdd,
    MemberRead,
    MentorAssign,
    ProjectCreate,
    ProjectDetailsRead,
    ProjectRead,
    ProjectStatusUpdate,
    ProjectUpdate,
    ViewerRoleRead,
)

__all__ = [
    # Application
    "ApplicationCreate",
    "ApplicationRead",
    "ApplicationWithApplicant",
    # File
    "ProjectFileCreate",
    "ProjectFileRead",
    # Pagination
    "PaginatedResponse",
    # Planning
    "MilestoneCreate",
    "MilestoneProgressUpdate",
    "MilestoneRead",
    "MilestoneStatusUpdate",
    "MilestoneUpdate",
    "TaskCreate",
    "TaskMove",
    "TaskRead",
    "TaskStats",
    "TaskUpdate",
    "TimelineStats",
    # Profile
    "ProfileSummary",
    # Project
    "MemberAdd",
    "MemberRead",
    "MentorAssign",
    "ProjectCreate",
    "ProjectDetailsRead",
    "ProjectRead",
    "ProjectStatusUpdate",
    "ProjectUpdate",
    "ViewerRoleRead",
]
