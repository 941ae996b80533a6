from src.projecthub.services.application_service import ApplicationService
from src.projecthub.services.file_service import FileService
from src.projecthub.services.membership_service import MembershipService
from src.projecthub.services.milestone_service import MilestoneService
from src.projecthub.services.project_service import ProjectDetails, ProjectService
from src.projecthub.services.task_service import TaskService

__all__ = [
    "ApplicationService",
    "FileService",
    "MembershipService",
    "MilestoneService",
    "ProjectDetails",
    "ProjectService",
    "TaskService",
]
