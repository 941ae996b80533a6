"""Repository layer - data access abstraction."""

from src.projecthub.repositories.application import ApplicationRepository
from src.projecthub.repositories.base import BaseRepository
from src.projecthub.repositories.file import ProjectFileRepository
from src.projecthub.repositories.member import MemberRepository
from src.projecthub.repositories.milestone import MilestoneRepository
from src.projecthub.repositories.profile import ProfileRepository
from src.projecthub.repositories.project import ProjectRepository
from src.projecthub.repositories.task import TaskRepository

__all__ = [
    "ApplicationRepository",
    "BaseRepository",
    "MemberRepository",
    "MilestoneRepository",
    "ProfileRepository",
    "ProjectFileRepository",
    "ProjectRepository",
    "TaskRepository",
]
