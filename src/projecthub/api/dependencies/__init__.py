"""FastAPI dependency injection definitions."""

# Auth
from src.projecthub.api.dependencies.auth import (
    CurrentUserId,
    OptionalUserId,
    get_current_user_id,
    get_optional_user_id,
)

# Database
from src.projecthub.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.projecthub.api.dependencies.repositories import (
    ApplicationRepo,
    FileRepo,
    MemberRepo,
    MilestoneRepo,
    ProfileRepo,
    ProjectRepo,
    TaskRepo,
)

# Services
from src.projecthub.api.dependencies.services import (
    ApplicationServiceDep,
    FileServiceDep,
    MembershipServiceDep,
    MilestoneServiceDep,
    ProjectServiceDep,
    TaskServiceDep,
)

__all__ = [
    # Auth
    "CurrentUserId",
    "OptionalUserId",
    "get_current_user_id",
    "get_optional_user_id",
    # Database
    "DBSession",
    "get_db_session",
    # Repositories
    "ApplicationRepo",
    "FileRepo",
    "MemberRepo",
    "MilestoneRepo",
    "ProfileRepo",
    "ProjectRepo",
    "TaskRepo",
    # Services
    "ApplicationServiceDep",
    "FileServiceDep",
    "MembershipServiceDep",
    "MilestoneServiceDep",
    "ProjectServiceDep",
    "TaskServiceDep",
]
