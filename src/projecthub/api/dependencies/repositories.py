"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.projecthub.api.dependencies.db import DBSession
from src.projecthub.repositories import (
    ApplicationRepository,
    MemberRepository,
    MilestoneRepository,
    ProfileRepository,
    ProjectFileRepository,
    ProjectRepository,
    TaskRepository,
)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_member_repository(session: DBSession) -> MemberRepository:
    return MemberRepository(session)


def get_application_repository(session: DBSession) -> ApplicationRepository:
    return ApplicationRepository(session)


def get_file_repository(session: DBSession) -> ProjectFileRepository:
    return ProjectFileRepository(session)


def get_profile_repository(session: DBSession) -> ProfileRepository:
    return ProfileRepository(session)


def get_milestone_repository(session: DBSession) -> MilestoneRepository:
    return MilestoneRepository(session)


def get_task_repository(session: DBSession) -> TaskRepository:
    return TaskRepository(session)


ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
MemberRepo = Annotated[MemberRepository, Depends(get_member_repository)]
ApplicationRepo = Annotated[ApplicationRepository, Depends(get_application_repository)]
FileRepo = Annotated[ProjectFileRepository, Depends(get_file_repository)]
ProfileRepo = Annotated[ProfileRepository, Depends(get_profile_repository)]
MilestoneRepo = Annotated[MilestoneRepository, Depends(get_milestone_repository)]
TaskRepo = Annotated[TaskRepository, Depends(get_task_repository)]
