"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.projecthub.api.dependencies.db import DBSession
from src.projecthub.api.dependencies.repositories import (
    ApplicationRepo,
    FileRepo,
    MemberRepo,
    MilestoneRepo,
    ProfileRepo,
    ProjectRepo,
    TaskRepo,
)
from src.projecthub.services import (
    ApplicationService,
    FileService,
    MembershipService,
    MilestoneService,
    ProjectService,
    TaskService,
)


def get_project_service(
    project_repo: ProjectRepo,
    member_repo: MemberRepo,
    application_repo: ApplicationRepo,
    file_repo: FileRepo,
    profile_repo: ProfileRepo,
    milestone_repo: MilestoneRepo,
    task_repo: TaskRepo,
    session: DBSession,
) -> ProjectService:
    """Get project service."""
    return ProjectService(
        project_repo,
        member_repo,
        application_repo,
        file_repo,
        profile_repo,
        milestone_repo,
        task_repo,
        session,
    )


def get_application_service(
    project_repo: ProjectRepo,
    member_repo: MemberRepo,
    application_repo: ApplicationRepo,
    profile_repo: ProfileRepo,
    session: DBSession,
) -> ApplicationService:
    """Get application workflow service."""
    return ApplicationService(project_repo, member_repo, application_repo, profile_repo, session)


def get_membership_service(
    project_repo: ProjectRepo,
    member_repo: MemberRepo,
    profile_repo: ProfileRepo,
    session: DBSession,
) -> MembershipService:
    """Get membership service."""
    return MembershipService(project_repo, member_repo, profile_repo, session)


def get_file_service(
    project_repo: ProjectRepo,
    member_repo: MemberRepo,
    file_repo: FileRepo,
    session: DBSession,
) -> FileService:
    """Get file record service."""
    return FileService(project_repo, member_repo, file_repo, session)


def get_milestone_service(
    project_repo: ProjectRepo,
    member_repo: MemberRepo,
    milestone_repo: MilestoneRepo,
    session: DBSession,
) -> MilestoneService:
    """Get project timeline service."""
    return MilestoneService(project_repo, member_repo, milestone_repo, session)


def get_task_service(
    project_repo: ProjectRepo,
    member_repo: MemberRepo,
    task_repo: TaskRepo,
    session: DBSession,
) -> TaskService:
    """Get task board service."""
    return TaskService(project_repo, member_repo, task_repo, session)


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
ApplicationServiceDep = Annotated[ApplicationService, Depends(get_application_service)]
MembershipServiceDep = Annotated[MembershipService, Depends(get_membership_service)]
FileServiceDep = Annotated[FileService, Depends(get_file_service)]
MilestoneServiceDep = Annotated[MilestoneService, Depends(get_milestone_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
