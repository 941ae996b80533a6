"""Test helper functions for common data creation patterns."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.security import create_access_token
from src.projecthub.models import (
    Milestone,
    Profile,
    Project,
    ProjectApplication,
    ProjectMember,
    ProjectStatus,
    Task,
)
from src.projecthub.repositories import (
    ApplicationRepository,
    MemberRepository,
    MilestoneRepository,
    ProfileRepository,
    ProjectFileRepository,
    ProjectRepository,
    TaskRepository,
)
from src.projecthub.services import (
    ApplicationService,
    FileService,
    MembershipService,
    MilestoneService,
    ProjectService,
    TaskService,
)
from tests.factories import (
    MilestoneFactory,
    ProfileFactory,
    ProjectApplicationFactory,
    ProjectFactory,
    ProjectMemberFactory,
    TaskFactory,
)


def auth_headers(user_id: UUID) -> dict[str, str]:
    """Authorization header carrying a valid token for user_id."""
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


async def create_profile(session: AsyncSession, **kwargs) -> Profile:
    """Create and commit a student profile (or a mentor with role="mentor")."""
    profile = ProfileFactory.build(**kwargs)
    session.add(profile)
    await session.commit()
    return profile


async def create_project(
    session: AsyncSession,
    owner: Profile,
    status: ProjectStatus = ProjectStatus.OPEN,
    **kwargs,
) -> Project:
    """Create and commit a project owned by owner."""
    project = ProjectFactory.build(initiator_id=owner.id, status=status.value, **kwargs)
    session.add(project)
    await session.commit()
    return project


async def add_member(session: AsyncSession, project: Project, user: Profile) -> ProjectMember:
    """Create and commit a membership row."""
    member = ProjectMemberFactory.build(project_id=project.id, user_id=user.id)
    session.add(member)
    await session.commit()
    return member


async def create_application(
    session: AsyncSession, project: Project, applicant: Profile, **kwargs
) -> ProjectApplication:
    """Create and commit an application (pending unless status is given)."""
    application = ProjectApplicationFactory.build(
        project_id=project.id, applicant_id=applicant.id, **kwargs
    )
    session.add(application)
    await session.commit()
    return application


async def create_milestone(
    session: AsyncSession, project: Project, creator: Profile, **kwargs
) -> Milestone:
    """Create and commit a milestone on project."""
    milestone = MilestoneFactory.build(project_id=project.id, created_by=creator.id, **kwargs)
    session.add(milestone)
    await session.commit()
    return milestone


async def create_task(
    session: AsyncSession, project: Project, creator: Profile, **kwargs
) -> Task:
    """Create and commit a task on project."""
    task = TaskFactory.build(project_id=project.id, created_by=creator.id, **kwargs)
    session.add(task)
    await session.commit()
    return task


def build_project_service(session: AsyncSession) -> ProjectService:
    return ProjectService(
        ProjectRepository(session),
        MemberRepository(session),
        ApplicationRepository(session),
        ProjectFileRepository(session),
        ProfileRepository(session),
        MilestoneRepository(session),
        TaskRepository(session),
        session,
    )


def build_application_service(session: AsyncSession) -> ApplicationService:
    return ApplicationService(
        ProjectRepository(session),
        MemberRepository(session),
        ApplicationRepository(session),
        ProfileRepository(session),
        session,
    )


def build_membership_service(session: AsyncSession) -> MembershipService:
    return MembershipService(
        ProjectRepository(session),
        MemberRepository(session),
        ProfileRepository(session),
        session,
    )


def build_file_service(session: AsyncSession) -> FileService:
    return FileService(
        ProjectRepository(session),
        MemberRepository(session),
        ProjectFileRepository(session),
        session,
    )


def build_milestone_service(session: AsyncSession) -> MilestoneService:
    return MilestoneService(
        ProjectRepository(session),
        MemberRepository(session),
        MilestoneRepository(session),
        session,
    )


def build_task_service(session: AsyncSession) -> TaskService:
    return TaskService(
        ProjectRepository(session),
        MemberRepository(session),
        TaskRepository(session),
        session,
    )
