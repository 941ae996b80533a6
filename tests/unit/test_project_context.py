"""Tests for per-request project loading with mocked repositories."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.projecthub.core.exceptions import (
    ForbiddenError,
    ProjectNotFoundError,
    UnauthorizedError,
)
from src.projecthub.models import ProjectStatus
from src.projecthub.services.project_context import (
    load_owned_project,
    load_team_project,
    load_visible_project,
    require_caller,
)
from tests.factories import ProjectFactory, ProjectMemberFactory

pytestmark = pytest.mark.unit


@pytest.fixture
def owner_id():
    return uuid4()


def _repos(project, members=()):
    project_repo = MagicMock()
    project_repo.get_by_id = AsyncMock(return_value=project)
    member_repo = MagicMock()
    member_repo.list_by_project = AsyncMock(return_value=list(members))
    return project_repo, member_repo


def test_require_caller():
    user_id = uuid4()
    assert require_caller(user_id) == user_id
    with pytest.raises(UnauthorizedError):
        require_caller(None)


async def test_missing_project(owner_id):
    project_repo, member_repo = _repos(None)

    with pytest.raises(ProjectNotFoundError):
        await load_visible_project(project_repo, member_repo, uuid4(), owner_id)

    member_repo.list_by_project.assert_not_awaited()


async def test_hidden_project_raises_same_error_as_missing(owner_id):
    project = ProjectFactory.build(initiator_id=owner_id, status=ProjectStatus.DRAFT.value)
    project_repo, member_repo = _repos(project)

    with pytest.raises(ProjectNotFoundError) as exc_info:
        await load_visible_project(project_repo, member_repo, project.id, uuid4())

    assert exc_info.value.detail == ProjectNotFoundError().detail


async def test_visible_project_carries_role(owner_id):
    member_id = uuid4()
    project = ProjectFactory.build(initiator_id=owner_id, status=ProjectStatus.CLOSED.value)
    members = [ProjectMemberFactory.build(project_id=project.id, user_id=member_id)]
    project_repo, member_repo = _repos(project, members)

    ctx = await load_visible_project(project_repo, member_repo, project.id, member_id)

    assert ctx.project is project
    assert ctx.role.is_member
    assert not ctx.role.is_owner


async def test_owned_project_requires_owner(owner_id):
    project = ProjectFactory.build(initiator_id=owner_id)
    project_repo, member_repo = _repos(project)

    ctx = await load_owned_project(project_repo, member_repo, project.id, owner_id)
    assert ctx.role.is_owner

    with pytest.raises(ForbiddenError):
        await load_owned_project(project_repo, member_repo, project.id, uuid4())


async def test_owned_project_requires_caller(owner_id):
    project = ProjectFactory.build(initiator_id=owner_id)
    project_repo, member_repo = _repos(project)

    with pytest.raises(UnauthorizedError):
        await load_owned_project(project_repo, member_repo, project.id, None)

    project_repo.get_by_id.assert_not_awaited()


async def test_team_project_admits_owner_mentor_and_member(owner_id):
    mentor_id, member_id = uuid4(), uuid4()
    project = ProjectFactory.build(initiator_id=owner_id, final_mentor_id=mentor_id)
    members = [ProjectMemberFactory.build(project_id=project.id, user_id=member_id)]
    project_repo, member_repo = _repos(project, members)

    for caller in (owner_id, mentor_id, member_id):
        ctx = await load_team_project(project_repo, member_repo, project.id, caller)
        assert ctx.role.is_team


async def test_team_project_forbids_outsider_on_open_project(owner_id):
    project = ProjectFactory.build(initiator_id=owner_id)
    project_repo, member_repo = _repos(project)

    with pytest.raises(ForbiddenError):
        await load_team_project(project_repo, member_repo, project.id, uuid4())


async def test_has_on_team(owner_id):
    mentor_id, member_id = uuid4(), uuid4()
    project = ProjectFactory.build(initiator_id=owner_id, final_mentor_id=mentor_id)
    members = [ProjectMemberFactory.build(project_id=project.id, user_id=member_id)]
    project_repo, member_repo = _repos(project, members)

    ctx = await load_visible_project(project_repo, member_repo, project.id, None)

    assert ctx.has_on_team(owner_id)
    assert ctx.has_on_team(mentor_id)
    assert ctx.has_on_team(member_id)
    assert not ctx.has_on_team(uuid4())
