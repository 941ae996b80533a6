"""Tests for project details, listing, lifecycle and deletion."""

from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy import func
from sqlmodel import select

from src.projecthub.core.exceptions import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ProjectNotFoundError,
    UnauthorizedError,
)
from src.projecthub.models import (
    ApplicationStatus,
    Milestone,
    Project,
    ProjectApplication,
    ProjectFile,
    ProjectMember,
    ProjectStatus,
    Task,
)
from src.projecthub.schemas import ProjectCreate, ProjectUpdate
from tests.factories import ProjectFileFactory, utc_now
from tests.helpers import (
    add_member,
    build_project_service,
    create_application,
    create_milestone,
    create_profile,
    create_project,
    create_task,
)

pytestmark = pytest.mark.integration


@pytest.fixture
async def owner(db_session):
    return await create_profile(db_session, full_name="Owner")


@pytest.fixture
async def project(db_session, owner):
    return await create_project(db_session, owner)


@pytest.fixture
def service(service_session):
    return build_project_service(service_session)


# --- details ---


async def test_anonymous_sees_open_project(project, service):
    details = await service.get_project_details(project.id, None)

    assert details.project.id == project.id
    assert not details.role.is_team
    assert not details.role.has_applied
    assert details.applications == []


async def test_details_include_team_and_files(db_session, project, owner, service):
    member = await create_profile(db_session, full_name="Member")
    await add_member(db_session, project, member)
    db_session.add(ProjectFileFactory.build(project_id=project.id, uploaded_by=owner.id))
    await db_session.commit()

    details = await service.get_project_details(project.id, member.id)

    assert details.initiator is not None
    assert details.initiator.full_name == "Owner"
    assert [(m.user_id, p.full_name) for m, p in details.members] == [(member.id, "Member")]
    assert len(details.files) == 1
    assert details.role.is_member


async def test_owner_sees_pending_applications_with_applicants(
    db_session, project, owner, service
):
    pending_by = await create_profile(db_session, full_name="Pending Applicant")
    rejected_by = await create_profile(db_session)
    await create_application(db_session, project, pending_by)
    await create_application(
        db_session, project, rejected_by, status=ApplicationStatus.REJECTED.value
    )

    details = await service.get_project_details(project.id, owner.id)

    assert details.role.is_owner
    assert [(a.applicant_id, p.full_name) for a, p in details.applications] == [
        (pending_by.id, "Pending Applicant")
    ]


async def test_non_owner_never_sees_applications(db_session, project, service):
    member = await create_profile(db_session)
    await add_member(db_session, project, member)
    other = await create_profile(db_session)
    await create_application(db_session, project, other)

    details = await service.get_project_details(project.id, member.id)

    assert details.applications == []


async def test_outsider_sees_own_latest_application(db_session, project, service):
    applicant = await create_profile(db_session)
    await create_application(
        db_session,
        project,
        applicant,
        status=ApplicationStatus.REJECTED.value,
        created_at=utc_now() - timedelta(days=2),
    )
    await create_application(db_session, project, applicant)

    details = await service.get_project_details(project.id, applicant.id)

    assert details.role.has_applied
    assert details.role.application_status == ApplicationStatus.PENDING.value


async def test_outsider_without_application(db_session, project, service):
    outsider = await create_profile(db_session)

    details = await service.get_project_details(project.id, outsider.id)

    assert not details.role.has_applied
    assert details.role.application_status is None


async def test_member_does_not_report_application(db_session, project, owner, service):
    member = await create_profile(db_session)
    await create_application(
        db_session, project, member, status=ApplicationStatus.ACCEPTED.value
    )
    await add_member(db_session, project, member)

    details = await service.get_project_details(project.id, member.id)

    assert details.role.is_member
    assert not details.role.has_applied


async def test_hidden_and_missing_projects_are_indistinguishable(db_session, owner, service):
    hidden = await create_project(db_session, owner, status=ProjectStatus.COMPLETED)
    outsider = await create_profile(db_session)

    with pytest.raises(ProjectNotFoundError) as hidden_exc:
        await service.get_project_details(hidden.id, outsider.id)
    with pytest.raises(ProjectNotFoundError) as missing_exc:
        await service.get_project_details(uuid4(), outsider.id)

    assert hidden_exc.value.detail == missing_exc.value.detail
    assert hidden_exc.value.status_code == missing_exc.value.status_code == 404


async def test_mentor_sees_non_open_project(db_session, owner, service):
    mentor = await create_profile(db_session, role="mentor", full_name="Mentor")
    hidden = await create_project(
        db_session, owner, status=ProjectStatus.IN_PROGRESS, final_mentor_id=mentor.id
    )

    details = await service.get_project_details(hidden.id, mentor.id)

    assert details.role.is_mentor
    assert details.final_mentor is not None
    assert details.final_mentor.full_name == "Mentor"


# --- listing ---


async def test_list_open_projects_newest_first_and_paginated(db_session, owner, service):
    now = utc_now()
    for days in range(3):
        await create_project(db_session, owner, created_at=now - timedelta(days=days))
    await create_project(db_session, owner, status=ProjectStatus.DRAFT)

    first, cursor, has_more = await service.list_open_projects(cursor=None, limit=2)
    second, _, more_after = await service.list_open_projects(cursor=cursor, limit=2)

    assert has_more
    assert not more_after
    assert len(first) == 2
    assert len(second) == 1
    assert first[0].created_at > first[1].created_at > second[0].created_at
    assert all(p.status == ProjectStatus.OPEN.value for p in first + second)


async def test_list_open_projects_by_tag(db_session, owner, service):
    await create_project(db_session, owner, tags=["iot"])
    await create_project(db_session, owner, tags=["ml", "vision"])

    projects, _, _ = await service.list_open_projects(cursor=None, limit=10, tag="vision")

    assert [p.tags for p in projects] == [["ml", "vision"]]


async def test_tag_filter_fills_pages_past_newer_untagged_projects(db_session, owner, service):
    """Matching happens before the page is cut, so newer non-matching projects
    never shorten a page or hide has_more."""
    now = utc_now()
    tagged = [
        await create_project(
            db_session, owner, tags=["ML"], created_at=now - timedelta(days=10 + i)
        )
        for i in range(3)
    ]
    for i in range(4):
        await create_project(db_session, owner, tags=["iot"], created_at=now - timedelta(days=i))

    first, cursor, has_more = await service.list_open_projects(cursor=None, limit=2, tag="ml")
    second, next_cursor, more_after = await service.list_open_projects(
        cursor=cursor, limit=2, tag="ml"
    )

    assert [p.id for p in first] == [tagged[0].id, tagged[1].id]
    assert has_more
    assert [p.id for p in second] == [tagged[2].id]
    assert not more_after
    assert next_cursor is None


async def test_pagination_with_equal_timestamps_skips_nothing(db_session, owner, service):
    created_at = utc_now()
    projects = [await create_project(db_session, owner, created_at=created_at) for _ in range(3)]

    first, cursor, has_more = await service.list_open_projects(cursor=None, limit=2)
    second, _, more_after = await service.list_open_projects(cursor=cursor, limit=2)

    seen = [p.id for p in first + second]
    assert has_more
    assert not more_after
    assert len(seen) == 3
    assert set(seen) == {p.id for p in projects}


async def test_malformed_cursor_starts_from_the_newest(db_session, owner, service):
    now = utc_now()
    newest = await create_project(db_session, owner, created_at=now)
    await create_project(db_session, owner, created_at=now - timedelta(days=1))

    projects, _, _ = await service.list_open_projects(cursor="not-a-cursor", limit=1)

    assert [p.id for p in projects] == [newest.id]


async def test_list_my_projects_covers_every_role(db_session, owner, service):
    me = await create_profile(db_session, role="mentor")
    owned = await create_project(db_session, me, status=ProjectStatus.DRAFT)
    mentored = await create_project(
        db_session, owner, status=ProjectStatus.CLOSED, final_mentor_id=me.id
    )
    joined = await create_project(db_session, owner)
    await add_member(db_session, joined, me)
    await create_project(db_session, owner)

    projects = await service.list_my_projects(me.id)

    assert {p.id for p in projects} == {owned.id, mentored.id, joined.id}


async def test_list_my_projects_requires_caller(service):
    with pytest.raises(UnauthorizedError):
        await service.list_my_projects(None)


# --- lifecycle ---


async def test_create_project_is_open_and_owned(owner, service):
    project = await service.create_project(
        owner.id, ProjectCreate(title="Campus Drone", tags="ml, iot")
    )

    assert project.status == ProjectStatus.OPEN.value
    assert project.initiator_id == owner.id
    assert project.tags == ["ml", "iot"]


async def test_update_project_owner_only(db_session, project, owner, service):
    updated = await service.update_project(
        project.id, owner.id, ProjectUpdate(title="Renamed", tags=["rust"])
    )
    assert updated.title == "Renamed"
    assert updated.tags == ["rust"]

    member = await create_profile(db_session)
    await add_member(db_session, project, member)
    with pytest.raises(ForbiddenError):
        await service.update_project(project.id, member.id, ProjectUpdate(title="Hijack"))


async def test_update_ignores_null_for_required_fields(db_session, owner, service):
    project = await create_project(
        db_session, owner, description="Original", tags=["ml"], github_link="https://git.example/p"
    )

    updated = await service.update_project(
        project.id,
        owner.id,
        ProjectUpdate(title=None, description=None, tags=None, github_link=None),
    )

    assert updated.title == project.title
    assert updated.description == "Original"
    assert updated.tags == ["ml"]
    assert updated.github_link is None


async def test_closing_project_hides_it_from_outsiders(db_session, project, owner, service):
    outsider = await create_profile(db_session)

    await service.update_status(project.id, owner.id, ProjectStatus.CLOSED)

    with pytest.raises(ProjectNotFoundError):
        await service.get_project_details(project.id, outsider.id)


async def test_outsider_cannot_change_status_of_hidden_project(db_session, owner, service):
    hidden = await create_project(db_session, owner, status=ProjectStatus.DRAFT)
    outsider = await create_profile(db_session)

    with pytest.raises(ProjectNotFoundError):
        await service.update_status(hidden.id, outsider.id, ProjectStatus.OPEN)


async def test_outsider_cannot_change_status_of_open_project(db_session, project, service):
    outsider = await create_profile(db_session)

    with pytest.raises(ForbiddenError):
        await service.update_status(project.id, outsider.id, ProjectStatus.CLOSED)


async def test_assign_mentor(db_session, project, owner, service):
    mentor = await create_profile(db_session, role="mentor")

    updated = await service.assign_mentor(project.id, owner.id, mentor.id)

    assert updated.final_mentor_id == mentor.id


async def test_assign_student_as_mentor_rejected(db_session, project, owner, service):
    student = await create_profile(db_session)

    with pytest.raises(InvalidStateError):
        await service.assign_mentor(project.id, owner.id, student.id)


async def test_assign_unknown_mentor(project, owner, service):
    with pytest.raises(NotFoundError):
        await service.assign_mentor(project.id, owner.id, uuid4())


# --- deletion ---


async def _count(session, model, *where) -> int:
    result = await session.execute(select(func.count()).select_from(model).where(*where))
    return result.scalar_one()


async def test_delete_removes_dependents(db_session, project, owner, service):
    member = await create_profile(db_session)
    applicant = await create_profile(db_session)
    await add_member(db_session, project, member)
    await create_application(db_session, project, applicant)
    db_session.add(ProjectFileFactory.build(project_id=project.id, uploaded_by=owner.id))
    await db_session.commit()
    await create_milestone(db_session, project, owner)
    await create_task(db_session, project, member)

    await service.delete_project(project.id, owner.id)

    assert await _count(db_session, Project, Project.id == project.id) == 0
    for model in (ProjectMember, ProjectApplication, ProjectFile, Milestone, Task):
        assert await _count(db_session, model, model.project_id == project.id) == 0


async def test_delete_by_non_owner_leaves_everything(db_session, project, service):
    member = await create_profile(db_session)
    await add_member(db_session, project, member)

    with pytest.raises(ForbiddenError):
        await service.delete_project(project.id, member.id)

    assert await _count(db_session, Project, Project.id == project.id) == 1
    assert await _count(db_session, ProjectMember, ProjectMember.project_id == project.id) == 1


async def test_delete_failure_rolls_back_all_rows(db_session, project, owner, service):
    applicant = await create_profile(db_session)
    await add_member(db_session, project, applicant)
    await create_application(db_session, project, applicant)

    async def _fail(project_id):
        raise RuntimeError("storage unavailable")

    service.project_repo.delete_by_id = _fail

    with pytest.raises(RuntimeError):
        await service.delete_project(project.id, owner.id)

    assert await _count(db_session, Project, Project.id == project.id) == 1
    assert await _count(db_session, ProjectMember, ProjectMember.project_id == project.id) == 1
    assert (
        await _count(db_session, ProjectApplication, ProjectApplication.project_id == project.id)
        == 1
    )
