"""Tests for project milestones and the task board against a real database."""

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
    Milestone,
    MilestoneStatus,
    ProjectStatus,
    Task,
    TaskPriority,
    TaskStatus,
)
from src.projecthub.schemas import MilestoneCreate, MilestoneUpdate, TaskCreate, TaskUpdate
from tests.factories import utc_now
from tests.helpers import (
    add_member,
    build_milestone_service,
    build_task_service,
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
async def member(db_session, project):
    profile = await create_profile(db_session, full_name="Member")
    await add_member(db_session, project, profile)
    return profile


@pytest.fixture
async def mentor(db_session, project):
    profile = await create_profile(db_session, role="mentor")
    project.final_mentor_id = profile.id
    await db_session.commit()
    return profile


@pytest.fixture
async def outsider(db_session):
    return await create_profile(db_session, full_name="Outsider")


@pytest.fixture
async def project(db_session, owner):
    return await create_project(db_session, owner)


@pytest.fixture
def milestones(service_session):
    return build_milestone_service(service_session)


@pytest.fixture
def tasks(service_session):
    return build_task_service(service_session)


async def _count(session, model, *where) -> int:
    result = await session.execute(select(func.count()).select_from(model).where(*where))
    return result.scalar_one()


def _milestone(**kwargs) -> MilestoneCreate:
    kwargs.setdefault("title", "Prototype")
    kwargs.setdefault("due_date", utc_now() + timedelta(days=7))
    return MilestoneCreate(**kwargs)


# --- milestones ---


async def test_member_creates_milestones_in_order(project, member, milestones):
    first = await milestones.create_milestone(project.id, member.id, _milestone())
    second = await milestones.create_milestone(project.id, member.id, _milestone(title="Demo"))

    assert first.status == MilestoneStatus.PENDING.value
    assert first.progress == 0
    assert first.created_by == member.id
    assert (first.position, second.position) == (1, 2)


async def test_anonymous_cannot_create_milestone(project, milestones):
    with pytest.raises(UnauthorizedError):
        await milestones.create_milestone(project.id, None, _milestone())


async def test_outsider_cannot_create_milestone(db_session, project, outsider, milestones):
    with pytest.raises(ForbiddenError):
        await milestones.create_milestone(project.id, outsider.id, _milestone())

    assert await _count(db_session, Milestone, Milestone.project_id == project.id) == 0


async def test_outsider_of_hidden_project_sees_not_found(db_session, owner, outsider, milestones):
    hidden = await create_project(db_session, owner, status=ProjectStatus.IN_PROGRESS)

    with pytest.raises(ProjectNotFoundError):
        await milestones.create_milestone(hidden.id, outsider.id, _milestone())
    with pytest.raises(ProjectNotFoundError):
        await milestones.list_milestones(hidden.id, outsider.id)


async def test_anyone_lists_milestones_of_open_project_by_due_date(
    db_session, project, owner, milestones
):
    now = utc_now()
    later = await create_milestone(db_session, project, owner, due_date=now + timedelta(days=9))
    sooner = await create_milestone(db_session, project, owner, due_date=now + timedelta(days=2))

    listed = await milestones.list_milestones(project.id, None)

    assert [m.id for m in listed] == [sooner.id, later.id]


async def test_milestone_assignee_must_be_on_team(
    db_session, project, owner, outsider, milestones
):
    with pytest.raises(InvalidStateError):
        await milestones.create_milestone(
            project.id, owner.id, _milestone(assigned_to=outsider.id)
        )

    assert await _count(db_session, Milestone, Milestone.project_id == project.id) == 0


async def test_milestone_can_be_assigned_to_mentor(project, owner, mentor, milestones):
    milestone = await milestones.create_milestone(
        project.id, owner.id, _milestone(assigned_to=mentor.id)
    )

    assert milestone.assigned_to == mentor.id


async def test_update_milestone_keeps_title_on_null_and_unassigns(
    db_session, project, owner, member, milestones
):
    milestone = await create_milestone(
        db_session, project, owner, title="Kickoff", assigned_to=member.id
    )

    updated = await milestones.update_milestone(
        project.id,
        milestone.id,
        member.id,
        MilestoneUpdate(title=None, description="Agenda ready", assigned_to=None),
    )

    assert updated.title == "Kickoff"
    assert updated.description == "Agenda ready"
    assert updated.assigned_to is None


async def test_update_progress(db_session, project, owner, member, milestones):
    milestone = await create_milestone(db_session, project, owner)

    updated = await milestones.update_progress(project.id, milestone.id, member.id, 40)

    assert updated.progress == 40
    assert updated.status == MilestoneStatus.PENDING.value


async def test_member_cannot_change_milestone_status(
    db_session, project, owner, member, milestones
):
    milestone = await create_milestone(db_session, project, owner)

    with pytest.raises(ForbiddenError):
        await milestones.update_status(
            project.id, milestone.id, member.id, MilestoneStatus.COMPLETED
        )


async def test_completing_and_reopening_milestone(db_session, project, owner, milestones):
    milestone = await create_milestone(db_session, project, owner, progress=60)

    completed = await milestones.update_status(
        project.id, milestone.id, owner.id, MilestoneStatus.COMPLETED
    )
    assert completed.completed_at is not None
    assert completed.progress == 100

    reopened = await milestones.update_status(
        project.id, milestone.id, owner.id, MilestoneStatus.IN_PROGRESS
    )
    assert reopened.completed_at is None
    assert reopened.status == MilestoneStatus.IN_PROGRESS.value


async def test_mentor_can_change_milestone_status(db_session, project, owner, mentor, milestones):
    milestone = await create_milestone(db_session, project, owner)

    updated = await milestones.update_status(
        project.id, milestone.id, mentor.id, MilestoneStatus.IN_PROGRESS
    )

    assert updated.status == MilestoneStatus.IN_PROGRESS.value


async def test_milestone_of_other_project_not_found(db_session, project, owner, milestones):
    other = await create_project(db_session, owner)
    milestone = await create_milestone(db_session, other, owner)

    with pytest.raises(NotFoundError):
        await milestones.update_progress(project.id, milestone.id, owner.id, 10)
    with pytest.raises(NotFoundError):
        await milestones.delete_milestone(project.id, uuid4(), owner.id)


async def test_delete_milestone(db_session, project, owner, member, milestones):
    milestone = await create_milestone(db_session, project, owner)

    await milestones.delete_milestone(project.id, milestone.id, member.id)

    assert await _count(db_session, Milestone, Milestone.id == milestone.id) == 0


async def test_timeline_stats(db_session, project, owner, milestones):
    now = utc_now()
    await create_milestone(
        db_session, project, owner, due_date=now + timedelta(days=3), progress=50
    )
    await create_milestone(
        db_session, project, owner, due_date=now - timedelta(days=1), progress=0
    )
    await create_milestone(
        db_session,
        project,
        owner,
        due_date=now - timedelta(days=5),
        status=MilestoneStatus.COMPLETED.value,
        progress=100,
        completed_at=now - timedelta(days=4),
    )

    stats = await milestones.timeline_stats(project.id, None)

    assert stats.total_milestones == 3
    assert stats.completed_milestones == 1
    assert stats.overdue_milestones == 1
    assert stats.overall_progress == 50
    assert [d.days_until_due for d in stats.upcoming_deadlines] == [3]
    assert len(stats.recent_completions) == 1


# --- tasks ---


async def test_tasks_append_to_their_column(project, member, tasks):
    first = await tasks.create_task(project.id, member.id, TaskCreate(title="Wire sensors"))
    second = await tasks.create_task(project.id, member.id, TaskCreate(title="Calibrate"))
    reviewing = await tasks.create_task(
        project.id, member.id, TaskCreate(title="Schematic", status=TaskStatus.REVIEW)
    )

    assert (first.position, second.position) == (1, 2)
    assert reviewing.position == 1
    assert first.priority == TaskPriority.MEDIUM.value
    assert first.completed_at is None


async def test_task_created_completed_is_stamped(project, owner, tasks):
    task = await tasks.create_task(
        project.id, owner.id, TaskCreate(title="Done already", status=TaskStatus.COMPLETED)
    )

    assert task.completed_at is not None


async def test_outsider_cannot_create_task(db_session, project, outsider, tasks):
    with pytest.raises(ForbiddenError):
        await tasks.create_task(project.id, outsider.id, TaskCreate(title="Sneaky"))

    assert await _count(db_session, Task, Task.project_id == project.id) == 0


async def test_task_assignee_must_be_on_team(db_session, project, owner, outsider, tasks):
    with pytest.raises(InvalidStateError):
        await tasks.create_task(
            project.id, owner.id, TaskCreate(title="Delegate", assigned_to=outsider.id)
        )

    task = await create_task(db_session, project, owner)
    with pytest.raises(InvalidStateError):
        await tasks.update_task(
            project.id, task.id, owner.id, TaskUpdate(assigned_to=outsider.id)
        )


async def test_update_task_fields(db_session, project, owner, member, tasks):
    task = await create_task(db_session, project, owner, title="Order parts")

    updated = await tasks.update_task(
        project.id,
        task.id,
        member.id,
        TaskUpdate(title=None, priority=TaskPriority.URGENT, assigned_to=member.id),
    )

    assert updated.title == "Order parts"
    assert updated.priority == TaskPriority.URGENT.value
    assert updated.assigned_to == member.id


async def test_move_task_shifts_target_column(db_session, project, owner, tasks):
    a = await create_task(db_session, project, owner, position=1)
    b = await create_task(db_session, project, owner, position=2)
    c = await create_task(db_session, project, owner, status=TaskStatus.REVIEW.value, position=1)

    moved = await tasks.move_task(project.id, c.id, owner.id, TaskStatus.TODO, 1)

    assert moved.status == TaskStatus.TODO.value
    assert moved.position == 1
    await db_session.refresh(a)
    await db_session.refresh(b)
    assert (a.position, b.position) == (2, 3)


async def test_move_into_and_out_of_completed(db_session, project, owner, member, tasks):
    task = await create_task(db_session, project, owner)

    done = await tasks.move_task(project.id, task.id, member.id, TaskStatus.COMPLETED, 1)
    assert done.completed_at is not None

    reopened = await tasks.move_task(project.id, task.id, member.id, TaskStatus.IN_PROGRESS, 1)
    assert reopened.completed_at is None


async def test_task_stats(db_session, project, owner, tasks):
    for status in (TaskStatus.TODO, TaskStatus.TODO, TaskStatus.REVIEW, TaskStatus.COMPLETED):
        await create_task(db_session, project, owner, status=status.value)

    stats = await tasks.task_stats(project.id, None)

    assert (stats.todo, stats.in_progress, stats.review, stats.completed) == (2, 0, 1, 1)
    assert stats.total == 4


async def test_task_of_other_project_not_found(db_session, project, owner, tasks):
    other = await create_project(db_session, owner)
    task = await create_task(db_session, other, owner)

    with pytest.raises(NotFoundError):
        await tasks.get_task(project.id, task.id, owner.id)
    with pytest.raises(NotFoundError):
        await tasks.move_task(project.id, task.id, owner.id, TaskStatus.REVIEW, 1)


async def test_delete_task(db_session, project, owner, member, tasks):
    task = await create_task(db_session, project, owner)

    await tasks.delete_task(project.id, task.id, member.id)

    assert await _count(db_session, Task, Task.id == task.id) == 0
