"""Team membership endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.projecthub.api.dependencies import MembershipServiceDep, OptionalUserId
from src.projecthub.schemas import MemberAdd, MemberRead, ProfileSummary

router = APIRouter(prefix="/projects/{project_id}/members", tags=["members"])


@router.get(
    "",
    response_model=list[MemberRead],
    summary="List members",
    responses={
        200: {"description": "Team members with profiles"},
        404: {"description": "Project not found"},
    },
)
async def list_members(
    project_id: UUID,
    service: MembershipServiceDep,
    user_id: OptionalUserId,
) -> list[MemberRead]:
    members = await service.list_members(project_id, user_id)
    return [
        MemberRead(
            user_id=member.user_id,
            is_lead=member.is_lead,
            joined_at=member.joined_at,
            profile=ProfileSummary.model_validate(profile) if profile else None,
        )
        for member, profile in members
    ]


@router.post(
    "",
    response_model=MemberRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add member",
    description="Add a user to the team without an application. Owner only.",
    responses={
        201: {"description": "Member added"},
        403: {"description": "Not the project owner"},
        404: {"description": "Project or user not found"},
        409: {"description": "User is already a member"},
    },
)
async def add_member(
    project_id: UUID,
    request: MemberAdd,
    service: MembershipServiceDep,
    user_id: OptionalUserId,
) -> MemberRead:
    member = await service.add_member(project_id, user_id, request.user_id, request.is_lead)
    return MemberRead(user_id=member.user_id, is_lead=member.is_lead, joined_at=member.joined_at)


@router.post(
    "/leave",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Leave project",
    responses={
        204: {"description": "Left the project"},
        404: {"description": "Project not found or caller is not a member"},
        422: {"description": "The owner cannot leave"},
    },
)
async def leave_project(
    project_id: UUID,
    service: MembershipServiceDep,
    user_id: OptionalUserId,
) -> None:
    await service.leave_project(project_id, user_id)


@router.delete(
    "/{member_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove member",
    description="Remove a user from the team. Owner only.",
    responses={
        204: {"description": "Member removed"},
        403: {"description": "Not the project owner"},
        404: {"description": "Project or member not found"},
    },
)
async def remove_member(
    project_id: UUID,
    member_id: UUID,
    service: MembershipServiceDep,
    user_id: OptionalUserId,
) -> None:
    await service.remove_member(project_id, user_id, member_id)
