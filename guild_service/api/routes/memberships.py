"""
Membership API Routes

Invite, approve, join, leave, role assignment and member removal.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from guild_service.api.error import raise_for_error
from guild_service.api.utils.ids import parse_uuid
from guild_service.app.services.unit_of_work import UnitOfWork
from guild_service.app.use_cases.memberships import (
    ApproveInviteByTokenUseCase,
    ApproveInviteForUserUseCase,
    AssignRoleResponse,
    AssignRoleUseCase,
    InviteMemberResponse,
    InviteMemberUseCase,
    JoinGuildUseCase,
    LeaveGuildResponse,
    LeaveGuildUseCase,
    MembershipResponse,
    RemoveMemberResponse,
    RemoveMemberUseCase,
)
from guild_service.depends import get_current_user_id, get_unit_of_work

router = APIRouter(prefix="/guilds", tags=["Memberships"])


class InviteMemberRequest(BaseModel):
    """Invite member HTTP request payload"""

    user_id: str = Field(..., description="User ID to invite")
    role: Optional[str] = Field(None, description="Role to grant (admin/member)")


class ApproveInviteRequest(BaseModel):
    """Approve invite by token HTTP request payload"""

    token: str = Field(..., min_length=1, description="Invitation token")


class AssignRoleRequest(BaseModel):
    """Assign role HTTP request payload"""

    role: str = Field(..., description="New role (admin/member)")


@router.post(
    "/{guild_id}/invites",
    status_code=status.HTTP_201_CREATED,
    response_model=InviteMemberResponse,
)
async def invite_member(
    guild_id: str,
    request: InviteMemberRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Invite Member

    Requires owner or admin. Returns the pending membership and its token.

    Raises:
        - 400 Bad Request: INVALID_ROLE
        - 403 Forbidden: FORBIDDEN
        - 404 Not Found: GUILD_NOT_FOUND
        - 409 Conflict: ALREADY_MEMBER
    """
    guild_uuid = parse_uuid(guild_id, "INVALID_GUILD_ID", "guild ID")
    target_user_uuid = parse_uuid(request.user_id, "INVALID_USER_ID", "user ID")

    use_case = InviteMemberUseCase(uow)
    result = await use_case.execute(user_id, guild_uuid, target_user_uuid, request.role)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{guild_id}/invites/approve",
    status_code=status.HTTP_200_OK,
    response_model=MembershipResponse,
)
async def approve_invite_by_token(
    guild_id: str,
    request: ApproveInviteRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Approve Invite by Token

    The invitee, or anyone who can manage the guild.

    Raises:
        - 403 Forbidden: FORBIDDEN
        - 404 Not Found: GUILD_NOT_FOUND, INVITE_NOT_FOUND
    """
    guild_uuid = parse_uuid(guild_id, "INVALID_GUILD_ID", "guild ID")

    result = await ApproveInviteByTokenUseCase(uow).execute(user_id, guild_uuid, request.token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{guild_id}/invites/accept",
    status_code=status.HTTP_200_OK,
    response_model=MembershipResponse,
)
async def accept_own_invite(
    guild_id: str,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Accept Own Invite

    Raises:
        - 400 Bad Request: NO_PENDING_INVITE
        - 404 Not Found: GUILD_NOT_FOUND, MEMBERSHIP_NOT_FOUND
    """
    guild_uuid = parse_uuid(guild_id, "INVALID_GUILD_ID", "guild ID")

    result = await ApproveInviteForUserUseCase(uow).execute(user_id, guild_uuid)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{guild_id}/join",
    status_code=status.HTTP_200_OK,
    response_model=MembershipResponse,
)
async def join_guild(
    guild_id: str,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Join Guild - idempotent for existing members"""
    guild_uuid = parse_uuid(guild_id, "INVALID_GUILD_ID", "guild ID")

    result = await JoinGuildUseCase(uow).execute(user_id, guild_uuid)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{guild_id}/leave",
    status_code=status.HTTP_200_OK,
    response_model=LeaveGuildResponse,
)
async def leave_guild(
    guild_id: str,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Leave Guild

    Raises:
        - 400 Bad Request: OWNER_CANNOT_LEAVE
        - 404 Not Found: GUILD_NOT_FOUND, NOT_A_MEMBER
    """
    guild_uuid = parse_uuid(guild_id, "INVALID_GUILD_ID", "guild ID")

    result = await LeaveGuildUseCase(uow).execute(user_id, guild_uuid)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.put(
    "/{guild_id}/members/{member_user_id}",
    status_code=status.HTTP_200_OK,
    response_model=AssignRoleResponse,
)
async def assign_role(
    guild_id: str,
    member_user_id: str,
    request: AssignRoleRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Assign Member Role

    Raises:
        - 400 Bad Request: INVALID_ROLE
        - 403 Forbidden: FORBIDDEN
        - 404 Not Found: GUILD_NOT_FOUND, MEMBERSHIP_NOT_FOUND
        - 409 Conflict: CANNOT_CHANGE_OWNER_ROLE
    """
    guild_uuid = parse_uuid(guild_id, "INVALID_GUILD_ID", "guild ID")
    target_user_uuid = parse_uuid(member_user_id, "INVALID_USER_ID", "user ID")

    result = await AssignRoleUseCase(uow).execute(
        user_id, guild_uuid, target_user_uuid, request.role
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{guild_id}/members/{member_user_id}",
    status_code=status.HTTP_200_OK,
    response_model=RemoveMemberResponse,
)
async def remove_member(
    guild_id: str,
    member_user_id: str,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove Member (or withdraw a pending invite)

    Raises:
        - 403 Forbidden: FORBIDDEN
        - 404 Not Found: GUILD_NOT_FOUND, MEMBERSHIP_NOT_FOUND
        - 409 Conflict: CANNOT_REMOVE_OWNER
    """
    guild_uuid = parse_uuid(guild_id, "INVALID_GUILD_ID", "guild ID")
    target_user_uuid = parse_uuid(member_user_id, "INVALID_USER_ID", "user ID")

    result = await RemoveMemberUseCase(uow).execute(user_id, guild_uuid, target_user_uuid)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
