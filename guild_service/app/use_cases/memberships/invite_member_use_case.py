"""
Invite Member Use Case

Handles inviting a user to a guild with a role.
"""

from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from guild_service.app.services.membership_state_machine import MembershipStateMachine
from guild_service.app.services.unit_of_work import UnitOfWork
from guild_service.domain.entities import GuildAuditEvent

from .dtos import InviteMemberResponse, MembershipResponse


class InviteMemberUseCase:
    """
    Use case for inviting users to join a guild.

    Business Rules:
    - Only owner/admin can invite
    - Role defaults to member; owner cannot be granted
    - Any existing membership row (pending or approved) blocks the invite;
      a stale invite must be removed before re-inviting
    - Generates a cryptographically secure invitation token
    - Token delivery to the invitee is the caller's concern
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        inviter_user_id: UUID,
        guild_id: UUID,
        target_user_id: UUID,
        role: Optional[str] = None,
    ) -> Result[InviteMemberResponse]:
        """
        Execute invite member use case.

        Args:
            inviter_user_id: User sending the invite
            guild_id: Target guild
            target_user_id: User being invited
            role: Role to grant on approval (admin/member), default member

        Returns:
            Result with InviteMemberResponse (membership + token), or Error
        """
        async with self.uow:
            guild = await self.uow.guilds.get_by_id(guild_id)
            if guild is None:
                return Return.err(Error("GUILD_NOT_FOUND", "Guild not found"))

            result = await MembershipStateMachine(self.uow).invite(
                guild, target_user_id, inviter_user_id, role
            )
            if result.is_err():
                return result

            membership, token = result.value

            audit = GuildAuditEvent(
                guild_id=guild_id,
                user_id=inviter_user_id,
                action="member_invited",
                event_metadata={
                    "invited_user_id": str(target_user_id),
                    "role": membership.role.value,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                InviteMemberResponse(
                    membership=MembershipResponse.from_entity(membership),
                    token=token,
                )
            )
