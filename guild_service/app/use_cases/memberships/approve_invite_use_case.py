"""
Approve Invite Use Cases

Transition a pending invite to approved, either by token or by the
invitee approving their own invite.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from guild_service.app.services.membership_state_machine import MembershipStateMachine
from guild_service.app.services.unit_of_work import UnitOfWork
from guild_service.domain.entities import GuildAuditEvent

from .dtos import MembershipResponse


class ApproveInviteByTokenUseCase:
    """
    Approve a pending invite identified by its token.

    Business Rules:
    - The invitee may approve their own invite
    - Anyone else must be able to manage the guild
    - Approval sets joined_at, clears the token and bumps member_count once
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, approver_user_id: UUID, guild_id: UUID, token: str
    ) -> Result[MembershipResponse]:
        async with self.uow:
            guild = await self.uow.guilds.get_by_id(guild_id)
            if guild is None:
                return Return.err(Error("GUILD_NOT_FOUND", "Guild not found"))

            result = await MembershipStateMachine(self.uow).approve_by_token(
                guild, token, approver_user_id
            )
            if result.is_err():
                return result

            membership = result.value
            audit = GuildAuditEvent(
                guild_id=guild_id,
                user_id=approver_user_id,
                action="invite_approved",
                event_metadata={"member_user_id": str(membership.user_id), "via": "token"},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(MembershipResponse.from_entity(membership))


class ApproveInviteForUserUseCase:
    """
    Self-service approval: the invitee accepts their own pending invite.

    No permission check beyond being the invitee.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, guild_id: UUID) -> Result[MembershipResponse]:
        async with self.uow:
            guild = await self.uow.guilds.get_by_id(guild_id)
            if guild is None:
                return Return.err(Error("GUILD_NOT_FOUND", "Guild not found"))

            result = await MembershipStateMachine(self.uow).approve_for_user(guild, user_id)
            if result.is_err():
                return result

            audit = GuildAuditEvent(
                guild_id=guild_id,
                user_id=user_id,
                action="invite_approved",
                event_metadata={"member_user_id": str(user_id), "via": "self"},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(MembershipResponse.from_entity(result.value))
