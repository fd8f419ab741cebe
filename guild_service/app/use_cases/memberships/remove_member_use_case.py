"""
Remove Member Use Case

Handles removing a member, or withdrawing a pending invite, by a manager.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from guild_service.app.services.membership_state_machine import MembershipStateMachine
from guild_service.app.services.unit_of_work import UnitOfWork
from guild_service.domain.entities import GuildAuditEvent

from .dtos import RemoveMemberResponse


class RemoveMemberUseCase:
    """
    Business Rules:
    - Only owner/admin can remove members
    - The owner can never be removed
    - Removing a pending row withdraws the invite so the user can be re-invited
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, requester_user_id: UUID, guild_id: UUID, target_user_id: UUID
    ) -> Result[RemoveMemberResponse]:
        async with self.uow:
            guild = await self.uow.guilds.get_by_id(guild_id)
            if guild is None:
                return Return.err(Error("GUILD_NOT_FOUND", "Guild not found"))

            result = await MembershipStateMachine(self.uow).remove_member(
                guild, target_user_id, requester_user_id
            )
            if result.is_err():
                return result

            audit = GuildAuditEvent(
                guild_id=guild_id,
                user_id=requester_user_id,
                action="member_removed",
                event_metadata={
                    "removed_user_id": str(target_user_id),
                    "removed_user_role": result.value.role.value,
                    "removed_user_status": result.value.status.value,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(RemoveMemberResponse(status="removed"))
