"""
Leave Guild Use Case

Handles a member voluntarily leaving a guild.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from guild_service.app.services.membership_state_machine import MembershipStateMachine
from guild_service.app.services.unit_of_work import UnitOfWork
from guild_service.domain.entities import GuildAuditEvent

from .dtos import LeaveGuildResponse


class LeaveGuildUseCase:
    """
    Business Rules:
    - NOT_A_MEMBER if the caller has no membership row
    - OWNER_CANNOT_LEAVE for the guild owner
    - Leaving a pending invite declines it (member_count unchanged)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, guild_id: UUID) -> Result[LeaveGuildResponse]:
        async with self.uow:
            guild = await self.uow.guilds.get_by_id(guild_id)
            if guild is None:
                return Return.err(Error("GUILD_NOT_FOUND", "Guild not found"))

            result = await MembershipStateMachine(self.uow).leave(guild, user_id)
            if result.is_err():
                return result

            audit = GuildAuditEvent(
                guild_id=guild_id,
                user_id=user_id,
                action="member_left",
                event_metadata={
                    "role": result.value.role.value,
                    "status": result.value.status.value,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(LeaveGuildResponse(status="left"))
