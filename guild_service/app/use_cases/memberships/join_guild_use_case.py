"""
Join Guild Use Case

Self-service join. Idempotent for users who are already approved.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from guild_service.app.services.membership_state_machine import MembershipStateMachine
from guild_service.app.services.unit_of_work import UnitOfWork
from guild_service.domain.entities import GuildAuditEvent

from .dtos import MembershipResponse


class JoinGuildUseCase:
    """
    Business Rules:
    - Already approved: existing membership returned, nothing written
    - Pending invite: promoted to approved with the invite's role
    - No membership: new member row, approved immediately
    - requireApproval is not consulted (joins always auto-approve)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, guild_id: UUID) -> Result[MembershipResponse]:
        async with self.uow:
            guild = await self.uow.guilds.get_by_id(guild_id)
            if guild is None:
                return Return.err(Error("GUILD_NOT_FOUND", "Guild not found"))

            result = await MembershipStateMachine(self.uow).join(guild, user_id)
            if result.is_err():
                return result

            membership, changed = result.value
            if not changed:
                return Return.ok(MembershipResponse.from_entity(membership))

            audit = GuildAuditEvent(
                guild_id=guild_id,
                user_id=user_id,
                action="member_joined",
                event_metadata={"role": membership.role.value},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(MembershipResponse.from_entity(membership))
