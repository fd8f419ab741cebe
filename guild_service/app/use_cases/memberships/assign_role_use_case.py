"""
Assign Role Use Case

Handles changing a member's role within a guild.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from guild_service.app.services.membership_state_machine import MembershipStateMachine
from guild_service.app.services.unit_of_work import UnitOfWork
from guild_service.domain.entities import GuildAuditEvent

from .dtos import AssignRoleResponse, MembershipResponse


class AssignRoleUseCase:
    """
    Use case for changing a member's role within a guild.

    Business Rules:
    - Only owner/admin can change roles
    - Role must be admin or member (owner is never assignable)
    - The owner's own role cannot be changed
    - Only the role changes; status is untouched
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, by_user_id: UUID, guild_id: UUID, target_user_id: UUID, role: str
    ) -> Result[AssignRoleResponse]:
        """
        Execute assign role use case.

        Args:
            by_user_id: User making the change
            guild_id: Guild ID
            target_user_id: User whose role is being changed
            role: New role (admin/member)

        Returns:
            Result with AssignRoleResponse, or Error
        """
        async with self.uow:
            guild = await self.uow.guilds.get_by_id(guild_id)
            if guild is None:
                return Return.err(Error("GUILD_NOT_FOUND", "Guild not found"))

            result = await MembershipStateMachine(self.uow).assign_role(
                guild, target_user_id, role, by_user_id
            )
            if result.is_err():
                return result

            membership, previous_role = result.value

            audit = GuildAuditEvent(
                guild_id=guild_id,
                user_id=by_user_id,
                action="role_changed",
                event_metadata={
                    "target_user_id": str(target_user_id),
                    "old_role": previous_role.value,
                    "new_role": membership.role.value,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                AssignRoleResponse(
                    membership=MembershipResponse.from_entity(membership),
                    previous_role=previous_role.value,
                )
            )
