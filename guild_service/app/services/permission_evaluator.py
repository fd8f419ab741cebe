"""
Guild Permission Evaluator

Decides who may perform management actions on a guild.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from guild_service.app.services.unit_of_work import UnitOfWork
from guild_service.domain.entities import Guild, GuildRole


class PermissionEvaluator:
    """
    Management permission checks for a guild.

    Rules:
    - The guild owner always passes
    - A user without a membership never passes
    - MEMBER never passes; every other role does
    - Deleting a guild requires exact ownership
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def ensure_can_manage(self, guild: Guild, user_id: UUID) -> Result[None]:
        if guild.owner_id == user_id:
            return Return.ok()

        membership = await self.uow.memberships.get_by_user_and_guild(user_id, guild.id)
        if membership is None:
            return Return.err(
                Error("FORBIDDEN", "You are not a member of this guild", reason="NOT_A_MEMBER")
            )

        if membership.role == GuildRole.member:
            return Return.err(
                Error(
                    "FORBIDDEN",
                    "Insufficient guild permissions",
                    reason="INSUFFICIENT_ROLE",
                )
            )

        return Return.ok()

    async def can_manage(self, guild: Guild, user_id: UUID) -> bool:
        result = await self.ensure_can_manage(guild, user_id)
        return result.is_ok()

    @staticmethod
    def ensure_owner(guild: Guild, user_id: UUID) -> Result[None]:
        if guild.owner_id != user_id:
            return Return.err(
                Error("FORBIDDEN", "Only the guild owner can perform this action")
            )
        return Return.ok()
