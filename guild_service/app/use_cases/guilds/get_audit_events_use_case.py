"""
Get Guild Audit Events Use Case

Lists a guild's audit trail for users who can manage it.
"""

from typing import List
from uuid import UUID

from libs.result import Error, Result, Return
from guild_service.app.services.permission_evaluator import PermissionEvaluator
from guild_service.app.services.unit_of_work import UnitOfWork

from .dtos import GuildAuditEventResponse


class GetGuildAuditEventsUseCase:
    """
    Business Rules:
    - Caller must be owner or admin
    - Results ordered newest first
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, guild_id: UUID, limit: int = 50, offset: int = 0
    ) -> Result[List[GuildAuditEventResponse]]:
        async with self.uow:
            guild = await self.uow.guilds.get_by_id(guild_id)
            if guild is None:
                return Return.err(Error("GUILD_NOT_FOUND", "Guild not found"))

            permission = await PermissionEvaluator(self.uow).ensure_can_manage(guild, user_id)
            if permission.is_err():
                return permission

            events = await self.uow.audit_events.get_by_guild_id(
                guild_id, limit=limit, offset=offset
            )
            return Return.ok([GuildAuditEventResponse.from_entity(e) for e in events])
