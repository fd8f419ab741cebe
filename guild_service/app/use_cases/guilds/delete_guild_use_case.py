"""
Delete Guild Use Case

Hard delete of a guild and all of its memberships. Owner only.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from guild_service.app.services.permission_evaluator import PermissionEvaluator
from guild_service.app.services.unit_of_work import UnitOfWork
from guild_service.domain.entities import GuildAuditEvent

from .dtos import DeleteGuildResponse

logger = logging.getLogger(__name__)


class DeleteGuildUseCase:
    """
    Delete a guild (exact ownership required, an admin is not enough).

    Business Logic:
    1. Load guild
    2. Verify caller is Guild.owner_id
    3. Remove all memberships, then the guild
    4. Record audit event and commit
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, guild_id: UUID) -> Result[DeleteGuildResponse]:
        """
        Execute delete guild use case.

        Errors:
            - GUILD_NOT_FOUND: Guild does not exist
            - FORBIDDEN: Caller is not the owner
        """
        async with self.uow:
            guild = await self.uow.guilds.get_by_id(guild_id)
            if guild is None:
                return Return.err(Error("GUILD_NOT_FOUND", "Guild not found"))

            ownership = PermissionEvaluator.ensure_owner(guild, user_id)
            if ownership.is_err():
                return ownership

            memberships_removed = await self.uow.memberships.delete_by_guild_id(guild_id)
            await self.uow.guilds.delete(guild)

            audit = GuildAuditEvent(
                guild_id=guild_id,
                user_id=user_id,
                action="guild_deleted",
                event_metadata={
                    "slug": guild.slug,
                    "memberships_removed": memberships_removed,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Guild {guild_id} deleted by {user_id}")
            return Return.ok(
                DeleteGuildResponse(status="deleted", memberships_removed=memberships_removed)
            )
