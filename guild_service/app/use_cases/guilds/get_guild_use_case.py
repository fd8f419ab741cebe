"""
Get Guild Use Case

Looks a guild up by ID or slug, with its memberships.
"""

from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from guild_service.app.services.unit_of_work import UnitOfWork

from .dtos import GuildDetailResponse


class GetGuildUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, guild_id: Optional[UUID] = None, slug: Optional[str] = None
    ) -> Result[GuildDetailResponse]:
        """
        Execute get guild use case. Exactly one of guild_id/slug is expected.

        Returns:
            Result with GuildDetailResponse, or Error(GUILD_NOT_FOUND)
        """
        async with self.uow:
            if guild_id is not None:
                guild = await self.uow.guilds.get_by_id(guild_id)
            elif slug is not None:
                guild = await self.uow.guilds.get_by_slug(slug)
            else:
                guild = None

            if guild is None:
                return Return.err(Error("GUILD_NOT_FOUND", "Guild not found"))

            memberships = await self.uow.memberships.get_by_guild_id(guild.id)
            return Return.ok(GuildDetailResponse.from_entities(guild, memberships))
