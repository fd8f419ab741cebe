from typing import List
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from guild_service.adapter.repositories.store_errors import translate_store_errors
from guild_service.app.repositories.audit_event_repository import IGuildAuditEventRepository
from guild_service.domain.entities import GuildAuditEvent


class GuildAuditEventRepository(IGuildAuditEventRepository):
    """Guild audit event repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_store_errors
    async def create(self, event: GuildAuditEvent) -> GuildAuditEvent:
        """Create a new audit event"""
        self.session.add(event)
        await self.session.flush()
        return event

    @translate_store_errors
    async def get_by_guild_id(
        self, guild_id: UUID, limit: int = 50, offset: int = 0
    ) -> List[GuildAuditEvent]:
        """Get audit events for a guild, newest first"""
        stmt = (
            select(GuildAuditEvent)
            .where(GuildAuditEvent.guild_id == guild_id)
            .order_by(col(GuildAuditEvent.created_at).desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
