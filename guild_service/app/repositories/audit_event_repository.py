from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from guild_service.domain.entities import GuildAuditEvent


class IGuildAuditEventRepository(ABC):
    """Guild audit event repository interface - application layer"""

    @abstractmethod
    async def create(self, event: GuildAuditEvent) -> GuildAuditEvent:
        """Create a new audit event"""
        pass

    @abstractmethod
    async def get_by_guild_id(
        self, guild_id: UUID, limit: int = 50, offset: int = 0
    ) -> List[GuildAuditEvent]:
        """Get audit events for a guild, newest first"""
        pass
