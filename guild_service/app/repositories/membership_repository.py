from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from guild_service.domain.entities import GuildMembership


class IGuildMembershipRepository(ABC):
    """Guild membership repository interface - application layer"""

    @abstractmethod
    async def get_by_user_and_guild(
        self, user_id: UUID, guild_id: UUID
    ) -> Optional[GuildMembership]:
        """Get membership by user and guild"""
        pass

    @abstractmethod
    async def get_by_guild_and_token(
        self, guild_id: UUID, token: str
    ) -> Optional[GuildMembership]:
        """Get pending membership by guild and invitation token"""
        pass

    @abstractmethod
    async def get_by_guild_id(self, guild_id: UUID) -> List[GuildMembership]:
        """Get all memberships for a guild"""
        pass

    @abstractmethod
    async def create(self, membership: GuildMembership) -> GuildMembership:
        """Create a new membership, raising UniqueViolationError if
        (user_id, guild_id) already exists"""
        pass

    @abstractmethod
    async def update(self, membership: GuildMembership) -> GuildMembership:
        """Update existing membership"""
        pass

    @abstractmethod
    async def approve_pending(self, membership: GuildMembership, joined_at: datetime) -> bool:
        """Move a membership from pending to approved, clearing its token.

        The write only applies while the stored row is still pending.
        Returns False when it is not (already approved or gone), in which
        case membership is left untouched.
        """
        pass

    @abstractmethod
    async def delete(self, membership: GuildMembership) -> bool:
        """Delete a membership if its stored status still matches membership.status.

        Returns False when the row is gone or its status changed underneath.
        """
        pass

    @abstractmethod
    async def delete_by_guild_id(self, guild_id: UUID) -> int:
        """Delete all memberships of a guild, returning how many were removed"""
        pass
