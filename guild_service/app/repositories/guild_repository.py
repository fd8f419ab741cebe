from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from guild_service.domain.entities import Guild


class IGuildRepository(ABC):
    """Guild repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, guild_id: UUID) -> Optional[Guild]:
        """Get guild by ID"""
        pass

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Guild]:
        """Get guild by slug"""
        pass

    @abstractmethod
    async def create(self, guild: Guild) -> Guild:
        """Create a new guild, raising UniqueViolationError on a taken slug"""
        pass

    @abstractmethod
    async def update(self, guild: Guild) -> Guild:
        """Update existing guild"""
        pass

    @abstractmethod
    async def delete(self, guild: Guild) -> None:
        """Delete a guild"""
        pass

    @abstractmethod
    async def adjust_member_count(self, guild_id: UUID, delta: int) -> None:
        """Atomically add delta to member_count on the store side"""
        pass

    @abstractmethod
    async def search(
        self, query: Optional[str], offset: int, limit: int
    ) -> Tuple[List[Guild], int]:
        """Case-insensitive substring search over name/description.

        Returns the requested page and the total number of matches.
        """
        pass
