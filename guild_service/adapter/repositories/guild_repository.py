from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func, or_, update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from guild_service.adapter.repositories.store_errors import translate_store_errors
from guild_service.app.repositories.guild_repository import IGuildRepository
from guild_service.domain.entities import Guild


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class GuildRepository(IGuildRepository):
    """Guild repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_store_errors
    async def get_by_id(self, guild_id: UUID) -> Optional[Guild]:
        """Get guild by ID"""
        stmt = select(Guild).where(Guild.id == guild_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @translate_store_errors
    async def get_by_slug(self, slug: str) -> Optional[Guild]:
        """Get guild by slug"""
        stmt = select(Guild).where(Guild.slug == slug)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @translate_store_errors
    async def create(self, guild: Guild) -> Guild:
        """Create a new guild"""
        self.session.add(guild)
        await self.session.flush()
        await self.session.refresh(guild)
        return guild

    @translate_store_errors
    async def update(self, guild: Guild) -> Guild:
        """Update existing guild"""
        self.session.add(guild)
        await self.session.flush()
        await self.session.refresh(guild)
        return guild

    @translate_store_errors
    async def delete(self, guild: Guild) -> None:
        """Delete a guild"""
        await self.session.execute(delete(Guild).where(Guild.id == guild.id))
        await self.session.flush()

    @translate_store_errors
    async def adjust_member_count(self, guild_id: UUID, delta: int) -> None:
        """Atomically add delta to member_count"""
        stmt = (
            update(Guild)
            .where(Guild.id == guild_id)
            .values(member_count=Guild.member_count + delta)
        )
        await self.session.execute(stmt)

    @translate_store_errors
    async def search(
        self, query: Optional[str], offset: int, limit: int
    ) -> Tuple[List[Guild], int]:
        """Case-insensitive substring search over name/description"""
        stmt = select(Guild)
        count_stmt = select(func.count()).select_from(Guild)

        if query:
            pattern = f"%{_escape_like(query)}%"
            condition = or_(
                col(Guild.name).ilike(pattern, escape="\\"),
                col(Guild.description).ilike(pattern, escape="\\"),
            )
            stmt = stmt.where(condition)
            count_stmt = count_stmt.where(condition)

        stmt = stmt.order_by(col(Guild.created_at), col(Guild.id)).offset(offset).limit(limit)

        result = await self.session.execute(stmt)
        total = await self.session.execute(count_stmt)
        return list(result.scalars().all()), total.scalar_one()
