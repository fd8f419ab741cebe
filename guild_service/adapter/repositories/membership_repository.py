from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from guild_service.adapter.repositories.store_errors import translate_store_errors
from guild_service.app.repositories.membership_repository import IGuildMembershipRepository
from guild_service.domain.entities import GuildMembership, MembershipStatus


class GuildMembershipRepository(IGuildMembershipRepository):
    """Guild membership repository implementation using SQLModel

    Single-row reads use populate_existing so a re-read after a lost
    conditional write sees the stored state, not the session's copy.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_store_errors
    async def get_by_user_and_guild(
        self, user_id: UUID, guild_id: UUID
    ) -> Optional[GuildMembership]:
        """Get membership by user and guild"""
        stmt = (
            select(GuildMembership)
            .where(GuildMembership.user_id == user_id, GuildMembership.guild_id == guild_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @translate_store_errors
    async def get_by_guild_and_token(
        self, guild_id: UUID, token: str
    ) -> Optional[GuildMembership]:
        """Get pending membership by guild and invitation token"""
        stmt = (
            select(GuildMembership)
            .where(
                GuildMembership.guild_id == guild_id,
                GuildMembership.invitation_token == token,
                GuildMembership.status == MembershipStatus.pending,
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @translate_store_errors
    async def get_by_guild_id(self, guild_id: UUID) -> List[GuildMembership]:
        """Get all memberships for a guild"""
        stmt = (
            select(GuildMembership)
            .where(GuildMembership.guild_id == guild_id)
            .order_by(col(GuildMembership.created_at))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    @translate_store_errors
    async def create(self, membership: GuildMembership) -> GuildMembership:
        """Create a new membership.

        Runs in a savepoint so a unique-key loss leaves the outer
        transaction usable for a re-read.
        """
        async with self.session.begin_nested():
            self.session.add(membership)
            await self.session.flush()
        await self.session.refresh(membership)
        return membership

    @translate_store_errors
    async def update(self, membership: GuildMembership) -> GuildMembership:
        """Update existing membership"""
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

    @translate_store_errors
    async def approve_pending(self, membership: GuildMembership, joined_at: datetime) -> bool:
        """Conditional pending -> approved write"""
        stmt = (
            update(GuildMembership)
            .where(
                GuildMembership.id == membership.id,
                GuildMembership.status == MembershipStatus.pending,
            )
            .values(
                status=MembershipStatus.approved,
                joined_at=joined_at,
                invitation_token=None,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return False

        await self.session.refresh(membership)
        return True

    @translate_store_errors
    async def delete(self, membership: GuildMembership) -> bool:
        """Delete a membership whose stored status is still the one we read"""
        stmt = (
            delete(GuildMembership)
            .where(
                GuildMembership.id == membership.id,
                GuildMembership.status == membership.status,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return False

        if membership in self.session:
            self.session.expunge(membership)
        return True

    @translate_store_errors
    async def delete_by_guild_id(self, guild_id: UUID) -> int:
        """Delete all memberships of a guild"""
        result = await self.session.execute(
            delete(GuildMembership).where(GuildMembership.guild_id == guild_id)
        )
        return result.rowcount
