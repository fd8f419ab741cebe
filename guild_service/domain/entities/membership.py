"""
GuildMembership Entity

Links a user to a guild with a role and a status.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from .enums import GuildRole, MembershipStatus

if TYPE_CHECKING:
    from .guild import Guild


class GuildMembership(SQLModel, table=True):
    """
    GuildMembership entity - links a user to a guild.

    Business Rules:
    - (user_id, guild_id) must be unique
    - Exactly one owner membership per guild, held by Guild.owner_id
    - invitation_token is present only while pending via an invite
    - joined_at is set only on entry to approved
    """

    __tablename__ = "guild_memberships"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(nullable=False, index=True)
    guild_id: UUID = Field(foreign_key="guilds.id", nullable=False, index=True)

    role: GuildRole = Field(default=GuildRole.member, nullable=False)
    status: MembershipStatus = Field(default=MembershipStatus.pending)

    invitation_token: Optional[str] = Field(default=None, unique=True, max_length=64)
    invited_by_id: Optional[UUID] = Field(default=None)

    # Timestamps
    joined_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    # Relationships
    guild: "Guild" = Relationship(back_populates="memberships")

    __table_args__ = (
        Index("idx_guild_membership_user_guild", "user_id", "guild_id", unique=True),
        Index("idx_guild_membership_guild_token", "guild_id", "invitation_token"),
    )
