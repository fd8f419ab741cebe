"""
Guild Entity

A named community group with an owner and configurable settings.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, Relationship, SQLModel

from .guild_settings import GuildSettings

if TYPE_CHECKING:
    from .membership import GuildMembership


class Guild(SQLModel, table=True):
    """
    Guild entity - community group owned by a single user.

    Business Rules:
    - slug is unique (enforced by the store, not by pre-checks)
    - owner_id is immutable after creation
    - settings always holds the full normalized record
    - member_count caches the number of approved memberships and is only
      changed through an atomic store-side increment/decrement
    """

    __tablename__ = "guilds"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    slug: str = Field(max_length=100, unique=True, index=True)
    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)

    owner_id: UUID = Field(nullable=False, index=True)

    settings: dict = Field(
        default_factory=lambda: GuildSettings().to_storage(), sa_column=Column(JSON)
    )
    member_count: int = Field(default=0, nullable=False)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Relationships
    memberships: list["GuildMembership"] = Relationship(back_populates="guild")

    __table_args__ = (Index("idx_guild_name", "name"),)

    def get_settings(self) -> GuildSettings:
        return GuildSettings.from_storage(self.settings)
