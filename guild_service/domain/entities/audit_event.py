"""
GuildAuditEvent Entity

Append-only log of guild and membership changes.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel


class GuildAuditEvent(SQLModel, table=True):
    """
    GuildAuditEvent entity - immutable record of a guild mutation.

    Business Rules:
    - Immutable (never updated)
    - guild_id is not a foreign key: events outlive the guild
    - user_id is the actor that triggered the change
    """

    __tablename__ = "guild_audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    guild_id: UUID = Field(nullable=False, index=True)
    user_id: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # e.g., "member_joined"
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_guild_audit_created_at", "created_at"),
        Index("idx_guild_audit_guild_action", "guild_id", "action"),
    )
