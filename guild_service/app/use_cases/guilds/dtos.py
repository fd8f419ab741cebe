"""
Guild Use Case DTOs (Data Transfer Objects)

Response classes for the guild domain.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from guild_service.app.use_cases.memberships.dtos import MembershipResponse
from guild_service.domain.entities import Guild, GuildAuditEvent, GuildMembership


def _isoformat(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


class GuildResponse(BaseModel):
    """Guild information"""

    id: str
    slug: str
    name: str
    description: Optional[str] = None
    owner_id: str
    settings: Dict[str, Any]
    member_count: int
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_entity(cls, guild: Guild) -> "GuildResponse":
        return cls(
            id=str(guild.id),
            slug=guild.slug,
            name=guild.name,
            description=guild.description,
            owner_id=str(guild.owner_id),
            settings=guild.get_settings().to_storage(),
            member_count=guild.member_count,
            created_at=_isoformat(guild.created_at),
            updated_at=_isoformat(guild.updated_at),
        )


class GuildDetailResponse(GuildResponse):
    """Guild with its memberships"""

    memberships: List[MembershipResponse]

    @classmethod
    def from_entities(
        cls, guild: Guild, memberships: List[GuildMembership]
    ) -> "GuildDetailResponse":
        return cls(
            **GuildResponse.from_entity(guild).model_dump(),
            memberships=[MembershipResponse.from_entity(m) for m in memberships],
        )


class SearchGuildsResponse(BaseModel):
    """One page of guild search results"""

    items: List[GuildResponse]
    total: int
    page: int
    size: int


class DeleteGuildResponse(BaseModel):
    """Response for delete guild use case"""

    status: str
    memberships_removed: int


class GuildAuditEventResponse(BaseModel):
    """Single audit event"""

    action: str
    user_id: Optional[str] = None
    timestamp: str
    metadata: Dict[str, Any]

    @classmethod
    def from_entity(cls, event: GuildAuditEvent) -> "GuildAuditEventResponse":
        return cls(
            action=event.action,
            user_id=str(event.user_id) if event.user_id else None,
            timestamp=event.created_at.isoformat() + "Z",
            metadata=event.event_metadata or {},
        )


# ============================================================================
# Command DTOs
# ============================================================================


class CreateGuildCommand(BaseModel):
    """
    Create guild command - represents validated creation intent

    slug is optional; when absent it is derived from name.
    settings is the raw, not yet validated settings input.
    """

    name: str
    slug: Optional[str] = None
    description: Optional[str] = None
    settings: Optional[Any] = None


class UpdateGuildCommand(BaseModel):
    """
    Update guild command - partial patch

    Only fields explicitly set are applied (see model_fields_set).
    settings is merged over the stored settings, key by key.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    settings: Optional[Any] = None
