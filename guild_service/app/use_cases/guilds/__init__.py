"""
Guild Lifecycle Use Cases

Guild creation, update, deletion, lookup and search.
"""

from .create_guild_use_case import CreateGuildUseCase
from .delete_guild_use_case import DeleteGuildUseCase
from .dtos import (
    CreateGuildCommand,
    DeleteGuildResponse,
    GuildAuditEventResponse,
    GuildDetailResponse,
    GuildResponse,
    SearchGuildsResponse,
    UpdateGuildCommand,
)
from .get_audit_events_use_case import GetGuildAuditEventsUseCase
from .get_guild_use_case import GetGuildUseCase
from .search_guilds_use_case import SearchGuildsUseCase
from .slug import slugify
from .update_guild_use_case import UpdateGuildUseCase

__all__ = [
    "CreateGuildUseCase",
    "UpdateGuildUseCase",
    "DeleteGuildUseCase",
    "GetGuildUseCase",
    "SearchGuildsUseCase",
    "GetGuildAuditEventsUseCase",
    "slugify",
    # DTOs
    "CreateGuildCommand",
    "UpdateGuildCommand",
    "GuildResponse",
    "GuildDetailResponse",
    "SearchGuildsResponse",
    "DeleteGuildResponse",
    "GuildAuditEventResponse",
]
