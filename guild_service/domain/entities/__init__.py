"""
Guild Service Domain Entities

All domain entities organized by model.
"""

from .enums import GuildRole, GuildVisibility, MembershipStatus
from .guild_settings import GuildSettings
from .guild import Guild
from .membership import GuildMembership
from .audit_event import GuildAuditEvent

__all__ = [
    # Enums
    "GuildRole",
    "GuildVisibility",
    "MembershipStatus",
    # Value objects
    "GuildSettings",
    # Entities
    "Guild",
    "GuildMembership",
    "GuildAuditEvent",
]
