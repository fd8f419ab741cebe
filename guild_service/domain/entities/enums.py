"""
Guild Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class GuildRole(str, Enum):
    """Member role within a guild"""

    owner = "owner"
    admin = "admin"
    member = "member"


class MembershipStatus(str, Enum):
    """Membership status"""

    pending = "pending"
    approved = "approved"


class GuildVisibility(str, Enum):
    """Who can see a guild"""

    public = "public"
    private = "private"
    unlisted = "unlisted"
