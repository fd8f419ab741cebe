"""
Membership Use Case DTOs (Data Transfer Objects)

Response classes for the membership domain.
"""

from typing import Optional

from pydantic import BaseModel

from guild_service.domain.entities import GuildMembership


def _isoformat(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


class MembershipResponse(BaseModel):
    """A single guild membership"""

    id: str
    user_id: str
    guild_id: str
    role: str
    status: str
    invited_by_id: Optional[str] = None
    joined_at: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_entity(cls, membership: GuildMembership) -> "MembershipResponse":
        return cls(
            id=str(membership.id),
            user_id=str(membership.user_id),
            guild_id=str(membership.guild_id),
            role=membership.role.value,
            status=membership.status.value,
            invited_by_id=str(membership.invited_by_id) if membership.invited_by_id else None,
            joined_at=_isoformat(membership.joined_at),
            created_at=_isoformat(membership.created_at),
        )


class InviteMemberResponse(BaseModel):
    """Response for invite member use case.

    token is the out-of-band credential for approving the invite.
    """

    membership: MembershipResponse
    token: str


class AssignRoleResponse(BaseModel):
    """Response for assign role use case"""

    membership: MembershipResponse
    previous_role: str


class LeaveGuildResponse(BaseModel):
    """Response for leave guild use case"""

    status: str


class RemoveMemberResponse(BaseModel):
    """Response for remove member use case"""

    status: str
