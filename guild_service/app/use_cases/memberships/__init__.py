"""
Guild Membership Use Cases

Invitations, approvals, joins, leaves and role changes. Every transition
goes through MembershipStateMachine.
"""

from .approve_invite_use_case import ApproveInviteByTokenUseCase, ApproveInviteForUserUseCase
from .assign_role_use_case import AssignRoleUseCase
from .dtos import (
    AssignRoleResponse,
    InviteMemberResponse,
    LeaveGuildResponse,
    MembershipResponse,
    RemoveMemberResponse,
)
from .invite_member_use_case import InviteMemberUseCase
from .join_guild_use_case import JoinGuildUseCase
from .leave_guild_use_case import LeaveGuildUseCase
from .remove_member_use_case import RemoveMemberUseCase

__all__ = [
    "InviteMemberUseCase",
    "ApproveInviteByTokenUseCase",
    "ApproveInviteForUserUseCase",
    "JoinGuildUseCase",
    "LeaveGuildUseCase",
    "AssignRoleUseCase",
    "RemoveMemberUseCase",
    # DTOs
    "MembershipResponse",
    "InviteMemberResponse",
    "AssignRoleResponse",
    "LeaveGuildResponse",
    "RemoveMemberResponse",
]
