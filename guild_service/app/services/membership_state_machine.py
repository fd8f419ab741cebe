"""
Membership State Machine

Owns every role/status transition of a (user, guild) pair:

    ABSENT -> PENDING -> APPROVED      (invite, approve)
    ABSENT -> APPROVED                 (self-join, owner bootstrap)
    APPROVED | PENDING -> ABSENT       (leave, remove)

APPROVED never goes back to PENDING. Guild.member_count is only ever
touched from _adjust_member_count, called once per transition into or out
of APPROVED and only after the repository confirms the conditional write
matched the row. A write that matches nothing means another session moved
the row first; the row is re-read and the rules applied again.

Methods run inside the caller's open unit of work and never commit.
"""

import logging
import secrets
from datetime import datetime
from typing import Optional, Tuple, Union
from uuid import UUID

from libs.result import Error, Result, Return
from guild_service.app.repositories.errors import StoreError, UniqueViolationError
from guild_service.app.services.permission_evaluator import PermissionEvaluator
from guild_service.app.services.unit_of_work import UnitOfWork
from guild_service.domain.entities import (
    Guild,
    GuildMembership,
    GuildRole,
    MembershipStatus,
)

logger = logging.getLogger(__name__)

# Re-reads allowed when a conditional write finds the row already moved
MAX_WRITE_ATTEMPTS = 3


def parse_assignable_role(role: Optional[Union[str, GuildRole]]) -> Result[GuildRole]:
    """Resolve a role that may be granted by invite or role assignment.

    None defaults to MEMBER. The owner role is never assignable: it belongs
    to Guild.owner_id alone.
    """
    if role is None:
        return Return.ok(GuildRole.member)

    try:
        guild_role = GuildRole(role)
    except ValueError:
        return Return.err(
            Error(
                "INVALID_ROLE",
                f"Invalid role: {role}. Must be one of: admin, member",
            )
        )

    if guild_role == GuildRole.owner:
        return Return.err(
            Error("INVALID_ROLE", "The owner role cannot be assigned")
        )

    return Return.ok(guild_role)


class MembershipStateMachine:
    def __init__(self, uow: UnitOfWork, permissions: Optional[PermissionEvaluator] = None):
        self.uow = uow
        self.permissions = permissions or PermissionEvaluator(uow)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def bootstrap_owner(self, guild: Guild, owner_id: UUID) -> GuildMembership:
        """Create the owner's approved membership for a freshly created guild"""
        return await self._insert_approved(guild, owner_id, GuildRole.owner)

    async def invite(
        self,
        guild: Guild,
        target_user_id: UUID,
        inviter_id: UUID,
        role: Optional[Union[str, GuildRole]] = None,
    ) -> Result[Tuple[GuildMembership, str]]:
        """Create a pending membership and return it with its invitation token.

        Any existing row for the pair, whatever its status, blocks the invite.
        """
        role_result = parse_assignable_role(role)
        if role_result.is_err():
            return role_result

        permission = await self.permissions.ensure_can_manage(guild, inviter_id)
        if permission.is_err():
            return permission

        existing = await self.uow.memberships.get_by_user_and_guild(target_user_id, guild.id)
        if existing is not None:
            return Return.err(self._already_member())

        token = secrets.token_urlsafe(32)
        membership = GuildMembership(
            user_id=target_user_id,
            guild_id=guild.id,
            role=role_result.value,
            status=MembershipStatus.pending,
            invitation_token=token,
            invited_by_id=inviter_id,
        )

        try:
            membership = await self.uow.memberships.create(membership)
        except UniqueViolationError:
            # A concurrent join or invite created the row first
            return Return.err(self._already_member())

        logger.info(f"User {target_user_id} invited to guild {guild.id} as {role_result.value.value}")
        return Return.ok((membership, token))

    async def approve_by_token(
        self, guild: Guild, token: str, approver_id: UUID
    ) -> Result[GuildMembership]:
        """Approve the pending invite holding token.

        The invitee may approve their own invite; anyone else needs
        management permission.
        """
        membership = await self.uow.memberships.get_by_guild_and_token(guild.id, token)
        if membership is None:
            return Return.err(self._invite_not_found())

        if membership.user_id != approver_id:
            permission = await self.permissions.ensure_can_manage(guild, approver_id)
            if permission.is_err():
                return permission

        if membership.status != MembershipStatus.pending:
            return Return.err(self._no_pending_invite())

        if await self._approve(guild, membership):
            return Return.ok(membership)

        # Approved or withdrawn since it was read
        current = await self.uow.memberships.get_by_user_and_guild(membership.user_id, guild.id)
        if current is not None and current.status == MembershipStatus.approved:
            return Return.err(self._no_pending_invite())
        return Return.err(self._invite_not_found())

    async def approve_for_user(self, guild: Guild, user_id: UUID) -> Result[GuildMembership]:
        """Self-service approval of the caller's own pending invite"""
        for _ in range(MAX_WRITE_ATTEMPTS):
            membership = await self.uow.memberships.get_by_user_and_guild(user_id, guild.id)
            if membership is None:
                return Return.err(Error("MEMBERSHIP_NOT_FOUND", "Invite not found"))

            if membership.status != MembershipStatus.pending:
                return Return.err(self._no_pending_invite())

            if await self._approve(guild, membership):
                return Return.ok(membership)

            self._log_lost_write("approve", guild, user_id)

        raise self._still_contended("approve", guild, user_id)

    async def join(self, guild: Guild, user_id: UUID) -> Result[Tuple[GuildMembership, bool]]:
        """Self-service join.

        Returns the membership and whether this call changed it. Idempotent
        for approved members; a pending invite is promoted.
        """
        for _ in range(MAX_WRITE_ATTEMPTS):
            existing = await self.uow.memberships.get_by_user_and_guild(user_id, guild.id)

            if existing is None:
                try:
                    membership = await self._insert_approved(guild, user_id, GuildRole.member)
                    return Return.ok((membership, True))
                except UniqueViolationError:
                    self._log_lost_write("join", guild, user_id)
                    continue

            if existing.status == MembershipStatus.approved:
                return Return.ok((existing, False))

            if await self._approve(guild, existing):
                return Return.ok((existing, True))

            self._log_lost_write("join", guild, user_id)

        raise self._still_contended("join", guild, user_id)

    async def leave(self, guild: Guild, user_id: UUID) -> Result[GuildMembership]:
        """Remove the caller's own membership. The owner can never leave."""
        for _ in range(MAX_WRITE_ATTEMPTS):
            membership = await self.uow.memberships.get_by_user_and_guild(user_id, guild.id)
            if membership is None:
                return Return.err(Error("NOT_A_MEMBER", "You are not a member of this guild"))

            if membership.role == GuildRole.owner or user_id == guild.owner_id:
                return Return.err(
                    Error("OWNER_CANNOT_LEAVE", "Owner cannot leave the guild")
                )

            if await self._remove(guild, membership):
                return Return.ok(membership)

            self._log_lost_write("leave", guild, user_id)

        raise self._still_contended("leave", guild, user_id)

    async def assign_role(
        self,
        guild: Guild,
        target_user_id: UUID,
        role: Union[str, GuildRole],
        by_user_id: UUID,
    ) -> Result[Tuple[GuildMembership, GuildRole]]:
        """Overwrite a member's role, returning the membership and its previous role.

        Status is left untouched.
        """
        role_result = parse_assignable_role(role)
        if role_result.is_err():
            return role_result

        permission = await self.permissions.ensure_can_manage(guild, by_user_id)
        if permission.is_err():
            return permission

        membership = await self.uow.memberships.get_by_user_and_guild(target_user_id, guild.id)
        if membership is None:
            return Return.err(Error("MEMBERSHIP_NOT_FOUND", "Member not found"))

        if membership.role == GuildRole.owner or target_user_id == guild.owner_id:
            return Return.err(
                Error("CANNOT_CHANGE_OWNER_ROLE", "The guild owner's role cannot be changed")
            )

        previous_role = membership.role
        membership.role = role_result.value
        membership = await self.uow.memberships.update(membership)
        return Return.ok((membership, previous_role))

    async def remove_member(
        self, guild: Guild, target_user_id: UUID, by_user_id: UUID
    ) -> Result[GuildMembership]:
        """Remove another user's membership or withdraw their pending invite"""
        permission = await self.permissions.ensure_can_manage(guild, by_user_id)
        if permission.is_err():
            return permission

        for _ in range(MAX_WRITE_ATTEMPTS):
            membership = await self.uow.memberships.get_by_user_and_guild(target_user_id, guild.id)
            if membership is None:
                return Return.err(Error("MEMBERSHIP_NOT_FOUND", "Member not found"))

            if membership.role == GuildRole.owner or target_user_id == guild.owner_id:
                return Return.err(
                    Error("CANNOT_REMOVE_OWNER", "The guild owner cannot be removed")
                )

            if await self._remove(guild, membership):
                return Return.ok(membership)

            self._log_lost_write("remove", guild, target_user_id)

        raise self._still_contended("remove", guild, target_user_id)

    # ------------------------------------------------------------------
    # Chokepoints
    # ------------------------------------------------------------------

    async def _insert_approved(
        self, guild: Guild, user_id: UUID, role: GuildRole
    ) -> GuildMembership:
        membership = GuildMembership(
            user_id=user_id,
            guild_id=guild.id,
            role=role,
            status=MembershipStatus.approved,
            joined_at=datetime.utcnow(),
        )
        membership = await self.uow.memberships.create(membership)
        await self._adjust_member_count(guild, 1)
        return membership

    async def _approve(self, guild: Guild, membership: GuildMembership) -> bool:
        """PENDING -> APPROVED. False when the stored row was no longer pending."""
        if not await self.uow.memberships.approve_pending(membership, datetime.utcnow()):
            return False
        await self._adjust_member_count(guild, 1)
        return True

    async def _remove(self, guild: Guild, membership: GuildMembership) -> bool:
        """Delete the row. False when it was already gone or its status moved."""
        was_approved = membership.status == MembershipStatus.approved
        if not await self.uow.memberships.delete(membership):
            return False
        if was_approved:
            await self._adjust_member_count(guild, -1)
        return True

    async def _adjust_member_count(self, guild: Guild, delta: int) -> None:
        await self.uow.guilds.adjust_member_count(guild.id, delta)

    @staticmethod
    def _log_lost_write(action: str, guild: Guild, user_id: UUID) -> None:
        logger.info(f"Concurrent change to membership of user {user_id} in guild {guild.id} during {action}; re-reading")

    @staticmethod
    def _still_contended(action: str, guild: Guild, user_id: UUID) -> StoreError:
        logger.warning(f"Gave up on {action} for user {user_id} in guild {guild.id} after {MAX_WRITE_ATTEMPTS} attempts")
        return StoreError(f"Membership of user {user_id} in guild {guild.id} kept changing during {action}")

    @staticmethod
    def _already_member() -> Error:
        return Error("ALREADY_MEMBER", "User already invited or member")

    @staticmethod
    def _invite_not_found() -> Error:
        return Error("INVITE_NOT_FOUND", "Invite not found")

    @staticmethod
    def _no_pending_invite() -> Error:
        return Error("NO_PENDING_INVITE", "No pending invite to approve")
