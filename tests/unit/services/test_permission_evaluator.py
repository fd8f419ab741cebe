from uuid import uuid4

import pytest

from guild_service.app.services.permission_evaluator import PermissionEvaluator
from guild_service.domain.entities import GuildRole, MembershipStatus
from tests.fixtures.entities import make_guild, make_membership


@pytest.mark.asyncio
async def test_owner_can_manage_without_membership_lookup(mock_uow):
    guild = make_guild()

    result = await PermissionEvaluator(mock_uow).ensure_can_manage(guild, guild.owner_id)

    assert result.is_ok()
    mock_uow.memberships.get_by_user_and_guild.assert_not_called()


@pytest.mark.asyncio
async def test_admin_can_manage(mock_uow):
    guild = make_guild()
    admin = make_membership(guild, role=GuildRole.admin)
    mock_uow.memberships.get_by_user_and_guild.return_value = admin

    assert await PermissionEvaluator(mock_uow).can_manage(guild, admin.user_id) is True


@pytest.mark.asyncio
async def test_pending_admin_can_manage(mock_uow):
    """Status is not consulted, only the role"""
    guild = make_guild()
    admin = make_membership(guild, role=GuildRole.admin, status=MembershipStatus.pending)
    mock_uow.memberships.get_by_user_and_guild.return_value = admin

    assert await PermissionEvaluator(mock_uow).can_manage(guild, admin.user_id) is True


@pytest.mark.asyncio
async def test_member_cannot_manage(mock_uow):
    guild = make_guild()
    member = make_membership(guild, role=GuildRole.member)
    mock_uow.memberships.get_by_user_and_guild.return_value = member

    result = await PermissionEvaluator(mock_uow).ensure_can_manage(guild, member.user_id)

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    assert result.error.reason == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_non_member_cannot_manage(mock_uow):
    guild = make_guild()

    result = await PermissionEvaluator(mock_uow).ensure_can_manage(guild, uuid4())

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    assert result.error.reason == "NOT_A_MEMBER"


def test_ensure_owner_rejects_admin():
    guild = make_guild()

    assert PermissionEvaluator.ensure_owner(guild, guild.owner_id).is_ok()

    result = PermissionEvaluator.ensure_owner(guild, uuid4())
    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
