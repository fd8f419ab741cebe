from uuid import uuid4

import pytest

from guild_service.app.use_cases.memberships import InviteMemberUseCase
from guild_service.domain.entities import GuildRole, MembershipStatus
from tests.fixtures.entities import make_guild, make_membership, memberships_by_user


@pytest.mark.asyncio
async def test_successful_invite_by_owner(mock_uow):
    """Owner invites a user as member; token returned once"""
    # Arrange
    guild = make_guild()
    target_user_id = uuid4()
    mock_uow.guilds.get_by_id.return_value = guild

    # Act
    use_case = InviteMemberUseCase(mock_uow)
    result = await use_case.execute(guild.owner_id, guild.id, target_user_id)

    # Assert
    assert result.is_ok()
    response = result.value
    assert response.membership.user_id == str(target_user_id)
    assert response.membership.role == "member"
    assert response.membership.status == "pending"
    assert response.membership.joined_at is None
    assert response.token

    created = mock_uow.memberships.create.call_args[0][0]
    assert created.invitation_token == response.token

    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "member_invited"
    assert audit.event_metadata == {"invited_user_id": str(target_user_id), "role": "member"}
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_admin_invites_admin(mock_uow):
    guild = make_guild()
    admin = make_membership(guild, role=GuildRole.admin)
    mock_uow.guilds.get_by_id.return_value = guild
    mock_uow.memberships.get_by_user_and_guild.side_effect = memberships_by_user(admin)

    result = await InviteMemberUseCase(mock_uow).execute(
        admin.user_id, guild.id, uuid4(), role="admin"
    )

    assert result.is_ok()
    assert result.value.membership.role == "admin"
    assert result.value.membership.invited_by_id == str(admin.user_id)


@pytest.mark.asyncio
async def test_invite_twice_is_already_member(mock_uow):
    guild = make_guild()
    pending = make_membership(guild, status=MembershipStatus.pending, invitation_token="tok")
    mock_uow.guilds.get_by_id.return_value = guild
    mock_uow.memberships.get_by_user_and_guild.side_effect = memberships_by_user(pending)

    result = await InviteMemberUseCase(mock_uow).execute(
        guild.owner_id, guild.id, pending.user_id
    )

    assert result.is_err()
    assert result.error.code == "ALREADY_MEMBER"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_invite_as_owner_is_invalid_role(mock_uow):
    guild = make_guild()
    mock_uow.guilds.get_by_id.return_value = guild

    result = await InviteMemberUseCase(mock_uow).execute(
        guild.owner_id, guild.id, uuid4(), role="owner"
    )

    assert result.is_err()
    assert result.error.code == "INVALID_ROLE"


@pytest.mark.asyncio
async def test_invite_to_missing_guild(mock_uow):
    result = await InviteMemberUseCase(mock_uow).execute(uuid4(), uuid4(), uuid4())

    assert result.is_err()
    assert result.error.code == "GUILD_NOT_FOUND"
