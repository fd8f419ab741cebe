from uuid import uuid4

import pytest

from guild_service.app.use_cases.guilds import DeleteGuildUseCase
from guild_service.domain.entities import GuildRole
from tests.fixtures.entities import make_guild, make_membership, memberships_by_user


@pytest.mark.asyncio
async def test_owner_deletes_guild_and_memberships(mock_uow):
    guild = make_guild(member_count=3)
    mock_uow.guilds.get_by_id.return_value = guild
    mock_uow.memberships.delete_by_guild_id.return_value = 3

    result = await DeleteGuildUseCase(mock_uow).execute(guild.owner_id, guild.id)

    assert result.is_ok()
    assert result.value.status == "deleted"
    assert result.value.memberships_removed == 3
    mock_uow.memberships.delete_by_guild_id.assert_called_once_with(guild.id)
    mock_uow.guilds.delete.assert_called_once_with(guild)

    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "guild_deleted"
    assert audit.event_metadata["memberships_removed"] == 3
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_admin_cannot_delete_guild(mock_uow):
    guild = make_guild()
    admin = make_membership(guild, role=GuildRole.admin)
    mock_uow.guilds.get_by_id.return_value = guild
    mock_uow.memberships.get_by_user_and_guild.side_effect = memberships_by_user(admin)

    result = await DeleteGuildUseCase(mock_uow).execute(admin.user_id, guild.id)

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    mock_uow.guilds.delete.assert_not_called()
    mock_uow.memberships.delete_by_guild_id.assert_not_called()


@pytest.mark.asyncio
async def test_delete_missing_guild(mock_uow):
    result = await DeleteGuildUseCase(mock_uow).execute(uuid4(), uuid4())

    assert result.is_err()
    assert result.error.code == "GUILD_NOT_FOUND"
