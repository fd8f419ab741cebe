from uuid import uuid4

import pytest

from guild_service.app.repositories.errors import UniqueViolationError
from guild_service.app.use_cases.guilds import CreateGuildCommand, CreateGuildUseCase
from guild_service.domain.entities import GuildRole, MembershipStatus
from tests.fixtures.entities import make_guild


@pytest.mark.asyncio
async def test_create_guild_derives_slug_and_bootstraps_owner(mock_uow):
    """Guild, owner membership and audit event are written in one transaction"""
    # Arrange
    owner_id = uuid4()
    command = CreateGuildCommand(name="My Cool Guild!!", description="Builders")

    # Act
    use_case = CreateGuildUseCase(mock_uow)
    result = await use_case.execute(owner_id, command)

    # Assert
    assert result.is_ok()
    guild = result.value
    assert guild.slug == "my-cool-guild"
    assert guild.name == "My Cool Guild!!"
    assert guild.owner_id == str(owner_id)
    assert guild.settings == {
        "visibility": "public",
        "requireApproval": False,
        "discoverable": True,
        "maxMembers": None,
    }

    created_guild = mock_uow.guilds.create.call_args[0][0]
    assert created_guild.member_count == 0

    owner_membership = mock_uow.memberships.create.call_args[0][0]
    assert owner_membership.user_id == owner_id
    assert owner_membership.guild_id == created_guild.id
    assert owner_membership.role == GuildRole.owner
    assert owner_membership.status == MembershipStatus.approved
    mock_uow.guilds.adjust_member_count.assert_called_once_with(created_guild.id, 1)

    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "guild_created"
    assert audit.event_metadata["slug"] == "my-cool-guild"

    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_create_guild_with_explicit_slug_and_settings(mock_uow):
    command = CreateGuildCommand(
        name="Night Owls",
        slug="owls-after-dark",
        settings={"visibility": "private", "maxMembers": 50},
    )

    result = await CreateGuildUseCase(mock_uow).execute(uuid4(), command)

    assert result.is_ok()
    assert result.value.slug == "owls-after-dark"
    assert result.value.settings["visibility"] == "private"
    assert result.value.settings["maxMembers"] == 50
    assert result.value.settings["discoverable"] is True


@pytest.mark.asyncio
async def test_create_guild_slug_taken_is_conflict(mock_uow):
    mock_uow.guilds.get_by_slug.return_value = make_guild(slug="my-cool-guild")

    result = await CreateGuildUseCase(mock_uow).execute(
        uuid4(), CreateGuildCommand(name="My Cool Guild")
    )

    assert result.is_err()
    assert result.error.code == "SLUG_CONFLICT"
    mock_uow.guilds.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_create_guild_concurrent_insert_is_conflict(mock_uow):
    """Pre-check passed but the unique index rejected the insert"""
    mock_uow.guilds.create.side_effect = UniqueViolationError("slug")

    result = await CreateGuildUseCase(mock_uow).execute(
        uuid4(), CreateGuildCommand(name="Racing Guild")
    )

    assert result.is_err()
    assert result.error.code == "SLUG_CONFLICT"
    mock_uow.memberships.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_create_guild_invalid_settings_writes_nothing(mock_uow):
    result = await CreateGuildUseCase(mock_uow).execute(
        uuid4(), CreateGuildCommand(name="Guild", settings={"maxMembers": 0})
    )

    assert result.is_err()
    assert result.error.code == "INVALID_VALUE"
    mock_uow.guilds.get_by_slug.assert_not_called()
    mock_uow.guilds.create.assert_not_called()


@pytest.mark.asyncio
async def test_create_guild_name_without_slug_characters(mock_uow):
    result = await CreateGuildUseCase(mock_uow).execute(
        uuid4(), CreateGuildCommand(name="!!!")
    )

    assert result.is_err()
    assert result.error.code == "INVALID_SLUG"


@pytest.mark.asyncio
async def test_create_guild_rejects_malformed_explicit_slug(mock_uow):
    result = await CreateGuildUseCase(mock_uow).execute(
        uuid4(), CreateGuildCommand(name="Guild", slug="Not A Slug")
    )

    assert result.is_err()
    assert result.error.code == "INVALID_SLUG"


@pytest.mark.asyncio
async def test_create_guild_blank_name(mock_uow):
    result = await CreateGuildUseCase(mock_uow).execute(uuid4(), CreateGuildCommand(name="   "))

    assert result.is_err()
    assert result.error.code == "INVALID_NAME"
