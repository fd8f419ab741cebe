import pytest
from unittest.mock import AsyncMock, MagicMock

from guild_service.domain.entities import MembershipStatus


async def _approve_pending(membership, joined_at):
    if membership.status != MembershipStatus.pending:
        return False
    membership.status = MembershipStatus.approved
    membership.joined_at = joined_at
    membership.invitation_token = None
    return True


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork; create/update echo their argument back and
    conditional writes succeed unless a test says otherwise"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.guilds = MagicMock()
    uow.guilds.get_by_id = AsyncMock(return_value=None)
    uow.guilds.get_by_slug = AsyncMock(return_value=None)
    uow.guilds.create = AsyncMock(side_effect=lambda guild: guild)
    uow.guilds.update = AsyncMock(side_effect=lambda guild: guild)
    uow.guilds.delete = AsyncMock()
    uow.guilds.adjust_member_count = AsyncMock()
    uow.guilds.search = AsyncMock(return_value=([], 0))

    uow.memberships = MagicMock()
    uow.memberships.get_by_user_and_guild = AsyncMock(return_value=None)
    uow.memberships.get_by_guild_and_token = AsyncMock(return_value=None)
    uow.memberships.get_by_guild_id = AsyncMock(return_value=[])
    uow.memberships.create = AsyncMock(side_effect=lambda membership: membership)
    uow.memberships.update = AsyncMock(side_effect=lambda membership: membership)
    uow.memberships.approve_pending = AsyncMock(side_effect=_approve_pending)
    uow.memberships.delete = AsyncMock(return_value=True)
    uow.memberships.delete_by_guild_id = AsyncMock(return_value=0)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock(side_effect=lambda event: event)
    uow.audit_events.get_by_guild_id = AsyncMock(return_value=[])

    return uow
