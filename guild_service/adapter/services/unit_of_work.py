from sqlmodel.ext.asyncio.session import AsyncSession

from guild_service.adapter.repositories.audit_event_repository import GuildAuditEventRepository
from guild_service.adapter.repositories.guild_repository import GuildRepository
from guild_service.adapter.repositories.membership_repository import GuildMembershipRepository
from guild_service.adapter.repositories.store_errors import translate_store_errors
from guild_service.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.guilds = GuildRepository(self.session)
        self.memberships = GuildMembershipRepository(self.session)
        self.audit_events = GuildAuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    @translate_store_errors
    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
