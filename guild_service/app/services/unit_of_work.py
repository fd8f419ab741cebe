from abc import ABC, abstractmethod

from guild_service.app.repositories.audit_event_repository import IGuildAuditEventRepository
from guild_service.app.repositories.guild_repository import IGuildRepository
from guild_service.app.repositories.membership_repository import IGuildMembershipRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    guilds: IGuildRepository
    memberships: IGuildMembershipRepository
    audit_events: IGuildAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
