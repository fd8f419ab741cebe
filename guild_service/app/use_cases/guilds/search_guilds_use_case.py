"""
Search Guilds Use Case

Paginated, case-insensitive substring search over guild name/description.
"""

from typing import Optional

from libs.result import Error, Result, Return
from guild_service.app.services.unit_of_work import UnitOfWork

from .dtos import GuildResponse, SearchGuildsResponse


class SearchGuildsUseCase:
    """
    Use case for searching guilds.

    - page is zero-based; offset = page * size
    - No query returns every guild
    - Ordering is the store's natural order
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, query: Optional[str] = None, page: int = 0, size: int = 20
    ) -> Result[SearchGuildsResponse]:
        if page < 0 or size < 1:
            return Return.err(
                Error("INVALID_PAGINATION", "page must be >= 0 and size must be >= 1")
            )

        async with self.uow:
            guilds, total = await self.uow.guilds.search(
                query or None, offset=page * size, limit=size
            )

            return Return.ok(
                SearchGuildsResponse(
                    items=[GuildResponse.from_entity(g) for g in guilds],
                    total=total,
                    page=page,
                    size=size,
                )
            )
