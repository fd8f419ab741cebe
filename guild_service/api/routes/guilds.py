"""
Guild API Routes

Guild lifecycle endpoints: create, read, search, update, delete, audit.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from guild_service.api.error import raise_for_error
from guild_service.api.utils.ids import parse_uuid
from guild_service.app.services.unit_of_work import UnitOfWork
from guild_service.app.use_cases.guilds import (
    CreateGuildCommand,
    CreateGuildUseCase,
    DeleteGuildResponse,
    DeleteGuildUseCase,
    GetGuildAuditEventsUseCase,
    GetGuildUseCase,
    GuildAuditEventResponse,
    GuildDetailResponse,
    GuildResponse,
    SearchGuildsResponse,
    SearchGuildsUseCase,
    UpdateGuildCommand,
    UpdateGuildUseCase,
)
from guild_service.depends import get_current_user_id, get_unit_of_work

router = APIRouter(prefix="/guilds", tags=["Guilds"])


class CreateGuildRequest(BaseModel):
    """
    Create guild HTTP request payload

    settings is passed through untyped; the use case validates it.
    """

    name: str = Field(..., min_length=1, max_length=100)
    slug: Optional[str] = Field(None, pattern=r"^[a-z0-9-]{1,100}$")
    description: Optional[str] = Field(None, max_length=1000)
    settings: Optional[Any] = Field(None, description="Guild settings object")


class UpdateGuildRequest(BaseModel):
    """Update guild HTTP request payload; omitted fields are left unchanged"""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    settings: Optional[Any] = None


@router.post("", status_code=status.HTTP_201_CREATED, response_model=GuildResponse)
async def create_guild(
    request: CreateGuildRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Guild

    The caller becomes the owner and first approved member.

    Raises:
        - 400 Bad Request: INVALID_FORMAT / INVALID_TYPE / INVALID_VALUE settings, INVALID_SLUG
        - 401 Unauthorized: Invalid or expired JWT
        - 409 Conflict: SLUG_CONFLICT
    """
    use_case = CreateGuildUseCase(uow)
    result = await use_case.execute(
        user_id,
        CreateGuildCommand(**request.model_dump(exclude_unset=True)),
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=SearchGuildsResponse)
async def search_guilds(
    q: Optional[str] = Query(None, description="Substring of name or description"),
    page: int = Query(0, ge=0, description="Zero-based page number"),
    size: int = Query(
        ApplicationConfig.DEFAULT_PAGE_SIZE, ge=1, le=ApplicationConfig.MAX_PAGE_SIZE
    ),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Search Guilds - case-insensitive match on name or description"""
    use_case = SearchGuildsUseCase(uow)
    result = await use_case.execute(q, page, size)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/slug/{slug}", status_code=status.HTTP_200_OK, response_model=GuildDetailResponse)
async def get_guild_by_slug(slug: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """Get Guild by slug, with memberships"""
    result = await GetGuildUseCase(uow).execute(slug=slug)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{guild_id}", status_code=status.HTTP_200_OK, response_model=GuildDetailResponse)
async def get_guild(guild_id: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """Get Guild by ID, with memberships"""
    guild_uuid = parse_uuid(guild_id, "INVALID_GUILD_ID", "guild ID")

    result = await GetGuildUseCase(uow).execute(guild_id=guild_uuid)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch("/{guild_id}", status_code=status.HTTP_200_OK, response_model=GuildResponse)
async def update_guild(
    guild_id: str,
    request: UpdateGuildRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Guild

    Requires owner or admin. settings are merged key by key.

    Raises:
        - 400 Bad Request: Invalid settings
        - 403 Forbidden: FORBIDDEN
        - 404 Not Found: GUILD_NOT_FOUND
    """
    guild_uuid = parse_uuid(guild_id, "INVALID_GUILD_ID", "guild ID")

    use_case = UpdateGuildUseCase(uow)
    result = await use_case.execute(
        user_id,
        guild_uuid,
        UpdateGuildCommand(**request.model_dump(exclude_unset=True)),
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete("/{guild_id}", status_code=status.HTTP_200_OK, response_model=DeleteGuildResponse)
async def delete_guild(
    guild_id: str,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Guild - owner only; removes every membership

    Raises:
        - 403 Forbidden: FORBIDDEN (caller is not the owner)
        - 404 Not Found: GUILD_NOT_FOUND
    """
    guild_uuid = parse_uuid(guild_id, "INVALID_GUILD_ID", "guild ID")

    result = await DeleteGuildUseCase(uow).execute(user_id, guild_uuid)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/{guild_id}/audit-events",
    status_code=status.HTTP_200_OK,
    response_model=List[GuildAuditEventResponse],
)
async def get_guild_audit_events(
    guild_id: str,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Guild audit trail, newest first. Owner or admin only."""
    guild_uuid = parse_uuid(guild_id, "INVALID_GUILD_ID", "guild ID")

    result = await GetGuildAuditEventsUseCase(uow).execute(
        user_id, guild_uuid, limit=limit, offset=offset
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value
