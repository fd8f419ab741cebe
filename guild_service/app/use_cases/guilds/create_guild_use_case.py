"""
Create Guild Use Case

Handles guild creation with slug assignment and owner bootstrap.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from guild_service.app.repositories.errors import UniqueViolationError
from guild_service.app.services.membership_state_machine import MembershipStateMachine
from guild_service.app.services.settings_validator import normalize_settings
from guild_service.app.services.unit_of_work import UnitOfWork
from guild_service.domain.entities import Guild, GuildAuditEvent

from .dtos import CreateGuildCommand, GuildResponse
from .slug import is_valid_slug, slugify

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000


def validate_guild_fields(name=None, description=None) -> Result[None]:
    if name is not None and (not name.strip() or len(name) > NAME_MAX_LENGTH):
        return Return.err(
            Error("INVALID_NAME", f"Guild name must be 1-{NAME_MAX_LENGTH} characters")
        )
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        return Return.err(
            Error(
                "INVALID_DESCRIPTION",
                f"Guild description must be at most {DESCRIPTION_MAX_LENGTH} characters",
            )
        )
    return Return.ok()


class CreateGuildUseCase:
    """
    Use case for creating a guild.

    Business Logic:
    1. Resolve slug (explicit override, else derived from name)
    2. Validate and normalize settings before any write
    3. Advisory slug pre-check for a friendly conflict error
    4. Insert; a unique violation (concurrent creator) is also a conflict
    5. Bootstrap the owner membership in the same transaction
    6. Record audit event and commit once
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, owner_id: UUID, command: CreateGuildCommand) -> Result[GuildResponse]:
        """
        Execute create guild use case.

        Args:
            owner_id: User creating (and owning) the guild
            command: CreateGuildCommand with name, optional slug/description/settings

        Returns:
            Result with GuildResponse, or Error(SLUG_CONFLICT / INVALID_*)
        """
        fields = validate_guild_fields(command.name, command.description)
        if fields.is_err():
            return fields

        slug = command.slug if command.slug else slugify(command.name)
        if not is_valid_slug(slug):
            return Return.err(
                Error(
                    "INVALID_SLUG",
                    "Slug must be 1-100 characters of a-z, 0-9 or '-'",
                    reason=f"Resolved slug: '{slug}'",
                )
            )

        settings = normalize_settings(command.settings)
        if settings.is_err():
            return settings

        async with self.uow:
            # Advisory only; the unique index is the final arbiter
            existing = await self.uow.guilds.get_by_slug(slug)
            if existing is not None:
                return Return.err(self._slug_conflict(slug))

            guild = Guild(
                name=command.name,
                slug=slug,
                description=command.description,
                owner_id=owner_id,
                settings=settings.value.to_storage(),
            )

            try:
                guild = await self.uow.guilds.create(guild)
            except UniqueViolationError:
                logger.warning(f"Slug '{slug}' was taken by a concurrent create")
                return Return.err(self._slug_conflict(slug))

            await MembershipStateMachine(self.uow).bootstrap_owner(guild, owner_id)

            audit = GuildAuditEvent(
                guild_id=guild.id,
                user_id=owner_id,
                action="guild_created",
                event_metadata={"slug": slug, "name": command.name},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Guild {guild.id} created with slug '{slug}' by {owner_id}")
            return Return.ok(GuildResponse.from_entity(guild))

    @staticmethod
    def _slug_conflict(slug: str) -> Error:
        return Error("SLUG_CONFLICT", "Slug already in use", reason=f"slug={slug}")
