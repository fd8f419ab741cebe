"""
Update Guild Use Case

Handles partial updates of guild name, description and settings.
"""

import logging
from datetime import datetime
from uuid import UUID

from libs.result import Error, Result, Return
from guild_service.app.services.permission_evaluator import PermissionEvaluator
from guild_service.app.services.settings_validator import merge_settings
from guild_service.app.services.unit_of_work import UnitOfWork
from guild_service.domain.entities import GuildAuditEvent

from .create_guild_use_case import validate_guild_fields
from .dtos import GuildResponse, UpdateGuildCommand

logger = logging.getLogger(__name__)


class UpdateGuildUseCase:
    """
    Use case for updating a guild.

    Business Rules:
    - Owner or admin only
    - name/description overwrite directly
    - settings merge key by key over the stored settings
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, guild_id: UUID, command: UpdateGuildCommand
    ) -> Result[GuildResponse]:
        """
        Execute update guild use case.

        Args:
            user_id: User requesting the update
            guild_id: Guild to update
            command: UpdateGuildCommand; only explicitly set fields apply

        Returns:
            Result with GuildResponse, or Error
        """
        provided = command.model_fields_set

        if "name" in provided and command.name is None:
            return Return.err(Error("INVALID_NAME", "Guild name cannot be null"))

        fields = validate_guild_fields(
            command.name if "name" in provided else None,
            command.description if "description" in provided else None,
        )
        if fields.is_err():
            return fields

        async with self.uow:
            guild = await self.uow.guilds.get_by_id(guild_id)
            if guild is None:
                return Return.err(Error("GUILD_NOT_FOUND", "Guild not found"))

            permission = await PermissionEvaluator(self.uow).ensure_can_manage(guild, user_id)
            if permission.is_err():
                return permission

            if "settings" in provided:
                merged = merge_settings(guild.get_settings(), command.settings)
                if merged.is_err():
                    return merged
                guild.settings = merged.value.to_storage()

            if "name" in provided:
                guild.name = command.name
            if "description" in provided:
                guild.description = command.description

            guild.updated_at = datetime.utcnow()
            guild = await self.uow.guilds.update(guild)

            audit = GuildAuditEvent(
                guild_id=guild.id,
                user_id=user_id,
                action="guild_updated",
                event_metadata={"fields": sorted(provided)},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(GuildResponse.from_entity(guild))
