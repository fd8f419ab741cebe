"""
GuildSettings Value Object

Fixed-shape settings record embedded in a Guild.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import GuildVisibility


class GuildSettings(BaseModel):
    """
    GuildSettings - configurable guild policy.

    Business Rules:
    - Always complete: every stored record carries all four keys
    - Stored with camelCase keys (requireApproval, maxMembers)
    - max_members None means no cap
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    visibility: GuildVisibility = GuildVisibility.public
    require_approval: bool = Field(default=False, alias="requireApproval")
    discoverable: bool = True
    max_members: Optional[int] = Field(default=None, alias="maxMembers")

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_storage(cls, data: Optional[dict]) -> "GuildSettings":
        return cls.model_validate(data or {})
