"""
Guild Settings Validation

Validates free-form settings input against the fixed GuildSettings shape.
Recognized keys use their wire names (camelCase); anything else is dropped.
"""

from collections.abc import Mapping
from typing import Any, Dict, Optional

from libs.result import Error, Result, Return
from guild_service.domain.entities import GuildSettings, GuildVisibility

_VISIBILITY_VALUES = tuple(v.value for v in GuildVisibility)


def _validate_fields(input: Any) -> Result[Dict[str, Any]]:
    """Validate the recognized keys present in input.

    Returns only those keys, keyed by their wire names.
    """
    if not isinstance(input, Mapping):
        return Return.err(Error("INVALID_FORMAT", "Invalid settings format"))

    fields: Dict[str, Any] = {}

    if "visibility" in input:
        if input["visibility"] not in _VISIBILITY_VALUES:
            return Return.err(
                Error(
                    "INVALID_VALUE",
                    "Invalid visibility setting",
                    reason=f"visibility must be one of: {', '.join(_VISIBILITY_VALUES)}",
                )
            )
        fields["visibility"] = input["visibility"]

    for key in ("requireApproval", "discoverable"):
        if key in input:
            if not isinstance(input[key], bool):
                return Return.err(Error("INVALID_TYPE", f"{key} must be boolean"))
            fields[key] = input[key]

    if "maxMembers" in input:
        value = input["maxMembers"]
        # bool is an int subclass; reject it explicitly
        if value is not None and (
            isinstance(value, bool) or not isinstance(value, int) or value < 1
        ):
            return Return.err(
                Error("INVALID_VALUE", "maxMembers must be a positive integer or null")
            )
        fields["maxMembers"] = value

    return Return.ok(fields)


def normalize_settings(input: Optional[Any]) -> Result[GuildSettings]:
    """Validate input and fill every missing key with its default"""
    if input is None:
        return Return.ok(GuildSettings())

    result = _validate_fields(input)
    if result.is_err():
        return result

    return Return.ok(GuildSettings.model_validate(result.value))


def merge_settings(current: GuildSettings, patch: Optional[Any]) -> Result[GuildSettings]:
    """Overlay the keys present in patch onto current.

    Keys absent from patch keep their stored value.
    """
    if patch is None:
        return Return.ok(current)

    result = _validate_fields(patch)
    if result.is_err():
        return result

    merged = {**current.to_storage(), **result.value}
    return Return.ok(GuildSettings.model_validate(merged))
