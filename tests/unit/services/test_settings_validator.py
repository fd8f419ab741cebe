import pytest

from guild_service.app.services.settings_validator import merge_settings, normalize_settings
from guild_service.domain.entities import GuildSettings, GuildVisibility


def test_absent_settings_use_defaults():
    result = normalize_settings(None)

    assert result.is_ok()
    assert result.value.to_storage() == {
        "visibility": "public",
        "requireApproval": False,
        "discoverable": True,
        "maxMembers": None,
    }


def test_partial_settings_are_filled_with_defaults():
    result = normalize_settings({"visibility": "private"})

    assert result.is_ok()
    assert result.value.to_storage() == {
        "visibility": "private",
        "requireApproval": False,
        "discoverable": True,
        "maxMembers": None,
    }


def test_full_settings_accepted():
    result = normalize_settings(
        {
            "visibility": "unlisted",
            "requireApproval": True,
            "discoverable": False,
            "maxMembers": 25,
        }
    )

    assert result.is_ok()
    settings = result.value
    assert settings.visibility == GuildVisibility.unlisted
    assert settings.require_approval is True
    assert settings.discoverable is False
    assert settings.max_members == 25


def test_unknown_keys_are_dropped():
    result = normalize_settings({"visibility": "private", "theme": "dark"})

    assert result.is_ok()
    assert "theme" not in result.value.to_storage()


@pytest.mark.parametrize("value", ["not-a-dict", 42, ["visibility"], True])
def test_non_mapping_input_is_invalid_format(value):
    result = normalize_settings(value)

    assert result.is_err()
    assert result.error.code == "INVALID_FORMAT"


def test_unknown_visibility_is_invalid_value():
    result = normalize_settings({"visibility": "secret"})

    assert result.is_err()
    assert result.error.code == "INVALID_VALUE"


@pytest.mark.parametrize("key", ["requireApproval", "discoverable"])
@pytest.mark.parametrize("value", ["true", 1, None])
def test_boolean_flags_reject_non_booleans(key, value):
    result = normalize_settings({key: value})

    assert result.is_err()
    assert result.error.code == "INVALID_TYPE"


@pytest.mark.parametrize("value", [0, -5, 2.5, "10", True])
def test_max_members_must_be_positive_integer(value):
    result = normalize_settings({"maxMembers": value})

    assert result.is_err()
    assert result.error.code == "INVALID_VALUE"


def test_max_members_accepts_null():
    result = normalize_settings({"maxMembers": None})

    assert result.is_ok()
    assert result.value.max_members is None


def test_merge_overlays_only_present_keys():
    current = GuildSettings.model_validate(
        {"visibility": "private", "requireApproval": True, "maxMembers": 10}
    )

    result = merge_settings(current, {"discoverable": False})

    assert result.is_ok()
    assert result.value.to_storage() == {
        "visibility": "private",
        "requireApproval": True,
        "discoverable": False,
        "maxMembers": 10,
    }


def test_merge_can_clear_max_members():
    current = GuildSettings.model_validate({"maxMembers": 10})

    result = merge_settings(current, {"maxMembers": None})

    assert result.is_ok()
    assert result.value.max_members is None


def test_merge_rejects_invalid_patch():
    current = GuildSettings()

    result = merge_settings(current, {"requireApproval": "yes"})

    assert result.is_err()
    assert result.error.code == "INVALID_TYPE"


def test_merge_with_none_keeps_current():
    current = GuildSettings.model_validate({"visibility": "unlisted"})

    result = merge_settings(current, None)

    assert result.is_ok()
    assert result.value == current
