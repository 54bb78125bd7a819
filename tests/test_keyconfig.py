import pytest

from taskwarrior_tui.keyconfig import (
    DuplicateKeyError,
    KeyConfig,
    get_key_config,
    load_key_config,
)
from taskwarrior_tui.keys import char


def test_defaults():
    config = KeyConfig()
    assert config.quit == char("q")
    assert config.help == char("?")
    assert config.shortcut9 == char("9")


def test_load_without_data_keeps_defaults():
    assert load_key_config("") == KeyConfig()


def test_configured_key_is_applied():
    config = load_key_config("uda.taskwarrior-tui.keyconfig.quit Q\n")
    assert config.quit == char("Q")
    assert config.refresh == KeyConfig().refresh


def test_underscore_spelling_is_accepted():
    config = load_key_config("uda.taskwarrior_tui.keyconfig.go_to_bottom X")
    assert config.go_to_bottom == char("X")


def test_multiple_characters_are_ignored():
    assert get_key_config("uda.taskwarrior-tui.keyconfig.quit", "uda.taskwarrior-tui.keyconfig.quit QQ") is None
    assert load_key_config("uda.taskwarrior-tui.keyconfig.quit QQ").quit == char("q")


def test_missing_key_returns_none():
    assert get_key_config("uda.taskwarrior-tui.keyconfig.zoom", "other.setting Z") is None


def test_prefix_collision_does_not_bind_select():
    config = load_key_config("uda.taskwarrior-tui.keyconfig.select-all W")
    assert config.select_all == char("W")
    assert config.select == char("v")


def test_help_is_not_configurable():
    config = load_key_config("uda.taskwarrior-tui.keyconfig.help H")
    assert config.help == char("?")


def test_neighbouring_duplicate_raises():
    with pytest.raises(DuplicateKeyError, match="Duplicate keys found in key config"):
        load_key_config("uda.taskwarrior-tui.keyconfig.quit r")


def test_duplicate_follows_edit():
    with pytest.raises(DuplicateKeyError):
        load_key_config("uda.taskwarrior-tui.keyconfig.edit E")


def test_check_detects_manual_duplicate():
    config = KeyConfig()
    config.down = config.up
    with pytest.raises(DuplicateKeyError):
        config.check()