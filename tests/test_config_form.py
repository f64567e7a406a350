import json

import pytest

from mftweb.config_form import (
    ConfigFormError,
    TransferConfig,
    apply_config_form,
    is_checked,
    parse_command_flags,
    parse_command_id,
    parse_flag_values,
)


@pytest.mark.parametrize(
    "value, expected",
    [("on", True), ("true", True), ("", False), ("off", False), ("TRUE", False), (None, False)],
)
def test_is_checked(value, expected):
    assert is_checked(value) is expected


def test_parse_command_id_default_is_copy():
    assert parse_command_id("") == 1
    assert parse_command_id(None) == 1


def test_parse_command_id_number():
    assert parse_command_id("5") == 5


@pytest.mark.parametrize("value", ["abc", "-1", "1.5", " 3", str(1 << 64)])
def test_parse_command_id_invalid(value):
    with pytest.raises(ConfigFormError):
        parse_command_id(value)


def test_parse_command_flags_empty_is_none():
    assert parse_command_flags([]) is None


def test_parse_command_flags_skips_invalid_and_keeps_order():
    encoded = parse_command_flags(["3", "x", "1"])
    assert json.loads(encoded) == [3, 1]


def test_parse_command_flags_all_invalid_gives_empty_list():
    assert parse_command_flags(["nope"]) == "[]"


def test_parse_flag_values_requires_enable_and_value():
    form = {
        "flag_value_1": ["fast"],
        "flag_enable_1": ["on"],
        "flag_value_2": ["slow"],
        "flag_value_3": [""],
        "flag_enable_3": ["on"],
        "flag_value_bad": ["x"],
        "flag_enable_bad": ["on"],
        "other": ["y"],
    }
    assert parse_flag_values(form) == {1: "fast"}


def test_parse_flag_values_accepts_plain_strings():
    form = {"flag_value_4": "10M", "flag_enable_4": "on"}
    assert parse_flag_values(form) == {4: "10M"}


def test_apply_sets_checkboxes():
    form = {
        "name": ["Nightly"],
        "skip_processed_files": ["on"],
        "archive_enabled": ["true"],
        "dest_read_only": ["on"],
    }
    result = apply_config_form(TransferConfig(), form)
    assert result.name == "Nightly"
    assert result.skip_processed_files is True
    assert result.archive_enabled is True
    assert result.dest_read_only is True
    assert result.delete_after_transfer is False
    assert result.use_builtin_auth_dest is False


def test_apply_does_not_mutate_input():
    original = TransferConfig(name="keep")
    apply_config_form(original, {"name": ["changed"], "archive_enabled": ["on"]})
    assert original.name == "keep"
    assert original.archive_enabled is None


def test_apply_defaults_command_id():
    result = apply_config_form(TransferConfig(), {})
    assert result.command_id == 1


def test_apply_invalid_command_id_keeps_existing():
    result = apply_config_form(TransferConfig(command_id=7), {"command_id": ["zz"]})
    assert result.command_id == 7


def test_apply_command_flags_and_values():
    form = {
        "command_id": ["2"],
        "command_flags": ["4", "9"],
        "flag_value_9": ["abc"],
        "flag_enable_9": ["on"],
    }
    result = apply_config_form(TransferConfig(), form)
    assert result.command_id == 2
    assert json.loads(result.command_flags) == [4, 9]
    assert json.loads(result.command_flag_values) == {"9": "abc"}


def test_apply_keeps_flags_when_none_submitted():
    config = TransferConfig(command_flags="[1]", command_flag_values='{"1":"v"}')
    result = apply_config_form(config, {})
    assert result.command_flags == "[1]"
    assert result.command_flag_values == '{"1":"v"}'


def test_apply_leaves_absent_text_fields():
    config = TransferConfig(source_path="/data/in", destination_path="/data/out")
    result = apply_config_form(config, {"source_path": ["/new"]})
    assert result.source_path == "/new"
    assert result.destination_path == "/data/out"


def test_flag_values_escape_html_characters():
    form = {"flag_value_1": ["<a&b>"], "flag_enable_1": ["on"]}
    result = apply_config_form(TransferConfig(), form)
    assert "<" not in result.command_flag_values
    assert json.loads(result.command_flag_values) == {"1": "<a&b>"}