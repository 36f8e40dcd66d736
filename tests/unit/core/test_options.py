"""Tests for logger options and additive rule configuration."""
import re
import sys

import pytest
from structlog.testing import capture_logs

from pluginlog.core.engine import Level
from pluginlog.core.options import (
    LoggerOpts,
    apply_logger_opts,
    env_var_name,
    parse_env_level,
    with_additional_location_offset,
    with_console_format,
    with_level,
    with_level_from_env,
    with_log_name,
    with_mask_field_values_with_field_keys,
    with_mask_message_regexes,
    with_mask_message_strings,
    with_omit_log_with_field_keys,
    with_omit_log_with_message_regexes,
    with_omit_log_with_message_strings,
    with_output,
    with_root_fields,
    without_location,
    without_timestamp,
)

pytestmark = pytest.mark.unit


class TestApplyLoggerOpts:
    """Test folding of options over the defaults."""

    def test_defaults(self):
        """Defaults include location and time, and no rules."""
        opts = apply_logger_opts()

        assert opts.name == ""
        assert opts.level == Level.NO_LEVEL
        assert opts.include_location is True
        assert opts.include_time is True
        assert opts.json_format is True
        assert opts.include_root_fields is False
        assert opts.additional_location_offset == 0
        assert opts.output is None
        assert opts.omit_log_with_field_keys == ()
        assert opts.mask_message_strings == ()

    def test_logger_shape_options(self):
        """Each shape option sets its own attribute."""
        opts = apply_logger_opts(
            with_log_name("custom"),
            with_level(Level.WARN),
            with_output(sys.stdout),
            with_root_fields(),
            without_location(),
            without_timestamp(),
            with_console_format(),
            with_additional_location_offset(2),
        )

        assert opts.name == "custom"
        assert opts.level == Level.WARN
        assert opts.output is sys.stdout
        assert opts.include_root_fields is True
        assert opts.include_location is False
        assert opts.include_time is False
        assert opts.json_format is False
        assert opts.additional_location_offset == 2


class TestAdditiveRules:
    """Test that rule options append instead of replacing."""

    def test_omit_keys_union_in_call_order(self):
        """Two calls with disjoint keys keep both, in order."""
        opts = apply_logger_opts(
            with_omit_log_with_field_keys("a", "b"),
            with_omit_log_with_field_keys("c"),
        )

        assert opts.omit_log_with_field_keys == ("a", "b", "c")

    def test_every_rule_list_is_additive(self):
        """All six rule lists accumulate."""
        first = re.compile("first")
        second = re.compile("second")

        opts = apply_logger_opts(
            with_omit_log_with_message_regexes(first),
            with_omit_log_with_message_regexes(second),
            with_omit_log_with_message_strings("x"),
            with_omit_log_with_message_strings("y"),
            with_mask_field_values_with_field_keys("k1"),
            with_mask_field_values_with_field_keys("k2"),
            with_mask_message_regexes(first),
            with_mask_message_regexes(second),
            with_mask_message_strings("s1"),
            with_mask_message_strings("s2"),
        )

        assert opts.omit_log_with_message_regexes == (first, second)
        assert opts.omit_log_with_message_strings == ("x", "y")
        assert opts.mask_field_values_with_field_keys == ("k1", "k2")
        assert opts.mask_message_regexes == (first, second)
        assert opts.mask_message_strings == ("s1", "s2")

    def test_input_is_not_modified(self):
        """Applying an option leaves the original configuration untouched."""
        original = LoggerOpts(omit_log_with_field_keys=("a",))

        updated = with_omit_log_with_field_keys("b")(original)

        assert original.omit_log_with_field_keys == ("a",)
        assert updated.omit_log_with_field_keys == ("a", "b")


class TestLevelFromEnv:
    """Test environment-driven levels."""

    def test_env_var_name(self):
        """Subsystem names are joined with underscores and uppercased."""
        assert env_var_name("tf_log_provider") == "TF_LOG_PROVIDER"
        assert env_var_name("tf_log_sdk", "proto", "v5") == "TF_LOG_SDK_PROTO_V5"

    def test_valid_level(self, monkeypatch):
        """A valid value sets the level, case-insensitively."""
        monkeypatch.setenv("TF_LOG_SDK_PROTO", "debug")

        opts = apply_logger_opts(with_level_from_env("tf_log_sdk", "proto"))

        assert opts.level == Level.DEBUG

    def test_unset_variable(self, monkeypatch):
        """An unset variable leaves no level."""
        monkeypatch.delenv("TF_LOG_PROVIDER_NOPE", raising=False)

        opts = apply_logger_opts(with_level_from_env("TF_LOG_PROVIDER_NOPE"))

        assert opts.level == Level.NO_LEVEL

    def test_invalid_level_warns(self, monkeypatch):
        """An invalid value falls back and warns on the diagnostic logger."""
        monkeypatch.setenv("TF_LOG_PROVIDER", "loud")

        with capture_logs() as logs:
            opts = apply_logger_opts(with_level_from_env("TF_LOG_PROVIDER"))

        assert opts.level == Level.NO_LEVEL
        assert len(logs) == 1
        assert logs[0]["log_level"] == "warning"
        assert logs[0]["event"] == "Invalid log level"
        assert logs[0]["env_var"] == "TF_LOG_PROVIDER"
        assert logs[0]["value"] == "loud"

    def test_parse_env_level_default(self):
        """Empty values return the default silently."""
        with capture_logs() as logs:
            assert parse_env_level("X", "", Level.OFF) == Level.OFF
        assert logs == []
