"""Tests for record omission and masking."""
import re

import pytest

from pluginlog.core.filtering import (
    MASK_REPLACEMENT,
    apply_mask,
    mask_field_value,
    should_omit,
)
from pluginlog.core.options import LoggerOpts

pytestmark = pytest.mark.unit


class TestShouldOmit:
    """Test omission decisions."""

    def test_no_rules(self):
        """Nothing is omitted without rules."""
        assert not should_omit(LoggerOpts(), "message", ["k1", "v1"])

    def test_field_key_in_any_arg_list(self):
        """A configured key in any argument list omits the record."""
        opts = LoggerOpts(omit_log_with_field_keys=("k2",))

        assert should_omit(opts, "message", ["k1", "v1"], ["k2", "v2"])
        assert should_omit(opts, "message", ["k2", "v2"], [])
        assert not should_omit(opts, "message", ["k1", "v1"], ["k3", "v3"])

    def test_field_key_is_case_sensitive(self):
        """Keys differing only in case do not match."""
        opts = LoggerOpts(omit_log_with_field_keys=("K2",))

        assert not should_omit(opts, "message", ["k1", "v1", "k2", "v2"])

    def test_unpaired_trailing_key_counts(self):
        """A trailing key without a value is still a key."""
        opts = LoggerOpts(omit_log_with_field_keys=("k2",))

        assert should_omit(opts, "message", ["k1", "v1", "k2"])

    def test_message_regex(self):
        """A pattern found anywhere in the message omits the record."""
        opts = LoggerOpts(omit_log_with_message_regexes=(re.compile("(foo|bar)"),))

        assert should_omit(opts, "banana apple foo")
        assert should_omit(opts, "bar at the start")
        assert not should_omit(opts, "pineapple mango")

    def test_message_string(self):
        """A literal substring omits the record."""
        opts = LoggerOpts(omit_log_with_message_strings=("DEBUG-ONLY",))

        assert should_omit(opts, "this is a DEBUG-ONLY trace")
        assert not should_omit(opts, "this is a debug-only trace")

    def test_message_string_is_not_a_regex(self):
        """Substrings are matched literally."""
        opts = LoggerOpts(omit_log_with_message_strings=("a.c",))

        assert not should_omit(opts, "abc")
        assert should_omit(opts, "xa.cx")

    def test_omission_has_no_masking_side_effects(self):
        """Checking omission never modifies the argument lists."""
        opts = LoggerOpts(
            omit_log_with_field_keys=("k1",),
            mask_field_values_with_field_keys=("k1",),
        )
        args = ["k1", "v1"]

        assert should_omit(opts, "message", args)
        assert args == ["k1", "v1"]


class TestApplyMask:
    """Test masking of field values and messages."""

    def test_field_values(self):
        """Values of configured keys are replaced in every argument list."""
        opts = LoggerOpts(mask_field_values_with_field_keys=("k1", "k2"))
        implied = ["k1", "v1", "other", "keep"]
        additional = ["k2", "v2", "k3", "v3"]

        message = apply_mask(opts, "message", implied, additional)

        assert message == "message"
        assert implied == ["k1", MASK_REPLACEMENT, "other", "keep"]
        assert additional == ["k2", MASK_REPLACEMENT, "k3", "v3"]

    def test_field_values_case_sensitive(self):
        """Keys differing only in case are left alone."""
        opts = LoggerOpts(mask_field_values_with_field_keys=("K2",))
        args = ["k2", "v2"]

        apply_mask(opts, "message", args)

        assert args == ["k2", "v2"]

    def test_unpaired_trailing_key(self):
        """A trailing key without a value is skipped without error."""
        opts = LoggerOpts(mask_field_values_with_field_keys=("k2",))
        args = ["k1", "v1", "k2"]

        apply_mask(opts, "message", args)

        assert args == ["k1", "v1", "k2"]

    def test_non_string_keys(self):
        """Non-string keys are compared in their formatted form."""
        opts = LoggerOpts(mask_field_values_with_field_keys=("42",))
        args = [42, "secret"]

        apply_mask(opts, "message", args)

        assert args == [42, MASK_REPLACEMENT]

    def test_idempotent(self):
        """Masking twice changes nothing more."""
        opts = LoggerOpts(
            mask_field_values_with_field_keys=("k1",),
            mask_message_strings=("secret",),
        )
        args = ["k1", "v1"]

        message = apply_mask(opts, "a secret here", args)
        masked_args = list(args)
        message_again = apply_mask(opts, message, args)

        assert message_again == message == "a *** here"
        assert args == masked_args

    def test_message_regex_every_match(self):
        """Every span matching a pattern is replaced."""
        opts = LoggerOpts(mask_message_regexes=(re.compile("(foo|bar)"),))

        assert apply_mask(opts, "foo and bar and foo") == "*** and *** and ***"

    def test_message_regex_anchored(self):
        """Anchored patterns only replace where they match."""
        opts = LoggerOpts(mask_message_regexes=(re.compile("BAZ$"),))
        message = "System FOO has caused error BAR because of incorrectly configured BAZ"

        assert apply_mask(opts, message) == (
            "System FOO has caused error BAR because of incorrectly configured ***"
        )

    def test_message_regexes_compound_in_order(self):
        """Patterns apply one after another, in list order."""
        opts = LoggerOpts(
            mask_message_regexes=(re.compile("ab"), re.compile(r"\*\*\*c")),
        )

        assert apply_mask(opts, "abc") == "***"

    def test_message_strings(self):
        """Every literal occurrence is replaced, string by string."""
        opts = LoggerOpts(mask_message_strings=("foo", "bar"))

        assert apply_mask(opts, "foo.bar.foo.baz") == "***.***.***.baz"

    def test_message_strings_are_literal(self):
        """Substrings with regex characters are replaced literally."""
        opts = LoggerOpts(mask_message_strings=("a.c",))

        assert apply_mask(opts, "abc a.c") == "abc ***"

    def test_message_and_fields_independent(self):
        """Message masking never touches argument values and vice versa."""
        opts = LoggerOpts(mask_message_strings=("v1",))
        args = ["k1", "v1"]

        assert apply_mask(opts, "v1 in message", args) == "*** in message"
        assert args == ["k1", "v1"]


class TestMaskFieldValue:
    """Test masking of a single persistent field."""

    def test_masked_key(self):
        """A configured key gets the replacement."""
        opts = LoggerOpts(mask_field_values_with_field_keys=("password",))

        assert mask_field_value(opts, "password", "s3cr3t") == MASK_REPLACEMENT

    def test_other_key(self):
        """Other keys keep their value."""
        opts = LoggerOpts(mask_field_values_with_field_keys=("password",))

        assert mask_field_value(opts, "user", "alice") == "alice"
