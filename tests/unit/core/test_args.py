"""Tests for field mapping / flat argument conversions."""
import pytest

from pluginlog.core.args import Field, args_to_fields, args_to_keys, maps_to_args

pytestmark = pytest.mark.unit


def _as_dict(args):
    return dict(zip(args[::2], args[1::2]))


class TestMapsToArgs:
    """Test flattening of field mappings."""

    def test_no_maps(self):
        """No mappings means no arguments."""
        assert maps_to_args() == []

    def test_single_map(self):
        """A single mapping is flattened pair by pair."""
        args = maps_to_args({"k1": "v1", "k2": 2})

        assert len(args) == 4
        assert _as_dict(args) == {"k1": "v1", "k2": 2}

    def test_empty_map(self):
        """An empty mapping yields an empty list."""
        assert maps_to_args({}) == []

    def test_shallow_merge_last_wins(self):
        """Later mappings override earlier ones on key clashes."""
        args = maps_to_args({"a": 1, "b": 2}, {"a": 9, "c": 3})

        assert len(args) == 6
        assert _as_dict(args) == {"a": 9, "b": 2, "c": 3}

    def test_merge_is_shallow(self):
        """Nested mappings are replaced, not merged."""
        args = maps_to_args({"nested": {"x": 1, "y": 2}}, {"nested": {"z": 3}})

        assert _as_dict(args) == {"nested": {"z": 3}}

    def test_result_is_fresh(self):
        """Each call returns a new list, and inputs are left untouched."""
        first = {"a": 1}
        second = {"a": 2}

        args1 = maps_to_args(first, second)
        args2 = maps_to_args(first, second)
        args1[1] = "changed"

        assert args2 == ["a", 2]
        assert first == {"a": 1}
        assert second == {"a": 2}


class TestArgsToKeys:
    """Test key extraction from flat argument lists."""

    def test_empty(self):
        """No arguments, no keys."""
        assert args_to_keys([]) == []

    def test_pairs(self):
        """Keys are taken from even positions."""
        assert args_to_keys(["k1", "v1", "k2", "v2"]) == ["k1", "k2"]

    def test_unpaired_trailing_key(self):
        """A trailing key without a value is still returned."""
        assert args_to_keys(["k1", "v1", "k2"]) == ["k1", "k2"]

    def test_non_string_keys(self):
        """Non-string keys are formatted to strings."""
        assert args_to_keys([1, "v1", 2.5, "v2", None, "v3"]) == ["1", "2.5", "None"]


class TestArgsToFields:
    """Test pairing of flat argument lists."""

    def test_pairs(self):
        """Pairs become Field tuples."""
        assert args_to_fields(["k1", "v1", 2, "v2"], "MISSING") == [
            Field("k1", "v1"),
            Field("2", "v2"),
        ]

    def test_trailing_key_gets_missing_value(self):
        """An unpaired key is paired with the missing value marker."""
        assert args_to_fields(["k1", "v1", "k2"], "MISSING") == [
            Field("k1", "v1"),
            Field("k2", "MISSING"),
        ]
