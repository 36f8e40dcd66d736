"""Conversions between field mappings and flat key/value argument lists.

The logging engine consumes arguments as a flat, alternating list
(``[k1, v1, k2, v2, ...]``). Call sites supply one or more field mappings
instead; this module translates between the two shapes.
"""

from collections.abc import Mapping
from typing import Any, NamedTuple


class Field(NamedTuple):
    """A single key/value pair taken from a flat argument list."""

    key: str
    value: Any


def maps_to_args(*maps: Mapping[str, Any]) -> list[Any]:
    """Shallow merge field mappings into a flat key/value argument list.

    When more than one mapping is given, later mappings win on key clashes.
    Nested mappings are replaced wholesale, never merged.

    Args:
    ----
        *maps: Field mappings, in precedence order (last wins)

    Returns:
    -------
        A freshly allocated list owned by the caller

    """
    if not maps:
        return []

    if len(maps) == 1:
        merged = maps[0]
    else:
        merged = {}
        for fields in maps:
            merged.update(fields)

    result: list[Any] = []
    for key, value in merged.items():
        result.extend((key, value))

    return result


def key_to_str(key: Any) -> str:
    """Format a key that may not be a string."""
    if isinstance(key, str):
        return key
    return f"{key}"


def args_to_keys(args: list[Any]) -> list[str]:
    """Extract the keys from a flat key/value argument list.

    With an odd number of arguments the last key has no value; it is still
    returned, so callers that need complete pairs must check the length.
    """
    return [key_to_str(args[i]) for i in range(0, len(args), 2)]


def args_to_fields(args: list[Any], missing_value: Any) -> list[Field]:
    """Pair up a flat argument list, filling a trailing key with ``missing_value``."""
    fields = [
        Field(key_to_str(args[i - 1]), args[i]) for i in range(1, len(args), 2)
    ]

    if len(args) % 2:
        fields.append(Field(key_to_str(args[-1]), missing_value))

    return fields
