"""Omission and masking of log records.

Both checks run around a single pending emission: :func:`should_omit`
first, then :func:`apply_mask` only if the record survives. Argument lists
are flat ``[k1, v1, k2, v2, ...]`` lists; a trailing key without a value is
never treated as a pair.
"""

from typing import Any

from .args import args_to_keys, key_to_str
from .options import LoggerOpts

MASK_REPLACEMENT = "***"


def should_omit(opts: LoggerOpts, message: str, *arg_lists: list[Any]) -> bool:
    """Decide whether a record must be dropped entirely.

    Rule kinds are checked in order: field keys (across every argument
    list), message regexes, then message substrings. Any single match is
    enough.
    """
    if opts.omit_log_with_field_keys:
        omitted = set(opts.omit_log_with_field_keys)
        for args in arg_lists:
            if omitted.intersection(args_to_keys(args)):
                return True

    if opts.omit_log_with_message_regexes:
        for expression in opts.omit_log_with_message_regexes:
            if expression.search(message):
                return True

    if opts.omit_log_with_message_strings:
        for matching_string in opts.omit_log_with_message_strings:
            if matching_string in message:
                return True

    return False


def apply_mask(opts: LoggerOpts, message: str, *arg_lists: list[Any]) -> str:
    """Mask field values in place and return the masked message.

    Note that ``arg_lists`` are modified in place; only pass lists owned by
    the current call.
    """
    for key in opts.mask_field_values_with_field_keys:
        for args in arg_lists:
            # Start at the first value so an unpaired trailing key is skipped
            for i in range(1, len(args), 2):
                if key_to_str(args[i - 1]) == key:
                    args[i] = MASK_REPLACEMENT

    for expression in opts.mask_message_regexes:
        message = expression.sub(MASK_REPLACEMENT, message)

    for matching_string in opts.mask_message_strings:
        if matching_string:
            message = message.replace(matching_string, MASK_REPLACEMENT)

    return message


def mask_field_value(opts: LoggerOpts, key: str, value: Any) -> Any:
    """Return the value to store for a persistent field ``key``."""
    if key in opts.mask_field_values_with_field_keys:
        return MASK_REPLACEMENT
    return value
