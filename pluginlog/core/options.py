"""Logger options and the additive omit/mask rule configuration.

Options are plain callables taking a :class:`LoggerOpts` and returning a new
one. Rule-adding options always append, so repeated configuration calls
accumulate instead of replacing each other, and never modify the input
configuration, which may be shared by other contexts.
"""

import os
import re
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TextIO

import structlog

from .engine import Level, level_from_string

logger = structlog.get_logger(__name__)

VALID_LEVELS = ("TRACE", "DEBUG", "INFO", "WARN", "ERROR", "OFF")


@dataclass(frozen=True)
class LoggerOpts:
    """Configuration for a root or subsystem logger.

    Attributes
    ----------
        name: Name, or ``@module``, of a root logger
        level: Most verbose level written; ``NO_LEVEL`` keeps the default
        include_location: Whether records include ``@caller``
        additional_location_offset: Extra frames to skip for ``@caller``
        output: Stream records are written to (stderr when unset)
        include_time: Whether records include ``@timestamp``
        json_format: JSON lines when true, console lines otherwise
        include_root_fields: Copy root implied fields into a new subsystem
        omit_log_with_field_keys: Drop records carrying any of these keys
        omit_log_with_message_regexes: Drop records whose message matches
        omit_log_with_message_strings: Drop records whose message contains
        mask_field_values_with_field_keys: Replace values of these keys
        mask_message_regexes: Replace message spans matching these patterns
        mask_message_strings: Replace these literal message substrings

    """

    name: str = ""
    level: Level = Level.NO_LEVEL
    include_location: bool = True
    additional_location_offset: int = 0
    output: TextIO | None = None
    include_time: bool = True
    json_format: bool = True
    include_root_fields: bool = False

    omit_log_with_field_keys: tuple[str, ...] = ()
    omit_log_with_message_regexes: tuple[re.Pattern[str], ...] = ()
    omit_log_with_message_strings: tuple[str, ...] = ()
    mask_field_values_with_field_keys: tuple[str, ...] = ()
    mask_message_regexes: tuple[re.Pattern[str], ...] = ()
    mask_message_strings: tuple[str, ...] = ()


Option = Callable[[LoggerOpts], LoggerOpts]


def apply_logger_opts(*options: Option) -> LoggerOpts:
    """Fold ``options`` over the defaults, in order."""
    opts = LoggerOpts()
    for option in options:
        opts = option(opts)
    return opts


def with_log_name(name: str) -> Option:
    """Set the name of a root logger."""

    def option(opts: LoggerOpts) -> LoggerOpts:
        return replace(opts, name=name)

    return option


def with_level(level: Level) -> Option:
    """Set the most verbose level a logger writes."""

    def option(opts: LoggerOpts) -> LoggerOpts:
        return replace(opts, level=level)

    return option


def env_var_name(name: str, *subsystems: str) -> str:
    """Build ``NAME[_SUB1[_SUB2...]]``, uppercased."""
    suffix = "_".join(subsystems)
    if suffix:
        suffix = "_" + suffix
    return (name + suffix).upper()


def parse_env_level(env_var: str, value: str | None, default: Level) -> Level:
    """Parse a level read from ``env_var``.

    Empty values yield ``default`` silently; unrecognized values yield
    ``default`` and a warning on the diagnostic logger.
    """
    if not value:
        return default

    normalized = value.strip().upper()
    if normalized in VALID_LEVELS:
        return level_from_string(normalized)

    logger.warning(
        "Invalid log level",
        env_var=env_var,
        value=value,
        default=default.name,
        valid_levels=list(VALID_LEVELS),
    )
    return default


def with_level_from_env(name: str, *subsystems: str) -> Option:
    """Set the level from the environment variable ``NAME[_SUBSYSTEM...]``.

    The variable is read when the option is applied.
    """

    def option(opts: LoggerOpts) -> LoggerOpts:
        env_var = env_var_name(name, *subsystems)
        level = parse_env_level(env_var, os.environ.get(env_var), Level.NO_LEVEL)
        return replace(opts, level=level)

    return option


def with_output(output: TextIO) -> Option:
    """Write records to ``output`` instead of stderr."""

    def option(opts: LoggerOpts) -> LoggerOpts:
        return replace(opts, output=output)

    return option


def with_console_format() -> Option:
    """Write human-readable console lines instead of JSON."""

    def option(opts: LoggerOpts) -> LoggerOpts:
        return replace(opts, json_format=False)

    return option


def with_root_fields() -> Option:
    """Copy the root logger's implied fields into a new subsystem logger."""

    def option(opts: LoggerOpts) -> LoggerOpts:
        return replace(opts, include_root_fields=True)

    return option


def without_location() -> Option:
    """Omit ``@caller`` from records."""

    def option(opts: LoggerOpts) -> LoggerOpts:
        return replace(opts, include_location=False)

    return option


def without_timestamp() -> Option:
    """Omit ``@timestamp`` from records."""

    def option(opts: LoggerOpts) -> LoggerOpts:
        return replace(opts, include_time=False)

    return option


def with_additional_location_offset(offset: int) -> Option:
    """Skip ``offset`` more frames when resolving ``@caller``.

    Use this from logging helper functions so the reported location is the
    helper's caller.
    """

    def option(opts: LoggerOpts) -> LoggerOpts:
        return replace(opts, additional_location_offset=offset)

    return option


def with_omit_log_with_field_keys(*keys: str) -> Option:
    """Append keys whose presence drops a record."""

    def option(opts: LoggerOpts) -> LoggerOpts:
        return replace(
            opts, omit_log_with_field_keys=opts.omit_log_with_field_keys + keys
        )

    return option


def with_omit_log_with_message_regexes(*expressions: re.Pattern[str]) -> Option:
    """Append patterns that drop a record when found in its message."""

    def option(opts: LoggerOpts) -> LoggerOpts:
        return replace(
            opts,
            omit_log_with_message_regexes=opts.omit_log_with_message_regexes
            + expressions,
        )

    return option


def with_omit_log_with_message_strings(*matching_strings: str) -> Option:
    """Append substrings that drop a record when contained in its message."""

    def option(opts: LoggerOpts) -> LoggerOpts:
        return replace(
            opts,
            omit_log_with_message_strings=opts.omit_log_with_message_strings
            + matching_strings,
        )

    return option


def with_mask_field_values_with_field_keys(*keys: str) -> Option:
    """Append keys whose values are replaced by ``***``."""

    def option(opts: LoggerOpts) -> LoggerOpts:
        return replace(
            opts,
            mask_field_values_with_field_keys=opts.mask_field_values_with_field_keys
            + keys,
        )

    return option


def with_mask_message_regexes(*expressions: re.Pattern[str]) -> Option:
    """Append patterns whose matches in a message are replaced by ``***``."""

    def option(opts: LoggerOpts) -> LoggerOpts:
        return replace(
            opts, mask_message_regexes=opts.mask_message_regexes + expressions
        )

    return option


def with_mask_message_strings(*matching_strings: str) -> Option:
    """Append substrings that are replaced by ``***`` in a message."""

    def option(opts: LoggerOpts) -> LoggerOpts:
        return replace(
            opts, mask_message_strings=opts.mask_message_strings + matching_strings
        )

    return option
