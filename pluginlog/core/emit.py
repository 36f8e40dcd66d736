"""Emission of a single record for any scope and level."""

from collections.abc import Mapping
from typing import Any

from .args import maps_to_args
from .context import Context
from .engine import Level
from .filtering import apply_mask, should_omit
from .options import LoggerOpts
from .registry import LogScope, get_options, resolve


def emit(
    ctx: Context,
    scope: LogScope,
    level: Level,
    message: str,
    *additional_fields: Mapping[str, Any] | None,
) -> None:
    """Log ``message`` at ``level`` to the logger of ``scope``.

    Additional field mappings are shallow merged (last wins) and combined
    with the logger's implied fields. The record is dropped when the
    scope's omission rules match; otherwise masking is applied to the
    message and the call's fields before writing.
    """
    ctx, logger = resolve(ctx, scope)
    if logger is None:
        return

    opts = get_options(ctx, scope) or LoggerOpts()
    additional_args = maps_to_args(*(fields for fields in additional_fields if fields))

    if should_omit(opts, message, logger.implied_args(), additional_args):
        return

    message = apply_mask(opts, message, additional_args)
    logger.log(level, message, *additional_args)
