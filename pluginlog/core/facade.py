"""Namespace-bound logging entry points.

:class:`LoggingFacade` collapses the per-level and per-scope entry points
into one implementation parameterized by namespace. The public
:mod:`pluginlog.provider` and :mod:`pluginlog.sdk` modules expose its bound
methods as plain functions.
"""

import re
from collections.abc import Mapping
from typing import Any

from . import options as opt
from .context import Context
from .emit import emit
from .engine import Level
from .registry import (
    Namespace,
    RootScope,
    SubsystemScope,
    configure,
    create_subsystem,
    with_field,
)

Fields = Mapping[str, Any] | None


class LoggingFacade:
    """Logging functions for the root and subsystems of one namespace."""

    def __init__(self, namespace: Namespace) -> None:
        self.namespace = namespace
        self.root = RootScope(namespace)

    def subsystem(self, name: str) -> SubsystemScope:
        return SubsystemScope(self.namespace, name)

    # --------------------- root logger ---------------------

    def set_field(self, ctx: Context, key: str, value: Any) -> Context:
        """Return a context whose root logger includes ``key=value`` in all output."""
        return with_field(ctx, self.root, key, value)

    def trace(self, ctx: Context, msg: str, *additional_fields: Fields) -> None:
        """Log ``msg`` at trace level to the root logger."""
        emit(ctx, self.root, Level.TRACE, msg, *additional_fields)

    def debug(self, ctx: Context, msg: str, *additional_fields: Fields) -> None:
        """Log ``msg`` at debug level to the root logger."""
        emit(ctx, self.root, Level.DEBUG, msg, *additional_fields)

    def info(self, ctx: Context, msg: str, *additional_fields: Fields) -> None:
        """Log ``msg`` at info level to the root logger."""
        emit(ctx, self.root, Level.INFO, msg, *additional_fields)

    def warn(self, ctx: Context, msg: str, *additional_fields: Fields) -> None:
        """Log ``msg`` at warn level to the root logger."""
        emit(ctx, self.root, Level.WARN, msg, *additional_fields)

    def error(self, ctx: Context, msg: str, *additional_fields: Fields) -> None:
        """Log ``msg`` at error level to the root logger."""
        emit(ctx, self.root, Level.ERROR, msg, *additional_fields)

    def omit_log_with_field_keys(self, ctx: Context, *keys: str) -> Context:
        """Drop root records that carry any of ``keys``. Additive."""
        return configure(ctx, self.root, opt.with_omit_log_with_field_keys(*keys))

    def omit_log_with_message_regexes(
        self, ctx: Context, *expressions: re.Pattern[str]
    ) -> Context:
        """Drop root records whose message matches any pattern. Additive."""
        return configure(
            ctx, self.root, opt.with_omit_log_with_message_regexes(*expressions)
        )

    def omit_log_with_message_strings(self, ctx: Context, *matching_strings: str) -> Context:
        """Drop root records whose message contains any string. Additive."""
        return configure(
            ctx, self.root, opt.with_omit_log_with_message_strings(*matching_strings)
        )

    def mask_field_values_with_field_keys(self, ctx: Context, *keys: str) -> Context:
        """Replace with ``***`` the values of ``keys`` in root records. Additive."""
        return configure(
            ctx, self.root, opt.with_mask_field_values_with_field_keys(*keys)
        )

    def mask_message_regexes(self, ctx: Context, *expressions: re.Pattern[str]) -> Context:
        """Replace with ``***`` message spans matching any pattern. Additive."""
        return configure(ctx, self.root, opt.with_mask_message_regexes(*expressions))

    def mask_message_strings(self, ctx: Context, *matching_strings: str) -> Context:
        """Replace with ``***`` any of the strings in root messages. Additive."""
        return configure(ctx, self.root, opt.with_mask_message_strings(*matching_strings))

    # --------------------- subsystem loggers ---------------------

    def new_subsystem(self, ctx: Context, subsystem: str, *options: opt.Option) -> Context:
        """Return a context holding a new subsystem logger under the root.

        Subsystems let areas of a plugin log at their own level. The
        supported options are ``with_level``, ``with_additional_location_offset``
        and ``with_root_fields``. Without a root logger this is a no-op.
        """
        return create_subsystem(ctx, self.namespace, subsystem, *options)

    def subsystem_set_field(
        self, ctx: Context, subsystem: str, key: str, value: Any
    ) -> Context:
        """Return a context whose subsystem logger includes ``key=value``."""
        return with_field(ctx, self.subsystem(subsystem), key, value)

    def subsystem_trace(
        self, ctx: Context, subsystem: str, msg: str, *additional_fields: Fields
    ) -> None:
        emit(ctx, self.subsystem(subsystem), Level.TRACE, msg, *additional_fields)

    def subsystem_debug(
        self, ctx: Context, subsystem: str, msg: str, *additional_fields: Fields
    ) -> None:
        emit(ctx, self.subsystem(subsystem), Level.DEBUG, msg, *additional_fields)

    def subsystem_info(
        self, ctx: Context, subsystem: str, msg: str, *additional_fields: Fields
    ) -> None:
        emit(ctx, self.subsystem(subsystem), Level.INFO, msg, *additional_fields)

    def subsystem_warn(
        self, ctx: Context, subsystem: str, msg: str, *additional_fields: Fields
    ) -> None:
        emit(ctx, self.subsystem(subsystem), Level.WARN, msg, *additional_fields)

    def subsystem_error(
        self, ctx: Context, subsystem: str, msg: str, *additional_fields: Fields
    ) -> None:
        emit(ctx, self.subsystem(subsystem), Level.ERROR, msg, *additional_fields)

    def subsystem_omit_log_with_field_keys(
        self, ctx: Context, subsystem: str, *keys: str
    ) -> Context:
        return configure(
            ctx, self.subsystem(subsystem), opt.with_omit_log_with_field_keys(*keys)
        )

    def subsystem_omit_log_with_message_regexes(
        self, ctx: Context, subsystem: str, *expressions: re.Pattern[str]
    ) -> Context:
        return configure(
            ctx,
            self.subsystem(subsystem),
            opt.with_omit_log_with_message_regexes(*expressions),
        )

    def subsystem_omit_log_with_message_strings(
        self, ctx: Context, subsystem: str, *matching_strings: str
    ) -> Context:
        return configure(
            ctx,
            self.subsystem(subsystem),
            opt.with_omit_log_with_message_strings(*matching_strings),
        )

    def subsystem_mask_field_values_with_field_keys(
        self, ctx: Context, subsystem: str, *keys: str
    ) -> Context:
        return configure(
            ctx,
            self.subsystem(subsystem),
            opt.with_mask_field_values_with_field_keys(*keys),
        )

    def subsystem_mask_message_regexes(
        self, ctx: Context, subsystem: str, *expressions: re.Pattern[str]
    ) -> Context:
        return configure(
            ctx, self.subsystem(subsystem), opt.with_mask_message_regexes(*expressions)
        )

    def subsystem_mask_message_strings(
        self, ctx: Context, subsystem: str, *matching_strings: str
    ) -> Context:
        return configure(
            ctx,
            self.subsystem(subsystem),
            opt.with_mask_message_strings(*matching_strings),
        )
