"""Scope registry: loggers and rule configurations stored in a context.

Every root namespace (``provider`` and ``sdk``) owns one root logger and
any number of named subsystem loggers. Each scope has its own logger and
its own omit/mask configuration; subsystems never share rules with their
root.

All mutating operations return a new :class:`Context`. A missing root
turns every operation into a no-op, because logging must never be the
cause of a failure in code that runs without a host-injected logger
(unit tests, for example).
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from .context import Context
from .engine import Level, Logger, LoggerOptions
from .filtering import mask_field_value
from .options import LoggerOpts, Option, apply_logger_opts


class Namespace(str, Enum):
    """Independent root logger namespaces."""

    PROVIDER = "provider"
    SDK = "sdk"


DEFAULT_ROOT_LOGGER_NAMES = {
    Namespace.PROVIDER: "provider",
    Namespace.SDK: "sdk",
}

NEW_LOGGER_WARNING_KEY = "new_logger_warning"

NEW_PROVIDER_SUBSYSTEM_LOGGER_WARNING = (
    "This log was generated by a subsystem logger that wasn't created before "
    "being used. Use provider.new_subsystem to create this logger before it "
    "is used."
)

NEW_SDK_SUBSYSTEM_LOGGER_WARNING = (
    "This log was generated by an SDK subsystem logger that wasn't created "
    "before being used. Use sdk.new_subsystem to create this logger before "
    "it is used."
)

_NEW_SUBSYSTEM_LOGGER_WARNINGS = {
    Namespace.PROVIDER: NEW_PROVIDER_SUBSYSTEM_LOGGER_WARNING,
    Namespace.SDK: NEW_SDK_SUBSYSTEM_LOGGER_WARNING,
}


@dataclass(frozen=True)
class RootScope:
    """The root logger of a namespace."""

    namespace: Namespace


@dataclass(frozen=True)
class SubsystemScope:
    """A named subsystem logger under a namespace's root."""

    namespace: Namespace
    name: str

    @property
    def root(self) -> RootScope:
        return RootScope(self.namespace)


LogScope = RootScope | SubsystemScope


@dataclass(frozen=True)
class _LoggerKey:
    scope: LogScope


@dataclass(frozen=True)
class _OptionsKey:
    scope: LogScope


@dataclass(frozen=True)
class _SinkKey:
    pass


def get_logger(ctx: Context, scope: LogScope) -> Logger | None:
    """Return the scope's logger, or ``None`` if it was never created."""
    return ctx.value(_LoggerKey(scope))


def set_logger(ctx: Context, scope: LogScope, logger: Logger) -> Context:
    return ctx.with_value(_LoggerKey(scope), logger)


def get_options(ctx: Context, scope: LogScope) -> LoggerOpts | None:
    """Return the scope's rule configuration, or ``None`` if never created."""
    return ctx.value(_OptionsKey(scope))


def set_options(ctx: Context, scope: LogScope, opts: LoggerOpts) -> Context:
    return ctx.with_value(_OptionsKey(scope), opts)


def get_sink(ctx: Context) -> Logger | None:
    return ctx.value(_SinkKey())


def set_sink(ctx: Context, sink: Logger) -> Context:
    return ctx.with_value(_SinkKey(), sink)


def _rules_of(opts: LoggerOpts) -> LoggerOpts:
    """Keep only the omit/mask rules of ``opts``."""
    return replace(
        LoggerOpts(),
        omit_log_with_field_keys=opts.omit_log_with_field_keys,
        omit_log_with_message_regexes=opts.omit_log_with_message_regexes,
        omit_log_with_message_strings=opts.omit_log_with_message_strings,
        mask_field_values_with_field_keys=opts.mask_field_values_with_field_keys,
        mask_message_regexes=opts.mask_message_regexes,
        mask_message_strings=opts.mask_message_strings,
    )


def create_root(ctx: Context, namespace: Namespace, *options: Option) -> Context:
    """Create the root logger of ``namespace`` and store it in the context.

    With a registered sink the root is a named child of the sink and only
    an explicit level is applied on top of it. Otherwise a JSON logger is
    built from the options, at ``TRACE`` unless a level is given.
    """
    opts = apply_logger_opts(*options)
    name = opts.name or DEFAULT_ROOT_LOGGER_NAMES[namespace]

    sink = get_sink(ctx)
    if sink is not None:
        root = sink.named(name)
        if opts.level != Level.NO_LEVEL:
            root.set_level(opts.level)
    else:
        root = Logger(
            LoggerOptions(
                name=name,
                level=Level.TRACE if opts.level == Level.NO_LEVEL else opts.level,
                json_format=opts.json_format,
                include_location=opts.include_location,
                include_time=opts.include_time,
                output=opts.output,
                additional_location_offset=opts.additional_location_offset,
            )
        )

    scope = RootScope(namespace)
    ctx = set_logger(ctx, scope, root)
    return set_options(ctx, scope, _rules_of(opts))


def create_subsystem(
    ctx: Context, namespace: Namespace, subsystem: str, *options: Option
) -> Context:
    """Create a subsystem logger named ``<root>.<subsystem>``.

    Only the level, location offset and root-field copying options apply
    to the logger itself. The subsystem starts with its own rules; the
    root's rules are never copied.
    """
    root = get_logger(ctx, RootScope(namespace))
    if root is None:
        return ctx

    opts = apply_logger_opts(*options)

    sub_options = root.options
    sub_options = replace(
        sub_options,
        name=f"{sub_options.name}.{subsystem}" if sub_options.name else subsystem,
    )
    if opts.level != Level.NO_LEVEL:
        sub_options = replace(sub_options, level=opts.level)
    if opts.additional_location_offset:
        sub_options = replace(
            sub_options, additional_location_offset=opts.additional_location_offset
        )

    sub_logger = Logger(sub_options)
    if opts.include_root_fields:
        sub_logger = sub_logger.with_(*root.implied_args())

    scope = SubsystemScope(namespace, subsystem)
    ctx = set_logger(ctx, scope, sub_logger)
    return set_options(ctx, scope, _rules_of(opts))


def resolve(ctx: Context, scope: LogScope) -> tuple[Context, Logger | None]:
    """Return the scope's logger, creating a missing subsystem on the fly.

    Lazily created subsystem loggers carry a ``new_logger_warning`` field.
    The returned context holds the created subsystem.
    """
    logger = get_logger(ctx, scope)
    if logger is not None or isinstance(scope, RootScope):
        return ctx, logger

    if get_logger(ctx, scope.root) is None:
        return ctx, None

    ctx = create_subsystem(ctx, scope.namespace, scope.name)
    logger = get_logger(ctx, scope).with_(
        NEW_LOGGER_WARNING_KEY, _NEW_SUBSYSTEM_LOGGER_WARNINGS[scope.namespace]
    )
    return set_logger(ctx, scope, logger), logger


def with_field(ctx: Context, scope: LogScope, key: str, value: Any) -> Context:
    """Attach ``key=value`` to every future record of the scope.

    The scope's current field masking rules apply to ``value`` before it is
    attached.
    """
    ctx, logger = resolve(ctx, scope)
    if logger is None:
        return ctx

    opts = get_options(ctx, scope) or LoggerOpts()
    return set_logger(ctx, scope, logger.with_(key, mask_field_value(opts, key, value)))


def configure(ctx: Context, scope: LogScope, *options: Option) -> Context:
    """Apply rule options on top of the scope's current configuration."""
    ctx, logger = resolve(ctx, scope)
    if logger is None:
        return ctx

    opts = get_options(ctx, scope) or LoggerOpts()
    for option in options:
        opts = option(opts)

    return set_options(ctx, scope, opts)
