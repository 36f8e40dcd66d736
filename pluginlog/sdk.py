"""Logging functions for SDK and framework code.

SDKs create the root loggers (``new_root_sdk_logger`` and
``new_root_provider_logger``) and inject them into the context handed to
provider code. Every function here is a silent no-op when the SDK root
logger is missing from the context.

Example::

    ctx = sdk.new_root_sdk_logger(background())
    ctx = sdk.mask_field_values_with_field_keys(ctx, "password")
    sdk.info(ctx, "login", {"user": "alice", "password": "s3cr3t"})
"""

from .core.context import Context
from .core.facade import LoggingFacade
from .core.options import (
    Option,
    with_additional_location_offset,
    with_console_format,
    with_level,
    with_level_from_env,
    with_log_name,
    with_output,
    with_root_fields,
    without_location,
    without_timestamp,
)
from .core.registry import Namespace, create_root

__all__ = [
    "new_root_sdk_logger",
    "new_root_provider_logger",
    "set_field",
    "trace",
    "debug",
    "info",
    "warn",
    "error",
    "omit_log_with_field_keys",
    "omit_log_with_message_regexes",
    "omit_log_with_message_strings",
    "mask_field_values_with_field_keys",
    "mask_message_regexes",
    "mask_message_strings",
    "new_subsystem",
    "subsystem_set_field",
    "subsystem_trace",
    "subsystem_debug",
    "subsystem_info",
    "subsystem_warn",
    "subsystem_error",
    "subsystem_omit_log_with_field_keys",
    "subsystem_omit_log_with_message_regexes",
    "subsystem_omit_log_with_message_strings",
    "subsystem_mask_field_values_with_field_keys",
    "subsystem_mask_message_regexes",
    "subsystem_mask_message_strings",
    "with_additional_location_offset",
    "with_console_format",
    "with_level",
    "with_level_from_env",
    "with_log_name",
    "with_output",
    "with_root_fields",
    "without_location",
    "without_timestamp",
]


def new_root_sdk_logger(ctx: Context, *options: Option) -> Context:
    """Return a context holding a new SDK root logger, named ``sdk`` by default."""
    return create_root(ctx, Namespace.SDK, *options)


def new_root_provider_logger(ctx: Context, *options: Option) -> Context:
    """Return a context holding a new provider root logger, named ``provider`` by default."""
    return create_root(ctx, Namespace.PROVIDER, *options)


_facade = LoggingFacade(Namespace.SDK)

set_field = _facade.set_field
trace = _facade.trace
debug = _facade.debug
info = _facade.info
warn = _facade.warn
error = _facade.error

omit_log_with_field_keys = _facade.omit_log_with_field_keys
omit_log_with_message_regexes = _facade.omit_log_with_message_regexes
omit_log_with_message_strings = _facade.omit_log_with_message_strings
mask_field_values_with_field_keys = _facade.mask_field_values_with_field_keys
mask_message_regexes = _facade.mask_message_regexes
mask_message_strings = _facade.mask_message_strings

new_subsystem = _facade.new_subsystem
subsystem_set_field = _facade.subsystem_set_field
subsystem_trace = _facade.subsystem_trace
subsystem_debug = _facade.subsystem_debug
subsystem_info = _facade.subsystem_info
subsystem_warn = _facade.subsystem_warn
subsystem_error = _facade.subsystem_error

subsystem_omit_log_with_field_keys = _facade.subsystem_omit_log_with_field_keys
subsystem_omit_log_with_message_regexes = _facade.subsystem_omit_log_with_message_regexes
subsystem_omit_log_with_message_strings = _facade.subsystem_omit_log_with_message_strings
subsystem_mask_field_values_with_field_keys = (
    _facade.subsystem_mask_field_values_with_field_keys
)
subsystem_mask_message_regexes = _facade.subsystem_mask_message_regexes
subsystem_mask_message_strings = _facade.subsystem_mask_message_strings
