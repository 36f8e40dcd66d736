"""Logging functions for provider code.

The provider root logger is created by the SDK the provider is built on
(``sdk.new_root_provider_logger``); provider code only derives fields,
subsystems and filtering rules from it. Without a root logger in the
context, every function here does nothing.

Example::

    ctx = provider.set_field(ctx, "resource", "example_thing")
    ctx = provider.new_subsystem(ctx, "client", with_level(Level.DEBUG))
    provider.subsystem_debug(ctx, "client", "request sent", {"status": 200})
"""

from .core.facade import LoggingFacade
from .core.options import (
    with_additional_location_offset,
    with_level,
    with_level_from_env,
    with_root_fields,
)
from .core.registry import Namespace

__all__ = [
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
    "with_level",
    "with_level_from_env",
    "with_root_fields",
]

_facade = LoggingFacade(Namespace.PROVIDER)

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
