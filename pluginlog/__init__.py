"""Structured logging for plugin ecosystems.

A host injects pre-configured loggers into a request-scoped
:class:`~pluginlog.core.context.Context`; SDK and provider code log through
:mod:`pluginlog.sdk` and :mod:`pluginlog.provider` without holding a logger,
with per-scope omission and masking of records.
"""

from .core.context import (
    Context,
    ContextScope,
    background,
    get_current_context,
    set_current_context,
)
from .core.engine import Level, Logger, LoggerOptions
from .core.filtering import MASK_REPLACEMENT
from .core.registry import Namespace, RootScope, SubsystemScope

__all__ = [
    "Context",
    "ContextScope",
    "background",
    "get_current_context",
    "set_current_context",
    "Level",
    "Logger",
    "LoggerOptions",
    "MASK_REPLACEMENT",
    "Namespace",
    "RootScope",
    "SubsystemScope",
]
