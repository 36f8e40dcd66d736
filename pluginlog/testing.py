"""Helpers for testing code that logs through pluginlog."""

import io
import json
from typing import Any, TextIO

from .core.context import Context
from .core.engine import Level
from .core.options import with_level, with_output, without_location, without_timestamp
from .core.registry import Namespace, create_root


def provider_root(ctx: Context, output: TextIO) -> Context:
    """Return a context with a provider root logger writing JSON to ``output``.

    Records carry no timestamp or caller location so that output is
    deterministic, and every level is written.
    """
    return create_root(
        ctx,
        Namespace.PROVIDER,
        with_output(output),
        with_level(Level.TRACE),
        without_location(),
        without_timestamp(),
    )


def sdk_root(ctx: Context, output: TextIO) -> Context:
    """Same as :func:`provider_root`, for the SDK root logger."""
    return create_root(
        ctx,
        Namespace.SDK,
        with_output(output),
        with_level(Level.TRACE),
        without_location(),
        without_timestamp(),
    )


def multiline_json_decode(output: str | io.StringIO) -> list[dict[str, Any]]:
    """Decode one JSON object per non-empty line."""
    if isinstance(output, io.StringIO):
        output = output.getvalue()

    return [json.loads(line) for line in output.splitlines() if line.strip()]
