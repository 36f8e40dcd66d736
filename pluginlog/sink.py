"""Process-wide log sink and piping of JSON logs from child processes.

The sink is configured from the environment (see
:class:`pluginlog.core.settings.SinkSettings`). Registering it in a context
makes every root logger created afterwards a named child of the sink, so
that all plugin output shares one destination and format.
"""

import atexit
import json
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from functools import lru_cache
from typing import IO, Any

import structlog

from .core.args import Field
from .core.context import Context
from .core.engine import Level, Logger, LoggerOptions, level_from_string
from .core.options import VALID_LEVELS, parse_env_level
from .core.registry import get_sink, set_sink
from .core.settings import SinkSettings

logger = structlog.get_logger(__name__)

ENV_LOG = "TF_LOG"
ENV_LOG_FILE = "TF_LOG_PATH"
ENV_LOG_CLI = "TF_LOG_CLI"

# Longest log line accepted by pipe_json_logs
MAX_LOG_LINE_SIZE = 64 * 1024

__all__ = [
    "VALID_LEVELS",
    "LogEntry",
    "new_cli_logger",
    "new_sink",
    "open_sink",
    "parse_json",
    "pipe_json_logs",
    "register_sink",
]


def _open_log_file(path: str) -> IO[str]:
    """Open ``path`` for appending, or fall back to stderr with a warning."""
    if not path:
        return sys.stderr

    try:
        return open(path, "a", encoding="utf-8")
    except OSError as e:
        logger.warning("Error opening log file", path=path, error=str(e))
        return sys.stderr


def new_sink(settings: SinkSettings | None = None, output: IO[str] | None = None) -> Logger:
    """Build a sink logger from settings (read from the environment by default).

    An empty ``TF_LOG`` disables output, ``JSON`` enables JSON output at
    trace level, and an unrecognized value disables output with a warning.
    Records go to ``output`` (stderr by default), which the caller owns; use
    :func:`open_sink` to write to ``TF_LOG_PATH``.
    """
    if settings is None:
        settings = SinkSettings()

    json_format = False
    if settings.log == "JSON":
        level = Level.TRACE
        json_format = True
    else:
        level = parse_env_level(ENV_LOG, settings.log, Level.OFF)

    return Logger(
        LoggerOptions(
            level=level,
            json_format=json_format,
            output=output or sys.stderr,
        )
    )


@contextmanager
def open_sink(settings: SinkSettings | None = None) -> Iterator[Logger]:
    """Build a sink writing to ``TF_LOG_PATH``, closing the file on exit."""
    if settings is None:
        settings = SinkSettings()

    output = _open_log_file(settings.log_path)
    try:
        yield new_sink(settings, output)
    finally:
        if output is not sys.stderr:
            output.close()


@lru_cache(maxsize=1)
def _process_sink() -> Logger:
    settings = SinkSettings()
    output = _open_log_file(settings.log_path)
    if output is not sys.stderr:
        atexit.register(output.close)
    return new_sink(settings, output)


def register_sink(ctx: Context, sink: Logger | None = None) -> Context:
    """Return a context that holds the process sink (or ``sink``).

    Call this before creating root loggers when output should be controlled
    by the environment.
    """
    return set_sink(ctx, sink or _process_sink())


def new_cli_logger(ctx: Context, command_id: str) -> Logger | None:
    """Return the sink's ``terraform`` logger tagged with ``command_id``."""
    sink = get_sink(ctx)
    if sink is None:
        return None

    cli_logger = sink.named("terraform")

    settings = SinkSettings()
    if settings.log_cli:
        cli_logger.set_level(parse_env_level(ENV_LOG_CLI, settings.log_cli, cli_logger.level))

    return cli_logger.with_("command_id", command_id)


@dataclass
class LogEntry:
    """A record read back from a JSON log line."""

    message: str = ""
    level: str = ""
    timestamp: datetime | None = None
    module: str = ""
    kv_pairs: list[Field] = field(default_factory=list)

    def args(self) -> list[Any]:
        """Flatten the remaining fields into a key/value argument list."""
        result: list[Any] = []
        for key, value in self.kv_pairs:
            result.extend((key, value))
        return result


def parse_json(line: str | bytes) -> LogEntry:
    """Parse one JSON log line.

    Raises:
    ------
        ValueError: If the line is not a JSON object or has a bad timestamp

    """
    raw = json.loads(line)
    if not isinstance(raw, dict):
        raise ValueError("log line is not a JSON object")

    entry = LogEntry(
        message=str(raw.pop("@message", "")),
        level=str(raw.pop("@level", "")),
        module=str(raw.pop("@module", "")),
    )

    timestamp = raw.pop("@timestamp", None)
    if timestamp is not None:
        entry.timestamp = datetime.fromisoformat(str(timestamp))

    entry.kv_pairs = [Field(key, value) for key, value in sorted(raw.items())]
    return entry


def _format_timestamp(timestamp: datetime) -> str:
    millis = timestamp.microsecond // 1000
    return f"{timestamp:%Y-%m-%dT%H:%M:%S}.{millis:03d}{timestamp:%z}"


def pipe_json_logs(ctx: Context, command_id: str, stream: IO[Any]) -> None:
    """Re-emit JSON log lines read from ``stream`` on the CLI logger.

    Stops at end of stream, on a read error, or on a line that is not valid
    JSON. Problems are reported on the sink. Without a registered sink this
    does nothing.
    """
    sink = get_sink(ctx)
    if sink is None:
        return

    cli_logger = new_cli_logger(ctx, command_id)
    continuation = False

    while True:
        try:
            line = stream.readline(MAX_LOG_LINE_SIZE)
        except (OSError, ValueError) as e:
            sink.error("reading JSON logs", "error", str(e))
            return

        if not line:
            return

        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")

        is_prefix = not line.endswith("\n") and len(line) >= MAX_LOG_LINE_SIZE
        if is_prefix or continuation:
            sink.error("log line larger than max log line size", "prefix", line)
            continuation = is_prefix
            continue

        if not line.strip():
            continue

        try:
            entry = parse_json(line)
        except ValueError as e:
            sink.error("parsing JSON logs", "input", line.rstrip("\n"), "error", str(e))
            return

        level = level_from_string(entry.level)
        if level in (Level.NO_LEVEL, Level.OFF):
            sink.error("parsing JSON logs", "input", line.rstrip("\n"), "error", "no log level")
            continue

        entry_logger = cli_logger.named(entry.module) if entry.module else cli_logger
        out = entry.args()
        if entry.timestamp is not None:
            out.extend(("timestamp", _format_timestamp(entry.timestamp)))

        entry_logger.log(level, entry.message, *out)
