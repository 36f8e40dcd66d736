"""Leveled, named loggers rendered through structlog.

A :class:`Logger` carries a name (the ``@module`` of its records), a
minimum level, persistent "implied" fields and a structlog processor chain
that renders each record either as a JSON line or as a human-readable
console line.
"""

import sys
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any, TextIO

import structlog
from structlog.processors import CallsiteParameter

from .args import args_to_fields, maps_to_args
from .console import ConsoleRenderer, RichConsoleLogger

# Value rendered for a trailing key that has no value
MISSING_VALUE = "EXTRA_VALUE_AT_END"

_INTERNAL_MODULES = ("pluginlog", "structlog")


class Level(IntEnum):
    """Log levels, from most to least verbose."""

    NO_LEVEL = 0
    TRACE = 1
    DEBUG = 2
    INFO = 3
    WARN = 4
    ERROR = 5
    OFF = 6

    @property
    def label(self) -> str:
        """Lowercase name used in rendered records."""
        return self.name.lower()


def level_from_string(value: str | None) -> Level:
    """Parse a level name case-insensitively.

    Unknown or empty values map to ``Level.NO_LEVEL``.
    """
    if not value:
        return Level.NO_LEVEL

    normalized = value.strip().upper()
    if normalized == "NO_LEVEL":
        return Level.NO_LEVEL

    try:
        return Level[normalized]
    except KeyError:
        return Level.NO_LEVEL


@dataclass(frozen=True)
class LoggerOptions:
    """Construction options for a :class:`Logger`."""

    name: str = ""
    level: Level = Level.INFO
    json_format: bool = True
    include_location: bool = False
    include_time: bool = True
    output: TextIO | None = None
    additional_location_offset: int = 0


def _expand_record(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Replace the positional event with the record it carries.

    Keys already added by earlier processors win over record fields.
    """
    record = event_dict.pop("event")
    return {**record, **event_dict}


class CallerLocationAdder:
    """Turn structlog's call-site parameters into ``@caller``.

    Must run after :class:`structlog.processors.CallsiteParameterAdder`.
    ``additional_offset`` moves the location that many frames further out,
    for callers that wrap logging in their own helper functions.
    """

    def __init__(self, additional_offset: int = 0) -> None:
        self.additional_offset = max(0, additional_offset)

    def __call__(self, _: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        pathname = event_dict.pop(CallsiteParameter.PATHNAME.value, None)
        lineno = event_dict.pop(CallsiteParameter.LINENO.value, None)

        if self.additional_offset:
            frame = _outer_frame(self.additional_offset)
            if frame is not None:
                pathname, lineno = frame.f_code.co_filename, frame.f_lineno

        if pathname is not None:
            event_dict["@caller"] = f"{pathname}:{lineno}"

        return event_dict


def _outer_frame(offset: int) -> Any:
    """Return the frame ``offset`` levels above the first application frame."""
    frame = sys._getframe(1)
    while frame is not None and frame.f_globals.get("__name__", "").startswith(
        _INTERNAL_MODULES
    ):
        frame = frame.f_back

    for _skipped in range(offset):
        if frame is None or frame.f_back is None:
            break
        frame = frame.f_back

    return frame


def _build_processors(options: LoggerOptions) -> list[Any]:
    processors: list[Any] = []

    # Call-site keys are resolved before the record's own fields are merged in
    if options.include_location:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[CallsiteParameter.PATHNAME, CallsiteParameter.LINENO],
                additional_ignores=["pluginlog"],
            )
        )
        processors.append(CallerLocationAdder(options.additional_location_offset))

    processors.append(_expand_record)

    if options.include_time:
        processors.append(
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="@timestamp")
        )

    if options.json_format:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(ConsoleRenderer())

    return processors


class Logger:
    """A named, leveled logger with persistent implied fields."""

    def __init__(
        self, options: LoggerOptions | None = None, implied_args: list[Any] | None = None
    ) -> None:
        options = options or LoggerOptions()
        if options.level == Level.NO_LEVEL:
            options = replace(options, level=Level.INFO)

        self._options = options
        self._level = options.level
        self._implied: list[Any] = list(implied_args or [])

        output = options.output or sys.stderr
        if options.json_format:
            sink: Any = structlog.WriteLogger(output)
        else:
            sink = RichConsoleLogger(output)

        self._bound = structlog.wrap_logger(
            sink,
            processors=_build_processors(options),
            wrapper_class=structlog.BoundLogger,
            context_class=dict,
        ).bind()

    @property
    def name(self) -> str:
        return self._options.name

    @property
    def level(self) -> Level:
        return self._level

    @property
    def options(self) -> LoggerOptions:
        """Options that reproduce this logger, including its current level."""
        return replace(self._options, level=self._level)

    def set_level(self, level: Level) -> None:
        """Change the minimum level of this logger only."""
        self._level = level

    def implied_args(self) -> list[Any]:
        """Return a copy of the persistent flat field list."""
        return list(self._implied)

    def named(self, name: str) -> "Logger":
        """Derive a child logger named ``<parent>.<name>``."""
        full_name = f"{self._options.name}.{name}" if self._options.name else name
        return Logger(replace(self.options, name=full_name), self._implied)

    def with_(self, *args: Any) -> "Logger":
        """Derive a logger that includes ``args`` in every record.

        Later values replace earlier ones for the same key.
        """
        fields = dict(args_to_fields(self._implied + list(args), MISSING_VALUE))
        return Logger(self.options, maps_to_args(fields))

    def is_enabled(self, level: Level) -> bool:
        return self._level != Level.OFF and level >= self._level

    def log(self, level: Level, message: str, *args: Any) -> None:
        """Write a record at ``level`` if the logger accepts it."""
        if level in (Level.NO_LEVEL, Level.OFF) or not self.is_enabled(level):
            return

        record: dict[str, Any] = {}
        for key, value in args_to_fields(self._implied + list(args), MISSING_VALUE):
            record[key] = value

        record["@level"] = level.label
        record["@message"] = message
        if self._options.name:
            record["@module"] = self._options.name

        self._bound.msg(record)

    def trace(self, message: str, *args: Any) -> None:
        self.log(Level.TRACE, message, *args)

    def debug(self, message: str, *args: Any) -> None:
        self.log(Level.DEBUG, message, *args)

    def info(self, message: str, *args: Any) -> None:
        self.log(Level.INFO, message, *args)

    def warn(self, message: str, *args: Any) -> None:
        self.log(Level.WARN, message, *args)

    def error(self, message: str, *args: Any) -> None:
        self.log(Level.ERROR, message, *args)
