"""Rich console rendering for human-readable log output.

Used when a logger is configured without JSON output, for example by a
``TF_LOG`` sink set to a plain level. Lines follow the familiar
``<timestamp> [LEVEL] <module>: <message>: key=value ...`` layout, colored
per level.
"""

from typing import Any, TextIO

from rich.console import Console
from rich.markup import escape

_RESERVED_KEYS = ("@timestamp", "@level", "@module", "@message", "@caller")


class ConsoleRenderer:
    """Render an event dict to a rich markup string."""

    def __init__(self) -> None:
        self.level_styles = {
            "trace": "dim",
            "debug": "cyan",
            "info": "green",
            "warn": "yellow",
            "error": "red bold",
        }

    def __call__(self, _: Any, __: str, event_dict: dict[str, Any]) -> str:
        """Render the record; the markup is printed by :class:`RichConsoleLogger`."""
        level = event_dict.get("@level", "info")
        style = self.level_styles.get(level, "white")

        output_parts = []

        timestamp = event_dict.get("@timestamp")
        if timestamp:
            output_parts.append(f"[dim]{escape(str(timestamp))}[/dim]")

        output_parts.append(f"[{style}]{escape(f'[{level.upper()}]')}[/{style}]")

        header = ""
        module = event_dict.get("@module")
        if module:
            header = f"[blue]{escape(str(module))}[/blue]: "

        caller = event_dict.get("@caller")
        if caller:
            header += f"[dim blue]{escape(str(caller))}[/dim blue]: "

        output_parts.append(f"{header}{escape(str(event_dict.get('@message', '')))}")

        fields = [
            f"{escape(str(key))}={escape(_format_value(value))}"
            for key, value in sorted(event_dict.items())
            if key not in _RESERVED_KEYS
        ]
        if fields:
            output_parts[-1] += ": " + " ".join(fields)

        return " ".join(output_parts)


def _format_value(value: Any) -> str:
    text = str(value)
    if " " in text or not text:
        return f'"{text}"'
    return text


class RichConsoleLogger:
    """structlog-compatible logger printing rendered markup through rich."""

    def __init__(self, output: TextIO) -> None:
        self.console = Console(file=output, highlight=False, emoji=False, soft_wrap=True)

    def msg(self, message: str) -> None:
        self.console.print(message)

