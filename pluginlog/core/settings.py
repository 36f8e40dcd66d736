"""Environment settings for the process-wide log sink.

Reads the ``TF_`` prefixed variables, for example:
- TF_LOG=DEBUG
- TF_LOG_PATH=/tmp/plugin.log
- TF_LOG_CLI=INFO
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SinkSettings(BaseSettings):
    """Configuration of the sink every root logger can be derived from.

    Attributes
    ----------
        log: Sink level (TRACE, DEBUG, INFO, WARN, ERROR, OFF) or JSON
        log_path: File to append logs to instead of stderr
        log_cli: Level of the CLI logger used when piping plugin logs

    """

    model_config = SettingsConfigDict(
        env_prefix="TF_",
        case_sensitive=False,
        extra="ignore",
    )

    log: str = Field(default="", description="Sink level, or JSON")
    log_path: str = Field(default="", description="Path of the log file")
    log_cli: str = Field(default="", description="Level of the CLI logger")

    @field_validator("log", "log_cli", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> str:
        """Strip and uppercase level names."""
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip().upper()
        return v
