"""Pydantic models for cmd-box configuration."""

from pathlib import Path

from pydantic import BaseModel, Field

from cmd_box.output.base import OutputFormat


class EngineConfig(BaseModel):
    """Interpreter behaviour."""

    default_undoable: bool = True
    strict_groups: bool = False  # raise instead of building an empty group
    builtins: list[str] = Field(default_factory=lambda: ["context"])


class OutputConfig(BaseModel):
    """Output configuration."""

    default_format: OutputFormat = OutputFormat.RICH
    color: bool = True
    show_context: bool = True


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    file: Path | None = None  # Default: no file logging
    json_format: bool = False


class CmdBoxConfig(BaseModel):
    """Root configuration for cmd-box."""

    engine: EngineConfig = Field(default_factory=EngineConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        """Pydantic config."""

        use_enum_values = True
