"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (UNREALLS__SECTION__KEY)
3. Project YAML (<project>/.unrealls/config.yaml)
4. Global YAML (~/.config/unrealls/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    UNREALLS__<SECTION>__<KEY>=<VALUE>

Examples:
    UNREALLS__LOGGING__LEVEL=DEBUG
    UNREALLS__ENGINE__DEFAULT_VERSION=5.4.0
    UNREALLS__INDEX__ENABLED=false
    UNREALLS__SERVER__STRICT_ERRORS=true
"""

import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_VERSION_RE = re.compile(r"^\d+\.\d+(?:\.\d+)?$")


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v == "stderr":
            return v
        if v == "stdout":
            raise ValueError("stdout carries the protocol stream; log to stderr or a file")
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        UNREALLS__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every protocol message.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class EngineConfig(BaseModel):
    """Engine discovery configuration.

    Env vars:
        UNREALLS__ENGINE__DEFAULT_VERSION: Version used when nothing is discovered
    """

    search_roots: list[str] = Field(
        default_factory=list,
        description="Extra install roots probed after the platform locations.",
    )
    env_vars: list[str] = Field(
        default_factory=lambda: ["UE_ROOT", "UE4_ROOT", "UE5_ROOT", "UNREAL_ENGINE_ROOT"],
        description="Environment variables naming an engine install root.",
    )
    default_version: str = Field(
        default="5.3.0",
        description="Fallback engine version when a project cannot be resolved.",
    )

    @field_validator("default_version")
    @classmethod
    def validate_default_version(cls, v: str) -> str:
        if not _VERSION_RE.match(v):
            raise ValueError(f"Version must look like 5.3 or 5.3.0, got {v!r}")
        return v


class IndexConfig(BaseModel):
    """Header index configuration.

    Env vars:
        UNREALLS__INDEX__ENABLED: Scan engine headers in the background
    """

    enabled: bool = Field(
        default=True,
        description="Scan installed engine headers to supplement completions. "
        "A full engine tree takes a while to scan; completions work without it.",
    )
    header_suffixes: list[str] = Field(
        default_factory=lambda: [".h"],
        description="File suffixes treated as headers.",
    )


class ServerConfig(BaseModel):
    """Protocol session configuration.

    Env vars:
        UNREALLS__SERVER__STRICT_ERRORS: Answer unknown methods/commands with errors
    """

    strict_errors: bool = Field(
        default=False,
        description="Reply to unknown methods and commands with JSON-RPC errors "
        "instead of dropping them.",
    )
    trigger_characters: list[str] = Field(
        default_factory=lambda: [".", "::", "U", "A", "F"],
        description="Completion trigger characters advertised on initialize.",
    )


class UnrealLSConfig(BaseModel):
    """Root configuration for unrealls.

    All settings can be configured via:
    1. Environment variables: UNREALLS__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
