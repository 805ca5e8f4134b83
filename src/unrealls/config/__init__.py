"""Config module exports."""

from unrealls.config.loader import UnrealLSSettings, load_config
from unrealls.config.models import (
    EngineConfig,
    IndexConfig,
    LoggingConfig,
    LogOutputConfig,
    ServerConfig,
    UnrealLSConfig,
)

__all__ = [
    "load_config",
    "UnrealLSConfig",
    "UnrealLSSettings",
    "EngineConfig",
    "IndexConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ServerConfig",
]
