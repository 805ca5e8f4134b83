"""Core module exports."""

from unrealls.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    ProtocolError,
    UnrealLSError,
)
from unrealls.core.logging import (
    bind_engine_version,
    clear_message_id,
    configure_logging,
    get_logger,
    get_message_id,
    set_message_id,
)
from unrealls.core.walk import WalkOutcome, WalkStatus, walk_files, walk_subdirectories

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "ProtocolError",
    "UnrealLSError",
    # Logging
    "bind_engine_version",
    "clear_message_id",
    "configure_logging",
    "get_logger",
    "get_message_id",
    "set_message_id",
    # Walking
    "WalkOutcome",
    "WalkStatus",
    "walk_files",
    "walk_subdirectories",
]
