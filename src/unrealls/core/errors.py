"""unrealls error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Protocol
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Stable numeric codes carried in log events and CLI errors."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_UNREADABLE = 2003

    # Protocol (3xxx)
    PROTOCOL_PARSE_ERROR = 3001
    PROTOCOL_BAD_HEADER = 3002
    PROTOCOL_INVALID_MESSAGE = 3003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class UnrealLSError(Exception):
    """Base error with structured context for log events."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """Code name used as the ``error`` field of log events."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(UnrealLSError):
    """A YAML layer or a merged setting that cannot be used."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Config file {path} is not valid: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Setting '{field}' rejected: {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_UNREADABLE,
            message=f"Cannot read config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class ProtocolError(UnrealLSError):
    """Wire-level errors: bad frames and undecodable message bodies."""

    @classmethod
    def parse_error(cls, reason: str) -> "ProtocolError":
        return cls(
            code=ErrorCode.PROTOCOL_PARSE_ERROR,
            message=f"Malformed message body: {reason}",
            details={"reason": reason},
        )

    @classmethod
    def bad_header(cls, line: str) -> "ProtocolError":
        return cls(
            code=ErrorCode.PROTOCOL_BAD_HEADER,
            message=f"Invalid frame header: {line!r}",
            details={"line": line},
        )

    @classmethod
    def invalid_message(cls, reason: str) -> "ProtocolError":
        return cls(
            code=ErrorCode.PROTOCOL_INVALID_MESSAGE,
            message=f"Invalid message: {reason}",
            details={"reason": reason},
        )


class InternalError(UnrealLSError):
    """A handler failed in a way no other error type describes."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Unexpected failure: {reason}",
            details=details,
        )
