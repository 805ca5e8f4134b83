"""structlog setup for the server process.

Every event is rendered through stdlib handlers so several outputs can run at
different levels. Two context values are stamped onto events while a session
runs: the id of the protocol message being handled and the engine version the
session resolved.

stdout carries the protocol stream, so nothing here ever writes to it.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from unrealls.config.models import LoggingConfig, LogOutputConfig

_message_id: ContextVar[str | None] = ContextVar("message_id", default=None)
_engine_version: ContextVar[str | None] = ContextVar("engine_version", default=None)

_log_file_path: Path | None = None

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_message_id() -> str | None:
    return _message_id.get()


def set_message_id(message_id: int | str | None) -> str | None:
    """Correlate following events with a protocol message.

    Notifications carry no id, which clears the current one.
    """
    mid = None if message_id is None else str(message_id)
    _message_id.set(mid)
    return mid


def clear_message_id() -> None:
    _message_id.set(None)


def bind_engine_version(version: str | None) -> None:
    """Tag following events with the engine version being served."""
    _engine_version.set(version)


def get_log_file_path() -> Path | None:
    """First file destination of the current configuration."""
    return _log_file_path


def _stamp_context(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if mid := _message_id.get():
        event_dict["message_id"] = mid
    if engine := _engine_version.get():
        event_dict.setdefault("engine", engine)
    return event_dict


def _level(name: str | None, default: int = logging.INFO) -> int:
    return _LEVELS.get((name or "").upper(), default)


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Route structlog through the stdlib root logger.

    Args:
        config: Full logging configuration. When given, *json_format* and
            *level* are ignored.
        json_format: Single stderr output rendered as JSON lines.
        level: Level of the single stderr output.
    """
    from unrealls.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )
    root_level = _level(config.level)

    shared: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
        _stamp_context,  # type: ignore[list-item]
    ]

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration (e.g. --verbose after config load) must take effect
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)

    global _log_file_path
    _log_file_path = None

    for output in config.outputs:
        handler = _handler_for(output)
        handler.setLevel(_level(output.level, root_level))
        handler.setFormatter(_formatter_for(output, shared))
        root.addHandler(handler)
        if output.destination != "stderr" and _log_file_path is None:
            _log_file_path = Path(output.destination)


def _handler_for(output: LogOutputConfig) -> logging.Handler:
    if output.destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    path = Path(output.destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a")


def _formatter_for(
    output: LogOutputConfig,
    shared: list[structlog.types.Processor],
) -> logging.Formatter:
    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        colors = output.destination == "stderr" and sys.stderr.isatty()
        renderer = structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0, pad_level=False)
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]
