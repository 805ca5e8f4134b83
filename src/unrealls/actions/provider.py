"""Code actions behind ``workspace/executeCommand``.

The session only knows the :class:`ActionProvider` contract: an action name
and a parameter object in, text out.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol
from urllib.parse import unquote, urlparse

import structlog

from unrealls.actions import compile_errors, logs
from unrealls.actions.codegen import ClassTemplate, generate_uclass, wrap_function_at
from unrealls.actions.pairing import NOT_PAIRABLE, sync_header_source
from unrealls.engine.models import EngineVersion

logger = structlog.get_logger()

NO_FUNCTION_FOUND = "// No function found at current position"

_WINDOWS_DRIVE_RE = re.compile(r"^/[A-Za-z]:")


class ActionProvider(Protocol):
    def run_action(self, action: str, params: dict[str, Any]) -> str: ...


def uri_to_path(uri: str) -> Path:
    """Filesystem path for a ``file://`` uri. Other strings are taken as paths."""
    parsed = urlparse(uri)
    if parsed.scheme != "file":
        return Path(uri)
    path = unquote(parsed.path)
    if _WINDOWS_DRIVE_RE.match(path):
        path = path[1:]
    return Path(path)


def _document_path(params: dict[str, Any]) -> Path | None:
    document = params.get("textDocument")
    uri = document.get("uri") if isinstance(document, dict) else None
    return uri_to_path(uri) if isinstance(uri, str) and uri else None


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item]


class EngineActions:
    """Actions for one project and its resolved engine version."""

    def __init__(self, project_path: Path, version: EngineVersion) -> None:
        self._project_path = project_path
        self._version = version
        self._actions: dict[str, Callable[[dict[str, Any]], str]] = {
            "generateUClass": self.generate_uclass,
            "generateBlueprintFunction": self.generate_blueprint_function,
            "syncHeaderSource": self.sync_header_source,
            "analyzeLogs": self.analyze_logs,
            "interpretErrors": self.interpret_errors,
        }

    @property
    def action_names(self) -> list[str]:
        return list(self._actions)

    def run_action(self, action: str, params: dict[str, Any]) -> str:
        handler = self._actions.get(action)
        if handler is None:
            logger.warning("unknown_action", action=action)
            return f"// Unknown action: {action}"
        return handler(params)

    def generate_uclass(self, params: dict[str, Any]) -> str:
        template = ClassTemplate(
            class_name=str(params.get("className") or "MyActor"),
            base_class=str(params.get("baseClass") or "AActor"),
            module_name=str(params.get("moduleName") or "GAME"),
            components=_string_list(params.get("components")),
            functions=_string_list(params.get("functions")),
        )
        return generate_uclass(template, self._version)

    def generate_blueprint_function(self, params: dict[str, Any]) -> str:
        path = _document_path(params)
        position = params.get("position")
        line = position.get("line") if isinstance(position, dict) else None
        if path is None or not isinstance(line, int):
            return NO_FUNCTION_FOUND
        try:
            lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
        except OSError as e:
            logger.debug("document_read_failed", path=str(path), error=str(e))
            return NO_FUNCTION_FOUND
        return wrap_function_at(lines, line) or NO_FUNCTION_FOUND

    def sync_header_source(self, params: dict[str, Any]) -> str:
        path = _document_path(params)
        if path is None:
            return NOT_PAIRABLE
        return sync_header_source(path)

    def analyze_logs(self, _params: dict[str, Any]) -> str:
        return logs.render_report(logs.analyze_project(self._project_path))

    def interpret_errors(self, _params: dict[str, Any]) -> str:
        return compile_errors.render_report(compile_errors.analyze_errors(self._project_path))
