"""Protocol session: read, decode, dispatch and answer messages one at a time.

The loop is fully synchronous. A message is handled to completion, including
any completion computation, before the next frame is read.
"""

from __future__ import annotations

from collections.abc import Callable
from importlib.metadata import PackageNotFoundError, version
from typing import Any, BinaryIO

import structlog

from unrealls.actions.provider import ActionProvider
from unrealls.completion.resolver import CompletionResolver
from unrealls.config.models import ServerConfig
from unrealls.core.errors import InternalError, ProtocolError
from unrealls.core.logging import bind_engine_version, clear_message_id, set_message_id
from unrealls.server.documents import DocumentStore, completion_context, current_word
from unrealls.server.framing import read_frame, write_frame
from unrealls.server.messages import (
    JsonRpcErrorCode,
    Message,
    RequestError,
    decode_message,
    make_error,
    make_response,
)

logger = structlog.get_logger()

SERVER_NAME = "unrealls"

# Executable command → action name forwarded to the action provider
COMMANDS: dict[str, str] = {
    "unreal.generateUClass": "generateUClass",
    "unreal.generateBlueprintFunction": "generateBlueprintFunction",
    "unreal.syncHeaderSource": "syncHeaderSource",
    "unreal.analyzeLogs": "analyzeLogs",
    "unreal.interpretErrors": "interpretErrors",
}

TEXT_DOCUMENT_SYNC_FULL = 1

Handler = Callable[[Message], Any]


def _server_version() -> str:
    try:
        return version(SERVER_NAME)
    except PackageNotFoundError:
        return "0.0.0"


def _text_document_uri(params: dict[str, Any]) -> str:
    document = params.get("textDocument")
    uri = document.get("uri") if isinstance(document, dict) else None
    if not isinstance(uri, str):
        raise RequestError(JsonRpcErrorCode.INVALID_PARAMS, "textDocument.uri is required")
    return uri


class Session:
    """One editor session over a pair of byte streams."""

    def __init__(
        self,
        resolver: CompletionResolver,
        actions: ActionProvider,
        config: ServerConfig | None = None,
    ) -> None:
        self._resolver = resolver
        self._actions = actions
        self._config = config or ServerConfig()
        self._documents = DocumentStore()
        self._shutdown_requested = False
        self._exited = False
        self._handlers: dict[str, Handler] = {
            "initialize": self._initialize,
            "shutdown": self._shutdown,
            "exit": self._exit,
            "textDocument/didOpen": self._did_open,
            "textDocument/didChange": self._did_change,
            "textDocument/completion": self._completion,
            "workspace/executeCommand": self._execute_command,
        }

    @property
    def resolver(self) -> CompletionResolver:
        return self._resolver

    @property
    def documents(self) -> DocumentStore:
        return self._documents

    @property
    def exited(self) -> bool:
        return self._exited

    def serve(self, reader: BinaryIO, writer: BinaryIO) -> None:
        """Run until end of input or an ``exit`` notification."""
        bind_engine_version(str(self._resolver.version))
        logger.info("session_started", install_path=self._resolver.version.install_path)
        try:
            while not self._exited:
                try:
                    body = read_frame(reader)
                except ProtocolError as e:
                    logger.warning("frame_rejected", **e.to_dict())
                    continue
                if body is None:
                    break
                response = self.handle_body(body)
                if response is not None:
                    write_frame(writer, response)
            logger.info("session_ended", shutdown_requested=self._shutdown_requested)
        finally:
            bind_engine_version(None)

    def handle_body(self, body: bytes) -> dict[str, Any] | None:
        """Decode and handle one frame body. Undecodable bodies get no response."""
        try:
            message = decode_message(body)
        except ProtocolError as e:
            logger.warning("message_parse_failed", error=e.message, code=e.error_name)
            return None
        return self.handle(message)

    def handle(self, message: Message) -> dict[str, Any] | None:
        """Dispatch *message* and build its response envelope, if any."""
        set_message_id(message.id)
        try:
            return self._dispatch(message)
        finally:
            clear_message_id()

    def _dispatch(self, message: Message) -> dict[str, Any] | None:
        logger.debug("message_received", method=message.method)
        handler = self._handlers.get(message.method)
        try:
            if handler is None:
                raise RequestError(
                    JsonRpcErrorCode.METHOD_NOT_FOUND, f"Unknown method: {message.method}"
                )
            result = handler(message)
        except RequestError as e:
            if message.id is None or not self._config.strict_errors:
                return None
            return make_error(message.id, e.code, e.message)
        except Exception as e:
            err = InternalError.unexpected(str(e), method=message.method)
            logger.error("handler_failed", method=message.method, error=str(e), exc_info=True)
            if message.id is None or not self._config.strict_errors:
                return None
            return make_error(message.id, JsonRpcErrorCode.INTERNAL_ERROR, err.message)

        if message.id is None:
            return None
        return make_response(message.id, result)

    # Handlers

    def _initialize(self, _message: Message) -> dict[str, Any]:
        return {
            "capabilities": {
                "textDocumentSync": TEXT_DOCUMENT_SYNC_FULL,
                "completionProvider": {
                    "triggerCharacters": list(self._config.trigger_characters),
                },
                "executeCommandProvider": {"commands": list(COMMANDS)},
            },
            "serverInfo": {"name": SERVER_NAME, "version": _server_version()},
        }

    def _shutdown(self, _message: Message) -> None:
        self._shutdown_requested = True
        return None

    def _exit(self, _message: Message) -> None:
        self._exited = True

    def _did_open(self, message: Message) -> None:
        document = message.params.get("textDocument")
        uri = _text_document_uri(message.params)
        text = document.get("text", "") if isinstance(document, dict) else ""
        self._documents.open(uri, text if isinstance(text, str) else "")
        logger.debug("document_opened", uri=uri)

    def _did_change(self, message: Message) -> None:
        uri = _text_document_uri(message.params)
        changes = message.params.get("contentChanges")
        self._documents.change(uri, changes if isinstance(changes, list) else [])

    def _completion(self, message: Message) -> list[dict[str, Any]]:
        uri = _text_document_uri(message.params)
        text = self._documents.get(uri)
        if text is None:
            return []

        position = message.params.get("position")
        position = position if isinstance(position, dict) else {}
        line = int(position.get("line", 0))
        character = int(position.get("character", 0))

        prefix = current_word(text, line, character)
        context = completion_context(text, line, character)
        candidates = self._resolver.get_completions(prefix, context)
        logger.debug("completion_served", uri=uri, prefix=prefix, count=len(candidates))
        return [candidate.to_item() for candidate in candidates]

    def _execute_command(self, message: Message) -> str:
        command = message.params.get("command")
        action = COMMANDS.get(command) if isinstance(command, str) else None
        if action is None:
            raise RequestError(JsonRpcErrorCode.INVALID_PARAMS, f"Unknown command: {command}")

        arguments = message.params.get("arguments")
        first = arguments[0] if isinstance(arguments, list) and arguments else None
        params = first if isinstance(first, dict) else {}

        logger.info("command_executed", command=command, action=action)
        return self._actions.run_action(action, params)
