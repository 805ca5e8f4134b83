"""JSON-RPC message decoding and response envelopes."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from unrealls.core.errors import ProtocolError

JSONRPC_VERSION = "2.0"


class JsonRpcErrorCode(IntEnum):
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class RequestError(Exception):
    """Raised by a handler when a request cannot be answered normally."""

    def __init__(self, code: JsonRpcErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


@dataclass(frozen=True, slots=True)
class Message:
    """A decoded inbound message. No id means a notification."""

    method: str
    params: dict[str, Any] = field(default_factory=dict)
    id: int | str | None = None

    @property
    def is_notification(self) -> bool:
        return self.id is None


def decode_message(body: bytes) -> Message:
    """Decode one frame body.

    Raises:
        ProtocolError: If the body is not a JSON object with a string method.
    """
    try:
        data = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ProtocolError.parse_error(str(e)) from e

    if not isinstance(data, dict):
        raise ProtocolError.invalid_message("body is not an object")
    method = data.get("method")
    if not isinstance(method, str):
        raise ProtocolError.invalid_message("missing method")

    params = data.get("params")
    if not isinstance(params, dict):
        params = {}

    msg_id = data.get("id")
    if isinstance(msg_id, bool) or not isinstance(msg_id, (int, str)):
        msg_id = None
    return Message(method=method, params=params, id=msg_id)


def make_response(msg_id: int | str, result: Any) -> dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": msg_id, "result": result}


def make_error(msg_id: int | str, code: JsonRpcErrorCode, message: str) -> dict[str, Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": msg_id,
        "error": {"code": int(code), "message": message},
    }
