"""Protocol session over framed JSON-RPC."""

from unrealls.server.app import create_session
from unrealls.server.documents import DocumentStore, completion_context, current_word
from unrealls.server.framing import encode_frame, read_frame, write_frame
from unrealls.server.messages import JsonRpcErrorCode, Message, RequestError, decode_message
from unrealls.server.session import COMMANDS, Session

__all__ = [
    "COMMANDS",
    "DocumentStore",
    "JsonRpcErrorCode",
    "Message",
    "RequestError",
    "Session",
    "completion_context",
    "create_session",
    "current_word",
    "decode_message",
    "encode_frame",
    "read_frame",
    "write_frame",
]
