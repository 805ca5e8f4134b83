"""Length-prefixed message framing.

A frame is a block of ``Name: value`` header lines, a blank line, then
exactly ``Content-Length`` bytes of body. The body is read by byte count,
so it may contain newlines.
"""

from __future__ import annotations

import json
from typing import Any, BinaryIO

from unrealls.core.errors import ProtocolError

CONTENT_LENGTH = "content-length"


def read_frame(stream: BinaryIO) -> bytes | None:
    """Read the next frame body from *stream*.

    Returns None at end of input, including input that ends mid-frame.
    Lines seen before a Content-Length header are skipped.

    Raises:
        ProtocolError: If the Content-Length value is not a non-negative integer.
    """
    length: int | None = None
    while True:
        raw = stream.readline()
        if not raw:
            return None
        line = raw.decode("ascii", errors="replace").strip()
        if not line:
            if length is not None:
                break
            continue
        name, sep, value = line.partition(":")
        if sep and name.strip().lower() == CONTENT_LENGTH:
            try:
                length = int(value.strip())
            except ValueError:
                raise ProtocolError.bad_header(line) from None
            if length < 0:
                raise ProtocolError.bad_header(line)

    body = stream.read(length)
    if body is None or len(body) < length:
        return None
    return body


def encode_frame(payload: dict[str, Any]) -> bytes:
    body = json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    header = f"Content-Length: {len(body)}\r\n\r\n".encode("ascii")
    return header + body


def write_frame(stream: BinaryIO, payload: dict[str, Any]) -> None:
    stream.write(encode_frame(payload))
    stream.flush()
