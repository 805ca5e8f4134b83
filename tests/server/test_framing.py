"""Tests for length-prefixed framing."""

import io
import json

import pytest

from unrealls.core.errors import ErrorCode, ProtocolError
from unrealls.server.framing import encode_frame, read_frame, write_frame


def frame(body: bytes, extra_headers: bytes = b"") -> bytes:
    return b"Content-Length: " + str(len(body)).encode() + b"\r\n" + extra_headers + b"\r\n" + body


class TestReadFrame:
    def test_given_frame_when_read_then_exact_body(self) -> None:
        stream = io.BytesIO(frame(b'{"method":"initialize"}'))

        assert read_frame(stream) == b'{"method":"initialize"}'

    def test_given_body_with_newlines_when_read_then_read_by_byte_count(self) -> None:
        # Given
        body = json.dumps({"method": "x", "params": {"text": "line1\nline2\n"}}, indent=2).encode()
        stream = io.BytesIO(frame(body) + frame(b"{}"))

        # When / Then
        assert read_frame(stream) == body
        assert read_frame(stream) == b"{}"

    def test_given_extra_headers_when_read_then_ignored(self) -> None:
        stream = io.BytesIO(
            frame(b"{}", b"Content-Type: application/vscode-jsonrpc; charset=utf-8\r\n")
        )

        assert read_frame(stream) == b"{}"

    def test_given_lowercase_header_when_read_then_accepted(self) -> None:
        stream = io.BytesIO(b"content-length: 2\r\n\r\n{}")

        assert read_frame(stream) == b"{}"

    def test_given_noise_before_header_when_read_then_skipped(self) -> None:
        stream = io.BytesIO(b"garbage line\r\n\r\n" + frame(b"{}"))

        assert read_frame(stream) == b"{}"

    def test_given_bare_newlines_when_read_then_accepted(self) -> None:
        stream = io.BytesIO(b"Content-Length: 2\n\n{}")

        assert read_frame(stream) == b"{}"

    def test_given_utf8_body_when_read_then_length_is_bytes(self) -> None:
        body = '{"text":"héllo"}'.encode()
        stream = io.BytesIO(frame(body))

        assert read_frame(stream) == body

    @pytest.mark.parametrize("data", [b"", b"Content-Length: 10\r\n", b"Content-Length: 10\r\n\r\n{}"])
    def test_given_end_of_input_when_read_then_none(self, data: bytes) -> None:
        assert read_frame(io.BytesIO(data)) is None

    @pytest.mark.parametrize("value", [b"abc", b"-1"])
    def test_given_bad_length_when_read_then_protocol_error(self, value: bytes) -> None:
        stream = io.BytesIO(b"Content-Length: " + value + b"\r\n\r\n{}")

        with pytest.raises(ProtocolError) as exc_info:
            read_frame(stream)

        assert exc_info.value.code is ErrorCode.PROTOCOL_BAD_HEADER


class TestWriteFrame:
    def test_given_payload_when_encoded_then_header_counts_utf8_bytes(self) -> None:
        # When
        data = encode_frame({"text": "é"})

        # Then
        header, _, body = data.partition(b"\r\n\r\n")
        assert header == b"Content-Length: " + str(len(body)).encode()
        assert json.loads(body) == {"text": "é"}
        assert len(body) != len(body.decode())

    def test_given_payload_when_written_then_readable_back(self) -> None:
        stream = io.BytesIO()

        write_frame(stream, {"jsonrpc": "2.0", "id": 1, "result": None})
        stream.seek(0)

        assert json.loads(read_frame(stream) or b"") == {"jsonrpc": "2.0", "id": 1, "result": None}
