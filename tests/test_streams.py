import io
import struct

import pytest

from dockapi.streams import (
    StreamKind,
    StreamLine,
    StreamLineReadError,
    iter_stream_lines,
)

HELLO_WORLD = b"\x01\x00\x00\x00\x00\x00\x00\x0eHello, world.\n"


def _frame(kind: int, payload: bytes) -> bytes:
    return struct.pack(">B3xI", kind, len(payload)) + payload


class _FailingReader:
    def read(self, size):
        raise OSError("boom")


def test_hello_world_line():
    cursor = io.BytesIO(HELLO_WORLD)
    line = StreamLine.read(cursor)
    assert line.kind == StreamKind.STDOUT
    assert line.text == "Hello, world.\n"
    assert StreamLine.read(cursor) is None


def test_hello_world_lines():
    lines = StreamLine.read_all(io.BytesIO(HELLO_WORLD))
    assert len(lines) == 1
    assert lines[0] == StreamLine(kind=StreamKind.STDOUT, text="Hello, world.\n")


def test_empty_stream_has_no_lines():
    assert StreamLine.read_all(io.BytesIO(b"")) == []


def test_iter_stream_lines_multiple_frames():
    data = _frame(1, b"out\n") + _frame(2, b"err\n") + _frame(0, b"in")
    lines = list(iter_stream_lines(io.BytesIO(data)))
    assert [line.kind for line in lines] == [
        StreamKind.STDOUT,
        StreamKind.STDERR,
        StreamKind.STDIN,
    ]
    assert [line.text for line in lines] == ["out\n", "err\n", "in"]


def test_empty_payload_frame():
    lines = StreamLine.read_all(io.BytesIO(_frame(1, b"")))
    assert lines == [StreamLine(StreamKind.STDOUT, "")]


def test_truncated_header_raises():
    with pytest.raises(StreamLineReadError, match="IO error"):
        StreamLine.read(io.BytesIO(HELLO_WORLD[:5]))


def test_truncated_payload_raises():
    with pytest.raises(StreamLineReadError, match="IO error"):
        StreamLine.read_all(io.BytesIO(HELLO_WORLD[:-1]))


def test_invalid_utf8_raises():
    with pytest.raises(StreamLineReadError, match="UTF-8"):
        StreamLine.read(io.BytesIO(_frame(1, b"\xff\xfe")))


def test_reader_os_error_raises():
    with pytest.raises(StreamLineReadError):
        StreamLine.read(_FailingReader())


def test_stream_kind_from_byte_known():
    assert StreamKind.from_byte(2) == StreamKind.STDERR


def test_stream_kind_other_kept():
    line = StreamLine.read(io.BytesIO(_frame(7, b"x")))
    assert line.kind == StreamKind.from_byte(7)
    assert str(line.kind) == "stream 7"


def test_stream_kind_display():
    assert [str(StreamKind.from_byte(value)) for value in (0, 1, 2)] == [
        "stdin",
        "stdout",
        "stderr",
    ]


def test_stream_kind_rejects_non_byte():
    with pytest.raises(ValueError):
        StreamKind.from_byte(256)


def test_stream_line_display_is_text():
    line = StreamLine.read(io.BytesIO(HELLO_WORLD))
    assert str(line) == "Hello, world.\n"