"""Reading the multiplexed stdin/stdout/stderr stream of attached containers."""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass
from typing import BinaryIO, ClassVar

_SIZE = struct.Struct(">3xI")


class StreamLineReadError(Exception):
    """Reading or decoding the stream failed; never raised for a clean end of stream."""


@dataclass(frozen=True)
class StreamKind:
    """Which stream a frame belongs to; unknown codes are kept as they are."""

    code: int

    STDIN: ClassVar[StreamKind]
    STDOUT: ClassVar[StreamKind]
    STDERR: ClassVar[StreamKind]

    _NAMES: ClassVar[dict[int, str]] = {0: "stdin", 1: "stdout", 2: "stderr"}

    @classmethod
    def from_byte(cls, value: int) -> StreamKind:
        if not 0 <= value <= 255:
            raise ValueError(f"stream type must be a byte, got {value}")
        return cls(value)

    def __str__(self) -> str:
        return self._NAMES.get(self.code, f"stream {self.code}")


StreamKind.STDIN = StreamKind(0)
StreamKind.STDOUT = StreamKind(1)
StreamKind.STDERR = StreamKind(2)


def _read(reader: BinaryIO, size: int) -> bytes:
    try:
        return reader.read(size)
    except OSError as exc:
        raise StreamLineReadError(f"Stream read IO error: {exc!r}") from exc


def _read_exact(reader: BinaryIO, size: int) -> bytes:
    chunks = []
    remaining = size
    while remaining:
        chunk = _read(reader, remaining)
        if not chunk:
            raise StreamLineReadError(
                "Stream read IO error: unexpected end of stream"
            )
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


@dataclass(frozen=True)
class StreamLine:
    """One frame of text from stdin, stdout or stderr."""

    kind: StreamKind
    text: str

    @classmethod
    def read(cls, reader: BinaryIO) -> StreamLine | None:
        """Read the next frame, or return None at the end of the stream.

        Each frame is an 8 byte header, the stream type followed by three
        ignored bytes and a big-endian 32 bit length, and then the payload.
        """
        first = _read(reader, 1)
        if not first:
            return None
        (length,) = _SIZE.unpack(_read_exact(reader, _SIZE.size))
        payload = _read_exact(reader, length)
        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StreamLineReadError(
                f"Stream read UTF-8 conversion error: {exc!r}"
            ) from exc
        return cls(kind=StreamKind.from_byte(first[0]), text=text)

    @classmethod
    def read_all(cls, reader: BinaryIO) -> list[StreamLine]:
        """Read every remaining frame."""
        return list(iter_stream_lines(reader))

    def __str__(self) -> str:
        return self.text


def iter_stream_lines(reader: BinaryIO) -> Iterator[StreamLine]:
    """Yield frames from the reader until the end of the stream."""
    while (line := StreamLine.read(reader)) is not None:
        yield line