"""Tests for StreamSource base class."""

from collections.abc import Iterator
from typing import Any

import pytest
from typing_extensions import override

from stream_readers.sources.base import Readable, StreamSource


class ChunkSource(StreamSource):
    """Serve fixed chunks; optionally fail once after ``fail_after`` chunks."""

    def __init__(self, chunks: list[bytes], fail_after: int | None = None) -> None:
        super().__init__()
        self.data = b"".join(chunks)
        self.chunks = chunks
        self.fail_after = fail_after
        self.starts: list[int] = []

    @override
    def get_stream(self, start: int = 0) -> Iterator[bytes]:
        self.starts.append(start)
        if start:
            # Resumed stream: serve the rest in one piece
            yield self.data[start:]
            return
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i == self.fail_after:
                self.fail_after = None
                raise OSError("connection reset")
            yield chunk

    @override
    def get_metadata(self) -> dict[str, Any]:
        return {"size": len(self.data), "source_type": "test"}


def read_all(source: StreamSource, size: int) -> bytes:
    out = bytearray()
    buf = bytearray(size)
    while True:
        n = source.readinto(buf)
        if not n:
            return bytes(out)
        out += buf[:n]


def test_stream_source_is_abstract() -> None:
    """Test that StreamSource is abstract and cannot be instantiated."""
    with pytest.raises(TypeError):
        StreamSource()  # type: ignore[abstract]


def test_stream_source_requires_get_stream() -> None:
    """Test that subclasses must implement get_stream."""

    class IncompleteSource(StreamSource):
        @override
        def get_metadata(self) -> dict[str, Any]:
            return {}

    with pytest.raises(TypeError):
        IncompleteSource()  # type: ignore[abstract]


def test_stream_source_requires_get_metadata() -> None:
    """Test that subclasses must implement get_metadata."""

    class IncompleteSource(StreamSource):
        @override
        def get_stream(self, start: int = 0) -> Iterator[bytes]:
            yield b""

    with pytest.raises(TypeError):
        IncompleteSource()  # type: ignore[abstract]


def test_stream_source_is_readable() -> None:
    """Test that StreamSource satisfies the Readable protocol."""
    source = ChunkSource([b"abc"])
    assert isinstance(source, Readable)
    assert source.readable()


def test_readinto_splits_chunks_across_buffers() -> None:
    """Test that chunks larger than the buffer are handed out in pieces."""
    source = ChunkSource([b"Hello, ", b"", b"World!"])

    assert read_all(source, 4) == b"Hello, World!"
    assert source.offset == 13


def test_readinto_short_read_does_not_exhaust() -> None:
    """Test that a chunk smaller than the buffer is a short read, not EOF."""
    source = ChunkSource([b"ab", b"cd"])
    buf = bytearray(10)

    assert source.readinto(buf) == 2
    assert source.readinto(buf) == 2
    assert bytes(buf[:2]) == b"cd"
    assert source.readinto(buf) == 0
    assert source.readinto(buf) == 0


def test_readinto_empty_buffer() -> None:
    """Test that an empty buffer reads nothing and opens no stream."""
    source = ChunkSource([b"abc"])

    assert source.readinto(bytearray()) == 0
    assert source.starts == []


def test_readinto_resumes_after_failure() -> None:
    """Test that a failed read is retried from the delivered offset."""
    source = ChunkSource([b"abc", b"def", b"ghi"], fail_after=2)
    buf = bytearray(3)

    assert source.readinto(buf) == 3
    assert source.readinto(buf) == 3
    with pytest.raises(OSError, match="connection reset"):
        source.readinto(buf)

    assert read_all(source, 3) == b"ghi"
    assert source.starts == [0, 6]


def test_close_stops_reading() -> None:
    """Test that a closed source refuses reads."""
    source = ChunkSource([b"abc"])
    source.readinto(bytearray(1))

    source.close()
    source.close()

    assert source.closed
    assert not source.readable()
    with pytest.raises(ValueError, match="closed source"):
        source.readinto(bytearray(1))


def test_context_manager_closes() -> None:
    """Test that StreamSource closes on exiting a with-block."""
    with ChunkSource([b"abc"]) as source:
        assert not source.closed
    assert source.closed
