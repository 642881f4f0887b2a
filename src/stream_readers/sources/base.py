"""Abstract base class and capability protocol for byte sources."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable

DEFAULT_CHUNK_SIZE = 16777216
DEFAULT_CONTENT_TYPE = "application/octet-stream"


@runtime_checkable
class Readable(Protocol):
    """
    Anything that can fill a caller-supplied buffer.

    ``readinto`` returns the number of bytes written, ``0`` once the source is
    exhausted (for a non-empty buffer), or ``None`` when a non-blocking source
    has nothing available yet. Failures are raised.
    """

    def readinto(self, buffer: Any) -> int | None: ...


class StreamSource(ABC):
    """
    Abstract base class for streaming data sources.

    Subclasses describe how to stream their bytes starting at an offset; this
    class exposes that as the ``readinto`` capability consumed by
    ``StreamReaders``. A failed read leaves the delivered offset untouched, so
    retrying the read reopens the stream where it stopped.
    """

    def __init__(self) -> None:
        self._offset = 0
        self._pending = memoryview(b"")
        self._chunks: Iterator[bytes] | None = None
        self._exhausted = False
        self._closed = False

    @abstractmethod
    def get_stream(self, start: int = 0) -> Iterator[bytes]:
        """
        Return an iterator of byte chunks from the source.

        Must not load the entire source into memory.

        Args:
            start: Byte offset to begin streaming from.

        Yields:
            bytes: Chunks of data from the source.

        Raises:
            IOError: If the source cannot be read.
        """
        ...

    @abstractmethod
    def get_metadata(self) -> dict[str, Any]:
        """
        Return metadata about the source.

        Returns:
            dict[str, Any]: Metadata dictionary containing:
                - 'size': Size in bytes (0 when unknown)
                - 'type': MIME type (default: 'application/octet-stream')
                - 'source_type': Type of source ('local', 'memory', 's3', 'http')
        """
        ...

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def offset(self) -> int:
        """Number of bytes handed out by ``readinto`` so far."""
        return self._offset

    def readable(self) -> bool:
        return not self._closed

    def readinto(self, buffer: Any) -> int:
        """
        Copy the next available bytes into ``buffer``.

        Args:
            buffer: Writable bytes-like object.

        Returns:
            int: Number of bytes written, 0 once the source is exhausted.

        Raises:
            ValueError: If the source is closed.
            IOError: Propagated from ``get_stream`` when the read fails.
        """
        if self._closed:
            raise ValueError("I/O operation on closed source")

        view = memoryview(buffer).cast("B")
        if not len(view):
            return 0

        while not len(self._pending):
            if self._exhausted:
                return 0
            if self._chunks is None:
                self._chunks = self.get_stream(start=self._offset)
            try:
                self._pending = memoryview(next(self._chunks))
            except StopIteration:
                self._chunks = None
                self._exhausted = True
                return 0
            except Exception:
                # A failed iterator cannot be resumed; reopen at the offset next time
                self._chunks = None
                raise

        count = min(len(view), len(self._pending))
        view[:count] = self._pending[:count]
        self._pending = self._pending[count:]
        self._offset += count
        return count

    def close(self) -> None:
        """Close the live stream, if any. Closing twice is a no-op."""
        if self._closed:
            return
        self._closed = True
        self._pending = memoryview(b"")
        chunks, self._chunks = self._chunks, None
        close = getattr(chunks, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "StreamSource":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
