"""Sequential concatenation of byte sources into one readable stream."""

from collections import deque
from collections.abc import Iterable
import io
import logging
from typing import Any

from typing_extensions import override

from stream_readers.sources.base import DEFAULT_CHUNK_SIZE, Readable
from stream_readers.sources.factory import create_source

logger = logging.getLogger(__name__)


class StreamReaders(io.RawIOBase):
    """
    Read an ordered queue of sources as a single stream.

    Sources are drained in push order: a read is served by the oldest
    remaining source, and a source is dropped once it reports exhaustion.
    The aggregate is itself ``Readable``, so it can be wrapped by
    ``io.BufferedReader``/``io.TextIOWrapper`` or pushed into another
    ``StreamReaders``.

    Reaching the end is not permanent: pushing another source after a read
    returned 0 makes the stream readable again.

    Example:
        >>> readers = StreamReaders()
        >>> readers.push(io.BytesIO(b"Hello,"))
        >>> readers.push(io.BytesIO(b"World!"))
        >>> readers.read()
        b'Hello,World!'
    """

    def __init__(self, sources: Iterable[Readable] = (), *, close_sources: bool = True) -> None:
        """
        Initialize the aggregate.

        Args:
            sources: Sources to push immediately, in read order.
            close_sources: Close each source when it is released, either after
                it is exhausted or when the aggregate is closed (default: True).

        Raises:
            TypeError: If a source does not offer ``readinto``.
            ValueError: If a source is already closed.
            io.UnsupportedOperation: If a source is not readable.
        """
        self._sources: deque[Readable] = deque()
        self._position = 0
        self.close_sources = close_sources
        super().__init__()
        self.extend(sources)

    def push(self, source: Readable) -> None:
        """
        Append a source to the end of the queue.

        The source is not read from. Only the handle itself is checked.

        Raises:
            TypeError: If the source does not offer ``readinto``.
            ValueError: If the source or the aggregate is closed, or the source
                is the aggregate itself or a StreamReaders that reads from it.
            io.UnsupportedOperation: If the source reports it is not readable.
        """
        if self.closed:
            raise ValueError("push to closed StreamReaders")
        if self._reachable_from(source):
            raise ValueError("cannot push a StreamReaders into itself")
        if not callable(getattr(source, "readinto", None)):
            raise TypeError(f"source must provide readinto(), got {type(source).__name__}")
        if getattr(source, "closed", False) is True:
            raise ValueError("cannot push a closed source")

        readable = getattr(source, "readable", None)
        if callable(readable) and not readable():
            raise io.UnsupportedOperation("source is not readable")

        self._sources.append(source)
        logger.debug("Pushed %s (%d pending)", type(source).__name__, len(self._sources))

    def extend(self, sources: Iterable[Readable]) -> None:
        """Push each of ``sources`` in order."""
        for source in sources:
            self.push(source)

    @property
    def pending(self) -> int:
        """Number of sources not yet exhausted."""
        return len(self._sources)

    def is_empty(self) -> bool:
        return not self._sources

    @override
    def readinto(self, buffer: Any) -> int | None:  # type: ignore[override]
        """
        Fill ``buffer`` from the head source.

        Returns the number of bytes written. Returns 0 when no source is left
        or the buffer is empty, and ``None`` when the head source is
        non-blocking and has nothing available. Exceptions from the head source
        propagate unchanged and leave it at the head, so the call can be
        retried.
        """
        if self.closed:
            raise ValueError("I/O operation on closed StreamReaders")

        view = memoryview(buffer).cast("B")
        if not len(view):
            return 0

        # Each pass either returns or drops one source
        for _ in range(len(self._sources)):
            head = self._sources[0]
            count = head.readinto(view)
            if count is None:
                return None
            if count:
                self._position += count
                return count

            self._sources.popleft()
            logger.debug(
                "Source %s exhausted at offset %d (%d pending)",
                type(head).__name__,
                self._position,
                len(self._sources),
            )
            self._release(head)

        return 0

    def _reachable_from(self, source: Readable) -> bool:
        """Return True if reading ``source`` could end up reading this aggregate."""
        stack = [source]
        while stack:
            item = stack.pop()
            if item is self:
                return True
            if isinstance(item, StreamReaders):
                stack.extend(item._sources)
        return False

    def _release(self, source: Readable) -> None:
        if not self.close_sources:
            return
        close = getattr(source, "close", None)
        if callable(close):
            close()

    @override
    def readable(self) -> bool:
        return True

    @override
    def seekable(self) -> bool:
        return False

    @override
    def tell(self) -> int:
        """Return the number of bytes read from the aggregate so far."""
        if self.closed:
            raise ValueError("I/O operation on closed StreamReaders")
        return self._position

    @override
    def close(self) -> None:
        """Release any sources still queued, then close the aggregate."""
        if self.closed:
            return
        try:
            while self._sources:
                self._release(self._sources.popleft())
        finally:
            super().close()

    def get_metadata(self) -> dict[str, Any]:
        """
        Return metadata about the aggregate.

        Returns:
            dict[str, Any]: Metadata containing:
                - 'size': Summed size of pending sources that report one
                - 'source_type': 'aggregate'
                - 'pending': Number of pending sources
                - 'position': Bytes read so far
        """
        size = 0
        for source in self._sources:
            get_metadata = getattr(source, "get_metadata", None)
            if callable(get_metadata):
                size += get_metadata().get("size") or 0

        return {
            "size": size,
            "source_type": "aggregate",
            "pending": len(self._sources),
            "position": self._position,
        }


def chain_sources(
    sources: Iterable[Readable],
    buffer_size: int = io.DEFAULT_BUFFER_SIZE,
    close_sources: bool = True,
) -> io.BufferedReader:
    """
    Chain sources together into a single buffered stream.

    Usage:
        def open_files():
            for name in filenames:
                yield open(name, "rb")

        with chain_sources(open_files()) as f:
            data = f.read()
    """
    return io.BufferedReader(
        StreamReaders(sources, close_sources=close_sources),
        buffer_size=buffer_size,
    )


def open_sources(
    uris: Iterable[str],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    buffer_size: int = io.DEFAULT_BUFFER_SIZE,
    **source_options: Any,
) -> io.BufferedReader:
    """
    Open each URI as a source and chain them in order.

    Args:
        uris: S3 URIs, HTTP(S) URLs or local paths.
        chunk_size: Chunk size for each source (default: 16MB).
        buffer_size: Size of the read buffer wrapping the aggregate.
        **source_options: Passed to ``create_source``.

    Returns:
        io.BufferedReader: Buffered stream over the concatenated sources.

    Raises:
        ValueError: If a URI is malformed.
        FileNotFoundError: If a local path does not exist.
        ImportError: If a required library is not installed.
    """
    sources = [create_source(uri, chunk_size=chunk_size, **source_options) for uri in uris]
    logger.info("Opened %d sources", len(sources))
    return chain_sources(sources, buffer_size=buffer_size)
