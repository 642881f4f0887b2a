"""In-memory data source implementation."""

from collections.abc import Iterator
import logging
from typing import Any

from typing_extensions import override

from stream_readers.sources.base import DEFAULT_CHUNK_SIZE, DEFAULT_CONTENT_TYPE, StreamSource

logger = logging.getLogger(__name__)


class MemorySource(StreamSource):
    """Stream a bytes-like value already held in memory."""

    def __init__(
        self,
        data: bytes | bytearray | memoryview,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        super().__init__()
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

        self.data = bytes(data)
        self.chunk_size = chunk_size

        logger.debug("MemorySource initialized (%d bytes)", len(self.data))

    @override
    def get_stream(self, start: int = 0) -> Iterator[bytes]:
        for pos in range(start, len(self.data), self.chunk_size):
            yield self.data[pos : pos + self.chunk_size]

    @override
    def get_metadata(self) -> dict[str, Any]:
        return {
            "size": len(self.data),
            "type": DEFAULT_CONTENT_TYPE,
            "source_type": "memory",
        }
