"""Local file system data source implementation."""

from collections.abc import Iterator
from functools import partial
import logging
import mimetypes
from pathlib import Path
from typing import Any

from typing_extensions import override

from stream_readers.sources.base import DEFAULT_CHUNK_SIZE, DEFAULT_CONTENT_TYPE, StreamSource

logger = logging.getLogger(__name__)


class LocalFileSource(StreamSource):
    """
    Stream a file from the local file system.

    The path is checked up front, but the file is only opened on the first
    read, and reopened at the delivered offset if a read fails.
    """

    def __init__(self, file_path: str | Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        """
        Args:
            file_path: Path to the local file.
            chunk_size: Size of chunks to read (default: 16MB).

        Raises:
            FileNotFoundError: If nothing exists at ``file_path``.
            ValueError: If ``file_path`` is not a regular file.
        """
        super().__init__()
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        if not path.is_file():
            raise ValueError(f"Path is not a file: {file_path}")

        self.file_path = path
        self.chunk_size = chunk_size

        logger.info("LocalFileSource initialized for: %s", path)

    @override
    def get_stream(self, start: int = 0) -> Iterator[bytes]:
        try:
            with self.file_path.open("rb") as f:
                f.seek(start)
                yield from iter(partial(f.read, self.chunk_size), b"")
        except Exception as e:
            logger.exception("Error reading file %s at offset %d: %s", self.file_path, start, e)
            raise OSError(f"Failed to read file {self.file_path}: {e}") from e

    @override
    def get_metadata(self) -> dict[str, Any]:
        """
        Return metadata about the local file.

        The MIME type is guessed from the file name. Size and modification
        time are 0 when the file can no longer be stat'ed.
        """
        try:
            stat = self.file_path.stat()
            size, modified = stat.st_size, stat.st_mtime
        except OSError as e:
            logger.warning("Could not stat %s: %s", self.file_path, e)
            size, modified = 0, 0.0

        content_type, _ = mimetypes.guess_type(self.file_path.name)

        return {
            "size": size,
            "type": content_type or DEFAULT_CONTENT_TYPE,
            "source_type": "local",
            "path": str(self.file_path),
            "modified": modified,
        }
