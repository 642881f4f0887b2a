"""HTTP/HTTPS data source implementation."""

from collections.abc import Iterator
import logging
from typing import Any

from typing_extensions import override

from stream_readers.sources.base import DEFAULT_CHUNK_SIZE, DEFAULT_CONTENT_TYPE, StreamSource

logger = logging.getLogger(__name__)


class HTTPSource(StreamSource):
    """
    Stream resources from HTTP/HTTPS URLs.

    Uses httpx to stream responses without loading them into memory.
    Supports authentication and custom headers. Resumed reads send a Range
    header; if the server answers with the full body instead, the bytes
    already delivered are skipped.
    """

    def __init__(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        auth: tuple[str, str] | None = None,
        timeout: int = 30,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """
        Initialize HTTPSource.

        Args:
            url: HTTP/HTTPS URL of the resource.
            headers: Optional custom HTTP headers.
            auth: Optional tuple of (username, password) for basic auth.
            timeout: Request timeout in seconds (default: 30).
            chunk_size: Size of chunks to read (default: 16MB).

        Raises:
            ImportError: If httpx is not installed.
            ValueError: If URL is invalid.
        """
        super().__init__()
        try:
            import httpx  # noqa: F401
        except ImportError as e:
            raise ImportError(
                "httpx is required for HTTPSource. Install with: pip install stream-readers[http]"
            ) from e

        if not url or not url.startswith(("http://", "https://")):
            raise ValueError("url must be a valid HTTP/HTTPS URL")

        self.url = url
        self.headers = headers or {}
        self.auth = auth
        self.timeout = timeout
        self.chunk_size = chunk_size

        logger.info("HTTPSource initialized for %s", url)

    @override
    def get_stream(self, start: int = 0) -> Iterator[bytes]:
        """
        Stream the HTTP resource in chunks.

        Args:
            start: Byte offset to begin at; requested with a Range header.

        Yields:
            bytes: Chunks of HTTP response data.

        Raises:
            IOError: If the HTTP request fails.
        """
        import httpx

        headers = dict(self.headers)
        if start:
            headers["Range"] = f"bytes={start}-"

        try:
            with httpx.stream(
                "GET",
                self.url,
                headers=headers,
                auth=self.auth,
                timeout=self.timeout,
                follow_redirects=True,
            ) as response:
                # Resuming exactly at the end of the resource
                if start and response.status_code == 416:
                    logger.debug("%s already read to offset %d", self.url, start)
                    return
                response.raise_for_status()

                skip = start if start and response.status_code != 206 else 0
                if skip:
                    logger.debug("Range ignored by %s, skipping %d bytes", self.url, skip)

                for chunk in response.iter_bytes(chunk_size=self.chunk_size):
                    if skip:
                        if len(chunk) <= skip:
                            skip -= len(chunk)
                            continue
                        chunk = chunk[skip:]
                        skip = 0
                    if chunk:
                        yield chunk
        except Exception as e:
            logger.exception("Error reading from %s: %s", self.url, e)
            raise OSError(f"Failed to read from {self.url}: {e}") from e

    @override
    def get_metadata(self) -> dict[str, Any]:
        """
        Return metadata about the HTTP resource.

        Returns:
            dict[str, Any]: Metadata containing content length, type, and source type.
        """
        import httpx

        try:
            response = httpx.head(
                self.url,
                headers=self.headers,
                auth=self.auth,
                timeout=self.timeout,
                follow_redirects=True,
            )
            response.raise_for_status()

            size = response.headers.get("content-length")
            size = int(size) if size else 0

            content_type = response.headers.get("content-type", DEFAULT_CONTENT_TYPE)
        except Exception as e:
            logger.warning("Could not retrieve metadata for %s: %s", self.url, e)
            size = 0
            content_type = DEFAULT_CONTENT_TYPE

        return {
            "size": size,
            "type": content_type,
            "source_type": "http",
            "url": self.url,
        }
