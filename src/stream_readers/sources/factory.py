"""Build stream sources from URI strings."""

import logging
from typing import Any
from urllib.parse import urlparse

from stream_readers.sources.base import DEFAULT_CHUNK_SIZE, StreamSource
from stream_readers.sources.http import HTTPSource
from stream_readers.sources.local import LocalFileSource
from stream_readers.sources.s3 import S3Source

logger = logging.getLogger(__name__)


def create_source(
    source_str: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    **options: Any,
) -> StreamSource:
    """
    Create a StreamSource from a URI string.

    Args:
        source_str: Source URI (s3://, http://, https://, or local path)
        chunk_size: Chunk size for streaming
        **options: Source-specific options:
            - For S3: client
            - For HTTP: headers, auth, timeout
            - For local files: (none)

    Returns:
        StreamSource: Appropriate source implementation

    Raises:
        ValueError: If URI format is not recognized
        ImportError: If the library for the source type is not installed.
    """
    parsed = urlparse(source_str)

    if parsed.scheme == "s3":
        # S3 URI: s3://bucket/key
        bucket = parsed.netloc
        key = parsed.path.lstrip("/")

        if not bucket or not key:
            raise ValueError(f"Invalid S3 URI: {source_str}. Expected: s3://bucket/key")

        logger.info("Creating S3Source for s3://%s/%s", bucket, key)
        return S3Source(
            bucket=bucket,
            key=key,
            chunk_size=chunk_size,
            **{k: v for k, v in options.items() if k == "client"},
        )

    elif parsed.scheme in ("http", "https"):
        logger.info("Creating HTTPSource for %s", source_str)
        return HTTPSource(
            url=source_str,
            chunk_size=chunk_size,
            **{k: v for k, v in options.items() if k in ("headers", "auth", "timeout")},
        )

    else:
        # Assume local file path
        logger.info("Creating LocalFileSource for %s", source_str)
        return LocalFileSource(
            file_path=source_str,
            chunk_size=chunk_size,
        )
