"""Byte source abstraction layer for stream readers."""

from stream_readers.sources.base import DEFAULT_CHUNK_SIZE, Readable, StreamSource
from stream_readers.sources.factory import create_source
from stream_readers.sources.http import HTTPSource
from stream_readers.sources.local import LocalFileSource
from stream_readers.sources.memory import MemorySource
from stream_readers.sources.s3 import S3Source

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "HTTPSource",
    "LocalFileSource",
    "MemorySource",
    "Readable",
    "S3Source",
    "StreamSource",
    "create_source",
]
