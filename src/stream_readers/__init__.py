"""Stream-Readers: read an ordered queue of byte sources as one stream."""

from stream_readers.readers import StreamReaders, chain_sources, open_sources

__all__ = ["StreamReaders", "chain_sources", "open_sources"]
