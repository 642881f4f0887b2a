"""Example: Reading several local files as one stream."""

import io

from stream_readers import StreamReaders
from stream_readers.sources import LocalFileSource, MemorySource

readers = StreamReaders()
readers.push(MemorySource(b"# header\n"))
readers.push(LocalFileSource("examples/part1.txt"))
readers.push(LocalFileSource("examples/part2.txt"))

print("Stream metadata:", readers.get_metadata())
print("\nLines:")
with io.TextIOWrapper(io.BufferedReader(readers), encoding="utf-8") as text:
    for i, line in enumerate(text, 1):
        print(f"Line {i}: {line.rstrip()}")
