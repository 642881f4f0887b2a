"""Example: Reading HTTP/HTTPS resources as one stream."""

from stream_readers import StreamReaders
from stream_readers.sources import HTTPSource

readers = StreamReaders(
    HTTPSource(
        url=f"https://example.com/archive/chunk-{i}.bin",
        headers={"Authorization": "Bearer token123"},
        timeout=60,
    )
    for i in range(3)
)

total = 0
buf = bytearray(65536)
while True:
    n = readers.readinto(buf)
    if not n:
        break
    total += n

print(f"Read {total} bytes")
