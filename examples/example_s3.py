"""Example: Concatenating objects from AWS S3."""

import shutil
import sys

from stream_readers import open_sources

# Read from S3 using URIs (auto-detection)
with open_sources(
    ["s3://my-bucket/logs/part-0000", "s3://my-bucket/logs/part-0001"],
    chunk_size=1048576,
) as stream:
    shutil.copyfileobj(stream, sys.stdout.buffer)

# Or use explicit S3Source for more control
# import boto3
# from stream_readers import StreamReaders
# from stream_readers.sources import S3Source
# s3_client = boto3.client("s3", region_name="us-east-1")
# readers = StreamReaders(
#     S3Source(bucket="my-bucket", key=key, client=s3_client)
#     for key in ("logs/part-0000", "logs/part-0001")
# )
