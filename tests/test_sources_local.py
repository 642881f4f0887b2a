"""Tests for LocalFileSource."""

from pathlib import Path
import tempfile

import pytest

from stream_readers.sources.local import LocalFileSource


def test_local_file_source_with_valid_file() -> None:
    """Test LocalFileSource with valid file."""
    with tempfile.NamedTemporaryFile(mode="wb", delete=False, suffix=".bin") as f:
        f.write(b"test content")
        temp_path = f.name

    try:
        source = LocalFileSource(temp_path, chunk_size=4)
        chunks = list(source.get_stream())

        assert len(chunks) > 0
        assert b"".join(chunks) == b"test content"

        metadata = source.get_metadata()
        assert metadata["source_type"] == "local"
        assert metadata["size"] == 12
        assert "path" in metadata
    finally:
        Path(temp_path).unlink()


def test_local_file_source_with_nonexistent_file() -> None:
    """Test LocalFileSource with nonexistent file."""
    with pytest.raises(FileNotFoundError):
        LocalFileSource("/nonexistent/path/file.bin")


def test_local_file_source_with_directory() -> None:
    """Test LocalFileSource with directory path."""
    with tempfile.TemporaryDirectory() as tmpdir, pytest.raises(ValueError, match="not a file"):
        LocalFileSource(tmpdir)


def test_local_file_source_chunking() -> None:
    """Test that LocalFileSource properly chunks data."""
    with tempfile.NamedTemporaryFile(mode="wb", delete=False) as f:
        f.write(b"0123456789")
        temp_path = f.name

    try:
        source = LocalFileSource(temp_path, chunk_size=3)
        chunks = list(source.get_stream())

        assert chunks == [b"012", b"345", b"678", b"9"]
    finally:
        Path(temp_path).unlink()


def test_local_file_source_stream_from_offset() -> None:
    """Test that get_stream starts at the requested offset."""
    with tempfile.NamedTemporaryFile(mode="wb", delete=False) as f:
        f.write(b"0123456789")
        temp_path = f.name

    try:
        source = LocalFileSource(temp_path, chunk_size=4)
        assert list(source.get_stream(start=6)) == [b"6789"]
    finally:
        Path(temp_path).unlink()


def test_local_file_source_readinto() -> None:
    """Test reading a local file through readinto."""
    with tempfile.NamedTemporaryFile(mode="wb", delete=False) as f:
        f.write(b"Hello,")
        temp_path = f.name

    try:
        source = LocalFileSource(temp_path, chunk_size=4)
        buf = bytearray(8)

        assert source.readinto(buf) == 4
        assert bytes(buf[:4]) == b"Hell"
        assert source.readinto(buf) == 2
        assert bytes(buf[:2]) == b"o,"
        assert source.readinto(buf) == 0
        source.close()
    finally:
        Path(temp_path).unlink()


def test_local_file_source_read_error() -> None:
    """Test that a file removed after validation surfaces as OSError."""
    with tempfile.NamedTemporaryFile(mode="wb", delete=False) as f:
        f.write(b"content")
        temp_path = f.name

    source = LocalFileSource(temp_path)
    Path(temp_path).unlink()

    with pytest.raises(OSError, match="Failed to read file"):
        source.readinto(bytearray(4))


def test_local_file_source_metadata() -> None:
    """Test LocalFileSource metadata."""
    with tempfile.NamedTemporaryFile(mode="wb", delete=False) as f:
        f.write(b"content")
        temp_path = f.name

    try:
        source = LocalFileSource(temp_path)
        metadata = source.get_metadata()

        assert metadata["source_type"] == "local"
        assert metadata["size"] == 7
        assert metadata["type"] == "application/octet-stream"
        assert metadata["path"] == temp_path
    finally:
        Path(temp_path).unlink()


def test_local_file_source_metadata_guesses_type() -> None:
    """Test that the MIME type is guessed from the file name."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "notes.txt"
        path.write_bytes(b"hello")

        metadata = LocalFileSource(path).get_metadata()

        assert metadata["type"] == "text/plain"
        assert metadata["size"] == 5
        assert metadata["modified"] == path.stat().st_mtime


def test_local_file_source_metadata_after_removal() -> None:
    """Test that metadata falls back to defaults once the file is gone."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "gone.bin"
        path.write_bytes(b"hello")
        source = LocalFileSource(path)
        path.unlink()

        metadata = source.get_metadata()

        assert metadata["size"] == 0
        assert metadata["modified"] == 0.0
