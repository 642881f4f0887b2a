"""Command-line interface for concatenating byte sources."""

import logging
from pathlib import Path
import shutil
import sys

import typer

from stream_readers.readers import open_sources
from stream_readers.sources.base import DEFAULT_CHUNK_SIZE

app = typer.Typer(add_completion=False)


@app.command()
def main(
    sources: list[str] = typer.Argument(
        ...,
        help="Sources in read order: s3://bucket/key, https://url, or /path/to/file",
    ),
    output: str | None = typer.Option(
        None,
        help="Output file path (default: stdout)",
    ),
    chunk_size: int = typer.Option(
        DEFAULT_CHUNK_SIZE,
        min=1,
        help="Size of chunks to read from each source",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """Write the concatenation of SOURCES, in order, to a file or stdout.

    Sources:
    - Local files: /path/to/file
    - S3: s3://bucket/key
    - HTTP/HTTPS: https://example.com/file
    """
    # Configure logging; stdout carries data only
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        with open_sources(sources, chunk_size=chunk_size) as stream:
            if output:
                with Path(output).open("wb") as f:
                    shutil.copyfileobj(stream, f)
                typer.echo(f"Output written to: {output}", err=True)
            else:
                shutil.copyfileobj(stream, sys.stdout.buffer)
                sys.stdout.buffer.flush()

    except FileNotFoundError as e:
        typer.echo(f"Error: File not found: {e}", err=True)
        raise typer.Exit(code=1) from None
    except ImportError as e:
        typer.echo(
            f"Error: Missing dependency: {e}\nInstall with: pip install stream-readers[all]",
            err=True,
        )
        raise typer.Exit(code=1) from None
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        if verbose:
            import traceback

            traceback.print_exc(file=sys.stderr)
        raise typer.Exit(code=1) from None


if __name__ == "__main__":
    app()
