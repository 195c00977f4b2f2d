"""Book renderer that extracts exercise starter code into a directory."""

from __future__ import annotations

import argparse
import json
import logging
import shutil
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO, Union

from .book import Book
from .exerciser import process

_log = logging.getLogger(__name__)


class _RenderError(Exception):
    """A problem with the render context or the output directory."""


def process_all(book: Book, output_directory: Union[str, Path]) -> None:
    """Extract exercises of every chapter into a subdirectory named after its file."""
    output_directory = Path(output_directory)
    for chapter in book.iter_chapters():
        _log.debug("Chapter %s / %s", chapter.path, chapter.source_path)
        if chapter.path is None:
            continue
        name = chapter.path.name
        if not name or name == "..":
            raise ValueError(f"Chapter {str(chapter.path)!r} has no file stem")
        process(output_directory / chapter.path.stem, chapter.content)


def _output_directory(context: dict) -> Path:
    try:
        config = context["config"]["output"]["exerciser"]
    except (KeyError, TypeError):
        config = None
    if not isinstance(config, dict):
        raise _RenderError("Missing output.exerciser configuration")
    if "output-directory" not in config:
        raise _RenderError(
            "Missing output.exerciser.output-directory configuration value"
        )
    value = config["output-directory"]
    if not isinstance(value, str):
        raise _RenderError("Expected a string for output.exerciser.output-directory")
    return Path(value)


def _render(stream: TextIO) -> None:
    try:
        context = json.load(stream)
        book = Book.from_json(context["book"])
    except (ValueError, KeyError, TypeError) as error:
        raise _RenderError(f"Parsing stdin: {error}") from error

    output_directory = _output_directory(context)
    shutil.rmtree(output_directory, ignore_errors=True)
    try:
        output_directory.mkdir()
    except OSError as error:
        raise _RenderError(
            f"Failed to create output directory {str(output_directory)!r}: {error}"
        ) from error

    process_all(book, output_directory)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Render the book given on standard input as exercise files."""
    argparse.ArgumentParser(
        prog="mdbook-exerciser",
        description="Extract starter code for exercises from Markdown files",
    ).parse_args(argv)
    try:
        _render(sys.stdin)
    except (_RenderError, ValueError, OSError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())