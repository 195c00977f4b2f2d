"""Book preprocessor that adds course structure information to chapters."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence, TextIO

from . import replacements, timing_info
from .book import Chapter, parse_preprocessor_input
from .course import Courses


def preprocess(input_stream: TextIO, output_stream: TextIO) -> None:
    """Read a ``[context, book]`` pair, expand course information and write the book."""
    _context, book = parse_preprocessor_input(input_stream)
    courses, book = Courses.extract_structure(book)

    def visit(chapter: Chapter) -> None:
        found = courses.find_slide(chapter)
        if found is None:
            # Outside of a course, only directives are expanded.
            replacements.replace(courses, None, None, None, chapter)
            return
        course, session, segment, slide = found
        timing_info.insert_timing_info(slide, chapter)
        replacements.replace(courses, course, session, segment, chapter)

    book.for_each_chapter(visit)
    json.dump(book.to_json(), output_stream, separators=(",", ":"), ensure_ascii=False)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdbook-course",
        description="Book preprocessor for course structure and timing",
    )
    subcommands = parser.add_subparsers(dest="command")
    supports = subcommands.add_parser(
        "supports", help="Report whether a renderer is supported"
    )
    supports.add_argument("renderer")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the preprocessor on standard input and output."""
    args = _parser().parse_args(argv)
    if args.command == "supports":
        # Every renderer is supported.
        return 0
    try:
        preprocess(sys.stdin, sys.stdout)
    except (ValueError, OSError) as error:
        print(error, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())