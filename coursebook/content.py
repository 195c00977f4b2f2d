"""Dump of the whole course content in course order."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

from .book import load_book
from .course import Courses


def course_content(courses: Courses, src_dir: Union[str, Path]) -> str:
    """All slide sources, headed by their course, session, segment and slide names."""
    src_dir = Path(src_dir)
    parts = []
    for course in courses:
        parts.append(f"# COURSE: {course.name}\n")
        for session in course:
            parts.append(f"# SESSION: {session.name}\n")
            for segment in session:
                parts.append(f"# SEGMENT: {segment.name}\n")
                for slide in segment:
                    parts.append(f"# SLIDE: {slide.name}\n")
                    for path in slide.source_paths:
                        text = (src_dir / path).read_text(encoding="utf-8")
                        parts.append(f"{text}\n")
    return "".join(parts)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print the content of the book in the current directory."""
    argparse.ArgumentParser(
        prog="course-content", description="Print all course content in order"
    ).parse_args(argv)
    courses, _ = Courses.extract_structure(load_book("."))
    sys.stdout.write(course_content(courses, "src"))
    return 0


if __name__ == "__main__":
    sys.exit(main())