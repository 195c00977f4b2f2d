"""Summaries of the course schedule, compared with target durations."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Optional, Sequence

from .book import load_book
from .course import Courses
from .markdown import duration


def timediff(actual: int, target: int, slop: int) -> str:
    """Describe ``actual`` minutes, noting how far it is off ``target`` beyond ``slop``."""
    if actual > target + slop:
        return f"{duration(actual)} (\u23f0 *{duration(actual - target)} too long*)"
    if actual + slop < target:
        return f"{duration(actual)}: ({duration(target - actual)} short)"
    return duration(actual)


def _lines(lines: Iterable[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


def session_summary(courses: Courses) -> str:
    """A Markdown summary of every session and its segments."""
    lines = []
    for course in courses:
        if course.target_minutes() == 0:
            break
        for session in course:
            lines.append(f"### {course.name} // {session.name}")
            lines.append(
                f"_{timediff(session.minutes(), session.target_minutes(), 15)}_"
            )
            lines.append("")
            lines.extend(
                f"* {segment.name} - _{duration(segment.minutes())}_"
                for segment in session
            )
            lines.append("")
    return _lines(lines)


def pr_summary(courses: Courses) -> str:
    """A Markdown summary of each course and its sessions, for a change review."""
    lines = [
        "## Course Schedule",
        "With this pull request applied, the course schedule is as follows:",
    ]
    for course in courses:
        if course.target_minutes() == 0:
            break
        lines.append(f"### {course.name}")
        lines.append(f"_{timediff(course.minutes(), course.target_minutes(), 15)}_")
        lines.extend(
            f"* {session.name} - _"
            f"{timediff(session.minutes(), session.target_minutes(), 5)}_"
            for session in course
        )
    return _lines(lines)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="course-schedule", description="Show the course schedule"
    )
    subcommands = parser.add_subparsers(dest="command")
    subcommands.add_parser("sessions", help="Show session summary (default)")
    subcommands.add_parser("segments", help="Show segment summary")
    subcommands.add_parser("pr", help="Show summary for a PR")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print a schedule summary of the book in the current directory."""
    args = _parser().parse_args(argv)
    courses, _ = Courses.extract_structure(load_book("."))
    if args.command in (None, "sessions"):
        sys.stdout.write(session_summary(courses))
    elif args.command == "pr":
        sys.stdout.write(pr_summary(courses))
    else:
        print(f"the {args.command!r} summary is not available", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())