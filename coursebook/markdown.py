"""Markdown helpers: relative links, durations and tables."""

from __future__ import annotations

from pathlib import PurePath, PurePosixPath
from typing import Iterable, List, Sequence, Union

PathLike = Union[str, PurePath]


def relative_link(doc_path: PathLike, target_path: PathLike) -> str:
    """Build a link to ``target_path`` from the document at ``doc_path``."""
    doc_parts = PurePosixPath(str(doc_path)).parts
    target = PurePosixPath(str(target_path))
    target_parts = target.parts

    dotdot = -1
    for length in range(len(doc_parts), -1, -1):
        ancestor = doc_parts[:length]
        if target_parts[:length] == ancestor:
            break
        dotdot += 1
    if dotdot > 0:
        return "../" * dotdot + str(target)
    return f"./{target}"


def duration(minutes: int) -> str:
    """Describe a duration in words, rounding past 5 minutes up to a multiple of 5."""
    if minutes > 5:
        minutes += 4
        minutes -= minutes % 5
    hours, minutes = divmod(minutes, 60)
    if hours == 0:
        return "1 minute" if minutes == 1 else f"{minutes} minutes"
    hour_text = "1 hour" if hours == 1 else f"{hours} hours"
    if minutes == 0:
        return hour_text
    return f"{hour_text} and {minutes} minutes"


class Table:
    """A table rendered as GitHub-flavoured Markdown."""

    def __init__(self, header: Sequence[str]) -> None:
        self.header: List[str] = list(header)
        self.rows: List[List[str]] = []

    def add_row(self, row: Sequence[str]) -> None:
        row = list(row)
        if len(row) != len(self.header):
            raise ValueError(
                f"row has {len(row)} cells but the table has {len(self.header)} columns"
            )
        self.rows.append(row)

    @staticmethod
    def _render_row(cells: Iterable[str]) -> str:
        return "|" + "".join(f" {cell} |" for cell in cells) + "\n"

    def __str__(self) -> str:
        lines = [self._render_row(self.header), self._render_row("-" for _ in self.header)]
        lines.extend(self._render_row(row) for row in self.rows)
        return "".join(lines)