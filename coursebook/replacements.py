"""Expansion of ``{{%...}}`` directives in chapter content."""

from __future__ import annotations

import re
from typing import Optional

from .book import Chapter
from .course import Course, Courses, Segment, Session

_DIRECTIVE = re.compile(r"\{\{%([^}]*)\}\}")


def replace(
    courses: Courses,
    course: Optional[Course],
    session: Optional[Session],
    segment: Optional[Segment],
    chapter: Chapter,
) -> None:
    """Replace supported directives in the chapter's content with what they describe."""
    if chapter.source_path is None:
        return

    def expand(found: re.Match) -> str:
        directive = found.group(1).strip()
        words = directive.split()
        if words == ["session", "outline"] and session is not None:
            return session.outline()
        if words == ["segment", "outline"] and segment is not None:
            return segment.outline()
        if words == ["course", "outline"] and course is not None:
            return course.schedule()
        if words[:2] == ["course", "outline"]:
            named = courses.find_course(" ".join(words[2:]))
            if named is None:
                return f"not found - {found.group(0)}"
            return named.schedule()
        return directive

    chapter.content = _DIRECTIVE.sub(expand, chapter.content)