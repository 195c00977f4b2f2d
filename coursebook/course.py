"""The course as a hierarchy: courses, sessions, segments and slides.

The structure is read from the order of chapters in the book and from the
frontmatter of each chapter. A top-level chapter whose frontmatter names a
``course`` starts that course; one naming a ``session`` starts that session.
Every top-level chapter inside a course becomes a segment. The chapter itself
is the segment's first slide, and each of its sub-chapters is a further slide
that also takes in all of its own sub-chapters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Iterator, List, Optional, Tuple

from .book import Book, Chapter
from .frontmatter import Frontmatter, split_frontmatter
from .markdown import Table, duration

BREAK_DURATION = 10
"""Minutes of break between segments of a session."""


class CourseStructureError(ValueError):
    """Raised when the book's frontmatter does not describe a valid course."""


def _describe(path: Optional[PurePosixPath]) -> str:
    return "None" if path is None else repr(str(path))


def _strip_frontmatter(chapter: Chapter) -> Frontmatter:
    """Parse a chapter's frontmatter and remove it from the chapter's content."""
    frontmatter, content = split_frontmatter(chapter)
    chapter.content = content
    return frontmatter


def _duration_table(first_column: str, rows) -> Table:
    table = Table([first_column, "Duration"])
    for name, minutes in rows:
        # Short items (welcomes, wrap-ups and the like) are left out.
        if minutes == 0:
            continue
        table.add_row([name, duration(minutes)])
    return table


@dataclass
class Slide:
    """A single topic, possibly made of several chapters."""

    name: str
    minutes: int = 0
    source_paths: List[PurePosixPath] = field(default_factory=list)

    @classmethod
    def _from_chapter(cls, frontmatter: Frontmatter, chapter: Chapter) -> "Slide":
        slide = cls(chapter.name)
        slide._take(frontmatter, chapter.source_path)
        return slide

    def _take(self, frontmatter: Frontmatter, source_path: Optional[PurePosixPath]) -> None:
        self.minutes += frontmatter.minutes or 0
        if source_path is not None:
            self.source_paths.append(source_path)

    def _add_sub_chapters(self, chapter: Chapter) -> None:
        for sub in chapter.sub_items:
            if not isinstance(sub, Chapter):
                continue
            frontmatter = _strip_frontmatter(sub)
            if frontmatter.course is not None or frontmatter.session is not None:
                raise CourseStructureError(
                    f"{_describe(sub.path)}: sub-slides may not have "
                    "'course' or 'session' set"
                )
            self._take(frontmatter, sub.source_path)
            self._add_sub_chapters(sub)

    def is_sub_chapter(self, chapter: Chapter) -> bool:
        """Whether ``chapter`` is one of this slide's sub-chapters rather than its first."""
        first = self.source_paths[0] if self.source_paths else None
        return chapter.source_path != first


@dataclass
class Segment:
    """A collection of slides with a related theme."""

    name: str
    slides: List[Slide] = field(default_factory=list)

    def _add_slide(self, frontmatter: Frontmatter, chapter: Chapter, recurse: bool) -> None:
        slide = Slide._from_chapter(frontmatter, chapter)
        if recurse:
            slide._add_sub_chapters(chapter)
        self.slides.append(slide)

    def __iter__(self) -> Iterator[Slide]:
        return iter(self.slides)

    def minutes(self) -> int:
        """Total minutes of the slides in this segment."""
        return sum(slide.minutes for slide in self)

    def outline(self) -> str:
        """A Markdown outline of this segment's slides."""
        slides = _duration_table("Slide", ((s.name, s.minutes) for s in self))
        return (
            f"This segment should take about {duration(self.minutes())}. "
            f"It contains:\n\n{slides}"
        )


@dataclass
class Session:
    """A block of instructional time made of segments."""

    name: str
    segments: List[Segment] = field(default_factory=list)
    _target_minutes: int = field(default=0, repr=False)

    def _add_segment(self, frontmatter: Frontmatter, chapter: Chapter) -> None:
        segment = Segment(chapter.name)
        segment._add_slide(frontmatter, chapter, recurse=False)
        for sub in chapter.sub_items:
            if not isinstance(sub, Chapter):
                continue
            segment._add_slide(_strip_frontmatter(sub), sub, recurse=True)
        self.segments.append(segment)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def outline(self) -> str:
        """A Markdown outline of this session's segments."""
        segments = _duration_table("Segment", ((s.name, s.minutes()) for s in self))
        return (
            f"Including {BREAK_DURATION} minute breaks, this session should take "
            f"about {duration(self.minutes())}. It contains:\n\n{segments}"
        )

    def minutes(self) -> int:
        """Total minutes of this session, including breaks between segments."""
        instructional = sum(segment.minutes() for segment in self)
        if instructional == 0:
            return 0
        timed = sum(1 for segment in self if segment.minutes() > 0)
        return instructional + (timed - 1) * BREAK_DURATION

    def target_minutes(self) -> int:
        """Declared target minutes, or the actual minutes when none are declared."""
        return self._target_minutes if self._target_minutes > 0 else self.minutes()


@dataclass
class Course:
    """The level of content at which students enroll."""

    name: str
    sessions: List[Session] = field(default_factory=list)

    def _session(self, name: str) -> Session:
        for session in self.sessions:
            if session.name == name:
                return session
        session = Session(name)
        self.sessions.append(session)
        return session

    def __iter__(self) -> Iterator[Session]:
        return iter(self.sessions)

    def minutes(self) -> int:
        """Total minutes of all sessions, including breaks within them."""
        return sum(session.minutes() for session in self)

    def target_minutes(self) -> int:
        """Total target minutes of all sessions."""
        return sum(session.target_minutes() for session in self)

    def schedule(self) -> str:
        """A Markdown schedule of this course."""
        parts = ["Course schedule:\n"]
        for session in self:
            parts.append(
                f" * {session.name} ({duration(session.minutes())}, including breaks)\n\n"
            )
            segments = _duration_table("Segment", ((s.name, s.minutes()) for s in session))
            parts.append(f"{segments}\n\n")
        return "".join(parts)


@dataclass
class Courses:
    """All courses in the book; material outside any course is not included."""

    courses: List[Course] = field(default_factory=list)

    def _course(self, name: str) -> Course:
        for course in self.courses:
            if course.name == name:
                return course
        course = Course(name)
        self.courses.append(course)
        return course

    @classmethod
    def extract_structure(cls, book: Book) -> Tuple["Courses", Book]:
        """Read the course structure from ``book``, stripping frontmatter from its chapters."""
        courses = cls()
        course_name: Optional[str] = None
        session_name: Optional[str] = None

        for item in book.sections:
            if not isinstance(item, Chapter):
                continue
            frontmatter = _strip_frontmatter(item)

            if frontmatter.course is not None:
                session_name = None
                course_name = None if frontmatter.course == "none" else frontmatter.course
            if frontmatter.session is not None:
                session_name = frontmatter.session

            if course_name is not None and session_name is None:
                raise CourseStructureError(
                    f"{_describe(item.path)}: 'session' must appear in frontmatter "
                    "when 'course' appears"
                )

            if course_name is not None and session_name is not None:
                session = courses._course(course_name)._session(session_name)
                session._target_minutes += frontmatter.target_minutes or 0
                session._add_segment(frontmatter, item)

        return courses, book

    def __iter__(self) -> Iterator[Course]:
        return iter(self.courses)

    def find_course(self, name: str) -> Optional[Course]:
        """The course with the given name, if any."""
        return next((course for course in self if course.name == name), None)

    def find_slide(
        self, chapter: Chapter
    ) -> Optional[Tuple[Course, Session, Segment, Slide]]:
        """The course, session, segment and slide that ``chapter`` belongs to, if any."""
        source_path = chapter.source_path
        if source_path is None:
            return None
        for course in self:
            for session in course:
                for segment in session:
                    for slide in segment:
                        if source_path in slide.source_paths:
                            return course, session, segment, slide
        return None