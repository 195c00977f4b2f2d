"""YAML frontmatter carried at the top of each chapter."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import yaml

_FRONTMATTER = re.compile(
    r"\A\s*---[ \t]*\r?\n(?:(?P<yaml>.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)(?P<content>.*)\Z",
    re.DOTALL,
)


class FrontmatterError(ValueError):
    """Raised when a chapter's frontmatter cannot be parsed."""


@dataclass
class Frontmatter:
    """Course-structure annotations from a chapter's frontmatter."""

    minutes: Optional[int] = None
    target_minutes: Optional[int] = None
    course: Optional[str] = None
    session: Optional[str] = None


def matter(content: str) -> Optional[Tuple[str, str]]:
    """Split ``content`` into (frontmatter text, remaining content), or None."""
    found = _FRONTMATTER.match(content)
    if not found:
        return None
    return found.group("yaml") or "", found.group("content")


def _count(data: dict, key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{key}: expected a non-negative integer, got {value!r}")
    return value


def _text(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ValueError(f"{key}: expected a string, got {value!r}")


def _parse(text: str) -> Frontmatter:
    data: Any = yaml.safe_load(text)
    if data is None:
        return Frontmatter()
    if not isinstance(data, dict):
        raise ValueError("expected a mapping")
    return Frontmatter(
        minutes=_count(data, "minutes"),
        target_minutes=_count(data, "target_minutes"),
        course=_text(data, "course"),
        session=_text(data, "session"),
    )


def split_frontmatter(chapter) -> Tuple[Frontmatter, str]:
    """Split a chapter's contents into frontmatter and the remaining contents."""
    split = matter(chapter.content)
    if split is None:
        return Frontmatter(), chapter.content
    text, content = split
    try:
        frontmatter = _parse(text)
    except (yaml.YAMLError, ValueError) as error:
        source = None if chapter.source_path is None else str(chapter.source_path)
        raise FrontmatterError(
            f"error parsing frontmatter in {source!r}: {error}"
        ) from error
    return frontmatter, content