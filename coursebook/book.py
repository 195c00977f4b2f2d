"""Book model matching the mdBook JSON interchange format, plus a SUMMARY.md loader."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Callable, Iterator, List, Optional, TextIO, Tuple, Union


def _opt_path(value: Optional[str]) -> Optional[PurePosixPath]:
    return None if value is None else PurePosixPath(value)


def _path_str(value: Optional[PurePosixPath]) -> Optional[str]:
    return None if value is None else str(value)


@dataclass
class Chapter:
    """A chapter of the book, possibly holding nested items."""

    name: str
    content: str = ""
    number: Optional[List[int]] = None
    sub_items: List["BookItem"] = field(default_factory=list)
    path: Optional[PurePosixPath] = None
    source_path: Optional[PurePosixPath] = None
    parent_names: List[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict) -> "Chapter":
        number = data.get("number")
        return cls(
            name=data["name"],
            content=data.get("content", ""),
            number=None if number is None else list(number),
            sub_items=[_item_from_json(item) for item in data.get("sub_items", [])],
            path=_opt_path(data.get("path")),
            source_path=_opt_path(data.get("source_path")),
            parent_names=list(data.get("parent_names", [])),
        )

    def to_json(self) -> dict:
        return {
            "name": self.name,
            "content": self.content,
            "number": None if self.number is None else list(self.number),
            "sub_items": [_item_to_json(item) for item in self.sub_items],
            "path": _path_str(self.path),
            "source_path": _path_str(self.source_path),
            "parent_names": list(self.parent_names),
        }


@dataclass
class Separator:
    """A horizontal separator between parts of the book."""


@dataclass
class PartTitle:
    """A title introducing a part of the book."""

    title: str


BookItem = Union[Chapter, Separator, PartTitle]


def _item_from_json(data: Any) -> BookItem:
    if data == "Separator":
        return Separator()
    if isinstance(data, dict):
        if "Chapter" in data:
            return Chapter.from_json(data["Chapter"])
        if "PartTitle" in data:
            return PartTitle(data["PartTitle"])
    raise ValueError(f"unknown book item: {data!r}")


def _item_to_json(item: BookItem) -> Any:
    if isinstance(item, Chapter):
        return {"Chapter": item.to_json()}
    if isinstance(item, PartTitle):
        return {"PartTitle": item.title}
    return "Separator"


def _walk_preorder(items: List[BookItem]) -> Iterator[Chapter]:
    for item in items:
        if isinstance(item, Chapter):
            yield item
            yield from _walk_preorder(item.sub_items)


def _walk_postorder(items: List[BookItem], func: Callable[[Chapter], None]) -> None:
    for item in items:
        if isinstance(item, Chapter):
            _walk_postorder(item.sub_items, func)
            func(item)


@dataclass
class Book:
    """A whole book: a sequence of top-level items."""

    sections: List[BookItem] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict) -> "Book":
        return cls([_item_from_json(item) for item in data.get("sections", [])])

    def to_json(self) -> dict:
        return {
            "sections": [_item_to_json(item) for item in self.sections],
            "__non_exhaustive": None,
        }

    def iter_chapters(self) -> Iterator[Chapter]:
        """Yield every chapter, parents before their sub-chapters."""
        return _walk_preorder(self.sections)

    def for_each_chapter(self, func: Callable[[Chapter], None]) -> None:
        """Call ``func`` on every chapter, sub-chapters before their parent."""
        _walk_postorder(self.sections, func)


def parse_preprocessor_input(stream: TextIO) -> Tuple[dict, Book]:
    """Read the ``[context, book]`` pair a preprocessor receives on input."""
    data = json.load(stream)
    if not (isinstance(data, list) and len(data) == 2):
        raise ValueError("expected a [context, book] pair on input")
    context, book = data
    return context, Book.from_json(book)


_LINK = re.compile(r"\[(?P<name>(?:[^\]\\]|\\.)*)\]\((?P<target>[^)]*)\)")
_LIST_ITEM = re.compile(r"^(?P<indent>[ \t]*)[-*+][ \t]+(?P<rest>.*)$")
_HEADING = re.compile(r"^[ \t]*#+[ \t]+(?P<title>.*?)[ \t]*#*[ \t]*$")
_SEPARATOR = re.compile(r"^[ \t]*-{3,}[ \t]*$")
_SECTION = re.compile(r"\[(?P<name>[^\]]+)\]")
_SRC_KEY = re.compile(r"""src\s*=\s*["'](?P<value>[^"']*)["']""")


def _source_dir(root: Path) -> Path:
    src = "src"
    config = root / "book.toml"
    if config.is_file():
        section = None
        for line in config.read_text(encoding="utf-8").splitlines():
            stripped = line.split("#", 1)[0].strip()
            header = _SECTION.fullmatch(stripped)
            if header:
                section = header.group("name").strip()
                continue
            if section == "book":
                key = _SRC_KEY.fullmatch(stripped)
                if key:
                    src = key.group("value")
    return root / src


def _make_chapter(link: re.Match, src_dir: Path, parent_names: List[str]) -> Chapter:
    name = re.sub(r"\\(.)", r"\1", link.group("name"))
    target = link.group("target").strip()
    if not target:
        return Chapter(name=name, parent_names=parent_names)
    path = PurePosixPath(target)
    content = (src_dir / path).read_text(encoding="utf-8")
    return Chapter(
        name=name,
        content=content,
        path=path,
        source_path=path,
        parent_names=parent_names,
    )


def _parse_summary(text: str, src_dir: Path) -> List[BookItem]:
    sections: List[BookItem] = []
    stack: List[Tuple[int, Chapter]] = []
    top_number = 0
    seen_any = False

    for line in text.splitlines():
        if not line.strip():
            continue
        if _SEPARATOR.match(line):
            seen_any = True
            stack.clear()
            sections.append(Separator())
            continue
        heading = _HEADING.match(line)
        if heading:
            if seen_any:
                stack.clear()
                sections.append(PartTitle(heading.group("title")))
            seen_any = True
            continue
        seen_any = True

        item = _LIST_ITEM.match(line)
        if item:
            link = _LINK.search(item.group("rest"))
            if not link:
                continue
            indent = len(item.group("indent").expandtabs(4))
            while stack and stack[-1][0] >= indent:
                stack.pop()
            chapter = _make_chapter(link, src_dir, [c.name for _, c in stack])
            if stack:
                parent = stack[-1][1]
                siblings = sum(
                    1
                    for sub in parent.sub_items
                    if isinstance(sub, Chapter) and sub.number is not None
                )
                chapter.number = list(parent.number or []) + [siblings + 1]
                parent.sub_items.append(chapter)
            else:
                top_number += 1
                chapter.number = [top_number]
                sections.append(chapter)
            stack.append((indent, chapter))
            continue

        link = _LINK.match(line.strip())
        if link:
            stack.clear()
            sections.append(_make_chapter(link, src_dir, []))

    return sections


def load_book(root: Union[str, Path]) -> Book:
    """Load the book rooted at ``root`` from its SUMMARY.md and chapter files."""
    src_dir = _source_dir(Path(root))
    summary = (src_dir / "SUMMARY.md").read_text(encoding="utf-8")
    return Book(_parse_summary(summary, src_dir))