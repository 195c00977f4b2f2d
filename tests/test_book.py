import io
import json
from pathlib import PurePosixPath

import pytest

from coursebook.book import (
    Book,
    Chapter,
    PartTitle,
    Separator,
    load_book,
    parse_preprocessor_input,
)


def _chapter_json(name, path, number=None, sub_items=(), parent_names=()):
    return {
        "Chapter": {
            "name": name,
            "content": f"content of {name}",
            "number": number,
            "sub_items": list(sub_items),
            "path": path,
            "source_path": path,
            "parent_names": list(parent_names),
        }
    }


def _sample_json():
    child = _chapter_json("A1", "a/a1.md", [1, 1], parent_names=["A"])
    return {
        "sections": [
            _chapter_json("Intro", "intro.md"),
            "Separator",
            {"PartTitle": "Part"},
            _chapter_json("A", "a.md", [1], sub_items=[child]),
        ],
        "__non_exhaustive": None,
    }


def test_json_round_trip():
    data = _sample_json()
    assert Book.from_json(data).to_json() == data


def test_item_kinds():
    book = Book.from_json(_sample_json())
    assert isinstance(book.sections[0], Chapter)
    assert isinstance(book.sections[1], Separator)
    assert book.sections[2] == PartTitle("Part")
    assert book.sections[3].sub_items[0].source_path == PurePosixPath("a/a1.md")


def test_unknown_item_rejected():
    with pytest.raises(ValueError):
        Book.from_json({"sections": ["Nonsense"]})


def test_iter_chapters_parents_first():
    book = Book.from_json(_sample_json())
    assert [c.name for c in book.iter_chapters()] == ["Intro", "A", "A1"]


def test_for_each_chapter_children_first():
    book = Book.from_json(_sample_json())
    seen = []
    book.for_each_chapter(lambda chapter: seen.append(chapter.name))
    assert seen == ["Intro", "A1", "A"]


def test_for_each_chapter_mutates():
    book = Book.from_json(_sample_json())

    def shout(chapter):
        chapter.content = chapter.content.upper()

    book.for_each_chapter(shout)
    assert [c.content for c in book.iter_chapters()] == [
        "CONTENT OF INTRO",
        "CONTENT OF A",
        "CONTENT OF A1",
    ]


def test_parse_preprocessor_input():
    data = _sample_json()
    stream = io.StringIO(json.dumps([{"root": "."}, data]))
    context, book = parse_preprocessor_input(stream)
    assert context == {"root": "."}
    assert book.to_json() == data


def test_parse_preprocessor_input_rejects_non_pair():
    with pytest.raises(ValueError):
        parse_preprocessor_input(io.StringIO(json.dumps({"sections": []})))


def _write_book(root, src="src"):
    src_dir = root / src
    (src_dir / "hello").mkdir(parents=True)
    (src_dir / "SUMMARY.md").write_text(
        "# Summary\n\n"
        "[Welcome](welcome.md)\n\n"
        "# Fundamentals\n\n"
        "- [Hello](hello.md)\n"
        "  - [Sub](hello/sub.md)\n"
        "- [Draft]()\n\n"
        "---\n\n"
        "[Thanks](thanks.md)\n"
    )
    (src_dir / "welcome.md").write_text("welcome text")
    (src_dir / "hello.md").write_text("hello text")
    (src_dir / "hello" / "sub.md").write_text("sub text")
    (src_dir / "thanks.md").write_text("thanks text")


def test_load_book(tmp_path):
    _write_book(tmp_path)
    book = load_book(tmp_path)
    kinds = [type(item) for item in book.sections]
    assert kinds == [Chapter, PartTitle, Chapter, Chapter, Separator, Chapter]
    assert book.sections[1].title == "Fundamentals"
    names = [c.name for c in book.iter_chapters()]
    assert names == ["Welcome", "Hello", "Sub", "Draft", "Thanks"]

    chapters = {c.name: c for c in book.iter_chapters()}
    assert chapters["Welcome"].number is None
    assert chapters["Hello"].number == [1]
    assert chapters["Sub"].number == [1, 1]
    assert chapters["Sub"].content == "sub text"
    assert chapters["Sub"].source_path == PurePosixPath("hello/sub.md")
    assert chapters["Sub"].parent_names == ["Hello"]
    assert chapters["Draft"].path is None
    assert chapters["Draft"].content == ""


def test_load_book_respects_src_setting(tmp_path):
    _write_book(tmp_path, src="content")
    (tmp_path / "book.toml").write_text('[book]\ntitle = "T"\nsrc = "content"\n')
    book = load_book(tmp_path)
    assert [c.content for c in book.iter_chapters()][0] == "welcome text"


def test_load_book_missing_chapter_file(tmp_path):
    _write_book(tmp_path)
    (tmp_path / "src" / "thanks.md").unlink()
    with pytest.raises(FileNotFoundError):
        load_book(tmp_path)