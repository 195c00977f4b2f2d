from pathlib import PurePosixPath

from coursebook.book import Book, Chapter
from coursebook.course import Courses
from coursebook.markdown import duration
from coursebook.schedule import main, pr_summary, session_summary, timediff


def _chapter(name, path, content, sub_items=()):
    p = PurePosixPath(path)
    return Chapter(
        name=name, content=content, path=p, source_path=p, sub_items=list(sub_items)
    )


def _fundamentals():
    welcome = _chapter(
        "Welcome",
        "welcome.md",
        "---\ncourse: Fundamentals\nsession: Day 1\ntarget_minutes: 60\n---\n",
        [
            _chapter("Basics", "basics.md", "---\nminutes: 20\n---\n"),
            _chapter("Loops", "loops.md", "---\nminutes: 30\n---\n"),
        ],
    )
    types = _chapter("Types", "types.md", "---\nminutes: 15\n---\n")
    return [welcome, types]


def _courses(chapters):
    courses, _ = Courses.extract_structure(Book(list(chapters)))
    return courses


def test_timediff_within_slop():
    assert timediff(60, 60, 15) == duration(60)
    assert timediff(75, 60, 15) == duration(75)
    assert timediff(45, 60, 15) == duration(45)


def test_timediff_too_long():
    result = timediff(100, 60, 15)
    assert result.startswith(duration(100) + " (")
    assert f"*{duration(40)} too long*" in result
    assert "\u23f0" in result


def test_timediff_too_short():
    result = timediff(30, 60, 15)
    assert result.startswith(duration(30) + ":")
    assert result.endswith(f"({duration(30)} short)")


def test_session_summary():
    courses = _courses(_fundamentals())
    session = courses.find_course("Fundamentals").sessions[0]
    lines = session_summary(courses).splitlines()
    assert lines[0] == "### Fundamentals // Day 1"
    assert lines[1] == f"_{timediff(session.minutes(), session.target_minutes(), 15)}_"
    assert lines[2] == ""
    for segment in session:
        assert f"* {segment.name} - _{duration(segment.minutes())}_" in lines
    assert session_summary(courses).endswith("\n\n")


def test_pr_summary():
    courses = _courses(_fundamentals())
    course = courses.find_course("Fundamentals")
    session = course.sessions[0]
    lines = pr_summary(courses).splitlines()
    assert lines[0] == "## Course Schedule"
    assert "### Fundamentals" in lines
    assert f"_{timediff(course.minutes(), course.target_minutes(), 15)}_" in lines
    assert (
        f"* Day 1 - _{timediff(session.minutes(), session.target_minutes(), 5)}_"
        in lines
    )


def test_course_without_time_stops_summaries():
    empty = _chapter("Empty", "empty.md", "---\ncourse: Empty\nsession: S\n---\n")
    courses = _courses([empty] + _fundamentals())
    assert session_summary(courses) == ""
    assert pr_summary(courses).splitlines() == [
        "## Course Schedule",
        "With this pull request applied, the course schedule is as follows:",
    ]


def _write_book(root):
    src = root / "src"
    src.mkdir()
    (src / "SUMMARY.md").write_text(
        "# Summary\n\n- [Welcome](welcome.md)\n  - [Basics](basics.md)\n",
        encoding="utf-8",
    )
    (src / "welcome.md").write_text(
        "---\ncourse: Fundamentals\nsession: Day 1\n---\n# Welcome\n", encoding="utf-8"
    )
    (src / "basics.md").write_text("---\nminutes: 10\n---\n# Basics\n", encoding="utf-8")


def test_main_prints_summaries(tmp_path, monkeypatch, capsys):
    _write_book(tmp_path)
    monkeypatch.chdir(tmp_path)
    from coursebook.book import load_book

    courses, _ = Courses.extract_structure(load_book("."))
    assert main([]) == 0
    assert capsys.readouterr().out == session_summary(courses)
    assert main(["sessions"]) == 0
    assert capsys.readouterr().out == session_summary(courses)
    assert main(["pr"]) == 0
    assert capsys.readouterr().out == pr_summary(courses)


def test_main_segments_unavailable(tmp_path, monkeypatch, capsys):
    _write_book(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["segments"]) == 1
    assert "segments" in capsys.readouterr().err