from coursebook.exerciser import process


def test_code_block_after_comment_is_written(tmp_path):
    markdown = "# Exercise\n\n<!-- File src/main.rs -->\n\n```rust\nfn main() {}\n```\n"
    process(tmp_path, markdown)
    assert (tmp_path / "src" / "main.rs").read_text(encoding="utf-8") == "fn main() {}\n"


def test_code_block_without_comment_is_ignored(tmp_path):
    out = tmp_path / "out"
    process(out, "# Exercise\n\n```rust\nfn main() {}\n```\n")
    assert not out.exists()


def test_comment_without_code_block_writes_nothing(tmp_path):
    out = tmp_path / "out"
    process(out, "<!-- File lonely.rs -->\n\nJust text.\n")
    assert not out.exists()


def test_filename_carries_over_intervening_text(tmp_path):
    markdown = "<!-- File a.txt -->\n\nSome prose here.\n\n```\nalpha\n```\n"
    process(tmp_path, markdown)
    assert (tmp_path / "a.txt").read_text(encoding="utf-8") == "alpha\n"


def test_only_first_code_block_is_used(tmp_path):
    markdown = "<!-- File a.txt -->\n\n```\nfirst\n```\n\n```\nsecond\n```\n"
    process(tmp_path, markdown)
    assert [p.name for p in tmp_path.iterdir()] == ["a.txt"]
    assert (tmp_path / "a.txt").read_text(encoding="utf-8") == "first\n"


def test_indented_code_block(tmp_path):
    process(tmp_path, "<!-- File b.txt -->\n\n    indented\n")
    assert (tmp_path / "b.txt").read_text(encoding="utf-8") == "indented\n"


def test_other_comments_are_ignored(tmp_path):
    out = tmp_path / "out"
    process(out, "<!-- Fil a.txt -->\n\n```\ncode\n```\n")
    assert not out.exists()


def test_latest_comment_wins(tmp_path):
    markdown = "<!-- File old.txt -->\n\n<!-- File new.txt -->\n\n```\ncode\n```\n"
    process(tmp_path, markdown)
    assert [p.name for p in tmp_path.iterdir()] == ["new.txt"]
    assert (tmp_path / "new.txt").read_text(encoding="utf-8") == "code\n"