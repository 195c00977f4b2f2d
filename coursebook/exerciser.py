"""Extraction of exercise starter code from Markdown."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from markdown_it import MarkdownIt

_FILENAME_START = "<!-- File "
_FILENAME_END = " -->"
_CODE_BLOCKS = ("fence", "code_block")

_log = logging.getLogger(__name__)


def _filename(html: str) -> Optional[str]:
    html = html.strip()
    if (
        len(html) >= len(_FILENAME_START) + len(_FILENAME_END)
        and html.startswith(_FILENAME_START)
        and html.endswith(_FILENAME_END)
    ):
        return html[len(_FILENAME_START) : len(html) - len(_FILENAME_END)]
    return None


def process(output_directory: Union[str, Path], input_contents: str) -> None:
    """Write each code block that follows a ``<!-- File name -->`` comment to that file.

    Code blocks without such a comment are ignored, as are comments that no
    code block follows.
    """
    output_directory = Path(output_directory)
    next_filename: Optional[str] = None
    for token in MarkdownIt("commonmark").parse(input_contents):
        if token.type == "html_block":
            for line in token.content.splitlines():
                name = _filename(line)
                if name is not None:
                    next_filename = name
                    _log.info("Next file: %r", next_filename)
        elif token.type in _CODE_BLOCKS and next_filename is not None:
            target = output_directory / next_filename
            _log.info("Writing %s", target)
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "w", encoding="utf-8", newline="") as output:
                output.write(token.content)
            next_filename = None