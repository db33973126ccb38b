"""
Read-only document access for the completion engine.

The engine never touches editor types directly; it reads lines through
the small DocumentView protocol so tests can feed plain lists of lines.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol, Sequence


WORD_CHAR = re.compile(r"\w")


class DocumentView(Protocol):
    """Minimal line-oriented view over a text buffer."""

    @property
    def line_count(self) -> int: ...

    def line_text(self, line: int) -> str: ...


@dataclass(frozen=True)
class Cursor:
    """Zero-based cursor position."""

    line: int
    column: int


class LinesDocumentView:
    """DocumentView over a sequence of lines (e.g. pygls TextDocument.lines)."""

    def __init__(self, lines: Sequence[str]) -> None:
        self._lines = [line.rstrip("\r\n") for line in lines]

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_text(self, line: int) -> str:
        if 0 <= line < len(self._lines):
            return self._lines[line]
        return ""


def line_prefix(document: DocumentView, cursor: Cursor) -> str:
    """Text of the cursor line up to the cursor column."""
    return document.line_text(cursor.line)[: max(cursor.column, 0)]


def word_at(line_text: str, column: int) -> str | None:
    """
    Return the word touching the cursor, or None.

    The word extends both sides of the cursor, so completing in the
    middle of `backgr|Color` yields `backgrColor`.
    """
    column = min(max(column, 0), len(line_text))

    start = column
    while start > 0 and WORD_CHAR.match(line_text[start - 1]):
        start -= 1

    end = column
    while end < len(line_text) and WORD_CHAR.match(line_text[end]):
        end += 1

    if start == end:
        return None
    return line_text[start:end]
