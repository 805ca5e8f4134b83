"""Open document text and cursor-relative text extraction."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

_TRAILING_WORD_RE = re.compile(r"\w+$")


class DocumentStore:
    """uri → full document text. Every change replaces the whole text."""

    def __init__(self) -> None:
        self._texts: dict[str, str] = {}

    def open(self, uri: str, text: str) -> None:
        self._texts[uri] = text

    def change(self, uri: str, changes: Sequence[dict[str, Any]]) -> None:
        """Apply a full-sync change list. Only the first entry is used."""
        if not changes or not isinstance(changes[0], dict):
            return
        text = changes[0].get("text")
        if isinstance(text, str):
            self._texts[uri] = text

    def get(self, uri: str) -> str | None:
        return self._texts.get(uri)

    def __contains__(self, uri: object) -> bool:
        return uri in self._texts

    def __len__(self) -> int:
        return len(self._texts)


def _line_before_cursor(text: str, line: int, character: int) -> str:
    lines = text.split("\n")
    if not 0 <= line < len(lines):
        return ""
    current = lines[line].rstrip("\r")
    # character counts UTF-16 code units; a split surrogate pair is dropped
    units = current.encode("utf-16-le")[: max(character, 0) * 2]
    return units.decode("utf-16-le", errors="ignore")


def current_word(text: str, line: int, character: int) -> str:
    """Identifier characters immediately before the cursor."""
    match = _TRAILING_WORD_RE.search(_line_before_cursor(text, line, character))
    return match.group(0) if match else ""


def completion_context(text: str, line: int, character: int) -> str:
    """Text of the cursor's line before the current word.

    >>> completion_context("Super::Beg", 0, 10)
    'Super::'
    """
    before = _line_before_cursor(text, line, character)
    word = current_word(text, line, character)
    return before[: len(before) - len(word)]
