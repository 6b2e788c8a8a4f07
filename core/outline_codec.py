# core/outline_codec.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.

Reader / writer for the djvused outline syntax:

    (bookmarks
     ("Chapter 1" "#3"
      ("Section 1.1" "#5" ) )
     ("Index" "#page0090.djvu" ) )
'''

from __future__ import annotations

from typing import List

from core.log import Log
from core.outline import (
    Entry,
    NamedTarget,
    Outline,
    Reference,
    page_index_from_text,
    reference_text,
)

__all__ = ["MalformedOutline", "parse_outline", "print_outline", "escape_label"]

OUTLINE_HEAD = "(bookmarks"

# Escapes understood inside quoted strings; anything else after a backslash
# is dropped together with the backslash.
_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "t": "\t",
    "r": "\r",
}

class MalformedOutline(ValueError):
    """Outline text could not be parsed."""

    def __init__(self, description: str, text: str = "", offset: int = 0):
        self.description = description
        self.offset = offset
        self.line = text.count("\n", 0, offset) + 1
        self.column = offset - (text.rfind("\n", 0, offset) + 1) + 1
        super().__init__(f"{description} (line {self.line}, column {self.column})")

class _OutlineReader:
    """Recursive-descent reader over one outline text."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def _error(self, description: str) -> MalformedOutline:
        return MalformedOutline(description, self.text, self.pos)

    def _skip_space(self) -> None:
        n = len(self.text)
        while self.pos < n and self.text[self.pos].isspace():
            self.pos += 1

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _expect(self, token: str) -> None:
        if not self.text.startswith(token, self.pos):
            found = self.text[self.pos:self.pos + len(token)] or "end of input"
            raise self._error(f"expected {token!r}, found {found!r}")
        self.pos += len(token)

    def read_outline(self) -> Outline:
        self._skip_space()
        if self.pos >= len(self.text):
            return Outline()

        self._expect(OUTLINE_HEAD)
        entries = self._read_entries()
        self._expect(")")

        self._skip_space()
        if self.pos < len(self.text):
            raise self._error("unexpected text after outline")
        return Outline(entries)

    def _read_entries(self) -> List[Entry]:
        entries = []
        self._skip_space()
        while self._peek() == "(":
            entries.append(self._read_entry())
            self._skip_space()
        return entries

    def _read_entry(self) -> Entry:
        self._expect("(")
        self._skip_space()
        label = self._read_quoted()
        self._skip_space()
        target = self._read_reference()
        children = self._read_entries()
        self._expect(")")
        return Entry(label=label, target=target, children=children)

    def _read_quoted(self) -> str:
        self._expect('"')
        out = []
        text = self.text
        i = self.pos
        n = len(text)
        while i < n:
            c = text[i]
            if c == '"':
                self.pos = i + 1
                return "".join(out)
            if c == "\\":
                i += 1
                if i < n:
                    out.append(_ESCAPES.get(text[i], ""))
            else:
                out.append(c)
            i += 1
        raise self._error("unterminated string")

    def _read_reference(self) -> Reference:
        start = self.pos
        raw = self._read_quoted()
        if not raw.startswith("#"):
            self.pos = start
            raise self._error(f"link {raw!r} does not start with '#'")
        rest = raw[1:]
        page = page_index_from_text(rest)
        if page is not None:
            return page
        return NamedTarget(rest)

def parse_outline(text: str) -> Outline:
    """
    Parse djvused outline text into an Outline.

    Empty (or blank) input is an empty outline. Raises MalformedOutline
    with the location of the first problem otherwise.
    """
    outline = _OutlineReader(text).read_outline()
    Log.debug(f"Parsed outline with {len(outline)} top-level entries", 2)
    return outline

# ---------- writing ----------

def escape_label(text: str) -> str:
    """Escape label or reference text for use between double quotes."""
    return text.replace("\\", "\\\\").replace('"', '\\"')

def _print_entry(entry: Entry, depth: int, out: List[str]) -> None:
    out.append("\n")
    out.append(" " * depth)
    out.append(f'("{escape_label(entry.label)}" "#{escape_label(reference_text(entry.target))}"')
    for child in entry.children:
        _print_entry(child, depth + 1, out)
    out.append(" )")

def print_outline(outline: Outline) -> str:
    """Render an Outline in djvused outline syntax. Never fails."""
    out = [OUTLINE_HEAD]
    for entry in outline:
        _print_entry(entry, 1, out)
    out.append(" )\n")
    return "".join(out)
