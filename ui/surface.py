# ui/surface.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from enum import Enum
from typing import List, Protocol, Tuple

__all__ = ["Style", "DrawingSurface", "RecordingSurface"]

class Style(Enum):
    NORMAL = "normal"
    SELECTED = "selected"     # drawn inverse

class DrawingSurface(Protocol):
    """Anything the viewport renderer can draw text runs onto."""

    def draw_text(self, col: int, row: int, text: str, style: Style) -> None: ...

class RecordingSurface:
    """
    Character-grid surface without any display.

    Keeps every draw call and a width x height grid of characters and
    styles; cells outside the grid are silently clipped. Used for text
    dumps of the view and by the tests.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.calls: List[Tuple[int, int, str, Style]] = []
        self._chars = [[" "] * width for _ in range(height)]
        self._styles = [[Style.NORMAL] * width for _ in range(height)]

    def draw_text(self, col: int, row: int, text: str, style: Style) -> None:
        self.calls.append((col, row, text, style))
        if not 0 <= row < self.height:
            return
        for i, ch in enumerate(text):
            x = col + i
            if 0 <= x < self.width:
                self._chars[row][x] = ch
                self._styles[row][x] = style

    def lines(self) -> List[str]:
        """Grid contents, one string per row, trailing blanks stripped."""
        return ["".join(r).rstrip() for r in self._chars]

    def style_at(self, col: int, row: int) -> Style:
        return self._styles[row][col]

    def selected_rows(self) -> List[int]:
        """Grid rows that contain any SELECTED cell."""
        return [y for y, r in enumerate(self._styles) if Style.SELECTED in r]

    def text(self) -> str:
        return "\n".join(self.lines()).rstrip("\n") + "\n"
