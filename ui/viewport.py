# ui/viewport.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

from __future__ import annotations

from typing import List, Sequence, Tuple

from core.log import Log
from ui.constants import INDENT_COLS, NODE_CLOSED_GLYPH, NODE_LEAF_GLYPH, NODE_OPEN_GLYPH
from ui.model import find_row_index, flatten_outline
from ui.navigation import NavigationState
from ui.surface import DrawingSurface, Style
from ui.types import FlattenedRow, OutlineShape, Rect, ViewportWindow

__all__ = ["ViewportRenderer", "fit_window"]

def fit_window(heights: Sequence[int], offset: int, selected_idx: int, available: int) -> Tuple[int, int]:
    """
    Pick the rows [start, end) to show in `available` cell rows.

    Starts from the previous offset (or the selection, if that is above it)
    and fills downward. If the selection is still below the window, rows are
    added at the bottom and dropped at the top until it fits, so the view
    moves as little as possible. The selected row itself is never dropped,
    even when it alone is taller than the area.
    """
    n = len(heights)
    start = min(offset, selected_idx)
    end = start
    used = 0

    while end < n and used + heights[end] <= available:
        used += heights[end]
        end += 1

    while selected_idx >= end:
        used += heights[end]
        end += 1
        while used > available and start < selected_idx:
            used -= heights[start]
            start += 1

    return start, end

def _printable(text: str) -> str:
    """Control characters would garble a cell grid; show them as blanks."""
    return "".join(" " if ord(c) < 32 else c for c in text)

class ViewportRenderer:
    """Draws the visible part of an outline and keeps the selection in view."""

    def __init__(self, indent_cols: int = INDENT_COLS,
                 open_glyph: str = NODE_OPEN_GLYPH,
                 closed_glyph: str = NODE_CLOSED_GLYPH,
                 leaf_glyph: str = NODE_LEAF_GLYPH):
        self.indent_cols = indent_cols
        self.open_glyph = open_glyph
        self.closed_glyph = closed_glyph
        self.leaf_glyph = leaf_glyph

    def glyph_for(self, row: FlattenedRow, nav: NavigationState) -> str:
        if not row.has_children:
            return self.leaf_glyph
        if row.path in nav.expanded:
            return self.open_glyph
        return self.closed_glyph

    def layout(self, tree: OutlineShape, nav: NavigationState, area: Rect) -> Tuple[List[FlattenedRow], ViewportWindow]:
        """
        Flatten the tree and fit the window, updating nav.scroll_offset.
        Nothing is drawn.
        """
        rows = flatten_outline(tree, nav.expanded)
        if not rows or area.width < 1 or area.height < 1:
            return rows, ViewportWindow(start=nav.scroll_offset, end=nav.scroll_offset,
                                        selected_index=0, total_rows=len(rows))

        selected_idx = 0
        if nav.selected:
            selected_idx = find_row_index(rows, nav.selected) or 0

        start, end = fit_window([r.height for r in rows], nav.scroll_offset, selected_idx, area.height)
        nav.scroll_offset = start

        Log.debug(f"viewport rows [{start}, {end}) of {len(rows)}, selection at {selected_idx}", 5)
        return rows, ViewportWindow(start=start, end=end, selected_index=selected_idx, total_rows=len(rows))

    def render(self, tree: OutlineShape, nav: NavigationState, area: Rect,
               surface: DrawingSurface) -> ViewportWindow:
        """Lay out and draw the visible rows onto surface."""
        rows, window = self.layout(tree, nav, area)
        if window.rows_drawn == 0:
            return window

        bottom = area.row + area.height
        y = area.row
        for row in rows[window.start:window.end]:
            if y >= bottom:
                break
            self._draw_row(row, nav, area, y, bottom, surface)
            y += row.height
        return window

    def _draw_row(self, row: FlattenedRow, nav: NavigationState, area: Rect, y: int,
                  bottom: int, surface: DrawingSurface) -> None:
        style = Style.SELECTED if row.path == nav.selected else Style.NORMAL
        indent = " " * (row.depth * self.indent_cols)
        glyph = self.glyph_for(row, nav)

        for j, line in enumerate(row.label.split("\n")):
            if y + j >= bottom:
                break
            prefix = glyph if j == 0 else " " * len(glyph)
            text = indent + prefix + _printable(line)
            if style is Style.SELECTED:
                # Highlight the full row width
                text = text.ljust(area.width)
            text = text[:area.width]
            if text:
                surface.draw_text(area.col, y + j, text, style)
