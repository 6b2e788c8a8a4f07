# ui/types.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from core.outline import Reference, TreePath


class OutlineShape(Protocol):
    """
    Read-only view of anything tree-shaped that navigation and rendering
    can work against. core.outline.Outline satisfies it.
    """

    def child_count(self, path: TreePath) -> int: ...

    def label(self, path: TreePath) -> str: ...

    def target(self, path: TreePath) -> Reference: ...


@dataclass(slots=True, frozen=True)
class FlattenedRow:
    """
    A single visible row of the outline view.

    • path          – TreePath of the entry this row represents
    • label         – entry label (may span several lines)
    • target        – entry link target
    • has_children  – whether the entry has any children
    • height        – number of cell rows the label occupies (>= 1)
    """
    path: TreePath
    label: str
    target: Reference
    has_children: bool
    height: int = 1

    @property
    def depth(self) -> int:
        """Tree-indent level (top-level entries = 0)."""
        return len(self.path) - 1


@dataclass(slots=True, frozen=True)
class Rect:
    """Drawing area in cell units."""
    col: int
    row: int
    width: int
    height: int


@dataclass(slots=True, frozen=True)
class ViewportWindow:
    """Result of one render: rows[start:end] of the flattened list were drawn."""
    start: int
    end: int
    selected_index: int
    total_rows: int

    @property
    def rows_drawn(self) -> int:
        return self.end - self.start
