'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import AbstractSet, List, Optional

from core.outline import TreePath
from ui.types import FlattenedRow, OutlineShape

def label_height(label: str) -> int:
    """Number of cell rows a label needs: one per line, at least one."""
    return label.count("\n") + 1

def _gather_children(tree: OutlineShape, path: TreePath, expanded: AbstractSet[TreePath],
                     out: List[FlattenedRow]) -> None:
    """Append the row for path, then its visible descendants."""
    n_children = tree.child_count(path)
    label = tree.label(path)
    out.append(FlattenedRow(
        path=path,
        label=label,
        target=tree.target(path),
        has_children=n_children > 0,
        height=label_height(label),
    ))

    # Only descend into expanded entries
    if path not in expanded:
        return

    for i in range(n_children):
        _gather_children(tree, path + (i,), expanded, out)

def flatten_outline(tree: OutlineShape, expanded: AbstractSet[TreePath]) -> List[FlattenedRow]:
    """
    Flatten the outline into the list of visible rows, in depth-first pre-order.

    Top-level entries are always visible; the children of an entry are
    visible only if its path is in `expanded` (and so on up the chain).
    """
    rows: List[FlattenedRow] = []
    for i in range(tree.child_count(())):
        _gather_children(tree, (i,), expanded, rows)
    return rows

def find_row_index(rows: List[FlattenedRow], path: TreePath) -> Optional[int]:
    """Find row index for path."""
    for i, row in enumerate(rows):
        if row.path == path:
            return i
    return None
