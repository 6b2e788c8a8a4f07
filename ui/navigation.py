# ui/navigation.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

from __future__ import annotations

from typing import Iterable, Set

from core.log import Log
from core.outline import TreePath
from ui.types import OutlineShape

__all__ = ["NavigationState", "selection_after_delete"]

class NavigationState:
    """
    Selection, expanded set and scroll offset of one outline view.

    The state knows nothing about entries; every operation that depends on
    the outline's shape takes the tree (anything with child_count) as an
    argument. Rows are ordered depth-first pre-order, so move_up and
    move_down undo each other as long as nothing is expanded, collapsed,
    inserted or deleted in between.
    """

    def __init__(self, selected: Iterable[int] = (), expanded: Iterable[TreePath] = (),
                 scroll_offset: int = 0):
        self.selected: TreePath = tuple(selected)
        self.expanded: Set[TreePath] = {tuple(p) for p in expanded}
        self.scroll_offset: int = scroll_offset

    @classmethod
    def for_tree(cls, tree: OutlineShape) -> "NavigationState":
        """Initial state: first entry selected if there is one, nothing expanded."""
        state = cls()
        state.select_first(tree)
        return state

    def __repr__(self) -> str:
        return (f"NavigationState(selected={self.selected!r}, "
                f"expanded={sorted(self.expanded)!r}, scroll_offset={self.scroll_offset})")

    # ------------------------------------------------------------------ #
    # Expanded set
    # ------------------------------------------------------------------ #

    def is_open(self, path: TreePath) -> bool:
        """The implicit root is always open."""
        path = tuple(path)
        if not path:
            return True
        return path in self.expanded

    def open(self, path: TreePath) -> bool:
        """Expand path. Returns True if the state changed."""
        path = tuple(path)
        if not path or path in self.expanded:
            return False
        self.expanded.add(path)
        return True

    def close(self, path: TreePath) -> bool:
        """Collapse path. Returns True if the state changed."""
        path = tuple(path)
        if path not in self.expanded:
            return False
        self.expanded.discard(path)
        return True

    def toggle(self, path: TreePath) -> bool:
        """Toggle path. Returns True if the state changed."""
        if not self.close(path):
            return self.open(path)
        return True

    def toggle_selected(self) -> bool:
        return self.toggle(self.selected)

    def close_all(self) -> None:
        self.expanded.clear()

    # ------------------------------------------------------------------ #
    # Selection
    # ------------------------------------------------------------------ #

    def select(self, path: Iterable[int]) -> None:
        self.selected = tuple(path)

    def select_first(self, tree: OutlineShape) -> None:
        self.selected = (0,) if tree.child_count(()) > 0 else ()

    def _last_visible_from(self, tree: OutlineShape, path: TreePath) -> TreePath:
        """Deepest, right-most visible descendant of path (path itself if closed)."""
        while self.is_open(path):
            n = tree.child_count(path)
            if n == 0:
                break
            path = path + (n - 1,)
        return path

    def select_last(self, tree: OutlineShape) -> None:
        self.selected = self._last_visible_from(tree, ())

    def move_up(self, tree: OutlineShape) -> None:
        sel = self.selected
        if not sel:
            return
        if sel[-1] == 0:
            self.selected = sel[:-1]
        else:
            self.selected = self._last_visible_from(tree, sel[:-1] + (sel[-1] - 1,))
        Log.debug(f"move_up: {list(sel)} -> {list(self.selected)}", 4)

    def move_down(self, tree: OutlineShape) -> None:
        sel = self.selected
        if not sel:
            self.select_first(tree)
            return

        if self.is_open(sel) and tree.child_count(sel) > 0:
            self.selected = sel + (0,)
        else:
            # Climb until some ancestor (or sel itself) has a next sibling
            child = sel
            while child:
                parent = child[:-1]
                if child[-1] + 1 < tree.child_count(parent):
                    self.selected = parent + (child[-1] + 1,)
                    break
                child = parent
        Log.debug(f"move_down: {list(sel)} -> {list(self.selected)}", 4)

    def move_left(self) -> None:
        """Collapse the selection, or go to its parent if already collapsed."""
        if self.close(self.selected):
            return
        # Never leave a top-level entry for the invisible root
        if len(self.selected) > 1:
            self.selected = self.selected[:-1]

    def move_right(self, tree: OutlineShape) -> None:
        """Expand the selection if it has children."""
        if self.selected and tree.child_count(self.selected) > 0:
            self.open(self.selected)

    # ------------------------------------------------------------------ #
    # Keeping the expanded set aligned with structural edits
    # ------------------------------------------------------------------ #

    def shift_after_insert(self, new_path: TreePath) -> None:
        """An entry was inserted at new_path; later siblings moved one slot down."""
        new_path = tuple(new_path)
        parent, index = new_path[:-1], new_path[-1]
        depth = len(parent)

        shifted = set()
        for p in self.expanded:
            if len(p) > depth and p[:depth] == parent and p[depth] >= index:
                p = p[:depth] + (p[depth] + 1,) + p[depth + 1:]
            shifted.add(p)
        self.expanded = shifted

    def shift_after_delete(self, old_path: TreePath) -> None:
        """The entry at old_path was removed; forget its subtree, slide later siblings up."""
        old_path = tuple(old_path)
        parent, index = old_path[:-1], old_path[-1]
        depth = len(parent)

        shifted = set()
        for p in self.expanded:
            if p[:depth + 1] == old_path:
                continue
            if len(p) > depth and p[:depth] == parent and p[depth] > index:
                p = p[:depth] + (p[depth] - 1,) + p[depth + 1:]
            shifted.add(p)
        self.expanded = shifted

def selection_after_delete(tree: OutlineShape, selected: TreePath) -> TreePath:
    """
    Where the selection goes when the selected entry is about to be deleted.

    An only child hands the selection to its parent, a last child to its
    previous sibling; otherwise the path is kept and will denote the entry
    that slides into the freed slot.
    """
    selected = tuple(selected)
    if not selected:
        return selected

    parent, last = selected[:-1], selected[-1]
    n_siblings = tree.child_count(parent)
    if last == 0 and n_siblings == 1:
        return parent
    if last == n_siblings - 1:
        return parent + (last - 1,)
    return selected
