# core/outline.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple, Union

__all__ = [
    "TreePath",
    "PageIndex",
    "NamedTarget",
    "Reference",
    "Entry",
    "Outline",
    "InvalidPath",
    "reference_text",
    "page_index_from_text",
]

# A path is the tuple of child indices from the forest root down to an entry.
TreePath = Tuple[int, ...]

_DIGITS_RE = re.compile(r"[0-9]+")
_MAX_PAGE_INDEX = 2**32 - 1

@dataclass(frozen=True)
class PageIndex:
    """Link to a page by its number."""
    page: int

    def __str__(self) -> str:
        return str(self.page)

@dataclass(frozen=True)
class NamedTarget:
    """Link to a symbolic target, e.g. a component file name."""
    name: str

    def __str__(self) -> str:
        return self.name

Reference = Union[PageIndex, NamedTarget]

def reference_text(reference: Reference) -> str:
    """Text of a reference as it appears after the '#' in the exchange format."""
    return str(reference)

def page_index_from_text(text: str) -> PageIndex | None:
    """Return a PageIndex if text is wholly an unsigned 32-bit number, else None."""
    if not _DIGITS_RE.fullmatch(text):
        return None
    page = int(text)
    if page > _MAX_PAGE_INDEX:
        return None
    return PageIndex(page)

@dataclass
class Entry:
    """
    One outline node.

    • label     – text shown for the bookmark (may contain newlines)
    • target    – where the bookmark points
    • children  – ordered sub-entries
    """
    label: str = ""
    target: Reference = field(default_factory=lambda: PageIndex(0))
    children: List[Entry] = field(default_factory=list)

class InvalidPath(LookupError):
    """A path does not resolve against the current outline shape."""

    def __init__(self, path: TreePath, reason: str):
        self.path = tuple(path)
        self.reason = reason
        super().__init__(f"Invalid outline path {list(self.path)}: {reason}")

class Outline:
    """
    Mutable forest of outline entries addressed by TreePath.

    Entries carry no parent pointers or ids; every operation re-resolves its
    path against the current shape, so callers must not hold on to paths
    across an insert or delete that happened before them in traversal order.
    """

    def __init__(self, entries: List[Entry] | None = None):
        self.entries: List[Entry] = list(entries) if entries is not None else []

    def __repr__(self) -> str:
        return f"Outline({self.entries!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Outline):
            return NotImplemented
        return self.entries == other.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __getitem__(self, path: TreePath) -> Entry:
        return self.get(path)

    # ------------------------------------------------------------------ #
    # resolution
    # ------------------------------------------------------------------ #

    def _children_at(self, path: TreePath) -> List[Entry]:
        """Child list of the entry at path (top-level list for the empty path)."""
        siblings = self.entries
        for depth, index in enumerate(path):
            if not 0 <= index < len(siblings):
                raise InvalidPath(path, f"index {index} out of range at depth {depth}")
            siblings = siblings[index].children
        return siblings

    def _parent_list(self, path: TreePath) -> Tuple[List[Entry], int]:
        """Return (sibling list containing path, index within it)."""
        path = tuple(path)
        if not path:
            raise InvalidPath(path, "the forest root has no parent")
        siblings = self._children_at(path[:-1])
        index = path[-1]
        if not 0 <= index < len(siblings):
            raise InvalidPath(path, f"index {index} out of range at depth {len(path) - 1}")
        return siblings, index

    def get(self, path: TreePath) -> Entry:
        """Resolve path to its entry. The entry may be mutated in place."""
        siblings, index = self._parent_list(path)
        return siblings[index]

    def child_count(self, path: TreePath = ()) -> int:
        return len(self._children_at(tuple(path)))

    def label(self, path: TreePath) -> str:
        return self.get(path).label

    def target(self, path: TreePath) -> Reference:
        return self.get(path).target

    def walk(self) -> Iterator[Tuple[TreePath, Entry]]:
        """Yield (path, entry) for every entry in depth-first pre-order."""
        stack = [((i,), e) for i, e in reversed(list(enumerate(self.entries)))]
        while stack:
            path, entry = stack.pop()
            yield path, entry
            for i in range(len(entry.children) - 1, -1, -1):
                stack.append((path + (i,), entry.children[i]))

    # ---------- structural edits ----------

    def insert_first_child(self, path: TreePath) -> TreePath:
        """Insert a default entry as first child of path; return its path."""
        path = tuple(path)
        self._children_at(path).insert(0, Entry())
        return path + (0,)

    def insert_sibling_below(self, path: TreePath) -> TreePath:
        """Insert a default entry right after path, at the same depth; return its path."""
        siblings, index = self._parent_list(path)
        siblings.insert(index + 1, Entry())
        return tuple(path[:-1]) + (index + 1,)

    def delete_entry(self, path: TreePath) -> Entry:
        """Remove the entry at path together with its subtree; return it."""
        siblings, index = self._parent_list(path)
        return siblings.pop(index)

    # ---------- field edits ----------

    def set_label(self, path: TreePath, text: str) -> None:
        self.get(path).label = text

    def set_target(self, path: TreePath, reference: Reference) -> None:
        self.get(path).target = reference
