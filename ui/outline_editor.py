# ui/outline_editor.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional, Protocol, Tuple

from core.djvused import DjvusedError
from core.entry_edit import EntryEditError
from core.log import Log
from core.outline import Entry, Outline, Reference
from ui.decorators import check_read_only
from ui.navigation import NavigationState, selection_after_delete
from ui.surface import DrawingSurface
from ui.types import Rect, ViewportWindow
from ui.viewport import ViewportRenderer

__all__ = ["EditorState", "OutlineEditor"]

class OutlineIO(Protocol):
    def read(self, document: str) -> Outline: ...

    def write(self, document: str, outline: Outline) -> None: ...

EntryEditor = Callable[[Entry], Tuple[str, Reference]]

class EditorState(Enum):
    NAVIGATING = "navigating"
    RUNNING_OTHER_COMMAND = "running_other_command"
    QUITTING = "quitting"

class OutlineEditor:
    """
    Command layer for one editing session.

    Owns the outline of one document together with its navigation state
    and keeps the two consistent: every structural edit fixes up the
    selection and the expanded set before anything is drawn again.
    Commands return True when they did something.
    """

    def __init__(self, document: str, outline: Outline, *,
                 outline_io: Optional[OutlineIO] = None,
                 entry_editor: Optional[EntryEditor] = None,
                 read_only: bool = False):
        self.document = document
        self.outline = outline
        self.nav = NavigationState.for_tree(outline)
        self.outline_io = outline_io
        self.entry_editor = entry_editor
        self.renderer = ViewportRenderer()
        self.state = EditorState.NAVIGATING
        self.modified = False
        self.status = ""
        self._read_only = read_only

    @classmethod
    def load(cls, document: str, outline_io: OutlineIO, **kwargs) -> "OutlineEditor":
        """Read the document's outline and start a session on it."""
        outline = outline_io.read(document)
        editor = cls(document, outline, outline_io=outline_io, **kwargs)
        editor.status = f"Loaded {len(outline)} top-level entries from {document}"
        Log.debug(editor.status, 1)
        return editor

    def is_read_only(self) -> bool:
        return self._read_only

    def render(self, area: Rect, surface: DrawingSurface) -> ViewportWindow:
        return self.renderer.render(self.outline, self.nav, area, surface)

    # ------------------------------------------------------------------ #
    # Navigation
    # ------------------------------------------------------------------ #

    def move_up(self) -> bool:
        before = self.nav.selected
        self.nav.move_up(self.outline)
        return self.nav.selected != before

    def move_down(self) -> bool:
        before = self.nav.selected
        self.nav.move_down(self.outline)
        return self.nav.selected != before

    def move_left(self) -> bool:
        before = (self.nav.selected, len(self.nav.expanded))
        self.nav.move_left()
        return (self.nav.selected, len(self.nav.expanded)) != before

    def move_right(self) -> bool:
        before = len(self.nav.expanded)
        self.nav.move_right(self.outline)
        return len(self.nav.expanded) != before

    def select_first(self) -> bool:
        before = self.nav.selected
        self.nav.select_first(self.outline)
        return self.nav.selected != before

    def select_last(self) -> bool:
        before = self.nav.selected
        self.nav.select_last(self.outline)
        return self.nav.selected != before

    def toggle_selected(self) -> bool:
        if not self.nav.selected or self.outline.child_count(self.nav.selected) == 0:
            return False
        return self.nav.toggle_selected()

    # ------------------------------------------------------------------ #
    # Structural edits
    # ------------------------------------------------------------------ #

    @check_read_only
    def add_entry_below(self) -> bool:
        """
        Add an empty entry right below the selection and select it: as
        first child when the selection is open, else as next sibling.
        With nothing selected the entry becomes the first top-level one.
        """
        selected = self.nav.selected
        if self.nav.is_open(selected):
            new_path = self.outline.insert_first_child(selected)
        else:
            new_path = self.outline.insert_sibling_below(selected)
        self.nav.shift_after_insert(new_path)
        self.nav.move_down(self.outline)

        self.modified = True
        self.status = "Added entry"
        Log.debug(f"Added entry at {list(new_path)}", 2)
        return True

    @check_read_only
    def delete_selected(self) -> bool:
        """Delete the selected entry and its subtree, then repair the selection."""
        selected = self.nav.selected
        if not selected:
            return False

        self.nav.select(selection_after_delete(self.outline, selected))
        removed = self.outline.delete_entry(selected)
        self.nav.shift_after_delete(selected)

        self.modified = True
        self.status = f"Deleted {removed.label!r}"
        Log.debug(f"Deleted entry at {list(selected)}; selection now {list(self.nav.selected)}", 2)
        return True

    @check_read_only
    def edit_selected(self) -> bool:
        """Edit label and link of the selected entry in the external editor."""
        selected = self.nav.selected
        if not selected or self.entry_editor is None:
            return False

        entry = self.outline.get(selected)
        self.state = EditorState.RUNNING_OTHER_COMMAND
        try:
            label, target = self.entry_editor(entry)
        except EntryEditError as e:
            Log.debug(f"Edit of {list(selected)} failed: {e}", 0)
            self.status = str(e)
            return False
        finally:
            self.state = EditorState.NAVIGATING

        if (label, target) == (entry.label, entry.target):
            self.status = "Entry unchanged"
            return False

        self.outline.set_label(selected, label)
        self.outline.set_target(selected, target)
        self.modified = True
        self.status = f"Edited {label!r}"
        Log.debug(f"Edited entry at {list(selected)}", 1)
        return True

    @check_read_only
    def write(self) -> bool:
        """Save the outline back into the document."""
        if self.outline_io is None:
            return False

        self.state = EditorState.RUNNING_OTHER_COMMAND
        try:
            self.outline_io.write(self.document, self.outline)
        except DjvusedError as e:
            Log.debug(f"Write of {self.document} failed: {e}", 0)
            self.status = f"Write failed: {e}"
            return False
        finally:
            self.state = EditorState.NAVIGATING

        self.modified = False
        self.status = f"Wrote outline to {self.document}"
        return True

    def quit(self) -> bool:
        self.state = EditorState.QUITTING
        return True
