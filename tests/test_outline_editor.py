"""Tests for the editing session command layer."""

import subprocess
from unittest.mock import patch

import pytest

from core.djvused import DjvusedError
from core.entry_edit import EntryEditError, ExternalEntryEditor
from core.outline import Entry, NamedTarget, Outline, PageIndex
from core.outline_codec import print_outline
from ui.keys import KEY_DOWN, KEY_SPACE, bound_keys, handle_key
from ui.outline_editor import EditorState, OutlineEditor
from ui.surface import RecordingSurface
from ui.types import Rect


class FakeOutlineIO:
    """In-memory stand-in for djvused."""

    def __init__(self, outline=None, fail_write=False):
        self.outline = outline if outline is not None else Outline()
        self.fail_write = fail_write
        self.written = []

    def read(self, document):
        return self.outline

    def write(self, document, outline):
        if self.fail_write:
            raise DjvusedError("set-outline failed", 10, "cannot write")
        self.written.append((document, print_outline(outline)))


def labels(entries):
    return [e.label for e in entries]


@pytest.fixture
def editor(sample_outline):
    return OutlineEditor("book.djvu", sample_outline, outline_io=FakeOutlineIO(sample_outline))


class TestLoad:
    """Starting a session."""

    def test_load_reads_outline(self, sample_outline):
        io = FakeOutlineIO(sample_outline)
        editor = OutlineEditor.load("book.djvu", io)
        assert editor.outline is sample_outline
        assert editor.nav.selected == (0,)
        assert editor.state is EditorState.NAVIGATING
        assert not editor.modified
        assert "3 top-level entries" in editor.status

    def test_load_empty_outline(self):
        editor = OutlineEditor.load("empty.djvu", FakeOutlineIO())
        assert editor.nav.selected == ()
        assert len(editor.outline) == 0


class TestNavigationCommands:
    """Commands report whether they changed anything."""

    def test_move_down_and_up(self, editor):
        assert editor.move_down() is True
        assert editor.nav.selected == (1,)
        assert editor.move_up() is True
        assert editor.nav.selected == (0,)

    def test_move_down_at_end(self, editor):
        editor.select_last()
        assert editor.move_down() is False

    def test_right_then_left(self, editor):
        assert editor.move_right() is True
        assert editor.nav.expanded == {(0,)}
        assert editor.move_right() is False
        assert editor.move_left() is True
        assert editor.nav.expanded == set()
        assert editor.move_left() is False
        assert editor.nav.selected == (0,)

    def test_toggle_selected_needs_children(self, editor):
        assert editor.toggle_selected() is True
        assert editor.nav.is_open((0,))
        editor.nav.select((1,))
        assert editor.toggle_selected() is False

    def test_select_first_and_last(self, editor):
        assert editor.select_last() is True
        assert editor.nav.selected == (2,)
        assert editor.select_first() is True
        assert editor.select_first() is False

    def test_quit(self, editor):
        assert editor.quit() is True
        assert editor.state is EditorState.QUITTING

    def test_render_through_editor(self, editor):
        surface = RecordingSurface(10, 3)
        window = editor.render(Rect(0, 0, 10, 3), surface)
        assert window.rows_drawn == 3
        assert surface.selected_rows() == [0]


class TestAddEntry:
    """Adding entries below the selection."""

    def test_add_to_empty_outline(self):
        editor = OutlineEditor("empty.djvu", Outline())
        assert editor.add_entry_below() is True
        assert len(editor.outline) == 1
        assert editor.outline.get((0,)) == Entry()
        assert editor.nav.selected == (0,)
        assert editor.modified

    def test_add_below_collapsed_entry_adds_sibling(self, editor):
        assert editor.add_entry_below() is True
        assert labels(editor.outline) == ["A", "", "B", "C"]
        assert editor.nav.selected == (1,)

    def test_add_below_open_entry_adds_first_child(self, editor):
        editor.move_right()
        editor.add_entry_below()
        assert labels(editor.outline.get((0,)).children) == ["", "A1", "A2"]
        assert editor.nav.selected == (0, 0)

    def test_add_keeps_expanded_entries_open(self, editor):
        editor.nav.open((2,))
        editor.nav.select((1,))
        editor.add_entry_below()
        assert editor.nav.selected == (2,)
        assert editor.nav.expanded == {(3,)}
        assert editor.outline.label((3,)) == "C"


class TestDeleteEntry:
    """Deleting the selection and repairing it."""

    def test_delete_middle_entry(self, flat_outline):
        editor = OutlineEditor("x.djvu", flat_outline)
        editor.nav.select((1,))
        assert editor.delete_selected() is True
        assert labels(editor.outline) == ["X", "Z"]
        assert editor.nav.selected == (1,)
        assert editor.modified

    def test_delete_last_entry(self, flat_outline):
        editor = OutlineEditor("x.djvu", flat_outline)
        editor.select_last()
        editor.delete_selected()
        assert editor.nav.selected == (1,)
        assert editor.outline.label(editor.nav.selected) == "Y"

    def test_delete_only_child(self, editor):
        editor.nav.open((2,))
        editor.nav.select((2, 0))
        editor.delete_selected()
        assert editor.nav.selected == (2,)
        assert editor.outline.child_count((2,)) == 0

    def test_delete_forgets_expanded_subtree(self, editor):
        editor.nav.open((0,))
        editor.nav.open((0, 1))
        editor.nav.open((2,))
        editor.delete_selected()
        assert labels(editor.outline) == ["B", "C"]
        assert editor.nav.expanded == {(1,)}

    def test_delete_everything(self):
        editor = OutlineEditor("x.djvu", Outline([Entry("only")]))
        editor.delete_selected()
        assert len(editor.outline) == 0
        assert editor.nav.selected == ()
        assert editor.delete_selected() is False


class TestEditEntry:
    """Handing one entry to the entry editor."""

    def test_edit_applies_label_and_target(self, sample_outline):
        seen = []

        def fake_editor(entry):
            seen.append((entry.label, editor.state))
            return "Preface", NamedTarget("preface.djvu")

        editor = OutlineEditor("book.djvu", sample_outline, entry_editor=fake_editor)
        editor.nav.select((1,))
        assert editor.edit_selected() is True
        assert seen == [("B", EditorState.RUNNING_OTHER_COMMAND)]
        assert editor.outline.get((1,)) == Entry("Preface", NamedTarget("preface.djvu"))
        assert editor.state is EditorState.NAVIGATING
        assert editor.modified

    def test_unchanged_edit(self, sample_outline):
        editor = OutlineEditor("book.djvu", sample_outline,
                               entry_editor=lambda entry: (entry.label, entry.target))
        assert editor.edit_selected() is False
        assert not editor.modified

    def test_untouched_multi_line_label_is_not_modified(self, tmp_path):
        outline = Outline([Entry("first\nsecond", PageIndex(4))])
        entry_editor = ExternalEntryEditor(tmp_path / "entry.txt", "true")
        editor = OutlineEditor("book.djvu", outline, entry_editor=entry_editor)
        done = subprocess.CompletedProcess(["true"], 0)
        with patch("core.entry_edit.subprocess.run", return_value=done):
            assert editor.edit_selected() is False
        assert editor.outline.get((0,)) == Entry("first\nsecond", PageIndex(4))
        assert not editor.modified

    def test_failed_edit_keeps_entry(self, sample_outline):
        def broken_editor(entry):
            raise EntryEditError("Edited entry has 1 line(s)")

        editor = OutlineEditor("book.djvu", sample_outline, entry_editor=broken_editor)
        assert editor.edit_selected() is False
        assert editor.outline.label((0,)) == "A"
        assert editor.status == "Edited entry has 1 line(s)"
        assert editor.state is EditorState.NAVIGATING
        assert not editor.modified

    def test_edit_without_selection(self):
        editor = OutlineEditor("x.djvu", Outline(), entry_editor=lambda e: ("a", PageIndex(1)))
        assert editor.edit_selected() is False


class TestWrite:
    """Saving the outline back."""

    def test_write_saves_and_clears_modified(self, editor):
        editor.add_entry_below()
        assert editor.write() is True
        assert not editor.modified
        document, text = editor.outline_io.written[-1]
        assert document == "book.djvu"
        assert text.startswith('(bookmarks\n ("A" "#1"')
        assert editor.state is EditorState.NAVIGATING

    def test_failed_write_keeps_modified(self, sample_outline):
        editor = OutlineEditor("book.djvu", sample_outline,
                               outline_io=FakeOutlineIO(sample_outline, fail_write=True))
        editor.add_entry_below()
        assert editor.write() is False
        assert editor.modified
        assert editor.status.startswith("Write failed")
        assert editor.state is EditorState.NAVIGATING

    def test_write_without_io(self, flat_outline):
        assert OutlineEditor("x.djvu", flat_outline).write() is False


class TestReadOnly:
    """Read-only sessions allow browsing only."""

    @pytest.fixture
    def read_only(self, sample_outline):
        return OutlineEditor("book.djvu", sample_outline,
                             outline_io=FakeOutlineIO(sample_outline),
                             entry_editor=lambda e: ("changed", PageIndex(1)),
                             read_only=True)

    @pytest.mark.parametrize("command", ["add_entry_below", "delete_selected", "edit_selected", "write"])
    def test_modifying_commands_are_refused(self, read_only, sample_outline, command):
        before = print_outline(sample_outline)
        assert getattr(read_only, command)() is False
        assert print_outline(read_only.outline) == before
        assert read_only.status.startswith("Read-only")
        assert read_only.outline_io.written == []

    def test_navigation_still_works(self, read_only):
        assert read_only.move_down() is True
        assert read_only.move_right() is False


class TestKeys:
    """Key routing."""

    def test_bound_keys(self):
        keys = bound_keys()
        for key in ["q", "h", "j", "k", "l", "i", "w", "o", "d"]:
            assert key in keys

    def test_vi_keys_move(self, editor):
        assert handle_key(editor, "j") is True
        assert editor.nav.selected == (1,)
        handle_key(editor, "k")
        handle_key(editor, "l")
        assert editor.nav.expanded == {(0,)}
        handle_key(editor, KEY_DOWN)
        assert editor.nav.selected == (0, 0)
        handle_key(editor, "h")
        assert editor.nav.selected == (0,)

    def test_bound_key_without_effect_is_still_handled(self, editor):
        editor.nav.select((1,))
        assert handle_key(editor, KEY_SPACE) is True
        assert editor.nav.expanded == set()

    def test_unknown_key(self, editor):
        assert handle_key(editor, "x") is False

    def test_edit_keys(self, editor):
        handle_key(editor, "o")
        assert labels(editor.outline) == ["A", "", "B", "C"]
        handle_key(editor, "d")
        assert labels(editor.outline) == ["A", "B", "C"]
        handle_key(editor, "w")
        assert len(editor.outline_io.written) == 1
        handle_key(editor, "q")
        assert editor.state is EditorState.QUITTING
