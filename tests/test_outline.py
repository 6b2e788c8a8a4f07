"""Tests for the path-addressed outline model."""

import pytest

from core.outline import (
    Entry,
    InvalidPath,
    NamedTarget,
    Outline,
    PageIndex,
    page_index_from_text,
    reference_text,
)


def labels(entries):
    return [e.label for e in entries]


class TestResolution:
    """Resolving paths against the current shape."""

    def test_get_nested_entry(self, sample_outline):
        assert sample_outline.get((0, 1, 0)).label == "A2a"
        assert sample_outline[(2, 0)].label == "C1"

    def test_child_count_of_root_and_entries(self, sample_outline):
        assert sample_outline.child_count() == 3
        assert sample_outline.child_count(()) == 3
        assert sample_outline.child_count((0,)) == 2
        assert sample_outline.child_count((0, 1)) == 1
        assert sample_outline.child_count((1,)) == 0

    def test_label_and_target(self, sample_outline):
        assert sample_outline.label((1,)) == "B"
        assert sample_outline.target((1,)) == PageIndex(5)
        assert sample_outline.target((0, 1, 0)) == NamedTarget("page0004.djvu")

    def test_get_root_is_invalid(self, sample_outline):
        with pytest.raises(InvalidPath):
            sample_outline.get(())

    @pytest.mark.parametrize("path", [(3,), (0, 2), (1, 0), (0, 1, 0, 0), (-1,)])
    def test_out_of_range_paths_raise(self, sample_outline, path):
        with pytest.raises(InvalidPath) as excinfo:
            sample_outline.get(path)
        assert excinfo.value.path == path

    def test_child_count_of_missing_entry_raises(self, sample_outline):
        with pytest.raises(InvalidPath):
            sample_outline.child_count((7,))

    def test_invalid_path_is_a_lookup_error(self, sample_outline):
        with pytest.raises(LookupError):
            sample_outline.label((9, 9))

    def test_walk_is_pre_order(self, sample_outline):
        paths = [p for p, _ in sample_outline.walk()]
        assert paths == [(0,), (0, 0), (0, 1), (0, 1, 0), (1,), (2,), (2, 0)]

    def test_walk_of_empty_outline(self):
        assert list(Outline().walk()) == []


class TestStructuralEdits:
    """Insert and delete keep paths meaningful."""

    def test_insert_sibling_below_shifts_later_siblings(self, flat_outline):
        new_path = flat_outline.insert_sibling_below((0,))
        assert new_path == (1,)
        assert labels(flat_outline) == ["X", "", "Y", "Z"]

    def test_inserted_entry_has_defaults(self, flat_outline):
        new_path = flat_outline.insert_sibling_below((2,))
        entry = flat_outline.get(new_path)
        assert entry.label == ""
        assert entry.target == PageIndex(0)
        assert entry.children == []

    def test_insert_first_child(self, sample_outline):
        new_path = sample_outline.insert_first_child((0,))
        assert new_path == (0, 0)
        assert labels(sample_outline.get((0,)).children) == ["", "A1", "A2"]

    def test_insert_first_child_of_root(self):
        outline = Outline()
        assert outline.insert_first_child(()) == (0,)
        assert len(outline) == 1

    def test_insert_sibling_below_root_is_invalid(self):
        with pytest.raises(InvalidPath):
            Outline().insert_sibling_below(())

    def test_insert_at_missing_path_is_invalid(self, flat_outline):
        with pytest.raises(InvalidPath):
            flat_outline.insert_first_child((5,))
        assert len(flat_outline) == 3

    def test_delete_removes_subtree(self, sample_outline):
        removed = sample_outline.delete_entry((0,))
        assert removed.label == "A"
        assert len(removed.children) == 2
        assert labels(sample_outline) == ["B", "C"]
        assert sample_outline.child_count((1,)) == 1

    def test_delete_middle_entry(self, flat_outline):
        flat_outline.delete_entry((1,))
        assert labels(flat_outline) == ["X", "Z"]

    def test_delete_root_is_invalid(self, flat_outline):
        with pytest.raises(InvalidPath):
            flat_outline.delete_entry(())

    def test_set_label_and_target(self, sample_outline):
        sample_outline.set_label((2, 0), "Appendix")
        sample_outline.set_target((2, 0), NamedTarget("appendix.djvu"))
        assert sample_outline.get((2, 0)) == Entry("Appendix", NamedTarget("appendix.djvu"))

    def test_equality_is_structural(self, flat_outline):
        other = Outline([Entry("X", PageIndex(1)), Entry("Y", PageIndex(2)), Entry("Z", PageIndex(3))])
        assert flat_outline == other
        other.set_label((2,), "z")
        assert flat_outline != other


class TestReferences:
    """Page numbers versus named targets."""

    def test_reference_text(self):
        assert reference_text(PageIndex(12)) == "12"
        assert reference_text(NamedTarget("intro.djvu")) == "intro.djvu"

    @pytest.mark.parametrize("text, expected", [
        ("0", PageIndex(0)),
        ("756", PageIndex(756)),
        ("007", PageIndex(7)),
        ("4294967295", PageIndex(4294967295)),
    ])
    def test_page_index_from_digits(self, text, expected):
        assert page_index_from_text(text) == expected

    @pytest.mark.parametrize("text", ["", "12a", "-3", "+3", " 3", "4294967296", "page0008.djvu", "١٢"])
    def test_non_page_text(self, text):
        assert page_index_from_text(text) is None
