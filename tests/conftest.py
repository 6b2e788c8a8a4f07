"""Shared fixtures for NavEdit tests."""

import pytest

from core.log import Log
from core.outline import Entry, NamedTarget, Outline, PageIndex


def make_entry(label, page=0, children=None):
    return Entry(label=label, target=PageIndex(page), children=list(children or []))


@pytest.fixture
def sample_outline() -> Outline:
    """Small outline with nesting on two levels.

    A (0,)            -> 1
      A1 (0,0)        -> 2
      A2 (0,1)        -> 3
        A2a (0,1,0)   -> page0004.djvu
    B (1,)            -> 5
    C (2,)            -> 6
      C1 (2,0)        -> 7
    """
    return Outline([
        make_entry("A", 1, [
            make_entry("A1", 2),
            make_entry("A2", 3, [
                Entry(label="A2a", target=NamedTarget("page0004.djvu")),
            ]),
        ]),
        make_entry("B", 5),
        make_entry("C", 6, [make_entry("C1", 7)]),
    ])


@pytest.fixture
def flat_outline() -> Outline:
    """Three top-level entries X, Y, Z without children."""
    return Outline([make_entry("X", 1), make_entry("Y", 2), make_entry("Z", 3)])


@pytest.fixture(autouse=True)
def quiet_log():
    """Keep the session log at its default verbosity between tests."""
    Log.set_verbosity(0)
    yield
    Log.set_verbosity(0)
