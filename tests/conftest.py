"""Shared plan fixtures."""

import pytest

from floorgraph.core.model import Corner, Plan, Wall


def build_plan(corners, walls, doors=(), windows=()):
    """Build a plan from ``{id: (x, y)}`` corners and ``(id, start, end)`` walls."""
    return Plan(
        corners={cid: Corner(cid, float(x), float(y)) for cid, (x, y) in corners.items()},
        walls={wid: Wall(wid, start, end) for wid, start, end in walls},
        doors={d.id: d for d in doors},
        windows={w.id: w for w in windows},
    )


@pytest.fixture
def rectangle():
    """A 10 x 8 ft room."""
    return build_plan(
        {"a": (0, 0), "b": (10, 0), "c": (10, 8), "d": (0, 8)},
        [("w1", "a", "b"), ("w2", "b", "c"), ("w3", "c", "d"), ("w4", "d", "a")],
    )


@pytest.fixture
def two_squares():
    """Two unit squares sharing the divider b-e."""
    return build_plan(
        {"a": (0, 0), "b": (1, 0), "c": (2, 0), "d": (2, 1), "e": (1, 1), "f": (0, 1)},
        [
            ("ab", "a", "b"),
            ("bc", "b", "c"),
            ("cd", "c", "d"),
            ("de", "d", "e"),
            ("ef", "e", "f"),
            ("fa", "f", "a"),
            ("be", "b", "e"),
        ],
    )


@pytest.fixture
def l_shape():
    """An L-shaped room of 12 sq ft."""
    return build_plan(
        {"a": (0, 0), "b": (4, 0), "c": (4, 2), "d": (2, 2), "e": (2, 4), "f": (0, 4)},
        [
            ("w1", "a", "b"),
            ("w2", "b", "c"),
            ("w3", "c", "d"),
            ("w4", "d", "e"),
            ("w5", "e", "f"),
            ("w6", "f", "a"),
        ],
    )
