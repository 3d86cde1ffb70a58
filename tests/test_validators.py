import pytest

from conftest import build_plan
from floorgraph.core.model import Door, Point, Wall, Window
from floorgraph.engine.validators import InvalidOperation, assert_valid, validate_coordinates, validate_plan


def test_valid_plan_has_no_problems(rectangle, two_squares):
    assert validate_plan(rectangle) == []
    assert_valid(two_squares)


def test_problems_are_listed(rectangle):
    plan = rectangle.replace(
        walls={
            **rectangle.walls,
            "dup": Wall("dup", "b", "a"),
            "loop": Wall("loop", "c", "c"),
            "ghost": Wall("ghost", "a", "zz"),
        },
        doors={"d1": Door("d1", "gone", 0.5)},
        windows={"v1": Window("v1", "w1", 0.01)},
    )

    problems = validate_plan(plan)

    assert any("'dup' duplicates wall 'w1'" in p for p in problems)
    assert any("'loop' starts and ends" in p for p in problems)
    assert any("missing corner 'zz'" in p for p in problems)
    assert any("Door 'd1' references missing wall" in p for p in problems)
    assert any("Window 'v1'" in p and "does not fit" in p for p in problems)

    with pytest.raises(InvalidOperation):
        assert_valid(plan)


def test_non_finite_corner_is_reported():
    plan = build_plan({"a": (float("nan"), 0)}, [])
    assert validate_plan(plan) == ["Corner 'a' has non-finite coordinates"]


def test_validate_coordinates():
    validate_coordinates({"x": 1, "y": 2.5, "point": {"x": 0, "y": 0}, "width": None, "wall": "w1"})

    with pytest.raises(InvalidOperation):
        validate_coordinates({"degrees": float("inf")})
    with pytest.raises(InvalidOperation):
        validate_coordinates({"start": {"x": True, "y": 0}})


def test_validate_point_pairs():
    # corner ids under start/end are left alone
    validate_coordinates({"start": "a", "end": "b"})
    validate_coordinates({"start": [0, 0], "end": (4.5, 4), "point": Point(1, 1)})

    with pytest.raises(InvalidOperation, match="start.x"):
        validate_coordinates({"start": [float("nan"), 0]})
    with pytest.raises(InvalidOperation, match="end.y"):
        validate_coordinates({"end": [0, "inf"]})
    with pytest.raises(InvalidOperation, match="Malformed point"):
        validate_coordinates({"point": 3})
