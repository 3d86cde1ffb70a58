import pytest

from conftest import build_plan
from floorgraph.core.model import Door, Point, Selection, Window
from floorgraph.engine.rooms import detect_rooms
from floorgraph.engine.validators import validate_plan
from floorgraph.geom import edit


@pytest.fixture
def straight_run():
    """Two collinear walls a-b (4 ft) and b-c (6 ft) with an opening on each."""
    return build_plan(
        {"a": (0, 0), "b": (4, 0), "c": (10, 0)},
        [("w1", "a", "b"), ("w2", "b", "c")],
        doors=[Door("door1", "w1", 0.5)],
        windows=[Window("win1", "w2", 0.5)],
    )


# --------------------------------------------------------------------------- #
# delete_corner
# --------------------------------------------------------------------------- #
def test_delete_corner_merges_two_walls(straight_run):
    plan = edit.delete_corner(straight_run, "b")

    assert set(plan.corners) == {"a", "c"}
    assert len(plan.walls) == 1
    (merged,) = plan.walls.values()
    assert merged.id not in ("w1", "w2")
    assert (merged.start_corner_id, merged.end_corner_id) == ("a", "c")

    assert plan.doors["door1"].wall_id == merged.id
    assert plan.doors["door1"].position == pytest.approx(0.5 * 4 / 10)
    assert plan.windows["win1"].wall_id == merged.id
    assert plan.windows["win1"].position == pytest.approx((4 + 0.5 * 6) / 10)


def test_delete_corner_at_a_bend_keeps_openings_on_the_wall():
    plan = build_plan(
        {"a": (0, 0), "b": (4, 0), "c": (4, 4)},
        [("w1", "a", "b"), ("w2", "b", "c")],
        doors=[Door("door1", "w1", 0.5, width=3.0)],
    )

    plan = edit.delete_corner(plan, "b")

    (merged,) = plan.walls.values()
    # 0.25 along the 5.66 ft diagonal leaves less than half the door width
    assert plan.doors["door1"].wall_id == merged.id
    assert plan.doors["door1"].position == pytest.approx(1.5 / 32 ** 0.5)
    assert validate_plan(plan) == []


def test_delete_corner_of_triangle_does_not_duplicate_wall():
    plan = build_plan(
        {"a": (0, 0), "b": (4, 0), "c": (0, 4)},
        [("ab", "a", "b"), ("bc", "b", "c"), ("ca", "c", "a")],
        doors=[Door("door1", "ab", 0.5), Door("door2", "ca", 0.5)],
    )

    plan = edit.delete_corner(plan, "b")

    assert set(plan.corners) == {"a", "c"}
    assert set(plan.walls) == {"ca"}
    assert set(plan.doors) == {"door2"}
    assert validate_plan(plan) == []


def test_delete_corner_cascades_when_not_two_walls(rectangle):
    plan = build_plan(
        {**{cid: (c.x, c.y) for cid, c in rectangle.corners.items()}, "x": (5, 4)},
        [(w.id, w.start_corner_id, w.end_corner_id) for w in rectangle.walls.values()] + [("w5", "a", "x")],
        doors=[Door("door1", "w1", 0.5), Door("door2", "w3", 0.5)],
    )

    plan = edit.delete_corner(plan, "a")

    assert "a" not in plan.corners
    assert set(plan.walls) == {"w2", "w3"}
    assert set(plan.doors) == {"door2"}


def test_delete_corner_with_shared_other_endpoint_cascades():
    plan = build_plan({"a": (0, 0), "b": (1, 0)}, [("w1", "a", "b"), ("w2", "b", "a")])

    plan = edit.delete_corner(plan, "b")

    assert set(plan.corners) == {"a"}
    assert plan.walls == {}


def test_delete_unknown_corner_is_noop(rectangle):
    assert edit.delete_corner(rectangle, "missing") is rectangle


# --------------------------------------------------------------------------- #
# merge_corners
# --------------------------------------------------------------------------- #
def test_merge_corners_drops_degenerate_and_duplicate_walls(rectangle):
    plan = build_plan(
        {**{cid: (c.x, c.y) for cid, c in rectangle.corners.items()}, "e": (0.2, 0.1)},
        [(w.id, w.start_corner_id, w.end_corner_id) for w in rectangle.walls.values()]
        + [("w5", "e", "b"), ("w6", "e", "a")],
        doors=[Door("keep", "w1", 0.5), Door("gone", "w5", 0.5)],
    )

    merged = edit.merge_corners(plan, "e", "a")

    assert "e" not in merged.corners
    assert set(merged.walls) == {"w1", "w2", "w3", "w4"}
    assert set(merged.doors) == {"keep"}
    assert validate_plan(merged) == []


def test_merge_corners_relabels_walls():
    plan = build_plan(
        {"a": (0, 0), "b": (5, 0), "e": (5.2, 0.1), "c": (5, 5)},
        [("w1", "a", "b"), ("w2", "e", "c")],
        windows=[Window("win1", "w2", 0.5)],
    )

    merged = edit.merge_corners(plan, "e", "b")

    assert merged.walls["w2"].start_corner_id == "b"
    assert merged.walls["w2"].end_corner_id == "c"
    assert merged.windows["win1"].wall_id == "w2"


def test_drop_corner_merges_when_close():
    plan = build_plan(
        {"a": (0, 0), "b": (5, 0), "c": (5, 5), "e": (9, 9)},
        [("w1", "a", "b"), ("w2", "b", "c"), ("w3", "c", "e")],
    )

    far = edit.drop_corner(plan, "e", 3, 3)
    assert far.corners["e"].x == 3.0
    assert len(far.corners) == 4

    closed = edit.drop_corner(plan, "e", 0.3, 0.2)
    assert "e" not in closed.corners
    assert closed.walls["w3"].end_corner_id == "a"
    (room,) = detect_rooms(closed.corners, closed.walls)
    assert room.area == pytest.approx(12.5)


def test_merge_corners_noops(rectangle):
    assert edit.merge_corners(rectangle, "a", "a") is rectangle
    assert edit.merge_corners(rectangle, "a", "missing") is rectangle


# --------------------------------------------------------------------------- #
# Walls
# --------------------------------------------------------------------------- #
def test_split_wall_remaps_openings(rectangle):
    plan = rectangle.replace(
        doors={"door1": Door("door1", "w1", 0.2)},
        windows={"win1": Window("win1", "w1", 0.8), "win2": Window("win2", "w1", 0.45)},
    )

    plan = edit.split_wall(plan, "w1", Point(4, 0), corner_id="m")

    assert "w1" not in plan.walls
    halves = plan.walls_at("m")
    assert len(halves) == 2
    first = next(w for w in halves if w.start_corner_id == "a")
    second = next(w for w in halves if w.end_corner_id == "b")
    assert first.end_corner_id == "m" and second.start_corner_id == "m"
    assert first.thickness == rectangle.walls["w1"].thickness

    assert plan.doors["door1"].wall_id == first.id
    assert plan.doors["door1"].position == pytest.approx(0.5)
    assert plan.windows["win1"].wall_id == second.id
    assert plan.windows["win1"].position == pytest.approx(4 / 6)
    # too close to the new corner to fit on its half
    assert "win2" not in plan.windows

    (room,) = detect_rooms(plan.corners, plan.walls)
    assert len(room.corners) == 5
    assert room.area == pytest.approx(80.0)


def test_split_unknown_wall_is_noop(rectangle):
    assert edit.split_wall(rectangle, "missing", Point(1, 1)) is rectangle


def test_split_with_taken_corner_id_is_noop(rectangle):
    plan = edit.split_wall(rectangle, "w1", Point(4, 0), corner_id="c")

    assert plan is rectangle
    assert (plan.corners["c"].x, plan.corners["c"].y) == (10.0, 8.0)


def test_delete_wall_keeps_corners(rectangle):
    plan = rectangle.replace(doors={"door1": Door("door1", "w1", 0.5)})

    plan = edit.delete_wall(plan, "w1")

    assert "w1" not in plan.walls
    assert set(plan.corners) == {"a", "b", "c", "d"}
    assert plan.doors == {}
    assert detect_rooms(plan.corners, plan.walls) == []


def test_connect_corners_skips_duplicates(rectangle):
    assert edit.connect_corners(rectangle, "b", "a") is rectangle
    assert edit.connect_corners(rectangle, "a", "a") is rectangle
    assert len(edit.connect_corners(rectangle, "a", "c").walls) == 5


def test_update_wall(rectangle):
    plan = edit.update_wall(rectangle, "w1", wall_type="virtual")
    assert plan.walls["w1"].wall_type == "virtual"
    assert plan.walls["w1"].thickness == rectangle.walls["w1"].thickness


def test_add_rectangle_reuses_nearby_corners():
    plan = edit.add_rectangle(build_plan({}, []), Point(0, 0), Point(12, 10))
    assert len(plan.corners) == 4
    assert len(plan.walls) == 4

    plan = edit.add_rectangle(plan, Point(12, 0), Point(20, 10))
    assert len(plan.corners) == 6
    assert len(plan.walls) == 7

    rooms = detect_rooms(plan.corners, plan.walls)
    assert sorted(r.area for r in rooms) == pytest.approx([80.0, 120.0])


def test_add_rectangle_degenerate():
    plan = edit.add_rectangle(build_plan({}, []), Point(3, 3), Point(3, 3))
    assert len(plan.corners) == 1
    assert plan.walls == {}


# --------------------------------------------------------------------------- #
# Openings
# --------------------------------------------------------------------------- #
@pytest.mark.parametrize(
    "position, expected",
    [(0.0, 0.15), (1.0, 0.85), (0.4, 0.4)],
)
def test_door_position_is_clamped(rectangle, position, expected):
    plan = edit.add_door(rectangle, Door("door1", "w1", position, width=3.0))
    assert plan.doors["door1"].position == pytest.approx(expected)


def test_opening_wider_than_wall_is_rejected():
    plan = build_plan({"a": (0, 0), "b": (2, 0)}, [("w1", "a", "b")])
    assert edit.add_window(plan, Window("win1", "w1", 0.1, width=3.0)) is plan


def test_moving_a_corner_refits_openings(rectangle):
    plan = edit.add_door(rectangle, Door("door1", "w1", 0.9, width=3.0))

    shorter = edit.update_corner(plan, "b", 4, 0)
    assert shorter.doors["door1"].position == pytest.approx(1 - 1.5 / 4)
    assert validate_plan(shorter) == []

    too_short = edit.move_corners(plan, ["b"], -8, 0)
    assert too_short.doors == {}
    assert validate_plan(too_short) == []


def test_opening_on_missing_wall_is_noop(rectangle):
    assert edit.add_door(rectangle, Door("door1", "nope", 0.5)) is rectangle


def test_update_door_reclamps(rectangle):
    plan = edit.add_door(rectangle, Door("door1", "w1", 0.1, width=2.0))
    assert plan.doors["door1"].position == pytest.approx(0.1)

    plan = edit.update_door(plan, "door1", type="double", width=6.0)
    assert plan.doors["door1"].type == "double"
    assert plan.doors["door1"].position == pytest.approx(0.3)


def test_place_door_near_wall(rectangle):
    plan = edit.place_door(rectangle, Point(5, 0.5), door_id="door1")
    assert plan.doors["door1"].wall_id == "w1"
    assert plan.doors["door1"].position == pytest.approx(0.5)

    assert edit.place_door(rectangle, Point(5, 4)) is rectangle


def test_delete_openings(rectangle):
    plan = edit.add_door(rectangle, Door("door1", "w1", 0.5))
    plan = edit.add_window(plan, Window("win1", "w2", 0.5))

    plan = edit.delete_door(plan, "door1")
    plan = edit.delete_window(plan, "win1")

    assert plan.doors == {} and plan.windows == {}


# --------------------------------------------------------------------------- #
# Selections
# --------------------------------------------------------------------------- #
def test_select_in_box(rectangle):
    plan = edit.add_door(rectangle, Door("door1", "w2", 0.5))

    selection = edit.select_in_box(plan, Point(-1, -1), Point(1, 1))
    assert selection.corner_ids == {"a"}
    assert selection.wall_ids == {"w1", "w4"}
    assert selection.door_ids == frozenset()

    crossing = edit.select_in_box(plan, Point(4, -1), Point(6, 1))
    assert crossing.corner_ids == frozenset()
    assert crossing.wall_ids == {"w1"}

    by_position = edit.select_in_box(plan, Point(9, 3), Point(11, 5))
    assert by_position.door_ids == {"door1"}


def test_tiny_box_selects_nothing(rectangle):
    assert edit.select_in_box(rectangle, Point(0, 0), Point(0.4, 0.4)).is_empty()


def test_delete_selection_cascades_without_merging(rectangle):
    plan = rectangle.replace(doors={"door1": Door("door1", "w1", 0.5), "door2": Door("door2", "w2", 0.5)})

    plan = edit.delete_selection(plan, Selection(corner_ids=frozenset({"a"})))

    assert set(plan.corners) == {"b", "c", "d"}
    assert set(plan.walls) == {"w2", "w3"}
    assert set(plan.doors) == {"door2"}


def test_move_selection(rectangle):
    plan = edit.move_selection(rectangle, Selection(corner_ids=frozenset({"c", "d"})), 0, 2)
    assert plan.corners["c"].y == pytest.approx(10.0)
    assert plan.corners["a"].y == 0.0

    (room,) = detect_rooms(plan.corners, plan.walls)
    assert room.area == pytest.approx(100.0)


def test_rotate_selection_cycles_orientation(rectangle):
    plan = rectangle.replace(doors={"door1": Door("door1", "w1", 0.5, orientation=3)})
    selection = Selection(corner_ids=frozenset(plan.corners), door_ids=frozenset({"door1"}))

    plan = edit.rotate_selection(plan, selection, 90)

    assert plan.corners["a"].x == pytest.approx(9.0)
    assert plan.corners["a"].y == pytest.approx(-1.0)
    assert plan.doors["door1"].orientation == 0


def test_rotate_room_rounds_coordinates(rectangle):
    (room,) = detect_rooms(rectangle.corners, rectangle.walls)

    plan = edit.rotate_room(rectangle, room, 90)

    assert (plan.corners["a"].x, plan.corners["a"].y) == (9.0, -1.0)
    (rotated,) = detect_rooms(plan.corners, plan.walls)
    assert rotated.area == pytest.approx(80.0)
