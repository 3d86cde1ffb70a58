"""Graph editing functions for floor plans.

This module provides the mutation operations of the corner/wall graph:
adding, moving, deleting, merging and splitting corners and walls, and
placing openings on walls. Every function takes a :class:`Plan` and returns
a new one. Operations that reference ids which do not exist return the plan
unchanged instead of raising, because an interactive editor routinely passes
through invalid intermediate states.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import uuid
from typing import Callable, Dict, Iterable, List, Optional

from .. import config
from ..core.model import Corner, Door, Plan, Point, Room, Selection, Wall, Window
from .polygon import (
    EPSILON,
    distance,
    find_nearby_corner,
    find_wall_at_point,
    is_point_in_box,
    make_box,
    point_along_wall,
    polygon_centroid,
    segment_intersects_box,
    wall_endpoints,
)

LOGGER = logging.getLogger(__name__)

Opening = Door | Window


def new_id(prefix: str) -> str:
    """Generate a fresh entity id such as ``wall-3f2a9c1e0b7d``."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


# --------------------------------------------------------------------------- #
# Opening helpers
# --------------------------------------------------------------------------- #
def opening_fits(position: float, wall_length: float, width: float, tolerance: float = 1e-9) -> bool:
    """Check that an opening of ``width`` at ``position`` stays within the wall."""
    half = width / 2
    return (
        position * wall_length >= half - tolerance
        and (1 - position) * wall_length >= half - tolerance
    )


def clamp_opening_position(position: float, wall_length: Optional[float], width: float) -> float:
    """Clamp a fractional position so the full opening width fits on the wall.

    When the wall is shorter than the opening the opening is centred.
    """
    position = min(1.0, max(0.0, position))
    if wall_length is None or wall_length <= EPSILON:
        return position
    if wall_length <= width:
        return 0.5
    margin = width / 2 / wall_length
    return min(1 - margin, max(margin, position))


def _map_openings(plan: Plan, fn: Callable[[Opening], Optional[Opening]]) -> Plan:
    """Apply ``fn`` to every door and window; a None result drops the opening."""
    doors: Dict[str, Door] = {}
    for door in plan.doors.values():
        mapped = fn(door)
        if mapped is not None:
            doors[mapped.id] = mapped

    windows: Dict[str, Window] = {}
    for window in plan.windows.values():
        mapped = fn(window)
        if mapped is not None:
            windows[mapped.id] = mapped

    return plan.replace(doors=doors, windows=windows)


def _drop_openings_on(plan: Plan, wall_ids: Iterable[str]) -> Plan:
    doomed = set(wall_ids)
    if not doomed:
        return plan
    return _map_openings(plan, lambda o: None if o.wall_id in doomed else o)


def _refit_openings(plan: Plan, wall_ids: Iterable[str]) -> Plan:
    """Re-clamp openings on walls whose length changed.

    Openings wider than their wall are dropped.
    """
    changed = set(wall_ids)
    if not changed:
        return plan

    def refit(opening: Opening) -> Optional[Opening]:
        if opening.wall_id not in changed:
            return opening
        length = plan.wall_length(opening.wall_id)
        if length is None:
            return opening
        if length < opening.width - EPSILON:
            LOGGER.debug("dropped opening %s: wall %s is too short", opening.id, opening.wall_id)
            return None
        position = clamp_opening_position(opening.position, length, opening.width)
        if position == opening.position:
            return opening
        return dataclasses.replace(opening, position=position)

    return _map_openings(plan, refit)


def _walls_touching(plan: Plan, corner_ids: Iterable[str]) -> List[str]:
    ids = set(corner_ids)
    return [w.id for w in plan.walls.values() if w.start_corner_id in ids or w.end_corner_id in ids]


# --------------------------------------------------------------------------- #
# Corners
# --------------------------------------------------------------------------- #
def add_corner(
    plan: Plan, x: float, y: float, corner_id: Optional[str] = None, elevation: float = 0.0
) -> Plan:
    """Add a corner at (x, y)."""
    corner = Corner(id=corner_id or new_id("corner"), x=x, y=y, elevation=elevation)
    corners = dict(plan.corners)
    corners[corner.id] = corner
    return plan.replace(corners=corners)


def update_corner(plan: Plan, corner_id: str, x: float, y: float) -> Plan:
    """Move a corner to (x, y)."""
    if corner_id not in plan.corners:
        LOGGER.debug("update_corner: unknown corner %s", corner_id)
        return plan

    corners = dict(plan.corners)
    corners[corner_id] = dataclasses.replace(plan.corners[corner_id], x=x, y=y)
    plan = plan.replace(corners=corners)
    return _refit_openings(plan, _walls_touching(plan, [corner_id]))


def delete_corner(plan: Plan, corner_id: str) -> Plan:
    """Delete a corner.

    A corner joining exactly two walls whose other endpoints differ is
    dissolved: the two walls are merged into one (o----o----o becomes
    o---------o) and their openings keep their physical distance along the
    combined wall, clamped to fit it. Any other corner, or one whose two
    neighbours are already joined by a wall, is removed together with every
    wall touching it and every opening on those walls.

    Args:
        plan: The plan to edit.
        corner_id: ID of the corner to delete.

    Returns:
        A new Plan, or the same plan if the corner does not exist.
    """
    if corner_id not in plan.corners:
        LOGGER.debug("delete_corner: unknown corner %s", corner_id)
        return plan

    connected = plan.walls_at(corner_id)

    if len(connected) == 2:
        wall1, wall2 = connected
        other1 = wall1.other_corner(corner_id)
        other2 = wall2.other_corner(corner_id)
        if (
            other1 != other2
            and corner_id not in (other1, other2)
            and plan.find_wall_between(other1, other2) is None
        ):
            return _merge_walls_through(plan, corner_id, wall1, wall2, other1, other2)

    corners = {cid: c for cid, c in plan.corners.items() if cid != corner_id}
    removed = {w.id for w in connected}
    walls = {wid: w for wid, w in plan.walls.items() if wid not in removed}
    LOGGER.debug("delete_corner: removed %s with %d wall(s)", corner_id, len(removed))
    return _drop_openings_on(plan.replace(corners=corners, walls=walls), removed)


def _merge_walls_through(
    plan: Plan, corner_id: str, wall1: Wall, wall2: Wall, other1: str, other2: str
) -> Plan:
    merged = dataclasses.replace(
        wall1, id=new_id("wall"), start_corner_id=other1, end_corner_id=other2
    )

    walls = {wid: w for wid, w in plan.walls.items() if wid not in (wall1.id, wall2.id)}
    walls[merged.id] = merged
    corners = {cid: c for cid, c in plan.corners.items() if cid != corner_id}

    deleted = plan.corners[corner_id]
    corner1 = plan.corners.get(other1)
    corner2 = plan.corners.get(other2)

    length1 = length2 = None
    if corner1 is not None and corner2 is not None:
        length1 = distance(deleted, corner1)
        length2 = distance(corner2, deleted)
    total = (length1 or 0.0) + (length2 or 0.0)

    def remap(opening: Opening) -> Opening:
        if opening.wall_id not in (wall1.id, wall2.id):
            return opening
        if length1 is None or total <= EPSILON:
            return dataclasses.replace(opening, wall_id=merged.id)
        if opening.wall_id == wall1.id:
            position = opening.position * length1 / total
        else:
            position = (length1 + opening.position * length2) / total
        return dataclasses.replace(opening, wall_id=merged.id, position=position)

    LOGGER.debug("delete_corner: merged %s and %s into %s", wall1.id, wall2.id, merged.id)
    plan = _map_openings(plan.replace(corners=corners, walls=walls), remap)
    # a bent pair merges into a wall shorter than L1 + L2
    return _refit_openings(plan, [merged.id])


def merge_corners(plan: Plan, source_id: str, target_id: str) -> Plan:
    """Merge the source corner into the target corner.

    Every wall endpoint equal to ``source_id`` is reassigned to
    ``target_id``. Walls that become degenerate (target to target) or that
    duplicate an earlier wall's corner pair are dropped, with their
    openings. Relabelled walls keep their ids and openings.

    Args:
        plan: The plan to edit.
        source_id: ID of the corner that disappears.
        target_id: ID of the corner that survives.

    Returns:
        A new Plan, or the same plan if the ids are equal or missing.
    """
    if source_id == target_id:
        return plan
    if source_id not in plan.corners or target_id not in plan.corners:
        LOGGER.debug("merge_corners: unknown corner %s or %s", source_id, target_id)
        return plan

    walls: Dict[str, Wall] = {}
    seen_pairs = set()
    dropped: List[str] = []
    relabelled: List[str] = []

    for wall in plan.walls.values():
        start = target_id if wall.start_corner_id == source_id else wall.start_corner_id
        end = target_id if wall.end_corner_id == source_id else wall.end_corner_id

        if start == end:
            dropped.append(wall.id)
            continue

        pair = frozenset((start, end))
        if pair in seen_pairs:
            dropped.append(wall.id)
            continue
        seen_pairs.add(pair)

        if (start, end) != (wall.start_corner_id, wall.end_corner_id):
            wall = dataclasses.replace(wall, start_corner_id=start, end_corner_id=end)
            relabelled.append(wall.id)
        walls[wall.id] = wall

    corners = {cid: c for cid, c in plan.corners.items() if cid != source_id}
    if dropped:
        LOGGER.debug("merge_corners: dropped walls %s", dropped)
    plan = _drop_openings_on(plan.replace(corners=corners, walls=walls), dropped)
    return _refit_openings(plan, relabelled)


def drop_corner(
    plan: Plan, corner_id: str, x: float, y: float, threshold: float = config.CLOSE_POLYGON_THRESHOLD
) -> Plan:
    """Move a corner and merge it into another corner it lands close to."""
    plan = update_corner(plan, corner_id, x, y)
    if corner_id not in plan.corners:
        return plan

    others = [c for c in plan.corners.values() if c.id != corner_id]
    target = find_nearby_corner(Point(x, y), others, threshold)
    if target is None:
        return plan
    return merge_corners(plan, corner_id, target.id)


def move_corners(plan: Plan, corner_ids: Iterable[str], dx: float, dy: float) -> Plan:
    """Translate a set of corners by (dx, dy)."""
    ids = set(corner_ids) & set(plan.corners)
    if not ids:
        return plan

    corners = {
        cid: dataclasses.replace(c, x=c.x + dx, y=c.y + dy) if cid in ids else c
        for cid, c in plan.corners.items()
    }
    plan = plan.replace(corners=corners)
    return _refit_openings(plan, _walls_touching(plan, ids))


def _rotate(point, center: Point, radians: float) -> Point:
    cos, sin = math.cos(radians), math.sin(radians)
    dx = point.x - center.x
    dy = point.y - center.y
    return Point(center.x + dx * cos - dy * sin, center.y + dx * sin + dy * cos)


def rotate_corners(
    plan: Plan,
    corner_ids: Iterable[str],
    degrees: float,
    center: Optional[Point] = None,
    decimals: Optional[int] = None,
) -> Plan:
    """Rotate corners about ``center`` (default: their centroid).

    Args:
        plan: The plan to edit.
        corner_ids: Corners to rotate; unknown ids are ignored.
        degrees: Counter-clockwise rotation in degrees.
        center: Rotation center.
        decimals: Round the resulting coordinates, if given.

    Returns:
        A new Plan.
    """
    ids = [cid for cid in dict.fromkeys(corner_ids) if cid in plan.corners]
    if not ids:
        return plan

    if center is None:
        center = polygon_centroid([plan.corners[cid] for cid in ids])
    radians = math.radians(degrees)

    corners = dict(plan.corners)
    for cid in ids:
        rotated = _rotate(plan.corners[cid], center, radians)
        x, y = rotated.x, rotated.y
        if decimals is not None:
            x, y = round(x, decimals), round(y, decimals)
        corners[cid] = dataclasses.replace(plan.corners[cid], x=x, y=y)
    plan = plan.replace(corners=corners)
    return _refit_openings(plan, _walls_touching(plan, ids))


def rotate_room(plan: Plan, room: Room, degrees: float) -> Plan:
    """Rotate a detected room's corners about the room center."""
    return rotate_corners(
        plan,
        [c.id for c in room.corners],
        degrees,
        center=room.center,
        decimals=config.ROTATION_DECIMALS,
    )


# --------------------------------------------------------------------------- #
# Walls
# --------------------------------------------------------------------------- #
def add_wall(plan: Plan, wall: Wall) -> Plan:
    """Add a wall.

    The caller is responsible for passing distinct endpoints and for not
    duplicating an existing corner pair; see :func:`connect_corners` for
    the checked variant. Walls referencing unknown corners are ignored.
    """
    if wall.start_corner_id not in plan.corners or wall.end_corner_id not in plan.corners:
        LOGGER.debug("add_wall: %s references an unknown corner", wall.id)
        return plan

    walls = dict(plan.walls)
    walls[wall.id] = wall
    return plan.replace(walls=walls)


def connect_corners(
    plan: Plan,
    start_id: str,
    end_id: str,
    wall_id: Optional[str] = None,
    thickness: float = config.WALL_THICKNESS,
    height: float = config.WALL_HEIGHT,
    wall_type: str = "solid",
) -> Plan:
    """Add a wall between two corners unless it would be degenerate or a duplicate."""
    if start_id == end_id or plan.find_wall_between(start_id, end_id) is not None:
        return plan

    wall = Wall(
        id=wall_id or new_id("wall"),
        start_corner_id=start_id,
        end_corner_id=end_id,
        thickness=thickness,
        height=height,
        wall_type=wall_type,
    )
    return add_wall(plan, wall)


def update_wall(
    plan: Plan,
    wall_id: str,
    thickness: Optional[float] = None,
    height: Optional[float] = None,
    wall_type: Optional[str] = None,
) -> Plan:
    """Change wall properties; arguments left as None are kept."""
    wall = plan.walls.get(wall_id)
    if wall is None:
        return plan

    updated = dataclasses.replace(
        wall,
        thickness=wall.thickness if thickness is None else thickness,
        height=wall.height if height is None else height,
        wall_type=wall.wall_type if wall_type is None else wall_type,
    )
    walls = dict(plan.walls)
    walls[wall_id] = updated
    return plan.replace(walls=walls)


def delete_wall(plan: Plan, wall_id: str) -> Plan:
    """Remove a wall and every opening on it. Corners are kept."""
    if wall_id not in plan.walls:
        return plan

    walls = {wid: w for wid, w in plan.walls.items() if wid != wall_id}
    return _drop_openings_on(plan.replace(walls=walls), [wall_id])


def split_wall(plan: Plan, wall_id: str, point, corner_id: Optional[str] = None) -> Plan:
    """Insert a corner at ``point`` and split the wall into two.

    The two new walls (start to new corner, new corner to end) copy the
    original wall's properties. Openings are moved onto the half that
    contains them, keeping their distance from the start corner; an
    opening that no longer fits on its half is dropped.

    Args:
        plan: The plan to edit.
        wall_id: ID of the wall to split.
        point: Location of the new corner.
        corner_id: ID for the new corner; generated when omitted.

    Returns:
        A new Plan, or the same plan if the wall or its corners are missing
        or ``corner_id`` is already taken.
    """
    wall = plan.walls.get(wall_id)
    if wall is None:
        return plan
    if corner_id is not None and corner_id in plan.corners:
        LOGGER.debug("split_wall: corner id %s already exists", corner_id)
        return plan
    endpoints = wall_endpoints(plan, wall)
    if endpoints is None:
        return plan
    start, end = endpoints

    corner = Corner(id=corner_id or new_id("corner"), x=point.x, y=point.y)
    first = dataclasses.replace(wall, id=new_id("wall"), end_corner_id=corner.id)
    second = dataclasses.replace(wall, id=new_id("wall"), start_corner_id=corner.id)

    corners = dict(plan.corners)
    corners[corner.id] = corner
    walls = {wid: w for wid, w in plan.walls.items() if wid != wall_id}
    walls[first.id] = first
    walls[second.id] = second

    length1 = distance(start, corner)
    length2 = distance(corner, end)
    total = length1 + length2

    def remap(opening: Opening) -> Optional[Opening]:
        if opening.wall_id != wall_id:
            return opening
        offset = opening.position * total
        if offset <= length1 and length1 > EPSILON:
            target, position, length = first, offset / length1, length1
        elif length2 > EPSILON:
            target, position, length = second, (offset - length1) / length2, length2
        else:
            return None
        if not opening_fits(position, length, opening.width):
            LOGGER.debug("split_wall: dropped opening %s", opening.id)
            return None
        return dataclasses.replace(opening, wall_id=target.id, position=position)

    return _map_openings(plan.replace(corners=corners, walls=walls), remap)


def add_rectangle(
    plan: Plan,
    start,
    end,
    snap_radius: float = config.SNAP_CORNER_RADIUS,
    thickness: float = config.WALL_THICKNESS,
    height: float = config.WALL_HEIGHT,
) -> Plan:
    """Add an axis-aligned rectangle of solid walls spanning two points.

    Existing corners within ``snap_radius`` of a rectangle vertex are
    reused. Sides that would be degenerate or duplicate an existing wall
    are skipped.
    """
    points = [
        Point(start.x, start.y),
        Point(end.x, start.y),
        Point(end.x, end.y),
        Point(start.x, end.y),
    ]

    corner_ids: List[str] = []
    for point in points:
        existing = find_nearby_corner(point, plan.corners.values(), snap_radius)
        if existing is not None:
            corner_ids.append(existing.id)
            continue
        corner_id = new_id("corner")
        plan = add_corner(plan, point.x, point.y, corner_id=corner_id)
        corner_ids.append(corner_id)

    for i, start_id in enumerate(corner_ids):
        end_id = corner_ids[(i + 1) % len(corner_ids)]
        plan = connect_corners(
            plan, start_id, end_id, thickness=thickness, height=height, wall_type="solid"
        )
    return plan


# --------------------------------------------------------------------------- #
# Openings
# --------------------------------------------------------------------------- #
def _add_opening(plan: Plan, opening: Opening) -> Plan:
    if opening.wall_id not in plan.walls:
        LOGGER.debug("add opening: %s references unknown wall %s", opening.id, opening.wall_id)
        return plan

    length = plan.wall_length(opening.wall_id)
    if length is not None and length < opening.width - EPSILON:
        LOGGER.debug("add opening: %s is wider than wall %s", opening.id, opening.wall_id)
        return plan

    position = clamp_opening_position(opening.position, length, opening.width)
    opening = dataclasses.replace(opening, position=position)

    if isinstance(opening, Door):
        doors = dict(plan.doors)
        doors[opening.id] = opening
        return plan.replace(doors=doors)

    windows = dict(plan.windows)
    windows[opening.id] = opening
    return plan.replace(windows=windows)


def _update_opening(plan: Plan, opening: Optional[Opening], changes: dict) -> Plan:
    if opening is None:
        return plan
    changes = {k: v for k, v in changes.items() if v is not None}
    return _add_opening(plan, dataclasses.replace(opening, **changes))


def add_door(plan: Plan, door: Door) -> Plan:
    """Place a door; its position is clamped so it fits on the wall.

    A door wider than its wall is not placed.
    """
    return _add_opening(plan, door)


def update_door(
    plan: Plan,
    door_id: str,
    position: Optional[float] = None,
    type: Optional[str] = None,
    width: Optional[float] = None,
    height: Optional[float] = None,
    orientation: Optional[int] = None,
) -> Plan:
    return _update_opening(
        plan,
        plan.doors.get(door_id),
        {"position": position, "type": type, "width": width, "height": height, "orientation": orientation},
    )


def delete_door(plan: Plan, door_id: str) -> Plan:
    if door_id not in plan.doors:
        return plan
    return plan.replace(doors={did: d for did, d in plan.doors.items() if did != door_id})


def add_window(plan: Plan, window: Window) -> Plan:
    """Place a window; its position is clamped so it fits on the wall."""
    return _add_opening(plan, window)


def update_window(
    plan: Plan,
    window_id: str,
    position: Optional[float] = None,
    type: Optional[str] = None,
    width: Optional[float] = None,
    height: Optional[float] = None,
    sill_height: Optional[float] = None,
    orientation: Optional[int] = None,
) -> Plan:
    return _update_opening(
        plan,
        plan.windows.get(window_id),
        {
            "position": position,
            "type": type,
            "width": width,
            "height": height,
            "sill_height": sill_height,
            "orientation": orientation,
        },
    )


def delete_window(plan: Plan, window_id: str) -> Plan:
    if window_id not in plan.windows:
        return plan
    return plan.replace(windows={wid: w for wid, w in plan.windows.items() if wid != window_id})


def place_door(
    plan: Plan,
    point,
    door_type: str = "single",
    door_id: Optional[str] = None,
    max_distance: float = config.OPENING_ATTACH_DISTANCE,
) -> Plan:
    """Attach a door to the wall nearest ``point``, if one is close enough."""
    found = find_wall_at_point(point, plan, max_distance)
    if found is None:
        return plan
    wall, position = found
    door = Door(
        id=door_id or new_id("door"),
        wall_id=wall.id,
        position=position,
        type=door_type,
        width=config.DOOR_WIDTHS.get(door_type, config.DOOR_WIDTH_SINGLE),
    )
    return add_door(plan, door)


def place_window(
    plan: Plan,
    point,
    window_type: str = "standard",
    window_id: Optional[str] = None,
    max_distance: float = config.OPENING_ATTACH_DISTANCE,
) -> Plan:
    """Attach a window to the wall nearest ``point``, if one is close enough."""
    found = find_wall_at_point(point, plan, max_distance)
    if found is None:
        return plan
    wall, position = found
    window = Window(id=window_id or new_id("window"), wall_id=wall.id, position=position, type=window_type)
    return add_window(plan, window)


# --------------------------------------------------------------------------- #
# Selections
# --------------------------------------------------------------------------- #
def select_in_box(plan: Plan, p1, p2, min_size: float = config.MIN_SELECTION_BOX) -> Selection:
    """Select everything inside or crossing the box spanned by two points.

    Corners are selected when inside the box. Walls are selected when an
    endpoint is inside or the wall crosses a box edge. Openings are selected
    when their wall is selected or their world position is inside the box.
    A box no larger than ``min_size`` in both directions selects nothing.
    """
    box = make_box(p1, p2)
    if box[2] - box[0] <= min_size and box[3] - box[1] <= min_size:
        return Selection()

    corner_ids = frozenset(cid for cid, c in plan.corners.items() if is_point_in_box(c, box))

    wall_ids = set()
    for wall in plan.walls.values():
        endpoints = wall_endpoints(plan, wall)
        if endpoints is None:
            continue
        start, end = endpoints
        if is_point_in_box(start, box) or is_point_in_box(end, box) or segment_intersects_box(start, end, box):
            wall_ids.add(wall.id)

    def selected(opening: Opening) -> bool:
        if opening.wall_id in wall_ids:
            return True
        wall = plan.walls.get(opening.wall_id)
        if wall is None:
            return False
        location = point_along_wall(plan, wall, opening.position)
        return location is not None and is_point_in_box(location, box)

    return Selection(
        corner_ids=corner_ids,
        wall_ids=frozenset(wall_ids),
        door_ids=frozenset(d.id for d in plan.doors.values() if selected(d)),
        window_ids=frozenset(w.id for w in plan.windows.values() if selected(w)),
    )


def delete_selection(plan: Plan, selection: Selection) -> Plan:
    """Delete every selected entity.

    Walls touching a deleted corner are removed and openings on removed
    walls follow. Unlike :func:`delete_corner` no walls are merged.
    """
    if selection.is_empty():
        return plan

    wall_ids = set(selection.wall_ids)
    wall_ids.update(
        w.id
        for w in plan.walls.values()
        if w.start_corner_id in selection.corner_ids or w.end_corner_id in selection.corner_ids
    )

    corners = {cid: c for cid, c in plan.corners.items() if cid not in selection.corner_ids}
    walls = {wid: w for wid, w in plan.walls.items() if wid not in wall_ids}
    doors = {
        did: d
        for did, d in plan.doors.items()
        if did not in selection.door_ids and d.wall_id not in wall_ids
    }
    windows = {
        wid: w
        for wid, w in plan.windows.items()
        if wid not in selection.window_ids and w.wall_id not in wall_ids
    }
    return Plan(corners=corners, walls=walls, doors=doors, windows=windows)


def move_selection(plan: Plan, selection: Selection, dx: float, dy: float) -> Plan:
    """Translate the selected corners."""
    return move_corners(plan, selection.corner_ids, dx, dy)


def rotate_selection(plan: Plan, selection: Selection, degrees: float) -> Plan:
    """Rotate selected corners about their centroid and cycle opening orientations.

    Each selected door or window steps to its next orientation (0-3).
    """
    plan = rotate_corners(plan, sorted(selection.corner_ids), degrees)

    def cycle(opening: Opening) -> Opening:
        chosen = selection.door_ids if isinstance(opening, Door) else selection.window_ids
        if opening.id not in chosen:
            return opening
        return dataclasses.replace(opening, orientation=(opening.orientation + 1) % 4)

    if selection.door_ids or selection.window_ids:
        plan = _map_openings(plan, cycle)
    return plan
