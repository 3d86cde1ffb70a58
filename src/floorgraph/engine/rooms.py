"""Room detection for corner/wall graphs.

Rooms are the bounded faces of the planar graph formed by corners and
walls. They are found by planar face tracing:

1. Build an adjacency list per corner, sorted by bearing.
2. From every directed arc, walk the graph always taking the tightest
   available turn, until the walk closes or fails.
3. Keep counter-clockwise (positive area) cycles; clockwise cycles are the
   unbounded exterior or a face already seen from the other side.
4. Drop duplicate cycles by canonical id.
5. Compute area and centroid and sort by area.

Detection is a pure function of ``(corners, walls)`` and is always a full
recompute.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .. import config
from ..core.model import Corner, Room, Wall
from ..geom.polygon import TWO_PI, bearing, is_point_in_polygon, polygon_centroid, signed_polygon_area

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdjacencyEntry:
    """One outgoing arc from a corner.

    Attributes:
        corner: The neighbouring corner.
        wall: The wall joining the two corners.
        angle: Bearing from the owning corner to ``corner``, in [0, 2*pi).
    """

    corner: Corner
    wall: Wall
    angle: float


def _as_list(items) -> list:
    if isinstance(items, Mapping):
        return list(items.values())
    return list(items)


def build_adjacency(corners: Sequence[Corner], walls: Iterable[Wall]) -> Dict[str, List[AdjacencyEntry]]:
    """Map every corner id to its neighbours sorted by bearing.

    Self loops and walls referencing unknown corners are skipped.
    """
    corner_map = {c.id: c for c in corners}
    adjacency: Dict[str, List[AdjacencyEntry]] = {c.id: [] for c in corners}

    for wall in walls:
        start = corner_map.get(wall.start_corner_id)
        end = corner_map.get(wall.end_corner_id)
        if start is None or end is None:
            continue
        if start.id == end.id:
            continue

        adjacency[start.id].append(AdjacencyEntry(end, wall, bearing(start, end)))
        adjacency[end.id].append(AdjacencyEntry(start, wall, bearing(end, start)))

    for entries in adjacency.values():
        entries.sort(key=lambda e: e.angle)

    return adjacency


def trace_face(
    start: Corner,
    first: Corner,
    adjacency: Mapping[str, List[AdjacencyEntry]],
    max_iterations: int = config.MAX_TRACE_ITERATIONS,
) -> Optional[List[Corner]]:
    """Trace the face to the left of the arc ``start -> first``.

    At every corner the walk leaves along the arc that makes the tightest
    turn: the smallest clockwise sweep from the reversed incoming bearing.

    Returns:
        The corner cycle starting at ``start``, or None if the walk revisits
        a corner other than ``start``, reaches a dead end, or exceeds
        ``max_iterations`` steps.
    """
    visited = set()
    path = [start]

    previous = start
    current = first

    for _ in range(max_iterations):
        if current.id == start.id:
            return path

        if current.id in visited:
            return None

        visited.add(current.id)
        path.append(current)

        entries = adjacency.get(current.id)
        if not entries or len(entries) < 2:
            return None

        incoming = bearing(current, previous)

        best: Optional[AdjacencyEntry] = None
        smallest = float("inf")
        for entry in entries:
            if entry.corner.id == previous.id:
                continue

            turn = (incoming - entry.angle) % TWO_PI
            if turn < smallest:
                smallest = turn
                best = entry

        if best is None:
            return None

        previous = current
        current = best.corner

    return None


def canonical_room_id(corners: Iterable[Corner]) -> str:
    """Sorted corner ids joined into a key."""
    return config.ROOM_ID_SEPARATOR.join(sorted(c.id for c in corners))


def _room_walls(cycle: Sequence[Corner], walls: Sequence[Wall]) -> Tuple[Wall, ...]:
    found = []
    for i, c1 in enumerate(cycle):
        c2 = cycle[(i + 1) % len(cycle)]
        pair = frozenset((c1.id, c2.id))
        wall = next((w for w in walls if w.corner_pair == pair), None)
        if wall is not None:
            found.append(wall)
    return tuple(found)


def detect_rooms(corners, walls) -> List[Room]:
    """Find all enclosed rooms in a corner/wall graph.

    Args:
        corners: Corners, as a sequence or an id-keyed mapping.
        walls: Walls, as a sequence or an id-keyed mapping.

    Returns:
        Rooms sorted by ascending area. Each room has a default name
        ("Room N", in order of discovery) and type "other".
    """
    corners = _as_list(corners)
    walls = _as_list(walls)

    if len(corners) < 3 or len(walls) < 3:
        return []

    adjacency = build_adjacency(corners, walls)
    found_ids = set()
    rooms: List[Room] = []

    for corner in corners:
        entries = adjacency.get(corner.id)
        if not entries or len(entries) < 2:
            continue

        for entry in entries:
            cycle = trace_face(corner, entry.corner, adjacency)
            if cycle is None or len(cycle) < 3:
                continue

            signed_area = signed_polygon_area(cycle)
            if signed_area <= 0:
                continue

            room_id = canonical_room_id(cycle)
            if room_id in found_ids:
                continue
            found_ids.add(room_id)

            rooms.append(
                Room(
                    id=room_id,
                    corners=tuple(cycle),
                    walls=_room_walls(cycle, walls),
                    area=abs(signed_area),
                    center=polygon_centroid(cycle),
                    name=f"Room {len(rooms) + 1}",
                    type="other",
                )
            )

    rooms.sort(key=lambda r: r.area)
    LOGGER.debug("detect_rooms: %d corners, %d walls -> %d rooms", len(corners), len(walls), len(rooms))
    return rooms


def is_point_in_room(point, room: Room) -> bool:
    return is_point_in_polygon(point, room.corners)


def find_room_at_point(point, rooms: Iterable[Room]) -> Optional[Room]:
    """Return the first room whose polygon contains the point."""
    for room in rooms:
        if is_point_in_room(point, room):
            return room
    return None


def room_type_label(room_type: str) -> str:
    """Display label for a room type; unknown types are returned as is."""
    return config.ROOM_TYPE_LABELS.get(room_type, room_type)


def suggest_room_type(room: Room) -> str:
    """Guess a room type from its area."""
    for upper, room_type in config.ROOM_TYPE_AREA_THRESHOLDS:
        if room.area < upper:
            return room_type
    return config.LARGE_ROOM_TYPE


def _overlap(a: frozenset, b: frozenset) -> float:
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def reattach_room_labels(previous: Iterable[Room], current: Iterable[Room]) -> List[Room]:
    """Carry user-assigned names and types over to freshly detected rooms.

    Rooms are matched by canonical id first. Rooms left unmatched are then
    paired greedily by corner-set overlap (Jaccard index), so a room that
    gained or lost a corner through a split or merge keeps its label. Each
    previous room is used at most once, and rooms with no overlapping
    predecessor keep their defaults.

    Args:
        previous: Rooms from before the edit, carrying user labels.
        current: Rooms detected after the edit.

    Returns:
        ``current`` in the same order with names and types reattached.
    """
    previous = list(previous)
    current = list(current)

    assigned: Dict[int, Room] = {}
    used = set()

    by_id = {room.id: i for i, room in enumerate(previous)}
    for index, room in enumerate(current):
        match = by_id.get(room.id)
        if match is not None and match not in used:
            assigned[index] = previous[match]
            used.add(match)

    candidates = []
    for index, room in enumerate(current):
        if index in assigned:
            continue
        for prev_index, prev in enumerate(previous):
            if prev_index in used:
                continue
            score = _overlap(room.corner_ids, prev.corner_ids)
            if score > 0:
                candidates.append((score, index, prev_index))

    for score, index, prev_index in sorted(candidates, key=lambda c: (-c[0], c[1], c[2])):
        if index in assigned or prev_index in used:
            continue
        assigned[index] = previous[prev_index]
        used.add(prev_index)

    result = []
    for index, room in enumerate(current):
        match = assigned.get(index)
        if match is None:
            result.append(room)
        else:
            result.append(dataclasses.replace(room, name=match.name, type=match.type))
    return result
