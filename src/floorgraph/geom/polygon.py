"""Polygon and segment geometry for floor plan graphs.

This module provides the pure geometric helpers shared by the graph editing
functions and the room detection engine: bearings, shoelace area, centroids,
point-in-polygon tests, segment intersection and point-to-segment
projection. All distances are Euclidean in feet.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence, Tuple

from shapely.geometry import Polygon

from .. import config
from ..core.model import Corner, Plan, Point, Room, Wall

# Global parameters for algorithm sensitivity
EPSILON = 1e-9  # Tolerance for degenerate lengths
TWO_PI = 2 * math.pi

Box = Tuple[float, float, float, float]  # min_x, min_y, max_x, max_y


def distance(p1, p2) -> float:
    """Calculate Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def bearing(p1, p2) -> float:
    """Angle of the direction from ``p1`` to ``p2`` in [0, 2*pi)."""
    angle = math.atan2(p2.y - p1.y, p2.x - p1.x)
    if angle < 0:
        angle += TWO_PI
    return angle


def signed_polygon_area(points: Sequence) -> float:
    """Signed polygon area using the shoelace formula.

    Positive for counter-clockwise winding, negative for clockwise.
    """
    area = 0.0
    n = len(points)
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y
    return area / 2


def polygon_centroid(points: Sequence) -> Point:
    """Arithmetic mean of the polygon vertices."""
    n = len(points)
    if n == 0:
        return Point(0.0, 0.0)
    return Point(sum(p.x for p in points) / n, sum(p.y for p in points) / n)


def is_point_in_polygon(point, polygon: Sequence) -> bool:
    """Ray casting point-in-polygon test."""
    inside = False
    n = len(polygon)
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y
        if (yi > point.y) != (yj > point.y) and point.x < (xj - xi) * (point.y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def _direction(p1, p2, p3) -> float:
    return (p3.x - p1.x) * (p2.y - p1.y) - (p2.x - p1.x) * (p3.y - p1.y)


def _on_segment(p1, p2, p) -> bool:
    return (
        min(p1.x, p2.x) <= p.x <= max(p1.x, p2.x)
        and min(p1.y, p2.y) <= p.y <= max(p1.y, p2.y)
    )


def segments_intersect(p1, p2, p3, p4) -> bool:
    """Check if segment p1-p2 intersects segment p3-p4.

    Touching endpoints and collinear overlaps count as intersections.
    """
    d1 = _direction(p3, p4, p1)
    d2 = _direction(p3, p4, p2)
    d3 = _direction(p1, p2, p3)
    d4 = _direction(p1, p2, p4)

    if ((d1 > 0 and d2 < 0) or (d1 < 0 and d2 > 0)) and (
        (d3 > 0 and d4 < 0) or (d3 < 0 and d4 > 0)
    ):
        return True

    if d1 == 0 and _on_segment(p3, p4, p1):
        return True
    if d2 == 0 and _on_segment(p3, p4, p2):
        return True
    if d3 == 0 and _on_segment(p1, p2, p3):
        return True
    if d4 == 0 and _on_segment(p1, p2, p4):
        return True
    return False


def make_box(p1, p2) -> Box:
    return (min(p1.x, p2.x), min(p1.y, p2.y), max(p1.x, p2.x), max(p1.y, p2.y))


def is_point_in_box(point, box: Box) -> bool:
    min_x, min_y, max_x, max_y = box
    return min_x <= point.x <= max_x and min_y <= point.y <= max_y


def segment_intersects_box(p1, p2, box: Box) -> bool:
    """Check if a segment crosses any edge of an axis-aligned box."""
    min_x, min_y, max_x, max_y = box
    edges = [
        (Point(min_x, min_y), Point(max_x, min_y)),
        (Point(max_x, min_y), Point(max_x, max_y)),
        (Point(max_x, max_y), Point(min_x, max_y)),
        (Point(min_x, max_y), Point(min_x, min_y)),
    ]
    return any(segments_intersect(p1, p2, e1, e2) for e1, e2 in edges)


def project_point_to_segment(point, a, b) -> Tuple[float, Point, float]:
    """Project a point onto segment a-b.

    Returns:
        Tuple of (t, projection, distance) where t is the clamped fraction
        along the segment from ``a``.
    """
    dx = b.x - a.x
    dy = b.y - a.y
    length_sq = dx * dx + dy * dy
    if length_sq <= EPSILON:
        return 0.0, Point(a.x, a.y), distance(point, a)

    t = ((point.x - a.x) * dx + (point.y - a.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    projection = Point(a.x + t * dx, a.y + t * dy)
    return t, projection, distance(point, projection)


def point_segment_distance(point, a, b) -> float:
    return project_point_to_segment(point, a, b)[2]


def snap_to_grid(point, step: float = config.GRID_SNAP) -> Point:
    """Snap a point to the nearest grid node."""
    return Point(round(point.x / step) * step, round(point.y / step) * step)


def find_nearby_corner(
    point, corners: Iterable[Corner], threshold: float = config.SNAP_CORNER_RADIUS
) -> Optional[Corner]:
    """Return the first corner within ``threshold`` of the point."""
    for corner in corners:
        if distance(corner, point) <= threshold:
            return corner
    return None


def wall_endpoints(plan: Plan, wall: Wall) -> Optional[Tuple[Corner, Corner]]:
    start = plan.corners.get(wall.start_corner_id)
    end = plan.corners.get(wall.end_corner_id)
    if start is None or end is None:
        return None
    return start, end


def find_wall_at_point(
    point, plan: Plan, max_distance: float = config.OPENING_ATTACH_DISTANCE
) -> Optional[Tuple[Wall, float]]:
    """Find the wall closest to a point and the position along it.

    Args:
        point: Query point in feet.
        plan: Plan whose walls are searched.
        max_distance: Walls further away than this are ignored.

    Returns:
        Tuple of (wall, position) with position in [0, 1], or None if no
        wall is close enough.
    """
    closest: Optional[Tuple[Wall, float]] = None
    closest_distance = max_distance

    for wall in plan.walls.values():
        endpoints = wall_endpoints(plan, wall)
        if endpoints is None:
            continue
        start, end = endpoints
        if distance(start, end) <= EPSILON:
            continue

        t, _, dist = project_point_to_segment(point, start, end)
        if dist < closest_distance:
            closest_distance = dist
            closest = (wall, t)

    return closest


def point_along_wall(plan: Plan, wall: Wall, position: float) -> Optional[Point]:
    """World position of a fractional position along a wall."""
    endpoints = wall_endpoints(plan, wall)
    if endpoints is None:
        return None
    start, end = endpoints
    return Point(start.x + (end.x - start.x) * position, start.y + (end.y - start.y) * position)


def room_outline(room: Room) -> Polygon | None:
    """Build a Shapely polygon from a room's corner cycle.

    Returns:
        Shapely Polygon, or None if the room has fewer than three corners
        or the outline is not a valid polygon.
    """
    if len(room.corners) < 3:
        return None

    polygon = Polygon([(c.x, c.y) for c in room.corners])
    if not polygon.is_valid:
        return None
    return polygon


def room_perimeter(room: Room) -> float:
    """Calculate room perimeter in feet.

    Returns:
        Room perimeter, or 0.0 if the outline cannot be built.
    """
    polygon = room_outline(room)
    if polygon is None:
        return 0.0
    return polygon.length
