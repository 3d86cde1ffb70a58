"""Validation functions for floor plan graphs.

This module provides the checks applied at the boundary of the graph core:
rejecting malformed input such as non-finite coordinates before it reaches
an edit, and listing integrity problems of a plan snapshot.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List

from ..core.model import Plan, Point
from ..geom.edit import opening_fits


class InvalidOperation(Exception):
    """Raised when input is rejected at the boundary of the graph core."""

    pass


COORDINATE_KEYS = ("x", "y", "dx", "dy", "degrees", "position", "width", "height", "thickness")
# String values under these keys are corner ids (``add_wall``), anything else a point
POINT_KEYS = ("point", "start", "end")


def _is_finite_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _check_point(key: str, value: Any) -> None:
    if isinstance(value, dict):
        if not {"x", "y"} <= set(value):
            raise InvalidOperation(f"Point '{key}' needs 'x' and 'y': {value!r}")
        components = {"x": value["x"], "y": value["y"]}
    elif isinstance(value, Point):
        components = {"x": value.x, "y": value.y}
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        components = {"x": value[0], "y": value[1]}
    else:
        raise InvalidOperation(f"Malformed point '{key}': {value!r}")

    for axis, component in components.items():
        if not _is_finite_number(component):
            raise InvalidOperation(f"Non-finite coordinate {key}.{axis}: {component!r}")


def validate_coordinates(params: Dict[str, Any]) -> None:
    """Reject non-finite numeric parameters of an operation.

    Scalars under the usual coordinate keys, points under the point keys
    (``{"x", "y"}`` dicts or ``[x, y]`` pairs) and point dicts anywhere in
    ``params`` are checked. Components must be real numbers; strings are
    rejected.

    Raises:
        InvalidOperation: If a coordinate is NaN, infinite or not a number.
    """
    for key, value in params.items():
        if key in POINT_KEYS and value is not None and not isinstance(value, str):
            _check_point(key, value)
        elif isinstance(value, dict) and {"x", "y"} <= set(value):
            _check_point(key, value)
        elif key in COORDINATE_KEYS and value is not None:
            if not _is_finite_number(value):
                raise InvalidOperation(f"Non-finite value for '{key}': {value!r}")


def validate_plan(plan: Plan) -> List[str]:
    """List integrity problems of a plan.

    The checks are:
    - corners have finite coordinates
    - walls reference two distinct existing corners
    - no two walls join the same unordered corner pair
    - openings reference an existing wall and fit within it

    Args:
        plan: The plan to validate.

    Returns:
        Human readable problem descriptions; empty when the plan is valid.
    """
    problems: List[str] = []

    for corner_id, corner in plan.corners.items():
        if not (_is_finite_number(corner.x) and _is_finite_number(corner.y)):
            problems.append(f"Corner '{corner_id}' has non-finite coordinates")

    seen_pairs: Dict[frozenset, str] = {}
    for wall_id, wall in plan.walls.items():
        for end in (wall.start_corner_id, wall.end_corner_id):
            if end not in plan.corners:
                problems.append(f"Wall '{wall_id}' references missing corner '{end}'")
        if wall.start_corner_id == wall.end_corner_id:
            problems.append(f"Wall '{wall_id}' starts and ends at corner '{wall.start_corner_id}'")
            continue
        pair = wall.corner_pair
        if pair in seen_pairs:
            problems.append(f"Wall '{wall_id}' duplicates wall '{seen_pairs[pair]}'")
        else:
            seen_pairs[pair] = wall_id

    for opening in (*plan.doors.values(), *plan.windows.values()):
        kind = type(opening).__name__
        if opening.wall_id not in plan.walls:
            problems.append(f"{kind} '{opening.id}' references missing wall '{opening.wall_id}'")
            continue
        length = plan.wall_length(opening.wall_id)
        if length is not None and not opening_fits(opening.position, length, opening.width):
            problems.append(
                f"{kind} '{opening.id}' at position {opening.position:.3f} does not fit "
                f"on wall '{opening.wall_id}' ({length:.2f} ft)"
            )

    return problems


def assert_valid(plan: Plan) -> None:
    """Raise if the plan has integrity problems.

    Raises:
        InvalidOperation: Listing every problem found.
    """
    problems = validate_plan(plan)
    if problems:
        raise InvalidOperation("; ".join(problems))
