"""Core API for floor plan editing.

This module provides the main interface used by an editor front end:
apply an operation dictionary to a plan, then recompute the rooms.
Every edit is synchronous and returns a new plan snapshot.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..core.model import Plan, Room
from .ops import get_operation
from .rooms import detect_rooms, reattach_room_labels
from .validators import InvalidOperation, validate_coordinates

LOGGER = logging.getLogger(__name__)


def apply(plan: Plan, operation: dict) -> Plan:
    """Apply an operation to a plan and return the modified plan.

    Operations referencing entities that do not exist leave the plan
    unchanged.

    Args:
        plan: The plan to modify.
        operation: Dictionary describing the operation to apply, with the
            operation name under ``op`` (or ``type``).

    Returns:
        A new Plan object with the operation applied, or ``plan`` itself
        when the operation is a no-op.

    Raises:
        ValueError: If the operation type is missing, not recognized, or
            given the wrong parameters.
        InvalidOperation: If a coordinate is not a finite number.
    """
    operation_type = operation.get("op") or operation.get("type")

    if operation_type is None:
        raise ValueError("Operation must have an 'op' or 'type' field")

    try:
        op = get_operation(operation_type)
    except KeyError:
        raise ValueError(f"Unknown operation type: {operation_type}")

    # Extract operation parameters (exclude 'op' and 'type' fields)
    params = {k: v for k, v in operation.items() if k not in ["op", "type"]}

    validate_coordinates(params)

    try:
        if not op.precheck(plan, **params):
            LOGGER.debug("Skipping %s: referenced entities not found (%s)", operation_type, params)
            return plan
        return op.apply(plan, **params)
    except (TypeError, KeyError) as e:
        raise ValueError(f"Invalid parameters for {operation_type}: {e}")


def rooms(plan: Plan) -> List[Room]:
    """Detect the rooms of a plan."""
    return detect_rooms(plan.corners, plan.walls)


def edit(plan: Plan, operation: dict, previous_rooms: Optional[List[Room]] = None) -> Tuple[Plan, List[Room]]:
    """Apply an operation and recompute the rooms.

    Args:
        plan: The plan to modify.
        operation: Dictionary describing the operation to apply.
        previous_rooms: Rooms from before the edit; their names and types
            are carried over to the recomputed rooms.

    Returns:
        A tuple of the new plan and its rooms.
    """
    new_plan = apply(plan, operation)
    new_rooms = rooms(new_plan)
    if previous_rooms:
        new_rooms = reattach_room_labels(previous_rooms, new_rooms)
    return new_plan, new_rooms


def apply_operations(plan: Plan, operations: list) -> Tuple[Plan, List[dict]]:
    """Apply a list of operations sequentially.

    A failing operation is recorded and skipped; the remaining operations
    are applied to the last good plan.

    Args:
        plan: The plan to modify.
        operations: List of operation dictionaries to apply.

    Returns:
        A tuple containing:
        - The final plan
        - List of results for each operation, containing:
          - operation: The operation that was applied
          - success: Whether the operation was accepted
          - changed: Whether the plan changed
          - error: Error message if the operation failed (optional)
    """
    current = plan
    results = []

    for i, operation in enumerate(operations):
        result = {"operation": operation, "success": False, "changed": False}
        try:
            updated = apply(current, operation)
            result["success"] = True
            result["changed"] = updated is not current
            current = updated
        except (ValueError, InvalidOperation) as e:
            LOGGER.warning("Operation %d (%s) failed: %s", i + 1, operation.get("op"), e)
            result["error"] = str(e)
        results.append(result)

    return current, results
