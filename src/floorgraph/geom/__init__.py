"""Geometry and graph editing for floor plans.

This module provides the geometric helpers (bearings, shoelace area,
point-in-polygon, projections) and the functions that edit the
corner/wall graph.
"""

from .polygon import room_outline, room_perimeter, signed_polygon_area

__all__ = ["room_outline", "room_perimeter", "signed_polygon_area"]
