"""Engine module for floor plan editing.

This module provides the core API for applying operations to a plan and
detecting the rooms it encloses.
"""

from .api import apply, apply_operations, edit, rooms
from .rooms import detect_rooms
from .validators import InvalidOperation

__all__ = ["apply", "apply_operations", "edit", "rooms", "detect_rooms", "InvalidOperation"]
