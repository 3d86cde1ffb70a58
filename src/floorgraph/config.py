"""
Configuration for floorgraph

Policy constants used by the editing helpers and by callers driving the
graph from pointer input. All lengths are in feet.
"""

# Walls
WALL_THICKNESS = 0.5  # 6 inches
WALL_HEIGHT = 9.0

# Doors
DOOR_WIDTH_SINGLE = 3.0
DOOR_WIDTH_DOUBLE = 6.0
DOOR_HEIGHT = 6.67  # 6'8"
DOOR_WIDTHS = {
    "single": DOOR_WIDTH_SINGLE,
    "double": DOOR_WIDTH_DOUBLE,
    "sliding": 6.0,
    "french": 5.0,
    "opening": 4.0,
}

# Windows
WINDOW_WIDTH = 3.0
WINDOW_HEIGHT = 4.0
WINDOW_SILL_HEIGHT = 3.0

# Snapping and thresholds
GRID_SNAP = 0.5
SNAP_CORNER_RADIUS = 0.5
CLOSE_POLYGON_THRESHOLD = 0.75  # also used for corner merge proximity
OPENING_ATTACH_DISTANCE = 2.0
MIN_SELECTION_BOX = 0.5

# Room detection
MAX_TRACE_ITERATIONS = 500  # safety valve for a single face trace
ROOM_ID_SEPARATOR = ","

# Rotation results are rounded to this many decimals (0.01 ft)
ROTATION_DECIMALS = 2

ROOM_TYPE_LABELS = {
    "bedroom": "Bedroom",
    "bathroom": "Bathroom",
    "half_bath": "Half Bath",
    "kitchen": "Kitchen",
    "living": "Living Room",
    "dining": "Dining Room",
    "closet": "Closet",
    "laundry": "Laundry",
    "storage": "Storage",
    "utility": "Utility",
    "entry": "Entry",
    "corridor": "Corridor",
    "flex": "Flex Space",
    "other": "Other",
}

# Upper area bounds (sq ft) for suggest_room_type, checked in order
ROOM_TYPE_AREA_THRESHOLDS = (
    (25.0, "closet"),
    (50.0, "half_bath"),
    (100.0, "bathroom"),
    (200.0, "bedroom"),
)
LARGE_ROOM_TYPE = "living"
