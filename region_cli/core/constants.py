"""Static constants for region-cli."""

from __future__ import annotations

FIELD_NAMES = ("x", "y", "r")

DEFAULT_X_RANGE = (-5.0, 5.0)
DEFAULT_Y_RANGE = (-5.0, 5.0)
DEFAULT_ALLOWED_RADII = (1.0, 1.5, 2.0, 2.5, 3.0)

# Relative slack applied to (r/2)^2 in the quarter-disk test.
ARC_TOLERANCE = 1e-9

# Absolute tolerance for matching r against the allowed set.
RADIUS_MATCH_TOLERANCE = 1e-6

SHAPE_LABELS = {
    "rectangle": "Rectangle (x >= 0, y <= 0)",
    "quarter_disk": "Quarter disk (x <= 0, y <= 0)",
    "triangle": "Triangle (x >= 0, y >= 0)",
}

HTTP_STATUS_TEXT = {
    200: "OK",
    400: "Bad Request",
    405: "Method Not Allowed",
    422: "Unprocessable Entity",
}
