"""Geometry of the composite region.

The region for a scale ``r`` is the union of three shapes, each anchored in
one quadrant at the origin:

* rectangle in quadrant IV: ``0 <= x <= r`` and ``-r/2 <= y <= 0``
* quarter disk in quadrant III: ``x <= 0``, ``y <= 0``, ``x^2 + y^2 <= (r/2)^2``
* right triangle in quadrant I: ``x >= 0``, ``y >= 0``, ``x + y <= r/2``

Every boundary is inclusive. Straight edges are compared exactly; the arc gets
a small relative tolerance so points computed to lie on it are not rejected
because of rounding.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List

from region_cli.core.constants import ARC_TOLERANCE


class DomainError(ValueError):
    """Raised when the region is undefined for the given inputs."""


def check_radius(r: float) -> None:
    """Raise DomainError unless r is a finite positive number."""
    if not math.isfinite(r) or r <= 0:
        raise DomainError(f"Region is undefined for r={r!r}; r must be a finite positive number")


@dataclass(frozen=True)
class Region:
    """Immutable region for one scale value."""

    r: float
    arc_tolerance: float = ARC_TOLERANCE

    def __post_init__(self) -> None:
        check_radius(self.r)
        if not math.isfinite(self.arc_tolerance) or self.arc_tolerance < 0:
            raise DomainError(f"arc_tolerance must be a finite non-negative number, got {self.arc_tolerance!r}")

    @property
    def half(self) -> float:
        return self.r / 2.0

    def rectangle(self, x: float, y: float) -> bool:
        return 0 <= x <= self.r and -self.half <= y <= 0

    def quarter_disk(self, x: float, y: float) -> bool:
        if x > 0 or y > 0:
            return False
        limit = self.half * self.half
        return x * x + y * y <= limit + limit * self.arc_tolerance

    def triangle(self, x: float, y: float) -> bool:
        return x >= 0 and y >= 0 and x + y <= self.half

    def contains(self, x: float, y: float) -> bool:
        """Return True if (x, y) lies in any of the three shapes."""
        return self.rectangle(x, y) or self.quarter_disk(x, y) or self.triangle(x, y)

    def matching_shapes(self, x: float, y: float) -> List[str]:
        """Names of the shapes containing (x, y); several only on shared edges."""
        checks = (
            ("rectangle", self.rectangle),
            ("quarter_disk", self.quarter_disk),
            ("triangle", self.triangle),
        )
        return [name for name, predicate in checks if predicate(x, y)]

    def describe(self) -> Dict[str, Any]:
        """Shape descriptor for drawing the region.

        Angles are in degrees, measured counter-clockwise from the positive
        x axis.
        """
        half = self.half
        return {
            "r": self.r,
            "rectangle": {
                "x_min": 0.0,
                "x_max": self.r,
                "y_min": -half,
                "y_max": 0.0,
            },
            "quarter_disk": {
                "center": [0.0, 0.0],
                "radius": half,
                "start_angle": 180.0,
                "end_angle": 270.0,
            },
            "triangle": {
                "vertices": [[0.0, 0.0], [half, 0.0], [0.0, half]],
            },
        }


def build(r: float, arc_tolerance: float = ARC_TOLERANCE) -> Region:
    """Build the region for scale r."""
    return Region(r=float(r), arc_tolerance=arc_tolerance)
