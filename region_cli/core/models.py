"""Lightweight data models shared by the core and the commands."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from region_cli.core.constants import (
    DEFAULT_ALLOWED_RADII,
    DEFAULT_X_RANGE,
    DEFAULT_Y_RANGE,
)


@dataclass(frozen=True)
class Point:
    """A point on the plane."""

    x: float
    y: float


@dataclass(frozen=True)
class ValidatedInput:
    """Parsed and bounds-checked (x, y, r), built fresh per submission."""

    x: float
    y: float
    r: float

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class ValidationBounds:
    """Deployment limits applied by the input validator.

    An empty ``allowed_radii`` means any positive radius is accepted.
    """

    x_min: float = DEFAULT_X_RANGE[0]
    x_max: float = DEFAULT_X_RANGE[1]
    y_min: float = DEFAULT_Y_RANGE[0]
    y_max: float = DEFAULT_Y_RANGE[1]
    r_max: Optional[float] = None
    allowed_radii: Tuple[float, ...] = DEFAULT_ALLOWED_RADII


@dataclass(frozen=True)
class EvaluationRecord:
    """Classifier verdict plus timing metadata for one evaluation."""

    point: Point
    radius: float
    hit: bool
    evaluated_at: datetime
    duration_micros: float

    def to_payload(self) -> Dict[str, Any]:
        """Return a JSON-ready mapping of the record."""
        return {
            "x": self.point.x,
            "y": self.point.y,
            "r": self.radius,
            "hit": self.hit,
            "now": self.evaluated_at.isoformat(),
            "execMicros": round(self.duration_micros, 3),
        }
