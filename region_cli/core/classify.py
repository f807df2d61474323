"""Region membership classification."""

from __future__ import annotations

import math
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from region_cli.core.constants import ARC_TOLERANCE
from region_cli.core.models import EvaluationRecord, Point, ValidatedInput
from region_cli.core.region import DomainError, build, check_radius


def classify(x: float, y: float, r: float, arc_tolerance: float = ARC_TOLERANCE) -> bool:
    """Return True if (x, y) is inside the region for scale r.

    Raises DomainError for r <= 0 or a non-finite point instead of returning
    False, since the region has no meaning there.
    """
    check_radius(r)
    if not (math.isfinite(x) and math.isfinite(y)):
        raise DomainError(f"Point ({x!r}, {y!r}) must have finite coordinates")
    return build(r, arc_tolerance=arc_tolerance).contains(x, y)


def evaluate(
    x: float,
    y: float,
    r: float,
    arc_tolerance: float = ARC_TOLERANCE,
    now: Optional[datetime] = None,
) -> EvaluationRecord:
    """Classify (x, y) and wrap the verdict with timestamp and duration."""
    started = time.perf_counter_ns()
    hit = classify(x, y, r, arc_tolerance=arc_tolerance)
    elapsed_ns = time.perf_counter_ns() - started

    return EvaluationRecord(
        point=Point(float(x), float(y)),
        radius=float(r),
        hit=hit,
        evaluated_at=now or datetime.now(timezone.utc),
        duration_micros=elapsed_ns / 1000.0,
    )


def evaluate_input(
    validated: ValidatedInput,
    arc_tolerance: float = ARC_TOLERANCE,
    now: Optional[datetime] = None,
) -> EvaluationRecord:
    """Evaluate an already validated submission."""
    return evaluate(validated.x, validated.y, validated.r, arc_tolerance=arc_tolerance, now=now)


def arc_tolerance_from_config(config: Dict[str, Any]) -> float:
    """Read the arc tolerance from config, falling back to the default."""
    raw = config.get("classification", {}).get("arc_tolerance", ARC_TOLERANCE)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return ARC_TOLERANCE
    if not math.isfinite(value) or value < 0:
        return ARC_TOLERANCE
    return value
