"""Validation of raw x, y, r fields."""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Sequence

from region_cli.core.constants import DEFAULT_ALLOWED_RADII, RADIUS_MATCH_TOLERANCE
from region_cli.core.models import ValidatedInput, ValidationBounds
from region_cli.utils.parsing import NumberFormatError, format_number, parse_real

DEFAULT_BOUNDS = ValidationBounds()


class ValidationError(ValueError):
    """Raised with every field message when raw input is rejected."""

    def __init__(self, messages: Sequence[str]) -> None:
        self.messages: List[str] = list(messages)
        super().__init__("; ".join(self.messages))


def _parse_field(name: str, raw: Optional[str], errors: List[str]) -> Optional[float]:
    if raw is None or not str(raw).strip():
        errors.append(f"{name} is required")
        return None
    try:
        value = parse_real(raw)
    except NumberFormatError:
        errors.append(f"{name} must be a real number")
        return None
    if not math.isfinite(value):
        errors.append(f"{name} must be finite")
        return None
    return value


def _check_range(name: str, value: float, low: float, high: float, errors: List[str]) -> None:
    if value < low or value > high:
        errors.append(f"{name} must be in range [{format_number(low)}, {format_number(high)}]")


def _check_radius(r: float, bounds: ValidationBounds, errors: List[str]) -> None:
    if r <= 0:
        errors.append("r must be positive")
        return
    if bounds.r_max is not None and r > bounds.r_max:
        errors.append(f"r must not be greater than {format_number(bounds.r_max)}")
    if bounds.allowed_radii and not any(
        abs(r - allowed) < RADIUS_MATCH_TOLERANCE for allowed in bounds.allowed_radii
    ):
        allowed_text = ", ".join(format_number(value) for value in bounds.allowed_radii)
        errors.append(f"r must be one of {{{allowed_text}}}")


def validate(
    raw_x: Optional[str],
    raw_y: Optional[str],
    raw_r: Optional[str],
    bounds: ValidationBounds = DEFAULT_BOUNDS,
) -> ValidatedInput:
    """Parse and bounds-check raw fields, reporting every failure at once."""
    errors: List[str] = []

    x = _parse_field("x", raw_x, errors)
    if x is not None:
        _check_range("x", x, bounds.x_min, bounds.x_max, errors)

    y = _parse_field("y", raw_y, errors)
    if y is not None:
        _check_range("y", y, bounds.y_min, bounds.y_max, errors)

    r = _parse_field("r", raw_r, errors)
    if r is not None:
        _check_radius(r, bounds, errors)

    if errors or x is None or y is None or r is None:
        raise ValidationError(errors)
    return ValidatedInput(x=x, y=y, r=r)


def validate_radius(raw_r: Optional[str], bounds: ValidationBounds = DEFAULT_BOUNDS) -> float:
    """Parse and check r on its own, for commands that take no point."""
    errors: List[str] = []
    r = _parse_field("r", raw_r, errors)
    if r is not None:
        _check_radius(r, bounds, errors)
    if errors or r is None:
        raise ValidationError(errors)
    return r


def _as_float(value: Any, default: Optional[float]) -> Optional[float]:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def bounds_from_config(config: Dict[str, Any]) -> ValidationBounds:
    """Build validation bounds from the [validation] config table."""
    section = config.get("validation", {})
    if not isinstance(section, dict):
        return DEFAULT_BOUNDS

    radii_raw = section.get("allowed_radii", list(DEFAULT_ALLOWED_RADII))
    radii: List[float] = []
    if isinstance(radii_raw, (list, tuple)):
        for item in radii_raw:
            value = _as_float(item, None)
            if value is not None and value > 0:
                radii.append(value)

    return ValidationBounds(
        x_min=_as_float(section.get("x_min"), DEFAULT_BOUNDS.x_min),
        x_max=_as_float(section.get("x_max"), DEFAULT_BOUNDS.x_max),
        y_min=_as_float(section.get("y_min"), DEFAULT_BOUNDS.y_min),
        y_max=_as_float(section.get("y_max"), DEFAULT_BOUNDS.y_max),
        r_max=_as_float(section.get("r_max"), None),
        allowed_radii=tuple(radii),
    )
