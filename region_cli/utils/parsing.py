"""Parsing helpers for raw field text and batch input files."""

from __future__ import annotations

import json
import math
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_NON_FINITE = {"nan", "+nan", "-nan", "inf", "+inf", "-inf", "infinity", "+infinity", "-infinity"}


class NumberFormatError(ValueError):
    """Raised when text is not a plain real number."""


def normalize_decimal(raw: str) -> str:
    """Strip whitespace and turn a locale decimal comma into a period."""
    return raw.strip().replace(",", ".")


def parse_real(raw: Optional[str]) -> float:
    """Parse a real number written with either decimal separator.

    Only plain decimal or exponent notation is accepted; hex, underscores and
    thousands separators are rejected. ``nan``/``inf`` parse, so callers can
    report them as non-finite rather than malformed.
    """
    if raw is None:
        raise NumberFormatError("missing value")
    text = normalize_decimal(str(raw))
    if not text:
        raise NumberFormatError("empty value")
    if text.lower() in _NON_FINITE:
        return float(text)
    if not _NUMBER_RE.match(text):
        raise NumberFormatError(f"not a number: {raw!r}")
    return float(text)


def format_number(value: float, decimals: int = 6) -> str:
    """Format a float without trailing zeros (2.5 -> '2.5', 3.0 -> '3')."""
    if not math.isfinite(value):
        return str(value)
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in {"-0", ""}:
        return "0"
    return text


def _raw_field(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def load_points_input(file_path: Optional[Path], read_stdin: bool, stdin_text: str = "") -> List[Dict[str, Optional[str]]]:
    """Load {x, y, r} entries from a JSON/YAML file or stdin text.

    Values come back as text so they go through the same validator as form
    fields. A top-level mapping with a ``points`` key is accepted too.
    """
    raw_data: Any
    if file_path:
        text = file_path.read_text()
        if file_path.suffix.lower() in {".yaml", ".yml"}:
            raw_data = yaml.safe_load(text)
        else:
            raw_data = json.loads(text)
    elif read_stdin:
        text = stdin_text.strip()
        if not text:
            return []
        try:
            raw_data = json.loads(text)
        except json.JSONDecodeError:
            raw_data = yaml.safe_load(text)
    else:
        return []

    if isinstance(raw_data, dict) and isinstance(raw_data.get("points"), list):
        raw_data = raw_data["points"]
    if isinstance(raw_data, dict):
        raw_data = [raw_data]
    if not isinstance(raw_data, list):
        return []

    return [
        {key: _raw_field(item.get(key)) for key in ("x", "y", "r")}
        for item in raw_data
        if isinstance(item, dict)
    ]
