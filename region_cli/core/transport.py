"""Request-body codec for the transport side.

Turns a raw request (method, body, content type) into raw x/y/r text,
runs validation and evaluation, and builds the response object. The wire
contract is fixed to these keys:

* success: ``{"ok": true, "hit": bool, "now": iso8601, "execMicros": float,
  "point": {"x", "y", "r"}}``
* validation failure: ``{"ok": false, "errors": [...], "now": iso8601}``
* malformed request: ``{"ok": false, "reason": str, "now": iso8601}``
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple
from urllib.parse import unquote_plus

from region_cli.core.classify import evaluate_input
from region_cli.core.constants import ARC_TOLERANCE, FIELD_NAMES
from region_cli.core.models import EvaluationRecord, ValidationBounds
from region_cli.core.validation import DEFAULT_BOUNDS, ValidationError, validate


class RequestError(ValueError):
    """Raised when a request body cannot be decoded."""


def parse_form(body: str) -> Dict[str, str]:
    """Decode an application/x-www-form-urlencoded body.

    A key without ``=`` maps to an empty string; the last occurrence of a key
    wins.
    """
    fields: Dict[str, str] = {}
    if not body:
        return fields
    for part in body.split("&"):
        if not part:
            continue
        key, sep, value = part.partition("=")
        fields[unquote_plus(key)] = unquote_plus(value) if sep else ""
    return fields


def parse_json_fields(body: str) -> Dict[str, str]:
    """Decode a flat JSON object, stringifying scalar values."""
    if not body.strip():
        return {}
    try:
        loaded = json.loads(body)
    except (ValueError, RecursionError) as exc:
        raise RequestError(f"Invalid JSON body: {exc}") from exc
    if not isinstance(loaded, dict):
        raise RequestError("JSON body must be an object")

    fields: Dict[str, str] = {}
    for key, value in loaded.items():
        if value is None or isinstance(value, (dict, list)):
            continue
        fields[str(key)] = str(value).lower() if isinstance(value, bool) else str(value)
    return fields


def _now_iso(now: Optional[datetime]) -> str:
    return (now or datetime.now(timezone.utc)).isoformat()


def success_payload(record: EvaluationRecord) -> Dict[str, Any]:
    return {
        "ok": True,
        "hit": record.hit,
        "now": record.evaluated_at.isoformat(),
        "execMicros": round(record.duration_micros, 3),
        "point": {"x": record.point.x, "y": record.point.y, "r": record.radius},
    }


def error_payload(messages: Any, now: Optional[datetime] = None) -> Dict[str, Any]:
    return {"ok": False, "errors": list(messages), "now": _now_iso(now)}


def reason_payload(reason: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    return {"ok": False, "reason": reason, "now": _now_iso(now)}


def extract_fields(method: str, body: str, content_type: str = "", query_string: str = "") -> Dict[str, str]:
    """Pick the raw fields from a request according to method and content type."""
    if method.upper() == "GET":
        return parse_form(query_string)
    if content_type.lower().startswith("application/json"):
        return parse_json_fields(body)
    return parse_form(body)


def handle_request(
    method: str,
    body: str = "",
    content_type: str = "",
    query_string: str = "",
    bounds: ValidationBounds = DEFAULT_BOUNDS,
    arc_tolerance: float = ARC_TOLERANCE,
    now: Optional[datetime] = None,
) -> Tuple[int, Dict[str, Any]]:
    """Run one request through validate and evaluate; return (status, payload)."""
    if method.upper() not in {"GET", "POST"}:
        return 405, reason_payload(f"Method {method.upper()} is not allowed; use POST", now)

    try:
        fields = extract_fields(method, body, content_type=content_type, query_string=query_string)
    except RequestError as exc:
        return 400, reason_payload(str(exc), now)

    try:
        validated = validate(*(fields.get(name) for name in FIELD_NAMES), bounds=bounds)
    except ValidationError as exc:
        return 422, error_payload(exc.messages, now)

    record = evaluate_input(validated, arc_tolerance=arc_tolerance, now=now)
    return 200, success_payload(record)
