"""JSON report export."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


def write_report(
    path: Path,
    results: List[Dict[str, Any]],
    summary: Dict[str, Any],
    generated_at: Optional[datetime] = None,
) -> Path:
    """Write batch results as pretty JSON and return the path."""
    payload = {
        "generated_at": (generated_at or datetime.now(timezone.utc)).isoformat(),
        "summary": summary,
        "results": results,
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2) + "\n")
    return path
