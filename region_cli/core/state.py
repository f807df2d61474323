"""Runtime state container for CLI context."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from rich.console import Console

from region_cli.core.classify import arc_tolerance_from_config
from region_cli.core.models import ValidationBounds
from region_cli.core.validation import bounds_from_config


@dataclass
class CLIState:
    """CLI runtime options and loaded configuration."""

    json_output: bool
    plain_output: bool
    verbose: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    console: Console

    @property
    def bounds(self) -> ValidationBounds:
        """Validation bounds from the [validation] table."""
        return bounds_from_config(self.config)

    @property
    def arc_tolerance(self) -> float:
        return arc_tolerance_from_config(self.config)
