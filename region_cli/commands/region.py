"""Region description command."""

from __future__ import annotations

from typing import Optional

import typer
from rich.table import Table

from region_cli.commands.common import get_state, print_json_payload, report_errors
from region_cli.core.region import build
from region_cli.core.validation import ValidationError, validate_radius
from region_cli.utils.parsing import format_number


def describe_command(
    ctx: typer.Context,
    r: Optional[str] = typer.Option(None, "--r", "-r", help="Scale parameter R"),
) -> None:
    """Print the shape geometry of the region for R."""
    state = get_state(ctx)

    try:
        radius = validate_radius(r, bounds=state.bounds)
    except ValidationError as exc:
        report_errors(state, exc.messages)
        raise typer.Exit(code=1)

    descriptor = build(radius, arc_tolerance=state.arc_tolerance).describe()

    if state.json_output or state.plain_output:
        print_json_payload(state, descriptor)
        return

    rect = descriptor["rectangle"]
    disk = descriptor["quarter_disk"]
    tri = descriptor["triangle"]

    table = Table(title=f"Region for R={format_number(radius)}")
    table.add_column("Shape")
    table.add_column("Geometry")
    table.add_row(
        "Rectangle",
        f"x in [{format_number(rect['x_min'])}, {format_number(rect['x_max'])}], "
        f"y in [{format_number(rect['y_min'])}, {format_number(rect['y_max'])}]",
    )
    table.add_row(
        "Quarter disk",
        f"center (0, 0), radius {format_number(disk['radius'])}, "
        f"{format_number(disk['start_angle'])}-{format_number(disk['end_angle'])} deg",
    )
    table.add_row(
        "Triangle",
        ", ".join(f"({format_number(vx)}, {format_number(vy)})" for vx, vy in tri["vertices"]),
    )
    state.console.print(table)
