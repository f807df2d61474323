"""Single-point check and raw form commands."""

from __future__ import annotations

from typing import Optional

import typer
from rich.table import Table

from region_cli.commands.common import get_state, log_verbose, print_json_payload, report_errors
from region_cli.core.classify import evaluate_input
from region_cli.core.constants import HTTP_STATUS_TEXT, SHAPE_LABELS
from region_cli.core.region import DomainError, build
from region_cli.core.transport import handle_request
from region_cli.core.validation import ValidationError, validate
from region_cli.utils.parsing import format_number


def check_command(
    ctx: typer.Context,
    x: Optional[str] = typer.Option(None, "--x", "-x", help="X coordinate (comma or period decimals)"),
    y: Optional[str] = typer.Option(None, "--y", "-y", help="Y coordinate (comma or period decimals)"),
    r: Optional[str] = typer.Option(None, "--r", "-r", help="Scale parameter R"),
) -> None:
    """Check whether a point lies inside the region for R."""
    state = get_state(ctx)

    try:
        validated = validate(x, y, r, bounds=state.bounds)
    except ValidationError as exc:
        report_errors(state, exc.messages)
        raise typer.Exit(code=1)

    log_verbose(state, f"validated input x={validated.x} y={validated.y} r={validated.r}")

    tolerance = state.arc_tolerance
    try:
        record = evaluate_input(validated, arc_tolerance=tolerance)
    except DomainError as exc:
        report_errors(state, [str(exc)], title="Domain error")
        raise typer.Exit(code=1)

    log_verbose(state, f"classified in {record.duration_micros:.3f} us")
    shapes = build(validated.r, arc_tolerance=tolerance).matching_shapes(validated.x, validated.y)

    if state.json_output:
        payload = {"ok": True, **record.to_payload(), "shapes": shapes}
        print_json_payload(state, payload)
        return

    if state.plain_output:
        typer.echo(f"x\t{format_number(record.point.x)}")
        typer.echo(f"y\t{format_number(record.point.y)}")
        typer.echo(f"r\t{format_number(record.radius)}")
        typer.echo(f"hit\t{str(record.hit).lower()}")
        typer.echo(f"now\t{record.evaluated_at.isoformat()}")
        typer.echo(f"exec_micros\t{record.duration_micros:.3f}")
        return

    table = Table(title="Region check")
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Point", f"({format_number(record.point.x)}, {format_number(record.point.y)})")
    table.add_row("R", format_number(record.radius))
    table.add_row("Result", "HIT" if record.hit else "MISS")
    table.add_row("Shapes", ", ".join(SHAPE_LABELS[name] for name in shapes) or "-")
    table.add_row("Evaluated at", record.evaluated_at.isoformat())
    table.add_row("Duration", f"{record.duration_micros:.3f} us")
    state.console.print(table)


def form_command(
    ctx: typer.Context,
    body: str = typer.Argument(..., help="Raw request body, e.g. 'x=1&y=-0,5&r=2'"),
    method: str = typer.Option("POST", help="Request method"),
    content_type: str = typer.Option(
        "application/x-www-form-urlencoded",
        "--content-type",
        help="Body content type (application/json for JSON bodies)",
    ),
) -> None:
    """Run a raw form submission and print the response object."""
    state = get_state(ctx)

    is_get = method.upper() == "GET"
    status, payload = handle_request(
        method,
        body="" if is_get else body,
        content_type=content_type,
        query_string=body if is_get else "",
        bounds=state.bounds,
        arc_tolerance=state.arc_tolerance,
    )
    log_verbose(state, f"status {status} {HTTP_STATUS_TEXT.get(status, '')}".rstrip())

    if state.json_output or state.plain_output:
        print_json_payload(state, payload)
    else:
        state.console.print(f"Status: {status} {HTTP_STATUS_TEXT.get(status, '')}".rstrip())
        state.console.print_json(data=payload)

    if not payload.get("ok"):
        raise typer.Exit(code=1)
