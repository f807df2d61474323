"""Batch evaluation from JSON/YAML input."""

from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
import yaml
from rich.table import Table

from region_cli.commands.common import get_state, log_verbose, print_json_payload
from region_cli.core.classify import evaluate_input
from region_cli.core.config import resolve_output_dir
from region_cli.core.models import ValidationBounds
from region_cli.core.validation import ValidationError, validate
from region_cli.exporters.json_export import write_report
from region_cli.utils.parsing import format_number, load_points_input


def evaluate_entries(
    entries: List[Dict[str, Optional[str]]],
    bounds: ValidationBounds,
    arc_tolerance: float,
) -> List[Dict[str, Any]]:
    """Evaluate each raw entry; invalid entries carry their errors instead."""
    results: List[Dict[str, Any]] = []
    for index, entry in enumerate(entries, 1):
        try:
            validated = validate(entry.get("x"), entry.get("y"), entry.get("r"), bounds=bounds)
        except ValidationError as exc:
            results.append({"index": index, "ok": False, "input": entry, "errors": exc.messages})
            continue
        record = evaluate_input(validated, arc_tolerance=arc_tolerance)
        results.append({"index": index, "ok": True, **record.to_payload()})
    return results


def _summary(results: List[Dict[str, Any]]) -> Dict[str, int]:
    counts = Counter()
    for item in results:
        if not item["ok"]:
            counts["invalid"] += 1
        elif item["hit"]:
            counts["hits"] += 1
        else:
            counts["misses"] += 1
    return {
        "total": len(results),
        "hits": counts["hits"],
        "misses": counts["misses"],
        "invalid": counts["invalid"],
    }


def batch_command(
    ctx: typer.Context,
    file_path: Optional[Path] = typer.Argument(None, help="JSON or YAML file with {x, y, r} entries"),
    stdin: bool = typer.Option(False, "--stdin", help="Read entries from stdin"),
    output: Optional[Path] = typer.Option(None, help="Write the JSON report to this file"),
    save: bool = typer.Option(False, help="Write the JSON report to the configured output directory"),
) -> None:
    """Evaluate many points at once."""
    state = get_state(ctx)

    if file_path is None and not stdin:
        raise typer.BadParameter("Provide an input file or --stdin")

    stdin_text = sys.stdin.read() if stdin and file_path is None else ""
    try:
        entries = load_points_input(file_path, read_stdin=stdin, stdin_text=stdin_text)
    except (OSError, ValueError, RecursionError, yaml.YAMLError) as exc:
        typer.echo(f"Failed to read input: {exc}")
        raise typer.Exit(code=1)

    log_verbose(state, f"loaded {len(entries)} entries")

    results = evaluate_entries(
        entries,
        bounds=state.bounds,
        arc_tolerance=state.arc_tolerance,
    )
    payload = {"results": results, "summary": _summary(results)}

    report_path: Optional[Path] = None
    if output is not None:
        report_path = write_report(output.expanduser().resolve(), results, payload["summary"])
    elif save:
        report_path = write_report(
            resolve_output_dir(state.config) / "evaluations.json", results, payload["summary"]
        )
    if report_path is not None:
        log_verbose(state, f"report written to {report_path}")

    if state.json_output:
        print_json_payload(state, payload)
        return

    if state.plain_output:
        typer.echo("index\tx\ty\tr\tresult")
        for item in results:
            if item["ok"]:
                typer.echo(
                    "\t".join(
                        [
                            str(item["index"]),
                            format_number(item["x"]),
                            format_number(item["y"]),
                            format_number(item["r"]),
                            "hit" if item["hit"] else "miss",
                        ]
                    )
                )
            else:
                raw = item["input"]
                typer.echo(
                    "\t".join(
                        [
                            str(item["index"]),
                            str(raw.get("x")),
                            str(raw.get("y")),
                            str(raw.get("r")),
                            "error: " + "; ".join(item["errors"]),
                        ]
                    )
                )
        summary = payload["summary"]
        typer.echo(f"total\t{summary['total']}")
        typer.echo(f"hits\t{summary['hits']}")
        if report_path is not None:
            typer.echo(f"report\t{report_path}")
        return

    table = Table(title=f"Evaluations ({len(results)} total)")
    table.add_column("#")
    table.add_column("X")
    table.add_column("Y")
    table.add_column("R")
    table.add_column("Result")
    table.add_column("Duration")

    for item in results:
        if item["ok"]:
            table.add_row(
                str(item["index"]),
                format_number(item["x"]),
                format_number(item["y"]),
                format_number(item["r"]),
                "HIT" if item["hit"] else "MISS",
                f"{item['execMicros']:.3f} us",
            )
        else:
            raw = item["input"]
            table.add_row(
                str(item["index"]),
                str(raw.get("x")),
                str(raw.get("y")),
                str(raw.get("r")),
                "; ".join(item["errors"]),
                "-",
            )

    state.console.print(table)
    summary = payload["summary"]
    state.console.print(
        f"Hits: {summary['hits']}  Misses: {summary['misses']}  Invalid: {summary['invalid']}"
    )
    if report_path is not None:
        state.console.print(f"Report written to: {report_path}")
