"""Shared command helpers."""

from __future__ import annotations

import json
from typing import Any, Iterable

import typer

from region_cli.core.state import CLIState


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def log_verbose(state: CLIState, message: str) -> None:
    """Emit a diagnostic line when --verbose is set."""
    if state.verbose and not state.quiet and not state.json_output:
        state.console.log(message)


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":")))
        return
    state.console.print_json(data=payload)


def report_errors(state: CLIState, messages: Iterable[str], title: str = "Invalid input") -> None:
    """Print validation messages in the active output mode."""
    messages = list(messages)
    if state.json_output:
        print_json_payload(state, {"ok": False, "errors": messages})
        return
    if state.plain_output:
        typer.echo("status\terror")
        for message in messages:
            typer.echo(f"error\t{message}")
        return
    state.console.print(f"{title}:", markup=False)
    for message in messages:
        state.console.print(f"- {message}", markup=False)
