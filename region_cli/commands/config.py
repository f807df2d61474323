"""Configuration commands."""

from __future__ import annotations

import typer

from region_cli.commands.common import get_state, print_json_payload
from region_cli.core.config import DEFAULT_CONFIG, save_config

app = typer.Typer(help="Inspect or create the configuration file")


@app.command("show")
def show_command(ctx: typer.Context) -> None:
    """Print the effective configuration."""
    state = get_state(ctx)

    if state.json_output or state.plain_output:
        print_json_payload(state, {"path": str(state.config_path), "config": state.config})
        return

    exists = state.config_path.exists()
    state.console.print(f"Config file: {state.config_path}{'' if exists else ' (not found, using defaults)'}")
    state.console.print_json(data=state.config)


@app.command("init")
def init_command(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Write the default configuration to the config path."""
    state = get_state(ctx)

    if state.config_path.exists() and not force:
        typer.echo(f"Config file already exists: {state.config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    path = save_config(DEFAULT_CONFIG, state.config_path)

    if state.json_output:
        print_json_payload(state, {"status": "success", "path": str(path)})
        return
    if state.plain_output:
        typer.echo(f"path\t{path}")
        return
    state.console.print(f"Wrote default config to {path}")
