"""
Command-line interface

    python -m registry_env show  --target user --prefix APP_
    python -m registry_env keys  --target machine

Author: registry_env Project
License: MIT
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config.config_loader import ConfigLoader
from .core.errors import InvalidArgument, LoadFailure
from .providers.registry_env import RegistryEnvironmentVariablesProvider
from .stores.base import EnvironmentVariableTarget
from .utils.logger import setup_logging

app = typer.Typer(
    name="registry-env",
    help="Inspect configuration loaded from persisted environment variables",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def _parse_target(value: str) -> EnvironmentVariableTarget:
    for target in EnvironmentVariableTarget:
        if target.value.lower() == value.lower():
            return target
    raise typer.BadParameter(f"Unknown target '{value}' (expected user or machine)")


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit JSON log records"),
):
    """Configure logging for every command."""
    setup_logging(log_level=log_level or "WARNING", json_format=json_logs)
    # explicit flags win over the Logging section of the settings
    ctx.obj = {"logging_from_flags": log_level is not None or json_logs}


@app.command("show")
def show_settings(
    ctx: typer.Context,
    target: str = typer.Option("user", "--target", "-t", help="user or machine"),
    prefix: Optional[str] = typer.Option(None, "--prefix", "-p", help="Variable prefix filter"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Settings YAML file"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """Build the layered configuration and print the bound AppSettings."""
    try:
        loader = ConfigLoader(
            config, target=_parse_target(target), prefix=prefix,
            apply_logging=not (ctx.obj or {}).get("logging_from_flags", False)
        )
        settings = loader.load()
    except (InvalidArgument, LoadFailure) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    dumped = settings.model_dump(by_alias=True, mode="json")
    if as_json:
        typer.echo(json.dumps(dumped, indent=2))
        return

    table = Table(title="AppSettings")
    table.add_column("Key")
    table.add_column("Value")
    for key, value in _flatten(dumped):
        table.add_row(key, "" if value is None else str(value))
    console.print(table)


@app.command("keys")
def list_keys(
    target: str = typer.Option("user", "--target", "-t", help="user or machine"),
    prefix: Optional[str] = typer.Option(None, "--prefix", "-p", help="Variable prefix filter"),
):
    """List the configuration keys produced from persisted variables."""
    try:
        provider = RegistryEnvironmentVariablesProvider(_parse_target(target), prefix)
        provider.load()
    except (InvalidArgument, LoadFailure) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    table = Table(title=str(provider))
    table.add_column("Key")
    table.add_column("Value")
    for key in sorted(provider.data, key=str.casefold):
        value = provider.data[key]
        table.add_row(key, "<null>" if value is None else value)
    console.print(table)


def _flatten(node, path=""):
    if isinstance(node, dict):
        for key, child in node.items():
            yield from _flatten(child, f"{path}:{key}" if path else key)
    else:
        yield path, node
