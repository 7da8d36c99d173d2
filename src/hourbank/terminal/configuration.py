# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from hourbank import configuration
from hourbank.repository.configuration import CONFIGURATION_REPO
from hourbank.terminal.custom_typer import AliasedTyperGroup
from hourbank.terminal.session import resolve_database_path

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def validate_log_level(log_level: Optional[str]) -> Optional[str]:
    if log_level is None:
        return None
    normalized = log_level.upper()
    if normalized not in LOG_LEVELS:
        raise typer.BadParameter(
            f"log level must be one of {', '.join(LOG_LEVELS)}, got '{log_level}'"
        )
    return normalized


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("config_file", str(configuration.APP_CONFIG_PATH))
    table.add_row(
        "database_path",
        config["database_path"] if config["database_path"] is not None else "None",
    )
    table.add_row("database_in_use", str(resolve_database_path()))
    table.add_row("tail_count", str(config["tail_count"]))
    table.add_row("log_level", config["log_level"])
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )

    console.print(table)


@app.command("set, s", no_args_is_help=True)
def set(
    database_path: Annotated[
        Optional[str],
        typer.Option("--database-path", help="ledger database file to use by default"),
    ] = None,
    remove_database_path: Annotated[
        bool,
        typer.Option(
            "--remove-database-path", help="go back to the default database location"
        ),
    ] = False,
    tail_count: Annotated[
        Optional[int],
        typer.Option("--tail-count", min=0, help="rows shown by tail and history"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            callback=validate_log_level,
            help="DEBUG, INFO, WARNING, ERROR or CRITICAL",
        ),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--hide-header", help="print report headers"),
    ] = None,
) -> None:
    """Update configuration settings."""
    CONFIGURATION_REPO.update_config(
        database_path=database_path,
        remove_database_path=remove_database_path,
        tail_count=tail_count,
        log_level=log_level,
        show_header=show_header,
    )

    view()
