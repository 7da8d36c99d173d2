# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from hourbank import state as app_state
from hourbank.initialize import set_log_level
from hourbank.terminal import configuration, ledger, schema, tail
from hourbank.terminal.custom_typer import OrderedAliasedTyperGroup

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="hourbank - Log your work hour balance.",
    no_args_is_help=True,
)
app.command(
    name="add, a",
    no_args_is_help=True,
    # lets negative amounts and day offsets through as arguments
    context_settings={"ignore_unknown_options": True},
)(ledger.add)
app.command(name="delete, d")(ledger.delete)
app.command(name="undo, u")(ledger.undo)
app.command(name="balance, b")(ledger.balance)
app.add_typer(tail.app, name="tail, t", help="Tail the latest ledger entries.")
app.command(name="show, s", no_args_is_help=True)(ledger.show)
app.command(name="history, h")(ledger.history)
app.command(name="migrate, m")(schema.migrate)
app.command(name="schema, sc")(schema.schema)
app.add_typer(configuration.app, name="config, c", help="View or change settings.")


@app.callback()
def main_callback(
    database: Annotated[
        Optional[Path],
        typer.Option(
            "--database",
            help="Path to the ledger database",
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug output to stderr"),
    ] = False,
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
) -> None:
    """
    hourbank - Log your work hour balance.

    Global options that apply to all commands.
    """
    if database is not None:
        app_state.set_database_path(database)
    if verbose:
        set_log_level(logging.DEBUG)
    if no_header:
        app_state.set_show_header(False)


def run() -> None:
    app()
