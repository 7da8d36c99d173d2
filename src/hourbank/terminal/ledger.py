# SPDX-License-Identifier: MIT

from decimal import Decimal
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console

from hourbank.model.selector import Selector
from hourbank.repository.configuration import CONFIGURATION_REPO
from hourbank.terminal.parse import parse_amount, parse_date, parse_id_list
from hourbank.terminal.session import ledger_session, resolve_database_path
from hourbank.time import date_to_str
from hourbank.view.util import format_amount
from hourbank.view.views.balance import balance_view
from hourbank.view.views.entry import single_entry_view
from hourbank.view.views.history import history_view, undo_view


def add(
    date: Annotated[
        pendulum.Date,
        typer.Argument(
            parser=parse_date,
            help="valid inputs: YYYY-MM-DD, now, yesterday, tomorrow, or day offset like 1, -1",
            show_default=False,
        ),
    ],
    amount: Annotated[
        Decimal,
        typer.Argument(
            parser=parse_amount,
            help="hours to add, negative for a deficit",
            show_default=False,
        ),
    ],
) -> None:
    """
    Add a new hour entry.
    """
    with ledger_session() as ledger:
        entry_id = ledger.add(date, amount)

    console = Console()
    console.print(
        f"Added entry {entry_id}: {date_to_str(date)} {format_amount(amount)} hours"
    )


def delete(
    entry: Annotated[
        Optional[list[str]],
        typer.Option(
            "--entry",
            "-e",
            help="entry ids, e.g. 4 or 1,3-5; may be repeated",
        ),
    ] = None,
    date: Annotated[
        Optional[list[str]],
        typer.Option(
            "--date",
            "-d",
            help="valid inputs: YYYY-MM-DD, now, yesterday, or day offset; may be repeated",
        ),
    ] = None,
) -> None:
    """
    Delete entries by id or by date. Deleted entries can be restored with undo.
    """
    ids: set[int] = set()
    for id_param in entry or []:
        ids.update(parse_id_list(id_param))

    dates: set[pendulum.Date] = set()
    for date_param in date or []:
        parsed_date = parse_date(date_param)
        if parsed_date is not None:
            dates.add(parsed_date)

    selector: Selector = {
        "ids": ids if len(ids) > 0 else None,
        "dates": dates if len(dates) > 0 else None,
    }

    with ledger_session() as ledger:
        deleted_count = ledger.delete(selector)

    console = Console()
    if deleted_count == 0:
        console.print("[yellow]No entries matched, nothing deleted.[/yellow]")
    else:
        console.print(
            f"Deleted {deleted_count} entr{'y' if deleted_count == 1 else 'ies'}"
        )


def balance() -> None:
    """
    Print out the current hour balance.
    """
    with ledger_session() as ledger:
        total = ledger.balance()

    balance_view(total)


def undo(
    depth: Annotated[
        int,
        typer.Argument(min=1, help="number of operations to undo"),
    ] = 1,
) -> None:
    """
    Undo the latest add or delete operations.
    """
    with ledger_session() as ledger:
        operations = ledger.undo(depth)

    undo_view(operations)


def show(entry_id: int) -> None:
    """
    Show a single entry, including deleted ones.
    """
    with ledger_session() as ledger:
        entry = ledger.get_entry(entry_id)

    single_entry_view(resolve_database_path(), entry)


def history(
    n: Annotated[
        Optional[int],
        typer.Option("-n", min=0, help="maximum number of operations to show"),
    ] = None,
) -> None:
    """
    Show the latest add and delete operations and whether they were undone.
    """
    limit = n if n is not None else CONFIGURATION_REPO.get_config()["tail_count"]

    with ledger_session() as ledger:
        operations, undoable = ledger.history(limit)

    history_view(resolve_database_path(), operations, undoable)
