# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from hourbank.repository.configuration import CONFIGURATION_REPO
from hourbank.terminal.custom_typer import AliasedTyperGroup
from hourbank.terminal.session import ledger_session, resolve_database_path
from hourbank.view.views.entry import date_totals_view, entries_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

CountOption = Annotated[
    Optional[int],
    typer.Option("-n", min=0, help="maximum number of rows to show"),
]


def __resolve_count(n: Optional[int]) -> int:
    if n is not None:
        return n
    return CONFIGURATION_REPO.get_config()["tail_count"]


@app.command("entry, e")
def entry(n: CountOption = None) -> None:
    """
    Tail the latest entries.
    """
    with ledger_session() as ledger:
        entries = ledger.list_recent(__resolve_count(n))

    entries_view(resolve_database_path(), entries)


@app.command("date, d")
def date(n: CountOption = None) -> None:
    """
    Tail the latest dates with their hours summed.
    """
    with ledger_session() as ledger:
        totals = ledger.list_recent_by_date(__resolve_count(n))

    date_totals_view(resolve_database_path(), totals)
