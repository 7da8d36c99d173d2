# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from hourbank.model.entry import DateTotal, Entry
from hourbank.time import date_to_display_str, date_to_str
from hourbank.view.header import header
from hourbank.view.util import colored_amount, format_amount


def entries_view(database_path: Optional[Path], entries: list[Entry]) -> None:
    """Display the most recent entries, newest first."""
    header(database_path, "latest entries")

    entries_table = Table(box=box.SIMPLE)
    entries_table.add_column("id", justify="right")
    entries_table.add_column("date")
    entries_table.add_column("hours", justify="right")

    for entry in entries:
        entries_table.add_row(
            str(entry["entry_id"]),
            date_to_display_str(entry["date"]),
            colored_amount(entry["amount"]),
        )

    console = Console()
    console.print(entries_table)


def date_totals_view(database_path: Optional[Path], totals: list[DateTotal]) -> None:
    """Display hours summed per date, newest date first."""
    header(database_path, "latest dates")

    totals_table = Table(box=box.SIMPLE)
    totals_table.add_column("date")
    totals_table.add_column("hours", justify="right")

    for date_total in totals:
        totals_table.add_row(
            date_to_display_str(date_total["date"]),
            colored_amount(date_total["amount"]),
        )

    console = Console()
    console.print(totals_table)


def single_entry_view(database_path: Optional[Path], entry: Entry) -> None:
    """Display a single entry, including whether it has been deleted."""
    header(database_path, "entry")

    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row("id", str(entry["entry_id"]))
    entry_table.add_row("date", date_to_str(entry["date"]))
    entry_table.add_row("hours", format_amount(entry["amount"]))
    entry_table.add_row("exact hours", str(entry["amount"]))
    entry_table.add_row("deleted", "yes" if entry["deleted"] else "no")

    console = Console()
    console.print(entry_table)
