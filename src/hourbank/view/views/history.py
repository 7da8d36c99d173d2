# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from hourbank.model.undo import Operation
from hourbank.time import datetime_to_display_local_datetime_str_optional
from hourbank.view.header import header


def format_entry_ids(entry_ids: list[int]) -> str:
    return ", ".join(str(entry_id) for entry_id in entry_ids)


def history_view(
    database_path: Optional[Path], operations: list[Operation], undoable: int
) -> None:
    """Display recent operations, newest first, with their undo state."""
    header(database_path, "history")

    history_table = Table(box=box.SIMPLE)
    history_table.add_column("op", justify="right")
    history_table.add_column("kind")
    history_table.add_column("entries")
    history_table.add_column("created")
    history_table.add_column("undone")

    for operation in operations:
        history_table.add_row(
            str(operation["op_id"]),
            operation["kind"],
            format_entry_ids(operation["entry_ids"]),
            datetime_to_display_local_datetime_str_optional(operation["created"]) or "",
            datetime_to_display_local_datetime_str_optional(operation["undone"]) or "",
        )

    console = Console()
    console.print(history_table)
    console.print(f"{undoable} operation(s) can be undone")


def undo_view(operations: list[Operation]) -> None:
    console = Console()
    for operation in operations:
        console.print(
            f"Undid {operation['kind']} operation {operation['op_id']} "
            f"(entries: {format_entry_ids(operation['entry_ids'])})"
        )
