# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

from hourbank.state import get_show_header


def header(database_path: Optional[Path], report: Optional[str] = None) -> None:
    """Title rule naming the report, followed by the ledger file it reads."""
    if not get_show_header():
        return

    title = "[dark_orange]hourbank[/dark_orange]"
    if report is not None:
        title += f" [sandy_brown]{report}[/sandy_brown]"

    console = Console()
    console.print(Rule(title, align="left", style="grey50"))
    if database_path is not None:
        console.print(f"[plum1]{escape(str(database_path))}[/plum1]", soft_wrap=True)
