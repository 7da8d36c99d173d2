# SPDX-License-Identifier: MIT

from decimal import Decimal

from rich.console import Console

from hourbank.view.util import colored_amount


def balance_view(balance: Decimal) -> None:
    console = Console()
    console.print(f"Total hour balance: {colored_amount(balance)}")
