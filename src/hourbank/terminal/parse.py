# SPDX-License-Identifier: MIT

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

import pendulum
import typer

from hourbank.time import date_from_str, today_local


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    """
    Resolve a date argument to a local calendar date.

    Accepts YYYY-MM-DD, now/today (n, t), yesterday (y), tomorrow (o), or a
    day offset from today such as 1 or -1.
    """
    if date_param is None:
        return None

    date = str(date_param).strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            return date_from_str(date)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date '{date}': {e}")

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date):
        days_offset = int(date)
        return today_local().add(days=days_offset)

    if date in ("now", "n", "today", "t"):
        return today_local()
    if date in ("yesterday", "y"):
        return today_local().subtract(days=1)
    if date in ("tomorrow", "o"):
        return today_local().add(days=1)
    raise typer.BadParameter(
        f"Incorrect date format '{date}', expected YYYY-MM-DD, now, yesterday or a day offset"
    )


def parse_amount(amount_param: str) -> Decimal:
    """
    Parse an hour amount such as 7.5, -2 or +0.25 into an exact Decimal.

    Zero is left for the ledger to reject so the message is the same for
    every caller.
    """
    amount_str = str(amount_param).strip().replace(",", ".")
    if not re.match(r"^[+-]?(\d+(\.\d*)?|\.\d+)$", amount_str):
        raise typer.BadParameter(f"Invalid hour amount: '{amount_param}'")
    try:
        return Decimal(amount_str)
    except InvalidOperation:
        raise typer.BadParameter(f"Invalid hour amount: '{amount_param}'")


def parse_id_list(id_param: str) -> list[int]:
    """Parse ids like "4", "1,2,3" or "1,3-5,8" into a sorted, deduplicated list."""
    id_strings = [s.strip() for s in id_param.split(",")]

    ids: list[int] = []
    for id_str in id_strings:
        if not id_str:
            continue

        if "-" in id_str:
            range_parts = id_str.split("-")
            if len(range_parts) != 2:
                raise typer.BadParameter(
                    f"Invalid range format: '{id_str}' (expected format: 'start-end')"
                )

            try:
                start = int(range_parts[0].strip())
                end = int(range_parts[1].strip())
            except ValueError:
                raise typer.BadParameter(
                    f"Invalid range: '{id_str}' contains non-integer values"
                )

            if start > end:
                raise typer.BadParameter(
                    f"Invalid range: '{id_str}' (start must be <= end)"
                )

            ids.extend(range(start, end + 1))
        else:
            try:
                ids.append(int(id_str))
            except ValueError:
                raise typer.BadParameter(
                    f"Invalid ID: '{id_str}' is not a valid integer"
                )

    if len(ids) == 0:
        raise typer.BadParameter("No valid IDs provided")

    return sorted(set(ids))
