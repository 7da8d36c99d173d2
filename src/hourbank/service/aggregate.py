# SPDX-License-Identifier: MIT

import datetime
from decimal import Context, Decimal, Inexact, InvalidOperation, Overflow, localcontext
from typing import Iterable

from hourbank.model.entry import DateTotal
from hourbank.time import date_to_str, python_to_pendulum_date

# Wide enough for any sum of validated amounts. Rounding is trapped, never applied.
AGGREGATE_CONTEXT = Context(prec=60, traps=[Inexact, InvalidOperation, Overflow])


def total(amounts: Iterable[Decimal]) -> Decimal:
    """Exact sum of the amounts, Decimal('0') when there are none."""
    with localcontext(AGGREGATE_CONTEXT):
        return sum(amounts, Decimal(0))


def rollup_by_date(
    dated_amounts: Iterable[tuple[datetime.date, Decimal]], limit: int
) -> list[DateTotal]:
    """
    Sum amounts per date for the `limit` newest dates.

    `dated_amounts` must already be ordered by date, newest first. Equal dates
    are then contiguous, so each bucket is closed as soon as the date changes
    and the scan stops at the first date past the limit.
    """
    if limit <= 0:
        return []

    buckets: list[DateTotal] = []
    previous_date: datetime.date | None = None

    with localcontext(AGGREGATE_CONTEXT):
        for date, amount in dated_amounts:
            if previous_date is not None and date > previous_date:
                raise ValueError(
                    f"dated amounts are not sorted newest first: {date_to_str(date)} after {date_to_str(previous_date)}"
                )
            if previous_date is None or date != previous_date:
                if len(buckets) == limit:
                    break
                buckets.append(
                    {"date": python_to_pendulum_date(date), "amount": amount}
                )
                previous_date = date
            else:
                buckets[-1]["amount"] += amount

    return buckets
