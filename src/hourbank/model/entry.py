# SPDX-License-Identifier: MIT

from decimal import Decimal
from typing import TypedDict

import pendulum

type EntryId = int


class Entry(TypedDict):
    entry_id: EntryId
    date: pendulum.Date
    amount: Decimal  # signed hours, negative is a deficit
    deleted: bool  # soft delete, never physically removed


class DateTotal(TypedDict):
    date: pendulum.Date
    amount: Decimal
