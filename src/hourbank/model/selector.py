# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from hourbank.model.entry import EntryId


class Selector(TypedDict):
    """Entries to delete, chosen either by id or by exact date."""

    ids: Optional[set[EntryId]]
    dates: Optional[set[pendulum.Date]]
