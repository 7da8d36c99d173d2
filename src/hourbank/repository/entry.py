# SPDX-License-Identifier: MIT

import datetime
import logging
from decimal import ROUND_DOWN, Decimal
from typing import Any, Iterable, Iterator

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Connection, Row

from hourbank.database import entries_table
from hourbank.errors import EntryNotFound, InvalidAmount
from hourbank.model.entry import Entry, EntryId
from hourbank.repository.undo_log import UndoLogRepository

logger = logging.getLogger(__name__)

# Bounds on a single stored amount, in hours
MAX_ABS_AMOUNT = Decimal("1000000000")
MAX_FRACTION_DIGITS = 10
SMALLEST_STEP = Decimal(1).scaleb(-MAX_FRACTION_DIGITS)


def validate_amount(amount: Decimal) -> None:
    if not isinstance(amount, Decimal):
        raise InvalidAmount(
            f"amount must be a Decimal, got {type(amount).__name__}"
        )
    if not amount.is_finite():
        raise InvalidAmount(f"amount must be a finite number, got {amount}")
    if amount.is_zero():
        raise InvalidAmount("amount cannot be zero")
    if abs(amount) >= MAX_ABS_AMOUNT:
        raise InvalidAmount(
            f"amount must be smaller than {MAX_ABS_AMOUNT} hours, got {amount}"
        )
    if amount.quantize(SMALLEST_STEP, rounding=ROUND_DOWN) != amount:
        raise InvalidAmount(
            f"amount can have at most {MAX_FRACTION_DIGITS} fractional digits, got {amount}"
        )


class EntryRepository:
    """
    Time entries on one open connection. Every write also goes to the undo
    log, so callers must run these methods inside the same transaction as
    the rest of their command.
    """

    def __init__(self, connection: Connection, undo_log: UndoLogRepository) -> None:
        self.connection = connection
        self.undo_log = undo_log

    def __row_to_entry(self, row: Row[Any]) -> Entry:
        return {
            "entry_id": row.entry_id,
            "date": row.date,
            "amount": row.amount,
            "deleted": bool(row.deleted),
        }

    def add(self, date: datetime.date, amount: Decimal) -> EntryId:
        validate_amount(amount)

        result = self.connection.execute(
            insert(entries_table).values(date=date, amount=amount, deleted=False)
        )
        entry_id: EntryId = result.inserted_primary_key[0]  # type: ignore[index]

        op_id = self.undo_log.open_operation("add")
        self.undo_log.record(entry_id, True, op_id)

        logger.info("added entry %s: %s %s", entry_id, date, amount)
        return entry_id

    def soft_delete_by_ids(self, ids: Iterable[EntryId]) -> int:
        id_list = sorted(set(ids))
        if len(id_list) == 0:
            return 0
        matched = self.connection.execute(
            select(entries_table.c.entry_id)
            .where(entries_table.c.entry_id.in_(id_list))
            .where(entries_table.c.deleted.is_(False))
            .order_by(entries_table.c.entry_id)
        ).scalars()
        return self.__soft_delete(list(matched))

    def soft_delete_by_dates(self, dates: Iterable[datetime.date]) -> int:
        date_list = sorted(set(dates))
        if len(date_list) == 0:
            return 0
        matched = self.connection.execute(
            select(entries_table.c.entry_id)
            .where(entries_table.c.date.in_(date_list))
            .where(entries_table.c.deleted.is_(False))
            .order_by(entries_table.c.entry_id)
        ).scalars()
        return self.__soft_delete(list(matched))

    def __soft_delete(self, entry_ids: list[EntryId]) -> int:
        if len(entry_ids) == 0:
            logger.info("delete matched no entries")
            return 0

        op_id = self.undo_log.open_operation("delete")
        for entry_id in entry_ids:
            self.connection.execute(
                update(entries_table)
                .where(entries_table.c.entry_id == entry_id)
                .values(deleted=True)
            )
            self.undo_log.record(entry_id, False, op_id)

        logger.info(
            "deleted entries %s in operation %s",
            ", ".join(str(entry_id) for entry_id in entry_ids),
            op_id,
        )
        return len(entry_ids)

    def list_recent(self, limit: int) -> list[Entry]:
        if limit <= 0:
            return []
        rows = self.connection.execute(
            select(entries_table)
            .where(entries_table.c.deleted.is_(False))
            .order_by(entries_table.c.entry_id.desc())
            .limit(limit)
        )
        return [self.__row_to_entry(row) for row in rows]

    def get_entry(self, entry_id: EntryId) -> Entry:
        """Fetch an entry whether or not it has been deleted."""
        row = self.connection.execute(
            select(entries_table).where(entries_table.c.entry_id == entry_id)
        ).first()
        if row is None:
            raise EntryNotFound(entry_id)
        return self.__row_to_entry(row)

    def list_entries(self, include_deleted: bool = False) -> list[Entry]:
        query = select(entries_table).order_by(entries_table.c.entry_id)
        if not include_deleted:
            query = query.where(entries_table.c.deleted.is_(False))
        return [self.__row_to_entry(row) for row in self.connection.execute(query)]

    def iter_amounts(self) -> Iterator[Decimal]:
        rows = self.connection.execute(
            select(entries_table.c.amount).where(entries_table.c.deleted.is_(False))
        ).scalars()
        yield from rows

    def iter_dated_amounts_newest_first(
        self,
    ) -> Iterator[tuple[datetime.date, Decimal]]:
        rows = self.connection.execute(
            select(entries_table.c.date, entries_table.c.amount)
            .where(entries_table.c.deleted.is_(False))
            .order_by(entries_table.c.date.desc(), entries_table.c.entry_id.desc())
        )
        for row in rows:
            yield row.date, row.amount
