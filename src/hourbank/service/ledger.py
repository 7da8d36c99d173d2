# SPDX-License-Identifier: MIT

import datetime
import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator

from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from hourbank.errors import NoSelector, StorageError
from hourbank.migrate.migrate import MigrationManager
from hourbank.migrate.registry import MigrationRegistry
from hourbank.model.entry import DateTotal, Entry, EntryId
from hourbank.model.schema_version import SchemaInfo
from hourbank.model.selector import Selector
from hourbank.model.undo import Operation
from hourbank.repository.entry import EntryRepository
from hourbank.repository.undo_log import UndoLogRepository
from hourbank.service import aggregate

logger = logging.getLogger(__name__)


class Ledger:
    """
    The typed command surface of the hour ledger.

    Each public method is one unit of work: it opens a transaction, checks
    that the database schema is at the latest known version (except for
    `migrate` and `schema_info`), and commits only if everything succeeded.
    Database failures are re-raised as StorageError after the rollback.
    """

    def __init__(self, engine: Engine, registry: MigrationRegistry) -> None:
        self.engine = engine
        self.migration_manager = MigrationManager(engine, registry)

    @contextmanager
    def _unit_of_work(self) -> Iterator[Connection]:
        try:
            with self.engine.begin() as connection:
                self.migration_manager.require_latest(connection)
                yield connection
        except SQLAlchemyError as e:
            logger.error("storage failure, transaction rolled back: %s", e)
            raise StorageError(str(getattr(e, "orig", None) or e)) from e

    @contextmanager
    def _repositories(self) -> Iterator[tuple[EntryRepository, UndoLogRepository]]:
        with self._unit_of_work() as connection:
            undo_log = UndoLogRepository(connection)
            yield EntryRepository(connection, undo_log), undo_log

    def migrate(self) -> list[int]:
        return self.migration_manager.migrate_to_latest()

    def schema_info(self) -> SchemaInfo:
        return self.migration_manager.schema_info()

    def add(self, date: datetime.date, amount: Decimal) -> EntryId:
        with self._repositories() as (entries, _):
            return entries.add(date, amount)

    def delete(self, selector: Selector) -> int:
        """
        Soft delete the selected entries as one undoable operation.

        Returns how many entries changed. Ids or dates that match nothing, or
        only already deleted entries, are not an error.
        """
        ids = selector.get("ids") or set()
        dates = selector.get("dates") or set()
        if len(ids) == 0 and len(dates) == 0:
            raise NoSelector()

        with self._repositories() as (entries, _):
            if len(ids) > 0 and len(dates) > 0:
                # both selectors still form a single logical operation
                dated_ids = {
                    entry["entry_id"]
                    for entry in entries.list_entries()
                    if entry["date"] in dates
                }
                return entries.soft_delete_by_ids(set(ids) | dated_ids)
            if len(ids) > 0:
                return entries.soft_delete_by_ids(ids)
            return entries.soft_delete_by_dates(dates)

    def list_recent(self, limit: int) -> list[Entry]:
        with self._repositories() as (entries, _):
            return entries.list_recent(limit)

    def list_recent_by_date(self, limit: int) -> list[DateTotal]:
        with self._repositories() as (entries, _):
            return aggregate.rollup_by_date(
                entries.iter_dated_amounts_newest_first(), limit
            )

    def balance(self) -> Decimal:
        with self._repositories() as (entries, _):
            return aggregate.total(entries.iter_amounts())

    def undo(self, depth: int = 1) -> list[Operation]:
        with self._repositories() as (_, undo_log):
            return undo_log.undo(depth)

    def get_entry(self, entry_id: EntryId) -> Entry:
        with self._repositories() as (entries, _):
            return entries.get_entry(entry_id)

    def list_entries(self, include_deleted: bool = False) -> list[Entry]:
        with self._repositories() as (entries, _):
            return entries.list_entries(include_deleted)

    def history(self, limit: int) -> tuple[list[Operation], int]:
        """The `limit` newest operations and how many operations can still be undone."""
        with self._repositories() as (_, undo_log):
            return undo_log.history(limit), undo_log.count_undoable()
