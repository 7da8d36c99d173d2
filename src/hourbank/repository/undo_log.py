# SPDX-License-Identifier: MIT

import logging
from typing import Any, Iterable

from sqlalchemy import func, insert, select, update
from sqlalchemy.engine import Connection, Row

from hourbank.database import entries_table, operations_table, undo_log_table
from hourbank.errors import InvalidDepth, NothingToUndo
from hourbank.model.entry import EntryId
from hourbank.model.undo import Operation, OperationId, OperationKind, UndoRecord
from hourbank.time import now_utc

logger = logging.getLogger(__name__)


def plan_reversal(records: Iterable[UndoRecord]) -> dict[EntryId, bool]:
    """
    Work out the `deleted` flag each entry must end up with once the given
    records are reversed.

    Records are applied newest first, so when an entry appears more than once
    the oldest record's `deleted_old` is the value that sticks.
    """
    restored: dict[EntryId, bool] = {}
    for record in sorted(records, key=lambda r: r["row_id"], reverse=True):
        if record["processed"]:
            raise ValueError(f"undo record {record['row_id']} was already processed")
        restored[record["entry_id"]] = record["deleted_old"]
    return restored


class UndoLogRepository:
    """
    Append-only log of the entry changes made by each logical operation.

    Every mutating call opens one operation and appends one record per entry
    it touches. `undo` reverses whole operations, newest first, and keeps the
    processed records around for history.
    """

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    def __row_to_record(self, row: Row[Any]) -> UndoRecord:
        return {
            "row_id": row.row_id,
            "op_id": row.op_id,
            "entry_id": row.entry_id,
            "deleted_old": bool(row.deleted_old),
            "processed": bool(row.processed),
        }

    def open_operation(self, kind: OperationKind) -> OperationId:
        result = self.connection.execute(
            insert(operations_table).values(kind=kind, created=now_utc(), undone=None)
        )
        op_id: OperationId = result.inserted_primary_key[0]  # type: ignore[index]
        logger.debug("opened %s operation %s", kind, op_id)
        return op_id

    def record(self, entry_id: EntryId, deleted_old: bool, op_id: OperationId) -> None:
        self.connection.execute(
            insert(undo_log_table).values(
                op_id=op_id,
                entry_id=entry_id,
                deleted_old=deleted_old,
                processed=False,
            )
        )

    def get_records(self, op_id: OperationId) -> list[UndoRecord]:
        rows = self.connection.execute(
            select(undo_log_table)
            .where(undo_log_table.c.op_id == op_id)
            .order_by(undo_log_table.c.row_id)
        )
        return [self.__row_to_record(row) for row in rows]

    def count_undoable(self) -> int:
        return int(
            self.connection.execute(
                select(func.count(func.distinct(undo_log_table.c.op_id))).where(
                    undo_log_table.c.processed.is_(False)
                )
            ).scalar_one()
        )

    def __latest_undoable_operations(self, depth: int) -> list[OperationId]:
        return list(
            self.connection.execute(
                select(undo_log_table.c.op_id)
                .where(undo_log_table.c.processed.is_(False))
                .group_by(undo_log_table.c.op_id)
                .order_by(undo_log_table.c.op_id.desc())
                .limit(depth)
            ).scalars()
        )

    def undo(self, depth: int) -> list[Operation]:
        """
        Reverse the `depth` most recent logical operations, newest first.

        Nothing is changed when fewer than `depth` operations are left to
        undo. Callers run this inside a single transaction so the whole
        request applies or none of it does.
        """
        if depth < 1:
            raise InvalidDepth(f"undo depth must be at least 1, got {depth}")

        op_ids = self.__latest_undoable_operations(depth)
        if len(op_ids) < depth:
            raise NothingToUndo(depth, len(op_ids))

        undone_at = now_utc()
        for op_id in op_ids:
            records = [
                record for record in self.get_records(op_id) if not record["processed"]
            ]
            for entry_id, deleted in plan_reversal(records).items():
                self.connection.execute(
                    update(entries_table)
                    .where(entries_table.c.entry_id == entry_id)
                    .values(deleted=deleted)
                )
            self.connection.execute(
                update(undo_log_table)
                .where(undo_log_table.c.op_id == op_id)
                .values(processed=True)
            )
            self.connection.execute(
                update(operations_table)
                .where(operations_table.c.op_id == op_id)
                .values(undone=undone_at)
            )
            logger.info(
                "undid operation %s affecting %s entr%s",
                op_id,
                len(records),
                "y" if len(records) == 1 else "ies",
            )

        return [self.get_operation(op_id) for op_id in op_ids]

    def get_operation(self, op_id: OperationId) -> Operation:
        row = self.connection.execute(
            select(operations_table).where(operations_table.c.op_id == op_id)
        ).one()
        return {
            "op_id": row.op_id,
            "kind": row.kind,
            "created": row.created,
            "undone": row.undone,
            "entry_ids": [record["entry_id"] for record in self.get_records(op_id)],
        }

    def history(self, limit: int) -> list[Operation]:
        if limit <= 0:
            return []
        op_ids = self.connection.execute(
            select(operations_table.c.op_id)
            .order_by(operations_table.c.op_id.desc())
            .limit(limit)
        ).scalars()
        return [self.get_operation(op_id) for op_id in list(op_ids)]
