# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from hourbank.model.entry import EntryId

type OperationId = int

OperationKind = Literal["add", "delete"]


class UndoRecord(TypedDict):
    row_id: int
    op_id: OperationId  # logical operation the row belongs to
    entry_id: EntryId
    deleted_old: bool  # entry's deleted flag before the operation
    processed: bool


class Operation(TypedDict):
    op_id: OperationId
    kind: OperationKind
    created: pendulum.DateTime
    undone: Optional[pendulum.DateTime]
    entry_ids: list[EntryId]
