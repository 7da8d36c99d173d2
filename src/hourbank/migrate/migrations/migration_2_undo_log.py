# SPDX-License-Identifier: MIT

from sqlalchemy.engine import Connection

from hourbank.migrate.registry import migration


@migration(2)
def migrate(connection: Connection) -> None:
    connection.exec_driver_sql(
        """
        CREATE TABLE operations(
            op_id INTEGER PRIMARY KEY AUTOINCREMENT,
            kind TEXT NOT NULL CHECK (kind IN ('add', 'delete')),
            created TEXT NOT NULL,
            undone TEXT
        )
        """
    )
    connection.exec_driver_sql(
        """
        CREATE TABLE undo_log(
            row_id INTEGER PRIMARY KEY AUTOINCREMENT,
            op_id INTEGER NOT NULL REFERENCES operations (op_id),
            entry_id INTEGER NOT NULL REFERENCES entries (entry_id),
            deleted_old BOOLEAN NOT NULL CHECK (deleted_old IN (0, 1)),
            processed BOOLEAN NOT NULL CHECK (processed IN (0, 1))
        )
        """
    )
    connection.exec_driver_sql(
        "CREATE INDEX ix_undo_log_unprocessed ON undo_log (processed, op_id)"
    )
