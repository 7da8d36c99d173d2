# SPDX-License-Identifier: MIT

from sqlalchemy.engine import Connection

from hourbank.migrate.registry import migration


@migration(1)
def migrate(connection: Connection) -> None:
    """
    Entries table. Amounts are stored as decimal text and `deleted` is the
    soft delete flag, rows are never removed.
    """
    connection.exec_driver_sql(
        """
        CREATE TABLE entries(
            entry_id INTEGER PRIMARY KEY AUTOINCREMENT,
            date TEXT NOT NULL,
            amount TEXT NOT NULL,
            deleted BOOLEAN NOT NULL CHECK (deleted IN (0, 1))
        )
        """
    )
