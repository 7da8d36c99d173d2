# SPDX-License-Identifier: MIT

from sqlalchemy.engine import Connection

from hourbank.migrate.registry import migration


@migration(3)
def migrate(connection: Connection) -> None:
    # rollups scan non-deleted entries newest date first
    connection.exec_driver_sql(
        "CREATE INDEX ix_entries_deleted_date ON entries (deleted, date)"
    )
