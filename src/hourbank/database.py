# SPDX-License-Identifier: MIT

import datetime
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

import pendulum
from sqlalchemy import (
    Boolean,
    Column,
    Integer,
    MetaData,
    Table,
    Text,
    create_engine,
    event,
)
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.types import TypeDecorator

from hourbank import time

logger = logging.getLogger(__name__)


class DateText(TypeDecorator[pendulum.Date]):
    """Calendar date stored as 'YYYY-MM-DD' text."""

    impl = Text
    cache_ok = True

    def process_bind_param(
        self, value: Optional[datetime.date], dialect: Any
    ) -> Optional[str]:
        if value is None:
            return None
        return time.date_to_str(value)

    def process_result_value(
        self, value: Optional[str], dialect: Any
    ) -> Optional[pendulum.Date]:
        if value is None:
            return None
        return time.date_from_str(value)


class DecimalText(TypeDecorator[Decimal]):
    """Exact decimal stored as text so no floating point rounding reaches the file."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Optional[Decimal], dialect: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)

    def process_result_value(self, value: Optional[str], dialect: Any) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(value)


class DateTimeText(TypeDecorator[pendulum.DateTime]):
    """UTC timestamp stored as ISO 8601 text."""

    impl = Text
    cache_ok = True

    def process_bind_param(
        self, value: Optional[pendulum.DateTime], dialect: Any
    ) -> Optional[str]:
        if value is None:
            return None
        return time.datetime_to_iso_str(value)

    def process_result_value(
        self, value: Optional[str], dialect: Any
    ) -> Optional[pendulum.DateTime]:
        return time.datetime_from_str_optional(value)


# Tables are created by the migration steps, this metadata only describes
# the latest schema for query construction.
metadata = MetaData()

entries_table = Table(
    "entries",
    metadata,
    Column("entry_id", Integer, primary_key=True, autoincrement=True),
    Column("date", DateText, nullable=False),
    Column("amount", DecimalText, nullable=False),
    Column("deleted", Boolean(create_constraint=False), nullable=False),
)

operations_table = Table(
    "operations",
    metadata,
    Column("op_id", Integer, primary_key=True, autoincrement=True),
    Column("kind", Text, nullable=False),
    Column("created", DateTimeText, nullable=False),
    Column("undone", DateTimeText, nullable=True),
)

undo_log_table = Table(
    "undo_log",
    metadata,
    Column("row_id", Integer, primary_key=True, autoincrement=True),
    Column("op_id", Integer, nullable=False),
    Column("entry_id", Integer, nullable=False),
    Column("deleted_old", Boolean(create_constraint=False), nullable=False),
    Column("processed", Boolean(create_constraint=False), nullable=False),
)


def database_url(path: Path | str) -> str:
    if str(path) == ":memory:":
        return "sqlite:///:memory:"
    return f"sqlite:///{Path(path).expanduser().resolve()}"


def create_ledger_engine(path: Path | str) -> Engine:
    """
    Create the engine for a ledger database file.

    pysqlite's own transaction handling does not BEGIN before DDL, which would
    let a half-applied migration step commit. It is switched off here and every
    engine.begin() emits an explicit BEGIN instead, so each step and each
    command is a single SQLite transaction.
    """
    if str(path) != ":memory:":
        Path(path).expanduser().parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(database_url(path))

    @event.listens_for(engine, "connect")
    def _do_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _do_begin(connection: Connection) -> None:
        connection.exec_driver_sql("BEGIN")

    logger.debug("opened ledger engine for %s", engine.url)
    return engine
