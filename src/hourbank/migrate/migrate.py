# SPDX-License-Identifier: MIT

import logging

from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from hourbank.errors import MigrationError, SchemaMismatch, StorageError
from hourbank.migrate.registry import MigrationRegistry
from hourbank.model.schema_version import (
    SchemaInfo,
    SchemaVersion,
    schema_version_to_str,
)

logger = logging.getLogger(__name__)


def read_version_marker(connection: Connection) -> int:
    return int(connection.exec_driver_sql("PRAGMA user_version").scalar_one())


def write_version_marker(connection: Connection, version: int) -> None:
    # PRAGMA arguments cannot be bound parameters
    connection.exec_driver_sql(f"PRAGMA user_version = {int(version)}")


class MigrationManager:
    """
    Applies the registered schema steps to a ledger database and answers
    whether the database is at the latest known version.

    The version marker is SQLite's `user_version` header field, 0 meaning that
    no migration has ever run.
    """

    def __init__(self, engine: Engine, registry: MigrationRegistry) -> None:
        self.engine = engine
        self.registry = registry

    def latest_known_version(self) -> int:
        return self.registry.latest_version

    def classify(self, version: int) -> SchemaVersion:
        if version == 0:
            return {"state": "not_set", "version": None}
        if self.registry.is_known(version):
            return {"state": "inside", "version": version}
        return {"state": "outside", "version": version}

    def current_version(self) -> SchemaVersion:
        try:
            with self.engine.connect() as connection:
                return self.classify(read_version_marker(connection))
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def schema_info(self) -> SchemaInfo:
        return {
            "current": self.current_version(),
            "latest": self.latest_known_version(),
        }

    def require_latest(self, connection: Connection) -> None:
        """Raise SchemaMismatch unless the database is exactly at the latest version."""
        schema_version = self.classify(read_version_marker(connection))
        latest = self.latest_known_version()
        if schema_version["state"] != "inside" or schema_version["version"] != latest:
            raise SchemaMismatch(schema_version_to_str(schema_version), latest)

    def migrate_to_latest(self) -> list[int]:
        """
        Run every pending step in ascending order, one transaction per step.

        Returns the versions that were applied, which is empty when the
        database was already up to date. When a step fails the database stays
        at the last step that completed.
        """
        current = self.current_version()
        if current["state"] == "outside":
            raise MigrationError(
                None,
                f"database version {current['version']} is newer than the latest known version {self.latest_known_version()}",
            )

        latest_migration_id = current["version"] or 0
        applied: list[int] = []

        for migration_id, migration_callable in self.registry.pending_after(
            latest_migration_id
        ):
            logger.info("running migration %s", migration_id)
            try:
                with self.engine.begin() as connection:
                    migration_callable(connection)
                    write_version_marker(connection, migration_id)
            except Exception as e:
                logger.error("migration %s failed: %s", migration_id, e)
                raise MigrationError(migration_id, str(e)) from e
            applied.append(migration_id)
            logger.info("migration %s complete", migration_id)

        if len(applied) == 0:
            logger.debug("database already at version %s", latest_migration_id)
        return applied
