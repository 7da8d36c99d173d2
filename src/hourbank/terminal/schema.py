# SPDX-License-Identifier: MIT

from hourbank.terminal.session import ledger_session
from hourbank.view.views.schema import migrate_view, schema_view


def migrate() -> None:
    """
    Migrate the database to the latest schema version.
    """
    with ledger_session() as ledger:
        applied = ledger.migrate()
        latest = ledger.migration_manager.latest_known_version()

    migrate_view(applied, latest)


def schema() -> None:
    """
    Display database schema version information.
    """
    with ledger_session() as ledger:
        schema_info = ledger.schema_info()

    schema_view(schema_info)
