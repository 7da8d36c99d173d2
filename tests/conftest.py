"""
Shared fixtures for the ledger tests.

- engine: SQLAlchemy engine on a fresh SQLite file per test
- unmigrated_ledger: Ledger over that file before any migration ran
- ledger: the same ledger migrated to the latest schema
- cli: isolated config/data directories plus a CliRunner wrapper
"""

from pathlib import Path
from typing import Iterator

import pytest
from sqlalchemy.engine import Engine
from typer.testing import CliRunner, Result

from hourbank import configuration
from hourbank import state as app_state
from hourbank.database import create_ledger_engine
from hourbank.initialize import initialize
from hourbank.migrate.registry import MigrationRegistry, build_registry
from hourbank.repository.configuration import CONFIGURATION_REPO
from hourbank.service.ledger import Ledger
from hourbank.terminal.app import app


@pytest.fixture
def database_path(tmp_path: Path) -> Path:
    return tmp_path / "ledger.sqlite3"


@pytest.fixture
def engine(database_path: Path) -> Iterator[Engine]:
    engine = create_ledger_engine(database_path)
    yield engine
    engine.dispose()


@pytest.fixture
def registry() -> MigrationRegistry:
    return build_registry()


@pytest.fixture
def unmigrated_ledger(engine: Engine, registry: MigrationRegistry) -> Ledger:
    return Ledger(engine, registry)


@pytest.fixture
def ledger(unmigrated_ledger: Ledger) -> Ledger:
    unmigrated_ledger.migrate()
    return unmigrated_ledger


class CliHarness:
    def __init__(self, database_path: Path) -> None:
        self.runner = CliRunner()
        self.database_path = database_path

    def invoke(self, *args: str) -> Result:
        return self.runner.invoke(
            app, ["--database", str(self.database_path), "--no-header", *args]
        )


@pytest.fixture
def cli(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[CliHarness]:
    """
    Point config and data paths at the test's temporary directory.

    CRITICAL: configuration paths are module globals read at call time, so
    they must be patched before initialize() writes the default config.
    """
    config_dir = tmp_path / "config"
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")
    monkeypatch.setattr(
        configuration, "DATA_DATABASE_PATH", tmp_path / "data" / "db.sqlite3"
    )
    CONFIGURATION_REPO.reset()
    app_state.set_database_path(None)
    app_state.set_show_header(True)

    initialize()

    yield CliHarness(tmp_path / "cli.sqlite3")

    CONFIGURATION_REPO.reset()
    app_state.set_database_path(None)
    app_state.set_show_header(True)
