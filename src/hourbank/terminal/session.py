# SPDX-License-Identifier: MIT

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import typer
from rich.console import Console
from rich.markup import escape

from hourbank import configuration, state
from hourbank.database import create_ledger_engine
from hourbank.errors import LedgerError
from hourbank.migrate.registry import build_registry
from hourbank.service.ledger import Ledger

logger = logging.getLogger(__name__)


def resolve_database_path() -> Path:
    database_path = state.get_database_path()
    if database_path is not None:
        return database_path
    return configuration.DATA_DATABASE_PATH


@contextmanager
def ledger_session() -> Iterator[Ledger]:
    """
    Open the ledger for one command.

    The migration registry is built here, once per process, and handed to the
    ledger. Ledger failures are printed and turned into exit status 1.
    """
    database_path = resolve_database_path()
    engine = create_ledger_engine(database_path)
    try:
        yield Ledger(engine, build_registry())
    except LedgerError as e:
        logger.debug("command failed", exc_info=e)
        Console(stderr=True, soft_wrap=True).print(f"[red]error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    finally:
        engine.dispose()
