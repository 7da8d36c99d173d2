# SPDX-License-Identifier: MIT

from typing import Optional


class LedgerError(Exception):
    """Base class for every failure the ledger core reports to its caller."""


class SchemaMismatch(LedgerError):
    def __init__(self, current: str, latest: int) -> None:
        self.current = current
        self.latest = latest
        super().__init__(
            f"database schema version {current} does not match latest version {latest}, "
            "run 'hourbank migrate'"
        )


class MigrationError(LedgerError):
    def __init__(self, version: Optional[int], reason: str) -> None:
        self.version = version
        self.reason = reason
        if version is None:
            super().__init__(f"migration failed: {reason}")
        else:
            super().__init__(f"migration {version} failed: {reason}")


class InvalidAmount(LedgerError):
    pass


class NoSelector(LedgerError):
    def __init__(self) -> None:
        super().__init__("no entry ids or dates selected")


class NothingToUndo(LedgerError):
    def __init__(self, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(
            f"cannot undo {requested} operation(s), only {available} available"
        )


class InvalidDepth(LedgerError):
    pass


class EntryNotFound(LedgerError):
    def __init__(self, entry_id: int) -> None:
        self.entry_id = entry_id
        super().__init__(f"entry {entry_id} does not exist")


class StorageError(LedgerError):
    pass
