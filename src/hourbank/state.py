# SPDX-License-Identifier: MIT

from contextvars import ContextVar
from pathlib import Path
from typing import Optional

_database_path: ContextVar[Optional[Path]] = ContextVar("database_path", default=None)


def set_database_path(value: Optional[Path]) -> None:
    _database_path.set(value)


def get_database_path() -> Optional[Path]:
    return _database_path.get()


_show_header: ContextVar[bool] = ContextVar("show_header", default=True)


def set_show_header(value: bool) -> None:
    _show_header.set(value)


def get_show_header() -> bool:
    return _show_header.get()
