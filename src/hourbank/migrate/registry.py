# SPDX-License-Identifier: MIT

import importlib
import pkgutil
from typing import Callable, Optional

from sqlalchemy.engine import Connection

type MigrationStep = Callable[[Connection], None]

MIGRATIONS_PACKAGE = "hourbank.migrate.migrations"
_VERSION_ATTRIBUTE = "__migration_version__"


def migration(version: int) -> Callable[[MigrationStep], MigrationStep]:
    """Mark a function as the schema step that brings the database to `version`."""
    if version < 1:
        raise ValueError(f"migration version must be positive, got {version}")

    def wrapper(func: MigrationStep) -> MigrationStep:
        setattr(func, _VERSION_ATTRIBUTE, version)
        return func

    return wrapper


class MigrationRegistry:
    def __init__(self, migrations: Optional[dict[int, MigrationStep]] = None) -> None:
        self._migrations: dict[int, MigrationStep] = {}
        for version, step in (migrations or {}).items():
            self.register(version, step)

    def register(self, version: int, step: MigrationStep) -> None:
        if version < 1:
            raise ValueError(f"migration version must be positive, got {version}")
        if version in self._migrations:
            raise ValueError(
                f"{MigrationRegistry.__name__}.{MigrationRegistry.register.__name__}: error, migration {version} is already registered"
            )
        self._migrations[version] = step

    def get_migrations(self) -> dict[int, MigrationStep]:
        return dict(self._migrations)

    def is_known(self, version: int) -> bool:
        return version in self._migrations

    def pending_after(self, version: int) -> list[tuple[int, MigrationStep]]:
        return sorted(
            [(key, value) for key, value in self._migrations.items() if key > version],
            key=lambda kvp: kvp[0],
        )

    @property
    def latest_version(self) -> int:
        if len(self._migrations) == 0:
            return 0
        return max(self._migrations)


def __import_all_modules(package_name: str) -> list[object]:
    package = importlib.import_module(package_name)

    modules = []
    for importer, modname, ispkg in pkgutil.iter_modules(package.__path__):
        full_module_name = f"{package_name}.{modname}"
        modules.append(importlib.import_module(full_module_name))
    return modules


def build_registry(package_name: str = MIGRATIONS_PACKAGE) -> MigrationRegistry:
    """Collect every @migration step found in `package_name` into a new registry."""
    registry = MigrationRegistry()
    for module in __import_all_modules(package_name):
        for value in vars(module).values():
            version = getattr(value, _VERSION_ATTRIBUTE, None)
            if callable(value) and isinstance(version, int):
                registry.register(version, value)
    return registry
