# SPDX-License-Identifier: MIT

from rich.console import Console

from hourbank.model.schema_version import SchemaInfo, schema_version_to_str


def schema_view(schema_info: SchemaInfo) -> None:
    version_str = schema_version_to_str(schema_info["current"])
    latest_str = str(schema_info["latest"])
    indent = max(len(version_str), len(latest_str))

    console = Console()
    console.print(f"Database schema version:  {version_str:>{indent}}")
    console.print(f"Latest available version: {latest_str:>{indent}}")
    if schema_info["current"]["state"] == "outside":
        console.print(
            "[yellow]The database was written by a newer version of hourbank.[/yellow]"
        )


def migrate_view(applied: list[int], latest: int) -> None:
    console = Console()
    if len(applied) == 0:
        console.print(f"Database is already at the latest version ({latest}).")
        return
    for migration_id in applied:
        console.print(f"Applied migration {migration_id}")
    console.print(f"[green]Database migrated to version {applied[-1]}.[/green]")
