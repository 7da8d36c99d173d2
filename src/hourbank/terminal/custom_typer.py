# SPDX-License-Identifier: MIT

import re
from typing import Optional

import click
import typer.core

COMMAND_ORDER = [
    "add, a",
    "delete, d",
    "undo, u",
    "balance, b",
    "tail, t",
    "show, s",
    "history, h",
    "migrate, m",
    "schema, sc",
    "config, c",
]


class AliasedTyperGroup(typer.core.TyperGroup):
    """
    Group whose commands are registered as "name, alias" and can be invoked
    by any of the comma-separated names.
    """

    _ALIAS_SEPARATOR = re.compile(r"\s*,\s*")

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        for registered_name, command in self.commands.items():
            if cmd_name in self._ALIAS_SEPARATOR.split(registered_name):
                return command
        return super().get_command(ctx, cmd_name)


class OrderedAliasedTyperGroup(AliasedTyperGroup):
    """Lists the top level commands in workflow order in --help"""

    def list_commands(self, ctx: click.Context) -> list[str]:
        ordered = [name for name in COMMAND_ORDER if name in self.commands]
        return ordered + [name for name in self.commands if name not in ordered]
