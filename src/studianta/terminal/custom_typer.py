# SPDX-License-Identifier: MIT

import re
from typing import Optional

import click
import typer.core

_ALIAS_SEPARATOR = re.compile(r"\s*,\s*")


class AliasedTyperGroup(typer.core.TyperGroup):
    """Group whose commands are registered as "name, alias" and answer to either."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        return super().get_command(ctx, self.resolve_alias(cmd_name))

    def resolve_alias(self, typed: str) -> str:
        for registered in self.commands:
            if typed in _ALIAS_SEPARATOR.split(registered):
                return registered
        return typed


class OrderedAliasedGroup(AliasedTyperGroup):
    """Top level group listing commands in workflow order in --help."""

    COMMAND_ORDER = [
        "view, v",
        "export, e",
        "recurring, r",
        "config, c",
    ]

    def list_commands(self, ctx: click.Context) -> list[str]:
        ordered = [name for name in self.COMMAND_ORDER if name in self.commands]
        ordered.extend(name for name in self.commands if name not in ordered)
        return ordered
