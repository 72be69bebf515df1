# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from studianta.terminal import configuration, export, recurring, view
from studianta.terminal.custom_typer import OrderedAliasedGroup
from studianta.view import header as view_header

app = typer.Typer(
    cls=OrderedAliasedGroup,
    help="Studianta - Classes, deadlines, finances and moods on one calendar",
    no_args_is_help=True,
)
app.add_typer(view.app, name="view, v", help="Month, week and day calendar views")
app.add_typer(export.app, name="export, e", help="Export the calendar to files")
app.add_typer(
    recurring.app, name="recurring, r", help="Materialize recurring transactions"
)
app.add_typer(configuration.app, name="config, c", help="Show and change settings")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in views",
        ),
    ] = False,
) -> None:
    """
    Studianta - Classes, deadlines, finances and moods on one calendar

    Global options that apply to all commands.
    """
    if no_header:
        view_header.set_show_header(False)


def run() -> None:
    app()
