# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from studianta.repository.custom_event import CUSTOM_EVENT_REPO
from studianta.repository.subject import SUBJECT_REPO
from studianta.service.ical import ics_filename, write_ics
from studianta.terminal.custom_typer import AliasedTyperGroup
from studianta.time import today_local

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("ics, i")
def ics(
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            dir_okay=False,
            writable=True,
            help="File to write (defaults to studianta-calendar-<date>.ics)",
        ),
    ] = None,
) -> None:
    """Export milestones and custom events as an iCalendar file."""
    subjects = SUBJECT_REPO.get_all()
    custom_events = CUSTOM_EVENT_REPO.get_all()
    if output is None:
        output = Path(ics_filename(today_local()))

    console = Console()
    try:
        exported, skipped = write_ics(output, subjects, custom_events)
    except OSError as e:
        console.print(f"[red]Could not write {output}: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Exported {exported} events to {output}[/green]")
    if skipped:
        console.print(f"[yellow]Skipped {skipped} records with invalid dates[/yellow]")
