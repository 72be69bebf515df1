# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from studianta.repository.configuration import CONFIGURATION_REPO
from studianta.repository.custom_event import CUSTOM_EVENT_REPO
from studianta.repository.journal import JOURNAL_REPO
from studianta.repository.subject import SUBJECT_REPO
from studianta.repository.transaction import TRANSACTION_REPO
from studianta.service.calendar_grid import (
    Resolution,
    build_day_focus,
    build_month_grid,
    build_week_columns,
    shift_anchor,
)
from studianta.terminal.custom_typer import AliasedTyperGroup
from studianta.terminal.parse import parse_date
from studianta.time import now_local, today_local
from studianta.view.calendar import day_view, month_view, week_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"


def _anchor(
    date: Optional[pendulum.Date], resolution: str, shift: int
) -> pendulum.Date:
    anchor = date if date is not None else today_local()
    if shift:
        anchor = shift_anchor(anchor, resolution, shift)
    return anchor


@app.command("month, m")
def month(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
    shift: Annotated[
        int,
        typer.Option("--shift", "-s", help="Move this many months forward (or back)"),
    ] = 0,
    cell_width: Annotated[
        int,
        typer.Option("--cell-width", "-w", help="Width of each day cell in characters"),
    ] = 20,
    limit: Annotated[
        Optional[int],
        typer.Option(
            "--limit",
            "-l",
            min=1,
            help="Events listed per day before collapsing into '+N more'",
        ),
    ] = None,
) -> None:
    """Display a month grid with classes, milestones, finances and moods."""
    anchor = _anchor(date, Resolution.MONTH, shift)
    if limit is None:
        limit = CONFIGURATION_REPO.get_config()["month_cell_limit"]

    cells = build_month_grid(
        anchor,
        SUBJECT_REPO.get_all(),
        TRANSACTION_REPO.get_all(),
        JOURNAL_REPO.get_all(),
        CUSTOM_EVENT_REPO.get_all(),
        now=now_local(),
        today=today_local(),
        limit=limit,
    )
    month_view(anchor, cells, cell_width)


@app.command("week, w")
def week(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
    shift: Annotated[
        int,
        typer.Option("--shift", "-s", help="Move this many weeks forward (or back)"),
    ] = 0,
    day_width: Annotated[
        int,
        typer.Option("--day-width", "-w", help="Width of each day column"),
    ] = 24,
) -> None:
    """Display the Monday to Sunday week containing the date."""
    anchor = _anchor(date, Resolution.WEEK, shift)
    columns = build_week_columns(
        anchor,
        SUBJECT_REPO.get_all(),
        TRANSACTION_REPO.get_all(),
        JOURNAL_REPO.get_all(),
        CUSTOM_EVENT_REPO.get_all(),
        now=now_local(),
        today=today_local(),
    )
    week_view(columns, day_width)


@app.command("day, d")
def day(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
    shift: Annotated[
        int,
        typer.Option("--shift", "-s", help="Move this many days forward (or back)"),
    ] = 0,
) -> None:
    """Display everything happening on a single day."""
    anchor = _anchor(date, Resolution.DAY, shift)
    events = build_day_focus(
        anchor,
        SUBJECT_REPO.get_all(),
        TRANSACTION_REPO.get_all(),
        JOURNAL_REPO.get_all(),
        CUSTOM_EVENT_REPO.get_all(),
        now=now_local(),
    )
    day_view(anchor, events)
