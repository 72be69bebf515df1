# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.columns import Columns
from rich.console import Console, RenderableType
from rich.errors import StyleSyntaxError
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from studianta.color import (
    HIGH_PRIORITY_MARK_COLOR,
    OUTSIDE_MONTH_COLOR,
    TODAY_COLOR,
)
from studianta.model.convergence_event import ConvergenceEvent, EventKind, Priority
from studianta.service.calendar_grid import MonthCell, WeekColumn
from studianta.time import date_to_display_str
from studianta.view.header import header

WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def _truncate(text: str, width: int) -> str:
    if width < 4 or len(text) <= width:
        return text
    return text[: width - 3] + "..."


def _style(color: Optional[str]) -> str:
    # Custom event colors come from user data and may not be valid styles
    if not color:
        return "white"
    try:
        Style.parse(color)
    except StyleSyntaxError:
        return "white"
    return color


def _event_line(event: ConvergenceEvent, width: Optional[int] = None) -> Text:
    line = Text()
    if event["priority"] == Priority.HIGH:
        line.append("! ", style=HIGH_PRIORITY_MARK_COLOR)
    else:
        line.append("■ ", style=_style(event["color"]))
    label = event["title"] or "[no title]"
    if event["time"] is not None:
        label = f"{event['time']} {label}"
    if width is not None:
        label = _truncate(label, width - 2)
    line.append(label, style=_style(event["color"]))
    return line


def _amount(event: ConvergenceEvent) -> str:
    if event["amount"] is None:
        return ""
    return f"{event['amount']:,.2f}"


def render_month_grid(cells: list[MonthCell], cell_width: int = 20) -> Table:
    """
    Render the 42 month cells as a 6x7 table.

    Args:
        cells: Cells from build_month_grid
        cell_width: Width of each day cell in characters

    Returns:
        A Table containing the month's calendar grid
    """
    table = Table(box=box.SIMPLE, show_header=True, padding=(0, 1))
    for day_name in WEEKDAY_NAMES:
        table.add_column(day_name, style="bold", width=cell_width)

    week_cells: list[Text] = []
    for cell in cells:
        content = Text()
        day_num = f"{cell['date'].day:2d}"
        if cell["is_outside_month"]:
            content.append(day_num, style=OUTSIDE_MONTH_COLOR)
        elif cell["is_today"]:
            content.append(day_num, style=TODAY_COLOR)
        else:
            content.append(day_num, style="bold")
        if cell["mood_glyph"] is not None:
            content.append(f" ({cell['mood_glyph']})", style="dim")
        content.append("\n")

        for event in cell["visible_events"]:
            content.append_text(_event_line(event, cell_width))
            content.append("\n")
        if cell["overflow"] > 0:
            content.append(f"  +{cell['overflow']} more\n", style="dim")

        week_cells.append(content)
        if len(week_cells) == 7:
            table.add_row(*week_cells)
            week_cells = []

    return table


def month_view(
    anchor: pendulum.Date,
    cells: list[MonthCell],
    cell_width: int = 20,
    console: Optional[Console] = None,
) -> None:
    header("month")
    console = console or Console()
    console.print(f"\n[bold]{anchor.format('MMMM YYYY')}[/bold]\n")
    console.print(render_month_grid(cells, cell_width))
    console.print()


def render_day_column(column: WeekColumn, day_width: int = 24) -> Panel:
    content = Text()
    # Moods only show as the title glyph
    listed = [event for event in column["events"] if event["kind"] != EventKind.MOOD]
    if not listed:
        content.append("-", style="dim")
    for event in listed:
        content.append_text(_event_line(event, day_width))
        if event["kind"] == EventKind.TRANSACTION:
            content.append(f" {_amount(event)}", style="dim")
        content.append("\n")

    title = column["date"].format("ddd DD")
    if column["mood_glyph"] is not None:
        title = f"{title} ({column['mood_glyph']})"
    return Panel(
        content,
        title=title,
        title_align="left",
        width=day_width,
        border_style=TODAY_COLOR if column["is_today"] else OUTSIDE_MONTH_COLOR,
        padding=(0, 1),
    )


def week_view(
    columns: list[WeekColumn],
    day_width: int = 24,
    console: Optional[Console] = None,
) -> None:
    header("week")
    console = console or Console()
    first = columns[0]["date"]
    last = columns[-1]["date"]
    console.print(
        f"\n[bold]{date_to_display_str(first)} - {date_to_display_str(last)}[/bold]\n"
    )
    panels: list[RenderableType] = [
        render_day_column(column, day_width) for column in columns
    ]
    console.print(Columns(panels, equal=False, expand=False, padding=(0, 0)))
    console.print()


def render_day_table(events: list[ConvergenceEvent]) -> Table:
    table = Table(box=box.SIMPLE)
    table.add_column("time")
    table.add_column("title")
    table.add_column("details")
    table.add_column("amount", justify="right")

    for event in events:
        title = Text()
        if event["priority"] == Priority.HIGH:
            title.append("! ", style=HIGH_PRIORITY_MARK_COLOR)
        title.append(event["title"] or "[no title]", style=_style(event["color"]))
        table.add_row(
            event["time"] or "all day",
            title,
            Text(event["subtitle"]),
            _amount(event),
        )
    return table


def day_view(
    date: pendulum.Date,
    events: list[ConvergenceEvent],
    console: Optional[Console] = None,
) -> None:
    header("day")
    console = console or Console()
    console.print(f"\n[bold]{date_to_display_str(date)}[/bold]\n")
    if not events:
        console.print("[dim]Nothing scheduled.[/dim]\n")
        return
    console.print(render_day_table(events))
