# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from studianta.model.convergence_event import ConvergenceEvent, EventKind
from studianta.model.custom_event import CustomCalendarEvent
from studianta.model.journal_entry import JournalEntry
from studianta.model.subject import Subject
from studianta.model.transaction import Transaction
from studianta.service.convergence import events_for_date
from studianta.time import now_local, to_local_naive

MONTH_GRID_CELLS = 42
WEEK_COLUMNS = 7
DEFAULT_MONTH_CELL_LIMIT = 3


class Resolution:
    MONTH = "month"
    WEEK = "week"
    DAY = "day"


class MonthCell(TypedDict):
    date: pendulum.Date
    events: list[ConvergenceEvent]
    visible_events: list[ConvergenceEvent]
    overflow: int
    mood_glyph: Optional[str]
    is_outside_month: bool
    is_today: bool


class WeekColumn(TypedDict):
    date: pendulum.Date
    events: list[ConvergenceEvent]
    mood_glyph: Optional[str]
    is_today: bool


def month_grid_start(anchor: pendulum.Date) -> pendulum.Date:
    """Monday on or before the first day of the anchor's month."""
    first = anchor.start_of("month")
    return first.subtract(days=first.isoweekday() - 1)


def week_start(anchor: pendulum.Date) -> pendulum.Date:
    """Monday on or before the anchor."""
    return anchor.subtract(days=anchor.weekday())


def shift_anchor(anchor: pendulum.Date, resolution: str, steps: int) -> pendulum.Date:
    """Move the anchor by whole periods of the given resolution.

    Months roll over into neighbouring years and clamp the day to the target
    month's length (Jan 31 + 1 month is the last day of February).
    """
    if resolution == Resolution.DAY:
        return anchor.add(days=steps)
    if resolution == Resolution.WEEK:
        return anchor.add(weeks=steps)
    if resolution == Resolution.MONTH:
        return anchor.add(months=steps)
    raise ValueError(f"unknown resolution: {resolution}")


def _mood_glyph(events: list[ConvergenceEvent]) -> Optional[str]:
    for event in events:
        if event["kind"] == EventKind.MOOD:
            return event["mood_glyph"]
    return None


def _resolve_today(
    now: Optional[pendulum.DateTime], today: Optional[pendulum.Date]
) -> tuple[pendulum.DateTime, pendulum.Date]:
    now = to_local_naive(now) if now is not None else now_local()
    if today is None:
        today = now.date()
    return now, today


def build_month_grid(
    anchor: pendulum.Date,
    subjects: list[Subject],
    transactions: list[Transaction],
    journal_entries: list[JournalEntry],
    custom_events: list[CustomCalendarEvent],
    now: Optional[pendulum.DateTime] = None,
    today: Optional[pendulum.Date] = None,
    limit: int = DEFAULT_MONTH_CELL_LIMIT,
) -> list[MonthCell]:
    """
    Build the fixed 6x7 month grid around the anchor's month.

    Only in-month cells are resolved against the convergence engine; leading
    and trailing cells belong to neighbouring months and stay empty. Each
    in-month cell keeps its full event list for tooltips, while
    visible_events holds at most `limit` non-mood events and overflow counts
    the ones left out. Moods surface as the cell's glyph instead.

    Args:
        anchor: Any date inside the month to display
        subjects: Subjects with schedules and milestones
        transactions: Financial transactions
        journal_entries: Mood journal entries
        custom_events: Custom calendar events
        now: Reference moment for urgency (defaults to the local clock)
        today: Date highlighted as today (defaults to the date of now)
        limit: Maximum number of visible events per cell
    """
    now, today = _resolve_today(now, today)
    start = month_grid_start(anchor)

    cells: list[MonthCell] = []
    for offset in range(MONTH_GRID_CELLS):
        date = start.add(days=offset)
        is_outside_month = date.month != anchor.month or date.year != anchor.year
        events: list[ConvergenceEvent] = []
        if not is_outside_month:
            events = events_for_date(
                date, subjects, transactions, journal_entries, custom_events, now
            )
        listed = [event for event in events if event["kind"] != EventKind.MOOD]
        visible = listed[:limit]
        cells.append(
            {
                "date": date,
                "events": events,
                "visible_events": visible,
                "overflow": len(listed) - len(visible),
                "mood_glyph": _mood_glyph(events),
                "is_outside_month": is_outside_month,
                "is_today": date == today,
            }
        )
    return cells


def build_week_columns(
    anchor: pendulum.Date,
    subjects: list[Subject],
    transactions: list[Transaction],
    journal_entries: list[JournalEntry],
    custom_events: list[CustomCalendarEvent],
    now: Optional[pendulum.DateTime] = None,
    today: Optional[pendulum.Date] = None,
) -> list[WeekColumn]:
    now, today = _resolve_today(now, today)
    start = week_start(anchor)

    columns: list[WeekColumn] = []
    for offset in range(WEEK_COLUMNS):
        date = start.add(days=offset)
        events = events_for_date(
            date, subjects, transactions, journal_entries, custom_events, now
        )
        columns.append(
            {
                "date": date,
                "events": events,
                "mood_glyph": _mood_glyph(events),
                "is_today": date == today,
            }
        )
    return columns


def build_day_focus(
    anchor: pendulum.Date,
    subjects: list[Subject],
    transactions: list[Transaction],
    journal_entries: list[JournalEntry],
    custom_events: list[CustomCalendarEvent],
    now: Optional[pendulum.DateTime] = None,
) -> list[ConvergenceEvent]:
    return events_for_date(
        anchor, subjects, transactions, journal_entries, custom_events, now
    )
