# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Optional, TypedDict

import pendulum
from icalendar import Calendar, Event, vText

from studianta.configuration import APP_NAME, APP_TITLE
from studianta.model.convergence_event import EventKind, Priority
from studianta.model.custom_event import CustomCalendarEvent
from studianta.model.subject import MilestoneType, Subject
from studianta.time import (
    date_from_str_optional,
    date_to_iso_str,
    local_moment,
    now_utc,
    time_from_str_optional,
    to_python_date,
    to_python_naive,
    to_python_utc,
)

logger = logging.getLogger(__name__)

ICS_MIME_TYPE = "text/calendar; charset=utf-8"
PRODID = f"-//{APP_TITLE}//Academic Calendar//EN"
UID_DOMAIN = APP_NAME
SUMMARY_PREFIX = f"[{APP_TITLE}]"

# Milestones and custom events store no end time
TIMED_EVENT_HOURS = 2


class ExportEntry(TypedDict):
    source_id: str
    kind: str
    summary: str
    description: Optional[str]
    date: pendulum.Date
    time: Optional[str]
    high_priority: bool


def exportable_entries(
    subjects: list[Subject], custom_events: list[CustomCalendarEvent]
) -> tuple[list[ExportEntry], int]:
    """Collect the single-occurrence events worth exporting.

    Weekly class occurrences are left out; only milestones and custom events
    are exported. Records whose date cannot be parsed are skipped.

    Returns:
        The entries in source order and the number of skipped records
    """
    entries: list[ExportEntry] = []
    skipped = 0

    for subject in subjects:
        for milestone in subject.get("milestones") or []:
            date = date_from_str_optional(milestone.get("date"))
            if date is None:
                logger.warning(
                    "skipping milestone %r of %r: unparsable date %r",
                    milestone.get("title"),
                    subject.get("name"),
                    milestone.get("date"),
                )
                skipped += 1
                continue
            milestone_type = milestone.get("type", "")
            entries.append(
                {
                    "source_id": str(milestone["id"]),
                    "kind": EventKind.MILESTONE,
                    "summary": f"{SUMMARY_PREFIX} {milestone_type}: {subject['name']}",
                    "description": (
                        f"Subject: {subject['name']}\n"
                        f"Type: {milestone_type}\n"
                        f"{milestone.get('title', '')}"
                    ),
                    "date": date,
                    "time": time_from_str_optional(milestone.get("time")),
                    "high_priority": milestone_type == MilestoneType.EXAM,
                }
            )

    for event in custom_events:
        date = date_from_str_optional(event.get("date"))
        if date is None:
            logger.warning(
                "skipping custom event %r: unparsable date %r",
                event.get("title"),
                event.get("date"),
            )
            skipped += 1
            continue
        entries.append(
            {
                "source_id": str(event["id"]),
                "kind": EventKind.CUSTOM,
                "summary": f"{SUMMARY_PREFIX} {event.get('title', '')}",
                "description": event.get("description") or None,
                "date": date,
                "time": time_from_str_optional(event.get("time")),
                "high_priority": event.get("priority") == Priority.HIGH,
            }
        )

    return entries, skipped


def entry_bounds(
    entry: ExportEntry,
) -> tuple[pendulum.Date | pendulum.DateTime, pendulum.Date | pendulum.DateTime]:
    """Start and exclusive end of an exported entry.

    Timed entries last TIMED_EVENT_HOURS; all-day entries end the next day.
    """
    if entry["time"] is None:
        return entry["date"], entry["date"].add(days=1)
    start = local_moment(entry["date"], entry["time"])
    return start, start.add(hours=TIMED_EVENT_HOURS)


def _strip_line_breaks(text: str) -> str:
    return " ".join(text.splitlines())


def _text(value: str) -> vText:
    """Wrap a raw value for RFC 5545 escaping, once, at serialization.

    Values that cannot be encoded (lone surrogates from bad decoding) fall back
    to a best-effort copy with unencodable characters replaced and every line
    break removed, so a single broken record does not abort the document.
    """
    text = vText(value)
    try:
        text.to_ical()
    except (UnicodeError, TypeError, ValueError) as e:
        logger.warning("falling back to plain text for %r: %s", value, e)
        fallback = str(value).encode("utf-8", "replace").decode("utf-8")
        text = vText(_strip_line_breaks(fallback))
    return text


def _add_bounds(component: Event, entry: ExportEntry) -> None:
    start, end = entry_bounds(entry)
    if isinstance(start, pendulum.DateTime) and isinstance(end, pendulum.DateTime):
        component.add("dtstart", to_python_naive(start))
        component.add("dtend", to_python_naive(end))
    else:
        component.add("dtstart", to_python_date(start))
        component.add("dtend", to_python_date(end))


def _calendar(entries: list[ExportEntry], stamp: Optional[pendulum.DateTime]) -> Calendar:
    if stamp is None:
        stamp = now_utc()
    dtstamp = to_python_utc(stamp)

    calendar = Calendar()
    calendar.add("version", "2.0")
    calendar.add("prodid", PRODID)
    calendar.add("calscale", "GREGORIAN")
    calendar.add("method", "PUBLISH")

    for entry in entries:
        component = Event()
        component.add("uid", f"{entry['source_id']}@{UID_DOMAIN}")
        _add_bounds(component, entry)
        component.add("summary", _text(entry["summary"]))
        if entry["description"]:
            component.add("description", _text(entry["description"]))
        component.add("dtstamp", dtstamp)
        calendar.add_component(component)

    return calendar


def build_calendar(
    subjects: list[Subject],
    custom_events: list[CustomCalendarEvent],
    stamp: Optional[pendulum.DateTime] = None,
) -> Calendar:
    entries, _ = exportable_entries(subjects, custom_events)
    return _calendar(entries, stamp)


def export_ics(
    subjects: list[Subject],
    custom_events: list[CustomCalendarEvent],
    stamp: Optional[pendulum.DateTime] = None,
) -> str:
    """
    Serialize milestones and custom events into an iCalendar document.

    UIDs derive from the source record ids so calendar clients update events
    on re-import instead of duplicating them.

    Args:
        subjects: Subjects whose milestones are exported
        custom_events: Custom events to export
        stamp: DTSTAMP for every event (defaults to the current UTC time)
    """
    calendar = build_calendar(subjects, custom_events, stamp)
    return calendar.to_ical(sorted=False).decode("utf-8")


def ics_filename(date: pendulum.Date) -> str:
    return f"{APP_NAME}-calendar-{date_to_iso_str(date)}.ics"


def write_ics(
    path: Path,
    subjects: list[Subject],
    custom_events: list[CustomCalendarEvent],
    stamp: Optional[pendulum.DateTime] = None,
) -> tuple[int, int]:
    """Write the export to path.

    Returns:
        The number of exported events and the number of skipped records
    """
    entries, skipped = exportable_entries(subjects, custom_events)
    path.write_bytes(_calendar(entries, stamp).to_ical(sorted=False))
    logger.info("wrote %d events to %s", len(entries), path)
    return len(entries), skipped
