# SPDX-License-Identifier: MIT

from typing import Optional, assert_never

import pendulum

from studianta.color import (
    CLASS_COLOR,
    EXAM_MILESTONE_COLOR,
    EXPENSE_COLOR,
    INCOME_COLOR,
    MILESTONE_COLOR,
    MOOD_COLOR,
)
from studianta.model.convergence_event import ConvergenceEvent, EventKind, Priority
from studianta.model.custom_event import CustomCalendarEvent
from studianta.model.journal_entry import MOOD_GLYPHS, JournalEntry
from studianta.model.occurrence import (
    ClassOccurrence,
    CustomOccurrence,
    MilestoneOccurrence,
    MoodOccurrence,
    Occurrence,
    TransactionOccurrence,
)
from studianta.model.subject import MilestoneType, Subject
from studianta.model.transaction import Transaction, TransactionType
from studianta.source import custom_event as custom_event_source
from studianta.source import milestone as milestone_source
from studianta.source import mood as mood_source
from studianta.source import schedule as schedule_source
from studianta.source import transaction as transaction_source
from studianta.time import local_moment, now_local, to_local_naive

# Milestones inside [now - LOOKBACK, now + LOOKAHEAD] are urgent.
URGENCY_LOOKAHEAD_HOURS = 48
URGENCY_LOOKBACK_HOURS = 24

UNTIMED_SORT_KEY = "00:00"


def milestone_priority(
    date: pendulum.Date, time: Optional[str], now: pendulum.DateTime
) -> str:
    moment = local_moment(date, time)
    now = to_local_naive(now)
    earliest = now.subtract(hours=URGENCY_LOOKBACK_HOURS)
    latest = now.add(hours=URGENCY_LOOKAHEAD_HOURS)
    if earliest <= moment <= latest:
        return Priority.HIGH
    return Priority.LOW


def collect_occurrences(
    date: pendulum.Date,
    subjects: list[Subject],
    transactions: list[Transaction],
    journal_entries: list[JournalEntry],
    custom_events: list[CustomCalendarEvent],
) -> list[Occurrence]:
    occurrences: list[Occurrence] = []
    occurrences.extend(schedule_source.occurrences_on(date, subjects))
    occurrences.extend(milestone_source.occurrences_on(date, subjects))
    occurrences.extend(transaction_source.occurrences_on(date, transactions))
    occurrences.extend(mood_source.occurrences_on(date, journal_entries))
    occurrences.extend(custom_event_source.occurrences_on(date, custom_events))
    return occurrences


def to_convergence_event(
    occurrence: Occurrence, now: pendulum.DateTime
) -> ConvergenceEvent:
    match occurrence:
        case ClassOccurrence(subject=subject, schedule_key=key, date=date):
            return {
                "id": f"{subject['id']}-{key}",
                "title": subject["name"],
                "subtitle": f"Class • Room: {subject.get('room') or 'TBD'}",
                "date": date,
                "time": occurrence.start_time,
                "kind": EventKind.CLASS,
                "priority": Priority.LOW,
                "color": CLASS_COLOR,
                "amount": None,
                "mood_glyph": None,
            }
        case MilestoneOccurrence(subject=subject, milestone=milestone, date=date):
            milestone_type = milestone.get("type", "")
            return {
                "id": milestone["id"],
                "title": milestone["title"],
                "subtitle": f"{subject['name']} • {milestone_type}",
                "date": date,
                "time": occurrence.time,
                "kind": EventKind.MILESTONE,
                "priority": milestone_priority(date, occurrence.time, now),
                "color": (
                    EXAM_MILESTONE_COLOR
                    if milestone_type == MilestoneType.EXAM
                    else MILESTONE_COLOR
                ),
                "amount": None,
                "mood_glyph": None,
            }
        case TransactionOccurrence(transaction=transaction, date=date):
            return {
                "id": transaction["id"],
                "title": transaction.get("description", ""),
                "subtitle": f"Finance • {transaction.get('category', '')}",
                "date": date,
                "time": None,
                "kind": EventKind.TRANSACTION,
                "priority": Priority.LOW,
                "color": (
                    EXPENSE_COLOR
                    if transaction.get("type") == TransactionType.EXPENSE
                    else INCOME_COLOR
                ),
                "amount": transaction.get("amount"),
                "mood_glyph": None,
            }
        case MoodOccurrence(entry=entry, mood=mood, date=date):
            return {
                "id": entry["id"],
                "title": f"Mood: {entry.get('mood')}",
                "subtitle": "Mood journal",
                "date": date,
                "time": None,
                "kind": EventKind.MOOD,
                "priority": Priority.LOW,
                "color": MOOD_COLOR,
                "amount": None,
                "mood_glyph": MOOD_GLYPHS[mood] if mood is not None else None,
            }
        case CustomOccurrence(event=event, date=date):
            return {
                "id": event["id"],
                "title": event["title"],
                "subtitle": event.get("description") or "Personal event",
                "date": date,
                "time": occurrence.time,
                "kind": EventKind.CUSTOM,
                "priority": event.get("priority", Priority.LOW),
                "color": event.get("color", ""),
                "amount": None,
                "mood_glyph": None,
            }
        case _:
            assert_never(occurrence)


def sort_key(event: ConvergenceEvent) -> str:
    return event["time"] or UNTIMED_SORT_KEY


def events_for_date(
    date: pendulum.Date,
    subjects: list[Subject],
    transactions: list[Transaction],
    journal_entries: list[JournalEntry],
    custom_events: list[CustomCalendarEvent],
    now: Optional[pendulum.DateTime] = None,
) -> list[ConvergenceEvent]:
    """
    Merge every source into the ordered list of events on a single date.

    Records with unparsable dates never match any day. They are not logged at
    warning level here, as this runs once per displayed day; the repositories
    report them once on load. Untimed events sort as if they started at 00:00,
    ahead of timed events of the same day. The sort is stable, so ties keep
    source order (classes, milestones, transactions, moods, custom events).

    Args:
        date: The calendar date to resolve
        subjects: Subjects with their weekly schedules and milestones
        transactions: Financial transactions
        journal_entries: Mood journal entries
        custom_events: Free-form custom events
        now: Reference moment for milestone urgency (defaults to the local clock)
    """
    if now is None:
        now = now_local()
    occurrences = collect_occurrences(
        date, subjects, transactions, journal_entries, custom_events
    )
    events = [to_convergence_event(occurrence, now) for occurrence in occurrences]
    return sorted(events, key=sort_key)
