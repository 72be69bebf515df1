# SPDX-License-Identifier: MIT

import pendulum
import pytest

from studianta.model.convergence_event import EventKind, Priority
from studianta.service.convergence import (
    UNTIMED_SORT_KEY,
    events_for_date,
    milestone_priority,
)

NOW = pendulum.naive(2024, 3, 15, 12, 0)


def _subject(**overrides):
    subject = {
        "id": "algebra",
        "name": "Algebra",
        "room": "B-204",
        "term_start": "2024-01-08",
        "term_end": "2024-05-20",
        "schedules": [
            {"id": "mon", "day": "Lunes", "start_time": "10:00", "end_time": "12:00"}
        ],
        "milestones": [],
    }
    subject.update(overrides)
    return subject


def _events(date, subjects=(), transactions=(), journal=(), custom=(), now=NOW):
    return events_for_date(
        date, list(subjects), list(transactions), list(journal), list(custom), now
    )


def test_algebra_midterm_sorts_before_class():
    subject = _subject(
        milestones=[
            {
                "id": "midterm",
                "title": "Midterm",
                "date": "2024-03-18",
                "type": "Examen",
            }
        ]
    )

    events = _events(pendulum.date(2024, 3, 18), subjects=[subject])

    assert [event["kind"] for event in events] == [EventKind.MILESTONE, EventKind.CLASS]
    milestone, lesson = events
    assert milestone["title"] == "Midterm"
    assert milestone["time"] is None
    assert milestone["subtitle"] == "Algebra • Examen"
    assert lesson["time"] == "10:00"
    assert lesson["id"] == "algebra-mon"
    assert lesson["subtitle"] == "Class • Room: B-204"


def test_term_bounded_recurrence():
    subject = _subject(term_start="2024-03-01", term_end="2024-07-15")
    start = pendulum.date(2024, 3, 1)
    end = pendulum.date(2024, 7, 15)

    date = pendulum.date(2024, 1, 1)
    while date <= pendulum.date(2024, 9, 30):
        classes = [
            event
            for event in _events(date, subjects=[subject])
            if event["kind"] == EventKind.CLASS
        ]
        if date.weekday() == 0 and start <= date <= end:
            assert len(classes) == 1, date
        else:
            assert classes == [], date
        date = date.add(days=1)


def test_open_term_bounds_are_unbounded():
    subject = _subject(term_start=None, term_end="")
    events = _events(pendulum.date(2030, 1, 7), subjects=[subject])
    assert [event["kind"] for event in events] == [EventKind.CLASS]


def test_unparsable_term_bound_hides_classes():
    subject = _subject(term_end="someday")
    assert _events(pendulum.date(2024, 3, 18), subjects=[subject]) == []


def test_schedule_day_names_with_accents():
    subject = _subject(
        schedules=[{"day": "Miércoles", "start_time": "8:00", "end_time": "10:00"}]
    )
    events = _events(pendulum.date(2024, 3, 20), subjects=[subject])
    assert len(events) == 1
    assert events[0]["time"] == "08:00"
    assert events[0]["id"] == "algebra-0"


def test_unknown_weekday_is_excluded():
    subject = _subject(
        schedules=[
            {"day": "Funday", "start_time": "08:00", "end_time": "10:00"},
            {"day": "Lunes", "start_time": "14:00", "end_time": "16:00"},
        ]
    )
    events = _events(pendulum.date(2024, 3, 18), subjects=[subject])
    assert [event["time"] for event in events] == ["14:00"]


def test_missing_room_reads_tbd():
    events = _events(pendulum.date(2024, 3, 18), subjects=[_subject(room=None)])
    assert events[0]["subtitle"] == "Class • Room: TBD"


def test_sort_invariant_across_sources():
    date = pendulum.date(2024, 3, 18)
    subject = _subject(
        schedules=[
            {"id": "late", "day": "Lunes", "start_time": "18:00", "end_time": "20:00"},
            {"id": "early", "day": "Monday", "start_time": "07:30", "end_time": "9:00"},
        ],
        milestones=[
            {
                "id": "tp",
                "title": "TP1",
                "date": "2024-03-18",
                "time": "12:15",
                "type": "Trabajo Práctico",
            }
        ],
    )
    transactions = [
        {
            "id": "rent",
            "date": "2024-03-18",
            "type": "Expense",
            "category": "Housing",
            "amount": 450.0,
            "description": "Rent",
        }
    ]
    journal = [{"id": "j1", "date": "2024-03-18", "mood": "Enfocada"}]
    custom = [
        {
            "id": "c1",
            "title": "Dentist",
            "date": "2024-03-18",
            "time": "09:45",
            "color": "cyan",
            "priority": "low",
        }
    ]

    events = _events(date, [subject], transactions, journal, custom)

    keys = [event["time"] or UNTIMED_SORT_KEY for event in events]
    assert keys == sorted(keys)
    assert len(events) == 6
    assert all(event["date"] == date for event in events)


def test_untimed_ties_keep_source_order():
    date = pendulum.date(2024, 3, 18)
    subject = _subject(
        schedules=[],
        milestones=[{"id": "m", "title": "Essay", "date": "2024-03-18", "type": "Entrega"}],
    )
    transactions = [
        {
            "id": "t",
            "date": "2024-03-18",
            "type": "Income",
            "category": "Scholarship",
            "amount": 200,
            "description": "Grant",
        }
    ]
    journal = [{"id": "j", "date": "2024-03-18", "mood": "Radiante"}]
    custom = [{"id": "c", "title": "Call mom", "date": "2024-03-18", "color": "red", "priority": "high"}]

    events = _events(date, [subject], transactions, journal, custom)

    assert [event["kind"] for event in events] == [
        EventKind.MILESTONE,
        EventKind.TRANSACTION,
        EventKind.MOOD,
        EventKind.CUSTOM,
    ]


def test_transaction_event_fields():
    transactions = [
        {
            "id": "t1",
            "date": "2024-03-18",
            "type": "Expense",
            "category": "Books",
            "amount": 35.5,
            "description": "Calculus book",
        }
    ]
    (event,) = _events(pendulum.date(2024, 3, 18), transactions=transactions)
    assert event["title"] == "Calculus book"
    assert event["subtitle"] == "Finance • Books"
    assert event["amount"] == 35.5
    assert event["priority"] == Priority.LOW


def test_mood_event_carries_glyph():
    journal = [{"id": "j1", "date": "2024-03-18", "mood": "Agotada"}]
    (event,) = _events(pendulum.date(2024, 3, 18), journal=journal)
    assert event["title"] == "Mood: Agotada"
    assert event["mood_glyph"] == "low-battery"


def test_unknown_mood_has_no_glyph():
    journal = [{"id": "j1", "date": "2024-03-18", "mood": "Confused"}]
    (event,) = _events(pendulum.date(2024, 3, 18), journal=journal)
    assert event["kind"] == EventKind.MOOD
    assert event["mood_glyph"] is None


def test_custom_event_keeps_its_priority_and_color():
    custom = [
        {
            "id": "c1",
            "title": "Visa appointment",
            "date": "2024-03-18",
            "time": "11:00",
            "color": "green",
            "priority": "high",
        }
    ]
    (event,) = _events(pendulum.date(2024, 3, 18), custom=custom)
    assert event["priority"] == Priority.HIGH
    assert event["color"] == "green"
    assert event["subtitle"] == "Personal event"


def test_malformed_dates_are_excluded():
    subject = _subject(
        schedules=[],
        milestones=[{"id": "bad", "title": "Lost", "date": "18/03/2024", "type": "Examen"}],
    )
    transactions = [
        {"id": "t", "date": None, "type": "Expense", "category": "x", "amount": 1, "description": "x"}
    ]
    journal = [{"id": "j", "date": "yesterday", "mood": "Radiante"}]
    custom = [{"id": "c", "title": "x", "date": "2024-13-01", "color": "red", "priority": "low"}]

    assert _events(pendulum.date(2024, 3, 18), [subject], transactions, journal, custom) == []


@pytest.mark.parametrize(
    "moment, expected",
    [
        (NOW.add(hours=48), Priority.HIGH),
        (NOW.add(hours=48, minutes=1), Priority.LOW),
        (NOW.subtract(hours=24), Priority.HIGH),
        (NOW.subtract(hours=24, minutes=1), Priority.LOW),
        (NOW, Priority.HIGH),
    ],
)
def test_urgency_boundaries(moment, expected):
    priority = milestone_priority(moment.date(), moment.format("HH:mm"), NOW)
    assert priority == expected


def test_untimed_milestone_urgency_uses_midnight():
    now = pendulum.naive(2024, 3, 16, 0, 0)
    assert milestone_priority(pendulum.date(2024, 3, 18), None, now) == Priority.HIGH
    assert milestone_priority(pendulum.date(2024, 3, 18), None, now.subtract(minutes=1)) == Priority.LOW


def test_milestone_priority_in_event():
    subject = _subject(
        schedules=[],
        milestones=[
            {"id": "soon", "title": "Quiz", "date": "2024-03-16", "time": "09:00", "type": "Parcial"},
        ],
    )
    (event,) = _events(pendulum.date(2024, 3, 16), subjects=[subject])
    assert event["priority"] == Priority.HIGH

    (event,) = _events(
        pendulum.date(2024, 3, 16), subjects=[subject], now=pendulum.naive(2024, 3, 1)
    )
    assert event["priority"] == Priority.LOW
