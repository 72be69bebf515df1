# SPDX-License-Identifier: MIT

import logging
import re

import pendulum

from studianta.service.ical import (
    ICS_MIME_TYPE,
    exportable_entries,
    export_ics,
    ics_filename,
    write_ics,
)

STAMP = pendulum.datetime(2024, 3, 1, 8, 0, tz="UTC")


def _unfold(document: str) -> list[str]:
    return document.replace("\r\n ", "").split("\r\n")


def _subject(milestones):
    return {
        "id": "algebra",
        "name": "Algebra",
        "schedules": [
            {"id": "mon", "day": "Lunes", "start_time": "10:00", "end_time": "12:00"}
        ],
        "milestones": milestones,
    }


def test_all_day_milestone_dates():
    subject = _subject(
        [{"id": "m1", "title": "Midterm", "date": "2024-03-18", "type": "Examen"}]
    )
    lines = _unfold(export_ics([subject], [], STAMP))

    assert "DTSTART;VALUE=DATE:20240318" in lines
    assert "DTEND;VALUE=DATE:20240319" in lines


def test_timed_milestone_lasts_two_hours():
    subject = _subject(
        [
            {
                "id": "m1",
                "title": "Midterm",
                "date": "2024-03-18",
                "time": "14:30",
                "type": "Examen",
            }
        ]
    )
    lines = _unfold(export_ics([subject], [], STAMP))

    assert "DTSTART:20240318T143000" in lines
    assert "DTEND:20240318T163000" in lines


def test_summary_escaping():
    custom = [
        {
            "id": "c1",
            "title": 'Exam; Part 1, "Final"',
            "date": "2024-03-18",
            "color": "red",
            "priority": "high",
        }
    ]
    lines = _unfold(export_ics([], custom, STAMP))

    (summary,) = [line for line in lines if line.startswith("SUMMARY:")]
    value = summary[len("SUMMARY:") :]
    assert "\\;" in value
    assert "\\," in value
    assert re.search(r"(?<!\\)[;,]", value) is None


def test_description_newlines_are_escaped_once():
    subject = _subject(
        [{"id": "m1", "title": "Chapters 1-4", "date": "2024-03-18", "type": "Parcial"}]
    )
    lines = _unfold(export_ics([subject], [], STAMP))

    (description,) = [line for line in lines if line.startswith("DESCRIPTION:")]
    assert description == "DESCRIPTION:Subject: Algebra\\nType: Parcial\\nChapters 1-4"


def test_unencodable_text_falls_back_without_line_breaks(caplog):
    custom = [
        {
            "id": "c1",
            "title": "bad\ud800\nline",
            "description": "bad\ud800\nline",
            "date": "2024-03-18",
            "color": "red",
            "priority": "low",
        }
    ]
    with caplog.at_level(logging.WARNING, logger="studianta.service.ical"):
        document = export_ics([], custom, STAMP)

    lines = _unfold(document)
    assert "SUMMARY:[Studianta] bad? line" in lines
    assert "DESCRIPTION:bad? line" in lines
    assert "line" not in [line.strip() for line in lines]
    assert all("\n" not in line for line in lines)
    fallbacks = [
        record
        for record in caplog.records
        if record.levelno == logging.WARNING
        and "falling back to plain text" in record.getMessage()
    ]
    assert len(fallbacks) == 2


def test_document_envelope_and_uids():
    subject = _subject(
        [{"id": "m1", "title": "Midterm", "date": "2024-03-18", "type": "Examen"}]
    )
    custom = [
        {"id": "c1", "title": "Trip", "date": "2024-03-20", "color": "red", "priority": "low"}
    ]
    document = export_ics([subject], custom, STAMP)
    lines = _unfold(document)

    assert lines[0] == "BEGIN:VCALENDAR"
    assert "VERSION:2.0" in lines
    assert "PRODID:-//Studianta//Academic Calendar//EN" in lines
    assert "CALSCALE:GREGORIAN" in lines
    assert "METHOD:PUBLISH" in lines
    assert "UID:m1@studianta" in lines
    assert "UID:c1@studianta" in lines
    assert "SUMMARY:[Studianta] Examen: Algebra" in lines
    assert "SUMMARY:[Studianta] Trip" in lines
    assert lines.count("DTSTAMP:20240301T080000Z") == 2
    assert lines.count("BEGIN:VEVENT") == 2


def test_classes_are_not_exported():
    document = export_ics([_subject([])], [], STAMP)
    assert "BEGIN:VEVENT" not in document


def test_unparsable_dates_are_skipped():
    subject = _subject(
        [
            {"id": "bad", "title": "Lost", "date": "soon", "type": "Examen"},
            {"id": "ok", "title": "Found", "date": "2024-03-18", "type": "Entrega"},
        ]
    )
    entries, skipped = exportable_entries([subject], [{"id": "c", "title": "x", "date": None}])

    assert [entry["source_id"] for entry in entries] == ["ok"]
    assert skipped == 2


def test_high_priority_flags():
    subject = _subject(
        [
            {"id": "exam", "title": "Final", "date": "2024-06-01", "type": "Examen"},
            {"id": "tp", "title": "TP", "date": "2024-06-02", "type": "Trabajo Práctico"},
        ]
    )
    custom = [
        {"id": "c", "title": "Visa", "date": "2024-06-03", "color": "red", "priority": "high"}
    ]
    entries, _ = exportable_entries([subject], custom)
    assert [entry["high_priority"] for entry in entries] == [True, False, True]


def test_ics_filename():
    assert ics_filename(pendulum.date(2024, 3, 18)) == "studianta-calendar-2024-03-18.ics"
    assert ICS_MIME_TYPE == "text/calendar; charset=utf-8"


def test_write_ics(tmp_path):
    custom = [
        {"id": "c1", "title": "Café con Ana", "date": "2024-03-20", "color": "red", "priority": "low"}
    ]
    path = tmp_path / "out.ics"
    exported, skipped = write_ics(path, [], custom + [{"id": "c2", "date": "later"}], STAMP)

    assert (exported, skipped) == (1, 1)
    text = path.read_bytes().decode("utf-8")
    assert text.startswith("BEGIN:VCALENDAR\r\n")
    assert "Café con Ana" in text.replace("\r\n ", "")
