# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from studianta.model.journal_entry import JournalEntry, Mood
from studianta.model.occurrence import MoodOccurrence
from studianta.time import date_from_str_optional


def _mood(value: object) -> Optional[Mood]:
    try:
        return Mood(value)
    except ValueError:
        return None


def occurrences_on(
    date: pendulum.Date, entries: list[JournalEntry]
) -> list[MoodOccurrence]:
    # JournalRepository warns about undated entries when it loads them
    return [
        MoodOccurrence(entry=entry, mood=_mood(entry.get("mood")), date=date)
        for entry in entries
        if date_from_str_optional(entry.get("date")) == date
    ]
