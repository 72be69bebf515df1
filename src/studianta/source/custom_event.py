# SPDX-License-Identifier: MIT

import pendulum

from studianta.model.custom_event import CustomCalendarEvent
from studianta.model.occurrence import CustomOccurrence
from studianta.time import date_from_str_optional, time_from_str_optional


def occurrences_on(
    date: pendulum.Date, events: list[CustomCalendarEvent]
) -> list[CustomOccurrence]:
    """Custom events dated `date`. Undated records are reported by the repository."""
    return [
        CustomOccurrence(
            event=event, date=date, time=time_from_str_optional(event.get("time"))
        )
        for event in events
        if date_from_str_optional(event.get("date")) == date
    ]
