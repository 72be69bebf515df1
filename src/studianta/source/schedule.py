# SPDX-License-Identifier: MIT

import logging
from typing import Optional, TypeAlias

import pendulum

from studianta.model.occurrence import ClassOccurrence
from studianta.model.subject import Subject
from studianta.model.weekday import weekday_from_name
from studianta.time import date_from_str_optional, time_from_str_optional

logger = logging.getLogger(__name__)

TermWindow: TypeAlias = tuple[Optional[pendulum.Date], Optional[pendulum.Date]]


def term_window(subject: Subject) -> Optional[TermWindow]:
    """Return the subject's (start, end) term bounds.

    A missing bound is open (None). Returns None when a bound is present but
    unparsable, which keeps the subject's classes off every day.
    """
    bounds: list[Optional[pendulum.Date]] = []
    for key in ("term_start", "term_end"):
        raw = subject.get(key)
        if raw is None or raw == "":
            bounds.append(None)
            continue
        bound = date_from_str_optional(raw)
        if bound is None:
            logger.debug("subject %s has an unparsable %s: %r", subject.get("id"), key, raw)
            return None
        bounds.append(bound)
    return bounds[0], bounds[1]


def term_contains(subject: Subject, date: pendulum.Date) -> bool:
    window = term_window(subject)
    if window is None:
        return False
    start, end = window
    if start is not None and date < start:
        return False
    if end is not None and date > end:
        return False
    return True


def occurrences_on(
    date: pendulum.Date, subjects: list[Subject]
) -> list[ClassOccurrence]:
    """Weekly class occurrences on `date`.

    Unknown weekdays and unparsable term bounds log at debug only; the
    warning for them comes from SubjectRepository when subjects are loaded.
    """
    occurrences: list[ClassOccurrence] = []
    for subject in subjects:
        if not term_contains(subject, date):
            continue
        for index, schedule in enumerate(subject.get("schedules") or []):
            weekday = weekday_from_name(schedule.get("day"))
            if weekday is None:
                logger.debug(
                    "subject %s has a schedule with unknown day %r",
                    subject.get("id"),
                    schedule.get("day"),
                )
                continue
            if weekday != date.weekday():
                continue
            schedule_id = schedule.get("id")
            occurrences.append(
                ClassOccurrence(
                    subject=subject,
                    schedule=schedule,
                    schedule_key=str(schedule_id) if schedule_id else str(index),
                    date=date,
                    start_time=time_from_str_optional(schedule.get("start_time")),
                )
            )
    return occurrences
