# SPDX-License-Identifier: MIT

import logging

import pendulum

from studianta.model.occurrence import MilestoneOccurrence
from studianta.model.subject import Subject
from studianta.time import date_from_str_optional, time_from_str_optional

logger = logging.getLogger(__name__)


def occurrences_on(
    date: pendulum.Date, subjects: list[Subject]
) -> list[MilestoneOccurrence]:
    """Milestones dated `date`.

    Runs once per displayed day, so malformed milestones are only logged at
    debug here. SubjectRepository warns about them once when it loads.
    """
    occurrences: list[MilestoneOccurrence] = []
    for subject in subjects:
        for milestone in subject.get("milestones") or []:
            milestone_date = date_from_str_optional(milestone.get("date"))
            if milestone_date is None:
                logger.debug("milestone %s has an unparsable date", milestone.get("id"))
                continue
            if milestone_date != date:
                continue
            occurrences.append(
                MilestoneOccurrence(
                    subject=subject,
                    milestone=milestone,
                    date=milestone_date,
                    time=time_from_str_optional(milestone.get("time")),
                )
            )
    return occurrences
