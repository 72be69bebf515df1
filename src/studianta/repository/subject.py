# SPDX-License-Identifier: MIT

from studianta import configuration
from studianta.model.subject import Subject
from studianta.model.weekday import weekday_from_name
from studianta.repository.collection import CollectionRepository
from studianta.time import date_from_str_optional


class SubjectRepository(CollectionRepository[Subject]):
    def __init__(self) -> None:
        super().__init__("subjects", lambda: configuration.DATA_SUBJECTS_PATH)

    def problems(self, record: Subject) -> list[str]:
        problems: list[str] = []
        for key in ("term_start", "term_end"):
            value = record.get(key)
            if value and date_from_str_optional(value) is None:
                problems.append(f"unparsable {key} {value!r}, classes hidden")
        for schedule in record.get("schedules") or []:
            if weekday_from_name(schedule.get("day")) is None:
                problems.append(f"unknown schedule day {schedule.get('day')!r}")
        for milestone in record.get("milestones") or []:
            if date_from_str_optional(milestone.get("date")) is None:
                problems.append(
                    f"milestone {milestone.get('id')!r} has unparsable date "
                    f"{milestone.get('date')!r}"
                )
        return problems


SUBJECT_REPO = SubjectRepository()
