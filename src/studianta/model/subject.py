# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict


class MilestoneType:
    EXAM = "Examen"
    ASSIGNMENT = "Entrega"
    MIDTERM = "Parcial"
    PRACTICAL_WORK = "Trabajo Práctico"


class Schedule(TypedDict):
    id: NotRequired[Optional[str]]
    day: str
    start_time: str
    end_time: str


class Milestone(TypedDict):
    id: str
    title: str
    date: str
    time: NotRequired[Optional[str]]
    type: str


class Subject(TypedDict):
    id: str
    name: str
    room: NotRequired[Optional[str]]
    term_start: NotRequired[Optional[str]]
    term_end: NotRequired[Optional[str]]
    schedules: list[Schedule]
    milestones: list[Milestone]
