# SPDX-License-Identifier: MIT

from dataclasses import dataclass
from typing import Optional, TypeAlias

import pendulum

from studianta.model.custom_event import CustomCalendarEvent
from studianta.model.journal_entry import JournalEntry, Mood
from studianta.model.subject import Milestone, Schedule, Subject
from studianta.model.transaction import Transaction


@dataclass(frozen=True)
class ClassOccurrence:
    subject: Subject
    schedule: Schedule
    schedule_key: str
    date: pendulum.Date
    start_time: Optional[str]


@dataclass(frozen=True)
class MilestoneOccurrence:
    subject: Subject
    milestone: Milestone
    date: pendulum.Date
    time: Optional[str]


@dataclass(frozen=True)
class TransactionOccurrence:
    transaction: Transaction
    date: pendulum.Date


@dataclass(frozen=True)
class MoodOccurrence:
    entry: JournalEntry
    mood: Optional[Mood]
    date: pendulum.Date


@dataclass(frozen=True)
class CustomOccurrence:
    event: CustomCalendarEvent
    date: pendulum.Date
    time: Optional[str]


Occurrence: TypeAlias = (
    ClassOccurrence
    | MilestoneOccurrence
    | TransactionOccurrence
    | MoodOccurrence
    | CustomOccurrence
)
