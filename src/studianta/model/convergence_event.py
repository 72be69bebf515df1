# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum


class EventKind:
    CLASS = "class"
    MILESTONE = "milestone"
    TRANSACTION = "transaction"
    MOOD = "mood"
    CUSTOM = "custom"


class Priority:
    LOW = "low"
    HIGH = "high"


class ConvergenceEvent(TypedDict):
    id: str
    title: str
    subtitle: str
    date: pendulum.Date
    time: Optional[str]
    kind: str
    priority: str
    color: str
    amount: Optional[float]
    mood_glyph: Optional[str]
