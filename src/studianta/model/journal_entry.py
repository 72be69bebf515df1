# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import TypedDict


class Mood(StrEnum):
    RADIANT = "Radiante"
    FOCUSED = "Enfocada"
    BALANCED = "Equilibrada"
    EXHAUSTED = "Agotada"
    STRESSED = "Estresada"


MOOD_GLYPHS: dict[Mood, str] = {
    Mood.RADIANT: "sun",
    Mood.FOCUSED: "target",
    Mood.BALANCED: "wind",
    Mood.EXHAUSTED: "low-battery",
    Mood.STRESSED: "storm",
}


class JournalEntry(TypedDict):
    id: str
    date: str
    mood: str
