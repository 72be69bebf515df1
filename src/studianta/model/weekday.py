# SPDX-License-Identifier: MIT

import unicodedata
from enum import IntEnum
from typing import Optional


class Weekday(IntEnum):
    """Days of the week numbered like datetime.date.weekday()."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


_DAY_NAMES: dict[str, Weekday] = {
    "lunes": Weekday.MONDAY,
    "martes": Weekday.TUESDAY,
    "miercoles": Weekday.WEDNESDAY,
    "jueves": Weekday.THURSDAY,
    "viernes": Weekday.FRIDAY,
    "sabado": Weekday.SATURDAY,
    "domingo": Weekday.SUNDAY,
    "monday": Weekday.MONDAY,
    "tuesday": Weekday.TUESDAY,
    "wednesday": Weekday.WEDNESDAY,
    "thursday": Weekday.THURSDAY,
    "friday": Weekday.FRIDAY,
    "saturday": Weekday.SATURDAY,
    "sunday": Weekday.SUNDAY,
}


def _fold(name: str) -> str:
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.strip().casefold()


def weekday_from_name(name: object) -> Optional[Weekday]:
    """Resolve a schedule day name ("Miércoles", "MIERCOLES", "Wednesday").

    Returns None for anything outside the seven known days.
    """
    if not isinstance(name, str):
        return None
    return _DAY_NAMES.get(_fold(name))
