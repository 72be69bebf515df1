# SPDX-License-Identifier: MIT

import datetime as _datetime
import re
from typing import Optional

import pendulum

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


def now_local() -> pendulum.DateTime:
    """Current local moment as a naive pendulum.DateTime."""
    return pendulum.now("local").naive()


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def to_local_naive(datetime: pendulum.DateTime) -> pendulum.DateTime:
    if datetime.tzinfo is None:
        return datetime
    return datetime.in_tz("local").naive()


def date_from_str_optional(value: object) -> Optional[pendulum.Date]:
    """Parse a stored date value into a calendar date.

    Accepts 'YYYY-MM-DD' strings, full ISO datetimes (the date part is kept
    as written) and date instances, which is what YAML yields for unquoted
    dates. Anything else yields None so that callers can drop the record
    instead of failing.
    """
    if isinstance(value, _datetime.date):
        return pendulum.date(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = pendulum.parse(value.strip(), exact=True)
    except (ValueError, TypeError, OverflowError):
        return None
    if isinstance(parsed, pendulum.DateTime):
        return parsed.date()
    if isinstance(parsed, pendulum.Date):
        return parsed
    return None


def time_from_str_optional(value: object) -> Optional[str]:
    """Normalize a stored '(H)H:mm' time to zero-padded 'HH:mm', or None."""
    # YAML 1.1 reads an unquoted 14:30 as the base 60 integer 870
    if isinstance(value, int) and not isinstance(value, bool):
        if 0 <= value < 24 * 60:
            return f"{value // 60:02d}:{value % 60:02d}"
        return None
    if not isinstance(value, str):
        return None
    match = _TIME_PATTERN.match(value.strip())
    if match is None:
        return None
    hour = int(match.group(1))
    minute = int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return f"{hour:02d}:{minute:02d}"


def local_moment(date: pendulum.Date, time: Optional[str]) -> pendulum.DateTime:
    """Combine a date with an optional 'HH:mm' time, defaulting to midnight."""
    hour, minute = (0, 0)
    if time is not None:
        hour, minute = map(int, time.split(":"))
    return pendulum.naive(date.year, date.month, date.day, hour, minute)


def date_to_iso_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD")


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD ddd")


def to_python_utc(datetime: pendulum.DateTime) -> _datetime.datetime:
    """Convert an aware pendulum.DateTime to a stdlib UTC datetime."""
    return _datetime.datetime.fromtimestamp(
        datetime.in_tz("UTC").timestamp(), tz=_datetime.timezone.utc
    )


def to_python_date(date: pendulum.Date) -> _datetime.date:
    return _datetime.date(date.year, date.month, date.day)


def to_python_naive(datetime: pendulum.DateTime) -> _datetime.datetime:
    return _datetime.datetime(
        datetime.year,
        datetime.month,
        datetime.day,
        datetime.hour,
        datetime.minute,
        datetime.second,
    )
