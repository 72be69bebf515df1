# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from studianta.time import date_from_str_optional, today_local


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    """
    Parse a date option.

    Accepts YYYY-MM-DD, today/t, yesterday/y, tomorrow/o, or a day offset
    relative to today such as 1 or -7.
    """
    if date_param is None:
        return None

    value = str(date_param).strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", value):
        date = date_from_str_optional(value)
        if date is None:
            raise typer.BadParameter(f"Invalid date: {value}")
        return date

    if re.match(r"^-?\d+$", value):
        return today_local().add(days=int(value))

    if value in ("today", "t"):
        return today_local()
    if value in ("yesterday", "y"):
        return today_local().subtract(days=1)
    if value in ("tomorrow", "o"):
        return today_local().add(days=1)
    raise typer.BadParameter("Incorrect date format")
