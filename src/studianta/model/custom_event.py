# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict


class CustomCalendarEvent(TypedDict):
    id: str
    title: str
    description: NotRequired[Optional[str]]
    date: str
    time: NotRequired[Optional[str]]
    color: str
    priority: str
