# SPDX-License-Identifier: MIT

from studianta import configuration
from studianta.model.custom_event import CustomCalendarEvent
from studianta.repository.collection import CollectionRepository
from studianta.time import date_from_str_optional


class CustomEventRepository(CollectionRepository[CustomCalendarEvent]):
    def __init__(self) -> None:
        super().__init__("custom_events", lambda: configuration.DATA_CUSTOM_EVENTS_PATH)

    def problems(self, record: CustomCalendarEvent) -> list[str]:
        if date_from_str_optional(record.get("date")) is None:
            return [f"unparsable date {record.get('date')!r}"]
        return []


CUSTOM_EVENT_REPO = CustomEventRepository()
