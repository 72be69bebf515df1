# SPDX-License-Identifier: MIT

from studianta import configuration
from studianta.model.journal_entry import JournalEntry
from studianta.repository.collection import CollectionRepository
from studianta.time import date_from_str_optional


class JournalRepository(CollectionRepository[JournalEntry]):
    def __init__(self) -> None:
        super().__init__("journal", lambda: configuration.DATA_JOURNAL_PATH)

    def problems(self, record: JournalEntry) -> list[str]:
        if date_from_str_optional(record.get("date")) is None:
            return [f"unparsable date {record.get('date')!r}"]
        return []


JOURNAL_REPO = JournalRepository()
