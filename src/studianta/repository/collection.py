# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Callable, Generic, Optional, TypeVar

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CollectionRepository(Generic[T]):
    """A YAML file holding one list of records under a single top-level key.

    Records are kept exactly as stored, so a malformed record is still loaded
    and handed to the calendar, which then ignores it.
    """

    def __init__(self, key: str, path: Callable[[], Path]) -> None:
        self._key = key
        self._path = path
        self._records: Optional[list[T]] = None
        self.is_dirty = False

    @property
    def records(self) -> list[T]:
        if self._records is None:
            self.__load_data()
        if self._records is None:
            raise ValueError()
        return self._records

    def __load_data(self) -> None:
        file_path = self._path()
        raw: Optional[dict[str, Any]] = None
        if file_path.is_file():
            raw = load(file_path.read_text(), Loader=Loader)
        self._records = list((raw or {}).get(self._key) or [])
        for record in self._records:
            for problem in self.problems(record):
                logger.warning("%s record %r: %s", self._key, _record_id(record), problem)

    def __save_data(self) -> None:
        self._path().write_text(dump({self._key: self.records}, Dumper=Dumper))

    def problems(self, record: T) -> list[str]:
        """Describe why a stored record will not show up on the calendar."""
        return []

    def flush(self) -> bool:
        if self._records is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def invalidate(self) -> None:
        """Drop the loaded snapshot so the next read goes back to disk."""
        self._records = None
        self.is_dirty = False

    def get_all(self) -> list[T]:
        return deepcopy(self.records)

    def add_all(self, records: list[T]) -> None:
        if not records:
            return
        self.is_dirty = True
        self.records.extend(deepcopy(records))


def _record_id(record: Any) -> Any:
    if isinstance(record, dict):
        return record.get("id")
    return record
