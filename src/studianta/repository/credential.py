# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, TypeAlias

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from studianta import configuration

Credential: TypeAlias = dict[str, Any]


class CredentialRepository:
    """Per-user credentials for a calendar sync bridge.

    Credentials are opaque mappings; nothing here looks inside them.
    """

    def __init__(self) -> None:
        self._credentials: Optional[dict[str, Credential]] = None
        self.is_dirty = False

    @property
    def credentials(self) -> dict[str, Credential]:
        if self._credentials is None:
            self.__load_data()
        if self._credentials is None:
            raise ValueError()
        return self._credentials

    def __load_data(self) -> None:
        raw: Optional[dict[str, Any]] = None
        if configuration.DATA_CREDENTIALS_PATH.is_file():
            raw = load(configuration.DATA_CREDENTIALS_PATH.read_text(), Loader=Loader)
        self._credentials = dict((raw or {}).get("credentials") or {})

    def __save_data(self) -> None:
        configuration.DATA_CREDENTIALS_PATH.write_text(
            dump({"credentials": self.credentials}, Dumper=Dumper)
        )

    def flush(self) -> bool:
        if self._credentials is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def save(self, user_id: str, credential: Credential) -> None:
        self.is_dirty = True
        self.credentials[user_id] = deepcopy(credential)

    def load(self, user_id: str) -> Optional[Credential]:
        credential = self.credentials.get(user_id)
        if credential is None:
            return None
        return deepcopy(credential)

    def has(self, user_id: str) -> bool:
        return user_id in self.credentials

    def delete(self, user_id: str) -> bool:
        if user_id not in self.credentials:
            return False
        self.is_dirty = True
        del self.credentials[user_id]
        return True


CREDENTIAL_REPO = CredentialRepository()
