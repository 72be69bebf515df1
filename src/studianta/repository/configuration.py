# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from studianta import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        loaded = None
        if configuration.APP_CONFIG_PATH.is_file():
            loaded = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        self._config = configuration.get_default_configuration()
        if loaded is None:
            return

        # Keys missing from older config files keep their defaults
        for key, value in loaded.items():
            if key in self._config:
                self._config[key] = value  # type: ignore[literal-required]

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        show_header: Optional[bool] = None,
        log_level: Optional[str] = None,
        month_cell_limit: Optional[int] = None,
        recurring_interval_seconds: Optional[int] = None,
        sync_timeout_seconds: Optional[int] = None,
    ) -> None:
        self.is_dirty = True

        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if show_header is not None:
            self.config["show_header"] = show_header
        if log_level is not None:
            self.config["log_level"] = log_level.upper()
        if month_cell_limit is not None:
            if month_cell_limit < 1:
                raise ValueError("month_cell_limit must be at least 1")
            self.config["month_cell_limit"] = month_cell_limit
        if recurring_interval_seconds is not None:
            if recurring_interval_seconds < 1:
                raise ValueError("recurring_interval_seconds must be at least 1")
            self.config["recurring_interval_seconds"] = recurring_interval_seconds
        if sync_timeout_seconds is not None:
            if sync_timeout_seconds < 1:
                raise ValueError("sync_timeout_seconds must be at least 1")
            self.config["sync_timeout_seconds"] = sync_timeout_seconds


CONFIGURATION_REPO = ConfigurationRepository()
