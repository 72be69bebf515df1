# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Any

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from studianta import configuration
from studianta.logger import configure_logging
from studianta.repository.configuration import CONFIGURATION_REPO
from studianta.view import header as view_header


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_files()

    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_data_files()

    config = CONFIGURATION_REPO.get_config()
    view_header.set_show_header(config["show_header"])
    configure_logging(config["log_level"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))


def __ensure_data_file(path: Path, key: str) -> None:
    if not path.is_file():
        empty: dict[str, Any] = {key: {} if key == "credentials" else []}
        path.write_text(dump(empty, Dumper=Dumper))


def __ensure_data_files() -> None:
    __ensure_data_file(configuration.DATA_SUBJECTS_PATH, "subjects")
    __ensure_data_file(configuration.DATA_TRANSACTIONS_PATH, "transactions")
    __ensure_data_file(
        configuration.DATA_RECURRING_TRANSACTIONS_PATH, "recurring_transactions"
    )
    __ensure_data_file(configuration.DATA_JOURNAL_PATH, "journal")
    __ensure_data_file(configuration.DATA_CUSTOM_EVENTS_PATH, "custom_events")
    __ensure_data_file(configuration.DATA_CREDENTIALS_PATH, "credentials")
