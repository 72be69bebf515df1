# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "studianta"
APP_TITLE = "Studianta"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_SUBJECTS_PATH: Path = DATA_PATH / "subjects.yaml"
DATA_TRANSACTIONS_PATH: Path = DATA_PATH / "transactions.yaml"
DATA_RECURRING_TRANSACTIONS_PATH: Path = DATA_PATH / "recurring_transactions.yaml"
DATA_JOURNAL_PATH: Path = DATA_PATH / "journal.yaml"
DATA_CUSTOM_EVENTS_PATH: Path = DATA_PATH / "custom_events.yaml"
DATA_CREDENTIALS_PATH: Path = DATA_PATH / "credentials.yaml"


class Configuration(TypedDict):
    data_path: Optional[str]
    show_header: bool
    log_level: str
    month_cell_limit: int
    recurring_interval_seconds: int
    sync_timeout_seconds: int


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "show_header": True,
        "log_level": "WARNING",
        "month_cell_limit": 3,
        "recurring_interval_seconds": 60,
        "sync_timeout_seconds": 30,
    }


def set_data_path(data_path: Path) -> None:
    global \
        DATA_PATH, \
        DATA_SUBJECTS_PATH, \
        DATA_TRANSACTIONS_PATH, \
        DATA_RECURRING_TRANSACTIONS_PATH, \
        DATA_JOURNAL_PATH, \
        DATA_CUSTOM_EVENTS_PATH, \
        DATA_CREDENTIALS_PATH

    DATA_PATH = data_path
    DATA_SUBJECTS_PATH = DATA_PATH / "subjects.yaml"
    DATA_TRANSACTIONS_PATH = DATA_PATH / "transactions.yaml"
    DATA_RECURRING_TRANSACTIONS_PATH = DATA_PATH / "recurring_transactions.yaml"
    DATA_JOURNAL_PATH = DATA_PATH / "journal.yaml"
    DATA_CUSTOM_EVENTS_PATH = DATA_PATH / "custom_events.yaml"
    DATA_CREDENTIALS_PATH = DATA_PATH / "credentials.yaml"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories load their data.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))
