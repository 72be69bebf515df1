# SPDX-License-Identifier: MIT

import importlib
import logging

import pytest
from rich.logging import RichHandler
from yaml import safe_load

from studianta import configuration
from studianta.initialize import initialize
from studianta.logger import configure_logging
from studianta.repository.configuration import ConfigurationRepository
from studianta.view import header as view_header


@pytest.fixture
def app_logger():
    logger = logging.getLogger(configuration.APP_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_configure_logging_installs_one_rich_handler(app_logger):
    configure_logging("info")
    configure_logging("debug")

    rich_handlers = [h for h in app_logger.handlers if isinstance(h, RichHandler)]
    assert len(rich_handlers) == 1
    assert app_logger.level == logging.DEBUG


def test_configure_logging_unknown_level_falls_back(app_logger):
    configure_logging("chatty")
    assert app_logger.level == logging.WARNING


def test_initialize_creates_files(tmp_path, monkeypatch, app_logger):
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")
    monkeypatch.setattr(
        importlib.import_module("studianta.initialize"),
        "CONFIGURATION_REPO",
        ConfigurationRepository(),
    )
    config_dir.mkdir()
    (config_dir / "config.yaml").write_text(
        f"data_path: {data_dir}\nshow_header: false\nlog_level: ERROR\n"
    )
    # set_data_path rebinds these globals, restore them afterwards
    for attribute in (
        "DATA_PATH",
        "DATA_SUBJECTS_PATH",
        "DATA_TRANSACTIONS_PATH",
        "DATA_RECURRING_TRANSACTIONS_PATH",
        "DATA_JOURNAL_PATH",
        "DATA_CUSTOM_EVENTS_PATH",
        "DATA_CREDENTIALS_PATH",
    ):
        monkeypatch.setattr(configuration, attribute, getattr(configuration, attribute))

    initialize()

    assert configuration.DATA_PATH == data_dir
    assert safe_load((data_dir / "subjects.yaml").read_text()) == {"subjects": []}
    assert safe_load((data_dir / "credentials.yaml").read_text()) == {"credentials": {}}
    assert (data_dir / "recurring_transactions.yaml").is_file()
    assert view_header.get_show_header() is False
    assert app_logger.level == logging.ERROR
    view_header.set_show_header(True)
