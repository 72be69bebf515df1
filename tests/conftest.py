# SPDX-License-Identifier: MIT

from collections.abc import Iterator
from pathlib import Path

import pytest

from studianta import configuration
from studianta.repository.custom_event import CUSTOM_EVENT_REPO
from studianta.repository.journal import JOURNAL_REPO
from studianta.repository.subject import SUBJECT_REPO
from studianta.repository.transaction import (
    RECURRING_TRANSACTION_REPO,
    TRANSACTION_REPO,
)

DATA_FILES = {
    "DATA_SUBJECTS_PATH": "subjects.yaml",
    "DATA_TRANSACTIONS_PATH": "transactions.yaml",
    "DATA_RECURRING_TRANSACTIONS_PATH": "recurring_transactions.yaml",
    "DATA_JOURNAL_PATH": "journal.yaml",
    "DATA_CUSTOM_EVENTS_PATH": "custom_events.yaml",
    "DATA_CREDENTIALS_PATH": "credentials.yaml",
}

REPOSITORIES = [
    SUBJECT_REPO,
    TRANSACTION_REPO,
    RECURRING_TRANSACTION_REPO,
    JOURNAL_REPO,
    CUSTOM_EVENT_REPO,
]


@pytest.fixture
def data_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point every data file at a fresh temporary directory."""
    monkeypatch.setattr(configuration, "DATA_PATH", tmp_path)
    for attribute, filename in DATA_FILES.items():
        monkeypatch.setattr(configuration, attribute, tmp_path / filename)
    for repository in REPOSITORIES:
        repository.invalidate()
    yield tmp_path
    for repository in REPOSITORIES:
        repository.invalidate()


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")
    return config_dir / "config.yaml"
