# SPDX-License-Identifier: MIT

import atexit

from studianta.repository.configuration import CONFIGURATION_REPO
from studianta.repository.credential import CREDENTIAL_REPO
from studianta.repository.custom_event import CUSTOM_EVENT_REPO
from studianta.repository.journal import JOURNAL_REPO
from studianta.repository.subject import SUBJECT_REPO
from studianta.repository.transaction import (
    RECURRING_TRANSACTION_REPO,
    TRANSACTION_REPO,
)


def flush_all() -> None:
    CONFIGURATION_REPO.flush()

    SUBJECT_REPO.flush()
    TRANSACTION_REPO.flush()
    RECURRING_TRANSACTION_REPO.flush()
    JOURNAL_REPO.flush()
    CUSTOM_EVENT_REPO.flush()
    CREDENTIAL_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush_all)
