# SPDX-License-Identifier: MIT

import pendulum

from studianta.model.occurrence import TransactionOccurrence
from studianta.model.transaction import Transaction
from studianta.time import date_from_str_optional


def occurrences_on(
    date: pendulum.Date, transactions: list[Transaction]
) -> list[TransactionOccurrence]:
    # Unparsable dates never match; TransactionRepository warns about them on load
    return [
        TransactionOccurrence(transaction=transaction, date=date)
        for transaction in transactions
        if date_from_str_optional(transaction.get("date")) == date
    ]
