# SPDX-License-Identifier: MIT

from studianta import configuration
from studianta.model.transaction import RecurringTransaction, Transaction
from studianta.repository.collection import CollectionRepository
from studianta.time import date_from_str_optional


class TransactionRepository(CollectionRepository[Transaction]):
    def __init__(self) -> None:
        super().__init__("transactions", lambda: configuration.DATA_TRANSACTIONS_PATH)

    def problems(self, record: Transaction) -> list[str]:
        if date_from_str_optional(record.get("date")) is None:
            return [f"unparsable date {record.get('date')!r}"]
        return []


class RecurringTransactionRepository(CollectionRepository[RecurringTransaction]):
    def __init__(self) -> None:
        super().__init__(
            "recurring_transactions",
            lambda: configuration.DATA_RECURRING_TRANSACTIONS_PATH,
        )

    def problems(self, record: RecurringTransaction) -> list[str]:
        recurring = record.get("recurring") or {}
        if date_from_str_optional(recurring.get("start_date")) is None:
            return [f"unparsable start_date {recurring.get('start_date')!r}"]
        return []


TRANSACTION_REPO = TransactionRepository()
RECURRING_TRANSACTION_REPO = RecurringTransactionRepository()
