# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict


class TransactionType:
    INCOME = "Income"
    EXPENSE = "Expense"


class Frequency:
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Transaction(TypedDict):
    id: str
    date: str
    type: str
    category: str
    amount: float
    description: str


class RecurringConfig(TypedDict):
    frequency: str
    start_date: str
    end_date: NotRequired[Optional[str]]


class RecurringTransaction(Transaction):
    recurring: RecurringConfig
