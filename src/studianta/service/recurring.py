# SPDX-License-Identifier: MIT

import logging
import queue
import threading
import uuid
from typing import Callable, Optional

import pendulum

from studianta.model.transaction import Frequency, RecurringTransaction, Transaction
from studianta.repository.transaction import (
    RECURRING_TRANSACTION_REPO,
    TRANSACTION_REPO,
)
from studianta.time import date_from_str_optional, date_to_iso_str, today_local

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 60


def _occurrence(start: pendulum.Date, frequency: str, n: int) -> pendulum.Date:
    # Always step from the start date so month-end clamping does not drift
    if frequency == Frequency.DAILY:
        return start.add(days=n)
    if frequency == Frequency.WEEKLY:
        return start.add(weeks=n)
    if frequency == Frequency.MONTHLY:
        return start.add(months=n)
    if frequency == Frequency.YEARLY:
        return start.add(years=n)
    raise ValueError(f"unknown frequency: {frequency}")


def latest_occurrence(
    start: pendulum.Date,
    frequency: str,
    today: pendulum.Date,
    end: Optional[pendulum.Date] = None,
) -> Optional[pendulum.Date]:
    """Most recent occurrence of a recurring series on or before today.

    Returns None when the series has not started yet or when that occurrence
    falls after the series end date.
    """
    if start > today:
        return None

    if frequency in (Frequency.DAILY, Frequency.WEEKLY):
        days = start.diff(today).in_days()
        n = days if frequency == Frequency.DAILY else days // 7
    elif frequency == Frequency.MONTHLY:
        n = (today.year - start.year) * 12 + today.month - start.month
    elif frequency == Frequency.YEARLY:
        n = today.year - start.year
    else:
        raise ValueError(f"unknown frequency: {frequency}")

    occurrence = _occurrence(start, frequency, n)
    while occurrence > today:
        n -= 1
        occurrence = _occurrence(start, frequency, n)

    if end is not None and occurrence > end:
        return None
    return occurrence


def _same_transaction(
    candidate: Transaction, date: pendulum.Date, template: RecurringTransaction
) -> bool:
    return (
        date_from_str_optional(candidate.get("date")) == date
        and candidate.get("amount") == template.get("amount")
        and candidate.get("type") == template.get("type")
    )


def materialize_recurring_transactions(
    templates: list[RecurringTransaction],
    existing: list[Transaction],
    today: pendulum.Date,
    id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
) -> list[Transaction]:
    """
    Create the transactions that recurring templates owe as of today.

    A template owes its latest occurrence unless a transaction with the same
    date, amount and type already exists, so running this twice creates
    nothing the second time.

    Args:
        templates: Recurring transaction templates
        existing: Transactions already recorded
        today: The date to materialize up to
        id_factory: Generator for new transaction ids

    Returns:
        The new transactions, not yet persisted
    """
    created: list[Transaction] = []
    for template in templates:
        config = template.get("recurring")
        if not config:
            continue

        start = date_from_str_optional(config.get("start_date"))
        if start is None:
            logger.warning(
                "recurring transaction %r has an unparsable start date",
                template.get("id"),
            )
            continue

        end = None
        raw_end = config.get("end_date")
        if raw_end:
            end = date_from_str_optional(raw_end)
            if end is None:
                logger.warning(
                    "recurring transaction %r has an unparsable end date",
                    template.get("id"),
                )
                continue

        try:
            occurrence = latest_occurrence(start, config.get("frequency", ""), today, end)
        except ValueError as e:
            logger.warning("recurring transaction %r: %s", template.get("id"), e)
            continue
        if occurrence is None:
            continue

        if any(
            _same_transaction(candidate, occurrence, template)
            for candidate in [*existing, *created]
        ):
            continue

        created.append(
            {
                "id": id_factory(),
                "date": date_to_iso_str(occurrence),
                "type": template["type"],
                "category": template.get("category", ""),
                "amount": template["amount"],
                "description": template.get("description")
                or f"Recurring: {template.get('category', '')}",
            }
        )
        logger.debug(
            "materialized %r for %s", template.get("id"), date_to_iso_str(occurrence)
        )

    return created


def materialize_from_repositories(
    today: Optional[pendulum.Date] = None,
) -> list[Transaction]:
    """Materialize due recurring transactions into the transaction store."""
    if today is None:
        today = today_local()

    # Always work from a fresh snapshot of what is on disk
    TRANSACTION_REPO.invalidate()
    RECURRING_TRANSACTION_REPO.invalidate()

    created = materialize_recurring_transactions(
        RECURRING_TRANSACTION_REPO.get_all(), TRANSACTION_REPO.get_all(), today
    )
    TRANSACTION_REPO.add_all(created)
    TRANSACTION_REPO.flush()
    if created:
        logger.info("materialized %d recurring transactions", len(created))
    return created


class RecurringTicker:
    """Runs a job on a fixed interval until stopped.

    A ticker thread posts ticks onto a queue and a worker thread consumes
    them. Each job runs to completion before on_complete is called, and ticks
    that pile up while a job is running collapse into one run.
    """

    def __init__(
        self,
        job: Callable[[], object],
        interval: float = DEFAULT_INTERVAL_SECONDS,
        on_complete: Optional[Callable[[], None]] = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._job = job
        self._interval = interval
        self._on_complete = on_complete
        self._ticks: queue.Queue[Optional[pendulum.DateTime]] = queue.Queue()
        self._stop = threading.Event()
        self._ticker_thread: Optional[threading.Thread] = None
        self._worker_thread: Optional[threading.Thread] = None
        self.runs = 0
        self.failures = 0

    @property
    def running(self) -> bool:
        return self._worker_thread is not None and self._worker_thread.is_alive()

    def start(self) -> None:
        if self.running:
            raise RuntimeError("ticker already running")
        self._stop.clear()
        self._worker_thread = threading.Thread(
            target=self.__work, name="recurring-worker", daemon=True
        )
        self._ticker_thread = threading.Thread(
            target=self.__tick, name="recurring-ticker", daemon=True
        )
        self._worker_thread.start()
        self._ticker_thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        self._ticks.put(None)
        if self._ticker_thread is not None:
            self._ticker_thread.join(timeout)
        if self._worker_thread is not None:
            self._worker_thread.join(timeout)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until stop() is called; True if it was."""
        return self._stop.wait(timeout)

    def run_once(self) -> bool:
        """Run the job now on the calling thread. Returns False if it failed."""
        self.runs += 1
        try:
            self._job()
        except Exception:
            self.failures += 1
            logger.exception("recurring job failed")
            return False
        if self._on_complete is not None:
            self._on_complete()
        return True

    def __tick(self) -> None:
        while not self._stop.is_set():
            self._ticks.put(pendulum.now("UTC"))
            if self._stop.wait(self._interval):
                break

    def __work(self) -> None:
        while True:
            tick = self._ticks.get()
            if tick is None:
                break
            # Collapse ticks that queued up during a slow run
            while True:
                try:
                    pending = self._ticks.get_nowait()
                except queue.Empty:
                    break
                if pending is None:
                    return
            if self._stop.is_set():
                break
            self.run_once()
