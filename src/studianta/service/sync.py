# SPDX-License-Identifier: MIT

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, TypedDict

from studianta.model.custom_event import CustomCalendarEvent
from studianta.model.subject import Subject
from studianta.repository.configuration import CONFIGURATION_REPO
from studianta.repository.credential import (
    CREDENTIAL_REPO,
    Credential,
    CredentialRepository,
)
from studianta.service.ical import entry_bounds, exportable_entries

logger = logging.getLogger(__name__)

DEFAULT_SYNC_TIMEOUT_SECONDS = 30


class SyncError(Exception):
    """A failure reported by, or while talking to, a calendar sync bridge."""


class SyncCounts(TypedDict):
    created: int
    updated: int
    errors: int


class SyncPayload(TypedDict):
    source_id: str
    kind: str
    summary: str
    description: Optional[str]
    all_day: bool
    start: str
    end: str
    high_priority: bool


class SyncBridge(Protocol):
    """A third-party calendar service the user can mirror events into.

    Implementations own the OAuth exchange, token storage and the remote
    protocol. Any method may raise; the coordinator turns that into a report.
    """

    def is_connected(self, user_id: str) -> bool: ...

    def initiate_oauth(self) -> str:
        """Start the authorization flow and return the URL to send the user to."""
        ...

    def handle_oauth_callback(self, code: str, state: str) -> Credential: ...

    def save_tokens(self, user_id: str, credential: Credential) -> None: ...

    def load_tokens(self, user_id: str) -> Optional[Credential]: ...

    def sync_events(
        self,
        user_id: str,
        subjects: list[Subject],
        custom_events: list[CustomCalendarEvent],
    ) -> SyncCounts: ...

    def disconnect(self, user_id: str) -> None: ...


@dataclass
class SyncReport:
    ok: bool
    counts: SyncCounts = field(
        default_factory=lambda: {"created": 0, "updated": 0, "errors": 0}
    )
    message: str = ""


def build_sync_payloads(
    subjects: list[Subject], custom_events: list[CustomCalendarEvent]
) -> tuple[list[SyncPayload], int]:
    """Bridge-neutral view of the events to mirror remotely.

    Uses the same selection as the iCalendar export: milestones and custom
    events, timed ones lasting two hours, all-day ones ending the next day.

    Returns:
        The payloads and the number of records skipped as malformed
    """
    entries, skipped = exportable_entries(subjects, custom_events)
    payloads: list[SyncPayload] = []
    for entry in entries:
        start, end = entry_bounds(entry)
        all_day = entry["time"] is None
        value_format = "YYYY-MM-DD" if all_day else "YYYY-MM-DD[T]HH:mm:ss"
        payloads.append(
            {
                "source_id": entry["source_id"],
                "kind": entry["kind"],
                "summary": entry["summary"],
                "description": entry["description"],
                "all_day": all_day,
                "start": start.format(value_format),
                "end": end.format(value_format),
                "high_priority": entry["high_priority"],
            }
        )
    return payloads, skipped


def _counts(result: Any) -> SyncCounts:
    try:
        return {
            "created": int(result["created"]),
            "updated": int(result.get("updated", 0)),
            "errors": int(result.get("errors", 0)),
        }
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise SyncError(f"unexpected sync result: {result!r}") from e


class SyncCoordinator:
    """Serializes user-triggered syncs and bounds how long they may take.

    At most one sync runs per user at a time; a second request while one is
    in flight is refused rather than queued. Nothing is retried.
    """

    def __init__(
        self,
        bridge: SyncBridge,
        timeout: float = DEFAULT_SYNC_TIMEOUT_SECONDS,
    ) -> None:
        self._bridge = bridge
        self._timeout = timeout
        self._lock = threading.Lock()
        self._in_flight: set[str] = set()

    def is_syncing(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._in_flight

    def __claim(self, user_id: str) -> bool:
        with self._lock:
            if user_id in self._in_flight:
                return False
            self._in_flight.add(user_id)
            return True

    def __release(self, user_id: str) -> None:
        with self._lock:
            self._in_flight.discard(user_id)

    def sync(
        self,
        user_id: str,
        subjects: list[Subject],
        custom_events: list[CustomCalendarEvent],
    ) -> SyncReport:
        if not self.__claim(user_id):
            return SyncReport(ok=False, message="A sync is already in progress.")

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="calendar-sync")
        # A timed-out call may still be running; the user stays claimed until
        # it actually finishes.
        release_now = True
        try:
            if not self._bridge.is_connected(user_id):
                return SyncReport(ok=False, message="Calendar account is not connected.")

            future = executor.submit(
                self._bridge.sync_events, user_id, subjects, custom_events
            )
            try:
                counts = _counts(future.result(timeout=self._timeout))
            except FutureTimeoutError:
                if not future.cancel():
                    release_now = False
                    future.add_done_callback(lambda _: self.__release(user_id))
                logger.error("sync for %s timed out after %ss", user_id, self._timeout)
                return SyncReport(
                    ok=False,
                    message=f"Calendar sync timed out after {self._timeout:g} seconds.",
                )
        except Exception as e:
            logger.error("sync for %s failed: %s", user_id, e)
            return SyncReport(ok=False, message=f"Calendar sync failed: {e}")
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
            if release_now:
                self.__release(user_id)

        logger.info(
            "sync for %s: %d created, %d updated, %d errors",
            user_id,
            counts["created"],
            counts["updated"],
            counts["errors"],
        )
        return SyncReport(
            ok=True,
            counts=counts,
            message=(
                f"Sync complete: {counts['created']} created, "
                f"{counts['updated']} updated, {counts['errors']} errors"
            ),
        )

    def connect(self, user_id: str, code: str, state: str) -> SyncReport:
        """Finish the OAuth flow and store the resulting credential."""
        try:
            credential = self._bridge.handle_oauth_callback(code, state)
            self._bridge.save_tokens(user_id, credential)
        except Exception as e:
            logger.error("connecting %s failed: %s", user_id, e)
            return SyncReport(ok=False, message=f"Could not connect calendar: {e}")
        return SyncReport(ok=True, message="Calendar connected.")

    def disconnect(self, user_id: str) -> SyncReport:
        try:
            self._bridge.disconnect(user_id)
        except Exception as e:
            logger.error("disconnecting %s failed: %s", user_id, e)
            return SyncReport(ok=False, message=f"Could not disconnect calendar: {e}")
        return SyncReport(ok=True, message="Calendar disconnected.")


def coordinator_from_config(bridge: SyncBridge) -> SyncCoordinator:
    """Coordinator for bridge, bounded by the configured sync_timeout_seconds."""
    timeout = CONFIGURATION_REPO.get_config()["sync_timeout_seconds"]
    return SyncCoordinator(bridge, timeout=timeout)


class StoredCredentialsMixin:
    """Token handling for bridges that keep credentials in a CredentialRepository.

    Uses the application credential store unless the bridge sets its own.
    """

    credential_repository: CredentialRepository = CREDENTIAL_REPO

    def is_connected(self, user_id: str) -> bool:
        return self.credential_repository.has(user_id)

    def save_tokens(self, user_id: str, credential: Credential) -> None:
        self.credential_repository.save(user_id, credential)
        self.credential_repository.flush()

    def load_tokens(self, user_id: str) -> Optional[Credential]:
        return self.credential_repository.load(user_id)

    def disconnect(self, user_id: str) -> None:
        if self.credential_repository.delete(user_id):
            self.credential_repository.flush()
