"""Self-expiring UI state: the notification queue and the "just copied" mark."""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Protocol

from follow_lists.models import (
    COPY_MARK_TIMEOUT_SECONDS,
    NOTIFICATION_TIMEOUT_SECONDS,
    NotificationEvent,
    NotificationKind,
)

logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    """Handle returned by a scheduler; ``asyncio.TimerHandle`` satisfies it."""

    def cancel(self) -> object: ...


Scheduler = Callable[[float, Callable[[], None]], Cancellable]


class _Unscheduled:
    """Handle for a timer that was never started."""

    def cancel(self) -> None:
        return None


def asyncio_scheduler(delay: float, callback: Callable[[], None]) -> Cancellable:
    """Run ``callback`` after ``delay`` seconds on the running event loop.

    Outside a running loop (plain synchronous callers) nothing is scheduled;
    the state stays until it is dismissed or replaced.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        logger.debug("No running event loop; %.1fs expiry not scheduled", delay)
        return _Unscheduled()
    return loop.call_later(delay, callback)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NotificationQueue:
    """Insertion-ordered set of transient notifications.

    Each event schedules its own removal ``timeout_seconds`` after creation.
    ``dismiss`` cancels that schedule and removes the event at once; other
    events keep their own timers.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = NOTIFICATION_TIMEOUT_SECONDS,
        scheduler: Scheduler | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._scheduler: Scheduler = scheduler or asyncio_scheduler
        self._now = now or _utcnow
        self._tokens = itertools.count(1)
        self._entries: dict[int, tuple[NotificationEvent, Cancellable]] = {}
        self._listeners: list[Callable[[], None]] = []

    @property
    def events(self) -> tuple[NotificationEvent, ...]:
        """Live events, oldest first."""
        return tuple(event for event, _handle in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, token: object) -> bool:
        return token in self._entries

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register a callback invoked whenever the set of events changes."""
        self._listeners.append(listener)

    def push(self, message: str, kind: NotificationKind = NotificationKind.INFO) -> int:
        """Add an event and schedule its expiry. Returns the event token."""
        token = next(self._tokens)
        event = NotificationEvent(id=token, message=message, kind=kind, created_at=self._now())
        handle = self._scheduler(self._timeout_seconds, lambda: self._expire(token))
        self._entries[token] = (event, handle)
        logger.debug("Notification %d (%s): %s", token, kind.value, message)
        self._changed()
        return token

    def dismiss(self, token: int) -> bool:
        """Remove an event before it expires. Unknown tokens are ignored."""
        entry = self._entries.pop(token, None)
        if entry is None:
            return False
        entry[1].cancel()
        self._changed()
        return True

    def dismiss_latest(self) -> bool:
        """Dismiss the newest event, if any."""
        if not self._entries:
            return False
        return self.dismiss(next(reversed(self._entries)))

    def _expire(self, token: int) -> None:
        if self._entries.pop(token, None) is not None:
            self._changed()

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener()


class TransientCopyMark:
    """Remembers the one record id most recently copied.

    The mark clears itself after ``timeout_seconds``; marking another id
    replaces it and restarts the timer.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = COPY_MARK_TIMEOUT_SECONDS,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._scheduler: Scheduler = scheduler or asyncio_scheduler
        self._current: int | str | None = None
        self._handle: Cancellable | None = None
        self._listeners: list[Callable[[], None]] = []

    @property
    def current(self) -> int | str | None:
        return self._current

    def subscribe(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def mark(self, record_id: int | str) -> None:
        old_handle = self._handle
        self._handle = None
        if old_handle is not None:
            old_handle.cancel()
        self._current = record_id
        self._handle = self._scheduler(self._timeout_seconds, self._expire)
        self._changed()

    def _expire(self) -> None:
        self._handle = None
        if self._current is not None:
            self._current = None
            self._changed()

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener()


__all__ = [
    "Cancellable",
    "NotificationQueue",
    "Scheduler",
    "TransientCopyMark",
    "asyncio_scheduler",
]
