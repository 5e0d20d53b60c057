"""Shared test fixtures for follow-lists tests."""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import Callable
from typing import Any

import pytest

from follow_lists.errors import RequestFailure
from follow_lists.models import BulkImportResult, HandleRecord, ListType, UserConfig
from follow_lists.notifications import NotificationQueue, TransientCopyMark
from follow_lists.services.interfaces import AppServices
from follow_lists.store import CollectionStore
from follow_lists.sync import SyncController

# ── Fakes ────────────────────────────────────────────────────────────────────


class ManualTimer:
    """Cancellable handle returned by :class:`ManualScheduler`."""

    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic stand-in for ``loop.call_later``; time moves only on ``advance``."""

    def __init__(self) -> None:
        self.now = 0.0
        self._timers: list[ManualTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + delay, callback)
        self._timers.append(timer)
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for timer in self._timers if not timer.cancelled)

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted(
            (t for t in self._timers if not t.cancelled and t.when <= self.now),
            key=lambda t: t.when,
        )
        for timer in due:
            self._timers.remove(timer)
            timer.callback()


class FakeUsernamesService:
    """In-memory list-storage server implementing the UsernamesService protocol.

    ``failures`` maps a method name to the RequestFailure it should raise;
    ``gates`` maps a method name to an Event the call waits on first.
    """

    def __init__(self, records: list[HandleRecord] | None = None) -> None:
        self.records: list[HandleRecord] = list(records or [])
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.failures: dict[str, RequestFailure] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self._ids = itertools.count(1000)

    def call_names(self) -> list[str]:
        return [name for name, _kwargs in self.calls]

    async def _enter(self, name: str, **kwargs: Any) -> None:
        self.calls.append((name, kwargs))
        gate = self.gates.get(name)
        if gate is not None:
            await gate.wait()
        failure = self.failures.get(name)
        if failure is not None:
            raise failure

    def _new_record(self, username: str, list_type: ListType) -> HandleRecord:
        return HandleRecord(id=next(self._ids), username=username, list_type=list_type)

    async def fetch_usernames(self, *, client, base_url, timeout_seconds) -> list[HandleRecord]:
        await self._enter("fetch_usernames")
        return list(self.records)

    async def create_username(
        self, *, client, base_url, username, list_type, timeout_seconds
    ) -> HandleRecord:
        await self._enter("create_username", username=username, list_type=list_type)
        record = self._new_record(username, list_type)
        self.records.insert(0, record)
        return record

    async def bulk_create_usernames(
        self, *, client, base_url, usernames, list_type, timeout_seconds
    ) -> BulkImportResult:
        await self._enter("bulk_create_usernames", usernames=list(usernames), list_type=list_type)
        existing = {(r.username, r.list_type) for r in self.records}
        imported = 0
        for username in usernames:
            if (username, list_type) in existing:
                continue
            existing.add((username, list_type))
            self.records.insert(0, self._new_record(username, list_type))
            imported += 1
        return BulkImportResult(imported=imported, total=len(usernames))

    async def delete_username(self, *, client, base_url, record_id, timeout_seconds) -> None:
        await self._enter("delete_username", record_id=record_id)
        self.records = [r for r in self.records if r.id != record_id]


class RecordingClipboard:
    """Clipboard callable that remembers what was copied."""

    def __init__(self, ok: bool = True) -> None:
        self.ok = ok
        self.copied: list[str] = []

    def __call__(self, text: str) -> bool:
        if self.ok:
            self.copied.append(text)
        return self.ok


# ── Factories ────────────────────────────────────────────────────────────────


@pytest.fixture
def make_record():
    """Factory fixture for creating HandleRecord instances with sensible defaults."""
    counter = itertools.count(1)

    def _make(
        username: str = "alice",
        list_type: ListType = ListType.FOLLOWING,
        record_id: int | str | None = None,
        display_name: str | None = None,
    ) -> HandleRecord:
        return HandleRecord(
            id=next(counter) if record_id is None else record_id,
            username=username,
            list_type=list_type,
            display_name=display_name,
        )

    return _make


@pytest.fixture
def sample_config():
    """Factory fixture for creating UserConfig with optional overrides."""

    def _make(**kwargs: Any) -> UserConfig:
        return UserConfig(**kwargs)

    return _make


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def fake_service() -> FakeUsernamesService:
    return FakeUsernamesService()


@pytest.fixture
def clipboard() -> RecordingClipboard:
    return RecordingClipboard()


@pytest.fixture
def make_controller(scheduler, fake_service, clipboard):
    """Factory fixture wiring a SyncController to the fake server and manual clock."""

    def _make(**kwargs: Any) -> SyncController:
        kwargs.setdefault("store", CollectionStore())
        kwargs.setdefault("notifications", NotificationQueue(scheduler=scheduler))
        kwargs.setdefault("copy_mark", TransientCopyMark(scheduler=scheduler))
        kwargs.setdefault("services", AppServices(usernames=fake_service))
        kwargs.setdefault("clipboard", clipboard)
        return SyncController(**kwargs)

    return _make
