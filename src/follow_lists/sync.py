"""Sync controller: every remote round trip and every store mutation goes through here.

Policies:

* Single add is applied locally only after the server confirms it, using the
  record the server returned (with its id). A rejected add changes nothing.
* Bulk add and import never apply their batch locally. After the server
  accepts a batch the controller re-fetches the full dataset, so ids and
  server-side deduplication come from the authoritative source.
* Delete removes locally only after the server confirms.
* The edit lock rejects new mutations before any request is sent. Requests
  already in flight when the lock is set still complete and apply.

All domain failures (:mod:`follow_lists.errors`) are recovered here and end in
an error notification; the store stays usable after any failed operation.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

import httpx

from follow_lists.action_messages import (
    ADD_FAILED,
    BULK_ADD_FAILED,
    COPY_ALL_FAILED,
    COPY_FAILED,
    EXPORT_FAILED,
    INVALID_IMPORT_FILE,
    LIST_LOCKED,
    LOAD_FAILED,
    LOCK_CLEARED,
    LOCK_SET,
    NO_VALID_USERNAMES,
    REMOVE_FAILED,
    USERNAME_REMOVED,
    build_added_message,
    build_bulk_added_message,
    build_copied_all_message,
    build_copied_message,
    build_export_message,
    build_import_failure,
    build_import_summary,
)
from follow_lists.errors import HandleValidationError, MalformedDocumentError, RequestFailure
from follow_lists.export import (
    build_export_document,
    parse_import_document,
    serialize_export_document,
)
from follow_lists.io_actions import build_copy_all_payload, copy_to_clipboard
from follow_lists.models import (
    BulkImportResult,
    EditLock,
    HandleRecord,
    ListType,
    NotificationKind,
    UserConfig,
)
from follow_lists.notifications import NotificationQueue, TransientCopyMark
from follow_lists.parsing import normalize_handles, parse_single_handle
from follow_lists.services.interfaces import AppServices, build_default_app_services
from follow_lists.store import CollectionStore

logger = logging.getLogger(__name__)


def _failure_text(error: RequestFailure, default: str) -> str:
    """Show the server's rejection text; network failures get the generic message."""
    message = str(error)
    if error.status_code is not None and message:
        return message
    return default


class SyncController:
    """Orchestrates remote calls and reconciles their results into the store."""

    def __init__(
        self,
        *,
        store: CollectionStore | None = None,
        notifications: NotificationQueue | None = None,
        copy_mark: TransientCopyMark | None = None,
        services: AppServices | None = None,
        config: UserConfig | None = None,
        client: httpx.AsyncClient | None = None,
        clipboard: Callable[[str], bool] = copy_to_clipboard,
        active_list: ListType = ListType.FOLLOWING,
    ) -> None:
        self.store = store if store is not None else CollectionStore()
        self.notifications = (
            notifications if notifications is not None else NotificationQueue()
        )
        self.copy_mark = copy_mark if copy_mark is not None else TransientCopyMark()
        self.edit_lock = EditLock()
        self.active_list = active_list
        self.is_loading = True
        self.pending_requests = 0
        self.client = client
        self._services = services if services is not None else build_default_app_services()
        self._config = config if config is not None else UserConfig()
        self._clipboard = clipboard
        self._pending_listeners: list[Callable[[], None]] = []

    # ── Session state ───────────────────────────────────────────────────

    @property
    def locked(self) -> bool:
        return self.edit_lock.locked

    def toggle_lock(self) -> bool:
        """Flip the edit lock. Always allowed, even with requests in flight."""
        locked = self.edit_lock.toggle()
        logger.debug("Edit lock %s", "set" if locked else "cleared")
        self.notifications.push(LOCK_SET if locked else LOCK_CLEARED, NotificationKind.INFO)
        return locked

    def subscribe_pending(self, listener: Callable[[], None]) -> None:
        """Register a callback invoked whenever ``pending_requests`` changes."""
        self._pending_listeners.append(listener)

    def set_active_list(self, list_type: ListType) -> None:
        self.active_list = list_type

    def _reject_if_locked(self, operation: str) -> bool:
        if not self.edit_lock.locked:
            return False
        logger.debug("Rejected %s: edit lock is set", operation)
        self.notifications.push(LIST_LOCKED, NotificationKind.INFO)
        return True

    @asynccontextmanager
    async def _requesting(self) -> AsyncIterator[None]:
        self.pending_requests += 1
        self._pending_changed()
        try:
            yield
        finally:
            self.pending_requests -= 1
            self._pending_changed()

    def _pending_changed(self) -> None:
        for listener in list(self._pending_listeners):
            listener()

    # ── Remote operations ───────────────────────────────────────────────

    async def _refresh(self) -> bool:
        """Fetch the full dataset and replace both collections.

        Returns False (leaving the store untouched) if the fetch fails.
        """
        try:
            async with self._requesting():
                records = await self._services.usernames.fetch_usernames(
                    client=self.client,
                    base_url=self._config.api_base_url,
                    timeout_seconds=self._config.request_timeout_seconds,
                )
        except RequestFailure as e:
            logger.warning("Loading usernames failed: %s", e)
            return False
        for list_type in ListType:
            self.store.replace_all(list_type, [r for r in records if r.list_type is list_type])
        logger.debug("Loaded %d records", len(records))
        return True

    async def load(self) -> bool:
        """Initial load or manual refresh. Not retried automatically."""
        try:
            ok = await self._refresh()
        finally:
            self.is_loading = False
        if not ok:
            self.notifications.push(LOAD_FAILED, NotificationKind.ERROR)
        return ok

    async def add(self, raw_username: str) -> HandleRecord | None:
        """Create one handle in the active list; applied only once confirmed."""
        if self._reject_if_locked("add"):
            return None
        try:
            username = parse_single_handle(raw_username)
        except HandleValidationError as e:
            self.notifications.push(str(e), NotificationKind.ERROR)
            return None
        list_type = self.active_list
        try:
            async with self._requesting():
                record = await self._services.usernames.create_username(
                    client=self.client,
                    base_url=self._config.api_base_url,
                    username=username,
                    list_type=list_type,
                    timeout_seconds=self._config.request_timeout_seconds,
                )
        except RequestFailure as e:
            logger.warning("Adding %r to %s failed: %s", username, list_type.value, e)
            self.notifications.push(_failure_text(e, ADD_FAILED), NotificationKind.ERROR)
            return None
        self.store.prepend(list_type, record)
        self.notifications.push(
            build_added_message(record.username, list_type), NotificationKind.SUCCESS
        )
        return record

    async def bulk_add(self, raw_text: str) -> BulkImportResult | None:
        """Submit pasted handles as one batch, then re-fetch authoritative state."""
        if self._reject_if_locked("bulk add"):
            return None
        usernames = normalize_handles(raw_text)
        if not usernames:
            self.notifications.push(NO_VALID_USERNAMES, NotificationKind.ERROR)
            return None
        list_type = self.active_list
        try:
            async with self._requesting():
                result = await self._services.usernames.bulk_create_usernames(
                    client=self.client,
                    base_url=self._config.api_base_url,
                    usernames=usernames,
                    list_type=list_type,
                    timeout_seconds=self._config.request_timeout_seconds,
                )
        except RequestFailure as e:
            logger.warning("Bulk add of %d handles failed: %s", len(usernames), e)
            self.notifications.push(_failure_text(e, BULK_ADD_FAILED), NotificationKind.ERROR)
            return None
        await self.load()
        self.notifications.push(build_bulk_added_message(result), NotificationKind.SUCCESS)
        return result

    async def delete(self, record_id: int | str, list_type: ListType | None = None) -> bool:
        """Delete a record on the server, then drop it locally."""
        if self._reject_if_locked("delete"):
            return False
        target = list_type or self.active_list
        try:
            async with self._requesting():
                await self._services.usernames.delete_username(
                    client=self.client,
                    base_url=self._config.api_base_url,
                    record_id=record_id,
                    timeout_seconds=self._config.request_timeout_seconds,
                )
        except RequestFailure as e:
            logger.warning("Deleting record %r failed: %s", record_id, e)
            self.notifications.push(_failure_text(e, REMOVE_FAILED), NotificationKind.ERROR)
            return False
        self.store.remove(target, record_id)
        self.notifications.push(USERNAME_REMOVED, NotificationKind.INFO)
        return True

    async def import_document(self, content: str | bytes) -> bool:
        """Import an exported document through the bulk path, one request per list."""
        if self._reject_if_locked("import"):
            return False
        try:
            per_list = parse_import_document(content)
        except MalformedDocumentError as e:
            logger.warning("Import aborted: %s", e)
            self.notifications.push(INVALID_IMPORT_FILE, NotificationKind.ERROR)
            return False
        if not any(per_list.values()):
            self.notifications.push(NO_VALID_USERNAMES, NotificationKind.ERROR)
            return False

        imported = total = 0
        failed: list[ListType] = []
        reason = ""
        for list_type, usernames in per_list.items():
            if not usernames:
                continue
            try:
                async with self._requesting():
                    result = await self._services.usernames.bulk_create_usernames(
                        client=self.client,
                        base_url=self._config.api_base_url,
                        usernames=usernames,
                        list_type=list_type,
                        timeout_seconds=self._config.request_timeout_seconds,
                    )
            except RequestFailure as e:
                logger.warning("Import into %s failed: %s", list_type.value, e)
                failed.append(list_type)
                reason = str(e)
                continue
            imported += result.imported
            total += result.total

        refreshed = await self._refresh()
        if failed:
            self.notifications.push(build_import_failure(failed, reason), NotificationKind.ERROR)
            return False
        if not refreshed:
            self.notifications.push(LOAD_FAILED, NotificationKind.ERROR)
            return False
        self.notifications.push(build_import_summary(imported, total), NotificationKind.SUCCESS)
        return True

    # ── Local-only operations ───────────────────────────────────────────

    def export_document(
        self,
        sink: Callable[[str], Path | None] | None = None,
        now: datetime | None = None,
    ) -> str:
        """Serialize both collections and hand the document to ``sink``.

        Returns the serialized document. A sink that raises ``OSError`` turns
        the success notification into an error notification.
        """
        content = serialize_export_document(build_export_document(self.store, now))
        location: Path | None = None
        if sink is not None:
            try:
                location = sink(content)
            except OSError as e:
                logger.warning("Writing export failed: %s", e)
                self.notifications.push(EXPORT_FAILED, NotificationKind.ERROR)
                return content
        self.notifications.push(
            build_export_message(location.name if location else None), NotificationKind.SUCCESS
        )
        return content

    def copy_handle(self, record: HandleRecord) -> bool:
        """Copy ``@username`` and mark the record as just copied."""
        if not self._clipboard(record.handle):
            self.notifications.push(COPY_FAILED, NotificationKind.ERROR)
            return False
        self.copy_mark.mark(record.id)
        self.notifications.push(build_copied_message(record.username), NotificationKind.SUCCESS)
        return True

    def copy_all(self, records: Sequence[HandleRecord]) -> bool:
        """Copy every given record, one handle per line. No-op when empty."""
        if not records:
            return False
        if not self._clipboard(build_copy_all_payload(records)):
            self.notifications.push(COPY_ALL_FAILED, NotificationKind.ERROR)
            return False
        self.notifications.push(build_copied_all_message(len(records)), NotificationKind.SUCCESS)
        return True


__all__ = [
    "SyncController",
]
