"""Follow Lists TUI - manage following/followers handle lists.

Usage:
    follow-lists                                   # Use config or default API URL
    follow-lists --api-url http://host:3001/api    # Point at another server
    follow-lists --debug                           # Log to ~/.config/follow-lists/debug.log

Key bindings:
    t       - Switch between following and followers
    a       - Focus the add input (Enter submits)
    /       - Focus the search box
    c       - Copy highlighted handle
    C       - Copy all visible handles
    o       - Open highlighted profile in browser
    d / Del - Delete highlighted handle
    Ctrl+b  - Bulk add (paste many handles)
    Ctrl+o  - Import from JSON export
    Ctrl+s  - Export both lists to JSON
    Ctrl+r  - Refresh from server
    Ctrl+l  - Toggle edit lock
    Esc     - Dismiss newest notification
    q       - Quit
"""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
from textual import on
from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.widgets import Footer, Header, Input, Label, OptionList, Static, Tab, Tabs
from textual.widgets.option_list import Option

from follow_lists.action_messages import INVALID_IMPORT_FILE, OPEN_FAILED
from follow_lists.cli import main as _cli_main
from follow_lists.errors import MalformedDocumentError
from follow_lists.export import get_export_filename
from follow_lists.io_actions import (
    copy_to_clipboard,
    get_export_dir,
    open_profile,
    read_import_file,
    write_export_file,
)
from follow_lists.modals import BulkAddModal, ImportPathModal
from follow_lists.models import HandleRecord, ListType, NotificationKind, UserConfig
from follow_lists.query import FilterView
from follow_lists.services.interfaces import AppServices
from follow_lists.sync import SyncController
from follow_lists.ui_constants import APP_BINDINGS, APP_CSS
from follow_lists.widgets import (
    build_list_empty_message,
    build_list_header,
    build_status_line,
    render_handle_option,
    render_toasts,
)

logger = logging.getLogger(__name__)


class FollowListsApp(App):
    """A TUI application to manage following/followers handle lists."""

    TITLE = "Follow Lists"

    CSS = APP_CSS

    BINDINGS = APP_BINDINGS

    def __init__(
        self,
        config: UserConfig | None = None,
        services: AppServices | None = None,
        clipboard: Callable[[str], bool] = copy_to_clipboard,
        open_profile_fn: Callable[[HandleRecord], bool] = open_profile,
    ) -> None:
        super().__init__()
        self._config = config or UserConfig()
        self._controller = SyncController(
            services=services,
            config=self._config,
            clipboard=clipboard,
        )
        self._open_profile = open_profile_fn
        self._filter_view = FilterView(self._controller.store)
        self._query: str = ""
        self.visible_records: list[HandleRecord] = []

        # Background task tracking (prevent GC of fire-and-forget tasks)
        self._background_tasks: set[asyncio.Task[None]] = set()

        # Shared HTTP client for connection pooling (created in on_mount)
        self._http_client: httpx.AsyncClient | None = None

        self._controller.store.subscribe(self._refresh_list_view)
        self._controller.copy_mark.subscribe(self._refresh_list_view)
        self._controller.notifications.subscribe(self._refresh_toasts)
        self._controller.subscribe_pending(self._update_status_bar)

    @property
    def controller(self) -> SyncController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Header()
        yield Tabs(
            Tab("Following", id=ListType.FOLLOWING.value),
            Tab("Followers", id=ListType.FOLLOWERS.value),
            id="list-tabs",
        )
        with Horizontal(id="input-row"):
            yield Input(placeholder=" Add handle, e.g. @alice (Enter)", id="add-input")
            yield Input(placeholder=" Search username or display name", id="search-input")
        yield Label("", id="list-header")
        yield Static("", id="empty-message")
        yield OptionList(id="handle-list")
        yield Label("", id="status-bar")
        yield Static("", id="toasts")
        yield Footer()

    def on_mount(self) -> None:
        """Create the shared HTTP client and start the initial load."""
        self._http_client = httpx.AsyncClient()
        self._controller.client = self._http_client
        self.sub_title = self._config.api_base_url
        self._refresh_list_view()
        self._track_task(self._load())
        try:
            self.query_one("#handle-list", OptionList).focus()
        except NoMatches:
            pass

    async def on_unmount(self) -> None:
        """Cancel outstanding work and close the HTTP client."""
        for task in list(self._background_tasks):
            task.cancel()
        client = self._http_client
        self._http_client = None
        self._controller.client = None
        if client is not None:
            await client.aclose()

    def _track_task(self, coro: Any) -> asyncio.Task[None]:
        """Create an asyncio task and track it to prevent garbage collection."""
        task = asyncio.create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        task.add_done_callback(self._on_task_done)
        return task

    @staticmethod
    def _on_task_done(task: asyncio.Task[None]) -> None:
        """Log unhandled exceptions from background tasks."""
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Unhandled exception in background task: %s", exc, exc_info=exc)

    async def _load(self) -> None:
        await self._controller.load()
        self._refresh_list_view()

    # ── Rendering ───────────────────────────────────────────────────────

    def _refresh_list_view(self) -> None:
        """Recompute the visible projection and redraw the list."""
        active = self._controller.active_list
        self.visible_records = self._filter_view.visible(active, self._query)
        try:
            option_list = self.query_one("#handle-list", OptionList)
            header = self.query_one("#list-header", Label)
            empty = self.query_one("#empty-message", Static)
        except NoMatches:
            return

        highlighted = option_list.highlighted
        copied_id = self._controller.copy_mark.current
        option_list.clear_options()
        option_list.add_options(
            [
                Option(render_handle_option(record, copied=record.id == copied_id))
                for record in self.visible_records
            ]
        )
        if self.visible_records:
            index = 0 if highlighted is None else highlighted
            option_list.highlighted = max(0, min(index, len(self.visible_records) - 1))

        header.update(
            build_list_header(
                active,
                len(self.visible_records),
                self._controller.store.count(active),
                self._query,
            )
        )
        if self.visible_records:
            empty.remove_class("visible")
        else:
            empty.update(
                build_list_empty_message(
                    is_loading=self._controller.is_loading,
                    list_type=active,
                    query=self._query,
                )
            )
            empty.add_class("visible")
        self._update_status_bar()

    def _update_status_bar(self) -> None:
        try:
            status = self.query_one("#status-bar", Label)
            add_input = self.query_one("#add-input", Input)
        except NoMatches:
            return
        add_input.disabled = self._controller.locked
        status.update(
            build_status_line(
                self._controller.store.counts(),
                locked=self._controller.locked,
                pending=self._controller.pending_requests,
            )
        )

    def _refresh_toasts(self) -> None:
        try:
            toasts = self.query_one("#toasts", Static)
        except NoMatches:
            return
        events = self._controller.notifications.events
        toasts.update(render_toasts(events))
        toasts.set_class(bool(events), "visible")
        self._update_status_bar()

    def _get_current_record(self) -> HandleRecord | None:
        try:
            index = self.query_one("#handle-list", OptionList).highlighted
        except NoMatches:
            return None
        if index is None or not 0 <= index < len(self.visible_records):
            return None
        return self.visible_records[index]

    # ── Input events ────────────────────────────────────────────────────

    @on(Tabs.TabActivated, "#list-tabs")
    def on_list_tab_activated(self, event: Tabs.TabActivated) -> None:
        if event.tab is None or event.tab.id is None:
            return
        self._controller.set_active_list(ListType(event.tab.id))
        self._refresh_list_view()

    @on(Input.Changed, "#search-input")
    def on_search_changed(self, event: Input.Changed) -> None:
        self._query = event.value
        self._refresh_list_view()

    @on(Input.Submitted, "#add-input")
    def on_add_submitted(self, event: Input.Submitted) -> None:
        self._track_task(self._submit_add(event.value))

    async def _submit_add(self, value: str) -> None:
        record = await self._controller.add(value)
        if record is not None:
            try:
                self.query_one("#add-input", Input).value = ""
            except NoMatches:
                pass
        self._update_status_bar()

    # ── Actions ─────────────────────────────────────────────────────────

    def action_toggle_lock(self) -> None:
        self._controller.toggle_lock()
        self._update_status_bar()

    def action_switch_list(self) -> None:
        nxt = (
            ListType.FOLLOWERS
            if self._controller.active_list is ListType.FOLLOWING
            else ListType.FOLLOWING
        )
        try:
            self.query_one("#list-tabs", Tabs).active = nxt.value
        except NoMatches:
            self._controller.set_active_list(nxt)
            self._refresh_list_view()

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    def action_focus_add(self) -> None:
        self.query_one("#add-input", Input).focus()

    def action_refresh(self) -> None:
        self._track_task(self._load())

    def action_copy_handle(self) -> None:
        record = self._get_current_record()
        if record is not None:
            self._controller.copy_handle(record)

    def action_copy_all(self) -> None:
        self._controller.copy_all(self.visible_records)

    def action_open_profile(self) -> None:
        record = self._get_current_record()
        if record is not None and not self._open_profile(record):
            self._controller.notifications.push(OPEN_FAILED, NotificationKind.ERROR)

    def action_delete_handle(self) -> None:
        record = self._get_current_record()
        if record is None:
            return
        self._track_task(self._controller.delete(record.id, record.list_type))

    def action_bulk_add(self) -> None:
        def on_bulk_text(text: str | None) -> None:
            if text is not None:
                self._track_task(self._controller.bulk_add(text))

        self.push_screen(BulkAddModal(self._controller.active_list), callback=on_bulk_text)

    def action_import_file(self) -> None:
        def on_path(path: str | None) -> None:
            if path:
                self._track_task(self._import_from_path(Path(path)))

        self.push_screen(ImportPathModal(), callback=on_path)

    async def _import_from_path(self, path: Path) -> None:
        try:
            content = read_import_file(path)
        except MalformedDocumentError as e:
            logger.warning("Import aborted: %s", e)
            self._controller.notifications.push(INVALID_IMPORT_FILE, NotificationKind.ERROR)
            return
        await self._controller.import_document(content)

    def action_export_file(self) -> None:
        self._controller.export_document(sink=self._write_export)

    def _write_export(self, content: str) -> Path:
        return write_export_file(
            content=content,
            export_dir=get_export_dir(self._config),
            filename=get_export_filename(),
        )

    def action_dismiss_toast(self) -> None:
        self._controller.notifications.dismiss_latest()


def main() -> int:
    """Main entry point wrapper for CLI/bootstrap logic."""
    return _cli_main(app_factory=FollowListsApp)


if __name__ == "__main__":
    sys.exit(main())
