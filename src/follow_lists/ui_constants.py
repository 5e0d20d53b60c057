"""Internal UI constants for the FollowListsApp."""

from __future__ import annotations

from textual.binding import Binding, BindingType

APP_CSS = """
Screen {
    background: $surface;
}

#list-tabs {
    height: auto;
}

#input-row {
    height: auto;
    padding: 0 1;
}

#add-input {
    width: 1fr;
}

#search-input {
    width: 1fr;
}

#list-header {
    padding: 0 1;
    color: $accent;
    text-style: bold;
}

#handle-list {
    height: 1fr;
    border: tall $primary-background;
    scrollbar-gutter: stable;
}

#handle-list:focus {
    border: tall $accent;
}

#empty-message {
    padding: 1 2;
    color: $text-muted;
    display: none;
}

#empty-message.visible {
    display: block;
}

#status-bar {
    padding: 0 1;
    background: $panel;
    color: $text;
}

#toasts {
    dock: bottom;
    height: auto;
    max-height: 8;
    margin: 0 1 2 1;
    padding: 0 1;
    background: $panel;
    border: round $primary;
    display: none;
}

#toasts.visible {
    display: block;
}
"""

APP_BINDINGS: list[BindingType] = [
    Binding("q", "quit", "Quit", show=False),
    Binding("ctrl+l", "toggle_lock", "Lock"),
    Binding("ctrl+b", "bulk_add", "Bulk add"),
    Binding("ctrl+o", "import_file", "Import"),
    Binding("ctrl+s", "export_file", "Export"),
    Binding("ctrl+r", "refresh", "Refresh"),
    Binding("t", "switch_list", "Switch list"),
    Binding("slash", "focus_search", "Search", show=False),
    Binding("a", "focus_add", "Add", show=False),
    Binding("c", "copy_handle", "Copy"),
    Binding("C", "copy_all", "Copy all"),
    Binding("o", "open_profile", "Open", show=False),
    Binding("d", "delete_handle", "Delete"),
    Binding("delete", "delete_handle", "Delete", show=False),
    Binding("escape", "dismiss_toast", "Dismiss", show=False),
]


__all__ = [
    "APP_BINDINGS",
    "APP_CSS",
]
