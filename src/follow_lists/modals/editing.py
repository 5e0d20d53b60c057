"""Handle entry modals: bulk paste and import file path."""

from __future__ import annotations

import logging

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static, TextArea

from follow_lists.models import ListType

logger = logging.getLogger(__name__)


class BulkAddModal(ModalScreen[str | None]):
    """Modal dialog for pasting many handles at once."""

    BINDINGS = [
        Binding("ctrl+s", "save", "Add all"),
        Binding("escape", "cancel", "Cancel"),
    ]

    CSS = """
    BulkAddModal {
        align: center middle;
    }

    #bulk-dialog {
        width: 60%;
        height: 60%;
        min-width: 50;
        min-height: 15;
        background: $surface;
        border: tall $accent;
        padding: 0 2;
    }

    #bulk-title {
        text-style: bold;
        color: $accent;
        margin-bottom: 1;
    }

    #bulk-help {
        color: $text-muted;
        margin-bottom: 1;
    }

    #bulk-textarea {
        height: 1fr;
        background: $panel;
        border: none;
    }

    #bulk-buttons {
        height: auto;
        margin-top: 1;
        align: right middle;
    }

    #bulk-buttons Button {
        margin-left: 1;
    }
    """

    def __init__(self, list_type: ListType, initial_text: str = "") -> None:
        super().__init__()
        self._list_type = list_type
        self._initial_text = initial_text

    def compose(self) -> ComposeResult:
        with Vertical(id="bulk-dialog"):
            yield Label(f"Bulk add to {self._list_type.value}", id="bulk-title")
            yield Static(
                "Separate handles with spaces, commas or new lines. A leading @ is optional.",
                id="bulk-help",
            )
            yield TextArea(self._initial_text, id="bulk-textarea")
            with Horizontal(id="bulk-buttons"):
                yield Button("Cancel", variant="default", id="cancel-btn")
                yield Button("Add all (Ctrl+S)", variant="primary", id="save-btn")

    def on_mount(self) -> None:
        self.query_one("#bulk-textarea", TextArea).focus()

    def action_save(self) -> None:
        text = self.query_one("#bulk-textarea", TextArea).text
        self.dismiss(text if text.strip() else None)

    def action_cancel(self) -> None:
        self.dismiss(None)

    @on(Button.Pressed, "#save-btn")
    def on_save_pressed(self) -> None:
        self.action_save()

    @on(Button.Pressed, "#cancel-btn")
    def on_cancel_pressed(self) -> None:
        self.action_cancel()


class ImportPathModal(ModalScreen[str | None]):
    """Modal dialog asking for the path of an exported JSON document."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    CSS = """
    ImportPathModal {
        align: center middle;
    }

    #import-dialog {
        width: 60%;
        height: auto;
        min-width: 50;
        background: $surface;
        border: tall $success;
        padding: 0 2;
    }

    #import-title {
        text-style: bold;
        color: $success;
        margin-bottom: 1;
    }

    #import-input {
        width: 100%;
        background: $panel;
        border: none;
    }

    #import-buttons {
        height: auto;
        margin-top: 1;
        align: right middle;
    }

    #import-buttons Button {
        margin-left: 1;
    }
    """

    def __init__(self, initial_path: str = "") -> None:
        super().__init__()
        self._initial_path = initial_path

    def compose(self) -> ComposeResult:
        with Vertical(id="import-dialog"):
            yield Label("Import usernames from JSON export", id="import-title")
            yield Input(
                value=self._initial_path,
                placeholder="Path to x-usernames-YYYY-MM-DD.json",
                id="import-input",
            )
            with Horizontal(id="import-buttons"):
                yield Button("Cancel", variant="default", id="cancel-btn")
                yield Button("Import (Enter)", variant="success", id="import-btn")

    def on_mount(self) -> None:
        self.query_one("#import-input", Input).focus()

    def action_submit(self) -> None:
        path = self.query_one("#import-input", Input).value.strip()
        self.dismiss(path or None)

    def action_cancel(self) -> None:
        self.dismiss(None)

    @on(Input.Submitted, "#import-input")
    def on_input_submitted(self) -> None:
        self.action_submit()

    @on(Button.Pressed, "#import-btn")
    def on_import_pressed(self) -> None:
        self.action_submit()

    @on(Button.Pressed, "#cancel-btn")
    def on_cancel_pressed(self) -> None:
        self.action_cancel()


__all__ = [
    "BulkAddModal",
    "ImportPathModal",
]
