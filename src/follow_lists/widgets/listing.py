"""Rendering helpers for the handle list, status bar and toast area."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from follow_lists.models import HandleRecord, ListType, NotificationEvent, NotificationKind
from follow_lists.query import escape_rich_text

COPIED_MARKER = "[green]✓ copied[/]"

_TOAST_STYLES: dict[NotificationKind, tuple[str, str]] = {
    NotificationKind.SUCCESS: ("green", "✓"),
    NotificationKind.ERROR: ("red", "!"),
    NotificationKind.INFO: ("cyan", "•"),
}


def render_handle_option(record: HandleRecord, copied: bool = False) -> str:
    """Render one list row: handle, optional display name, copy marker."""
    parts = [f"[bold]{escape_rich_text(record.handle)}[/]"]
    if record.display_name:
        parts.append(f"[dim]{escape_rich_text(record.display_name)}[/]")
    if copied:
        parts.append(COPIED_MARKER)
    return "  ".join(parts)


def build_list_header(list_type: ListType, visible: int, total: int, query: str) -> str:
    title = list_type.value.capitalize()
    if query:
        return f" {title} ({visible} of {total} matching)"
    return f" {title} ({total})"


def build_list_empty_message(*, is_loading: bool, list_type: ListType, query: str) -> str:
    """Explain why the list is empty."""
    if is_loading:
        return "[dim italic]Loading usernames...[/]"
    if query:
        return (
            f"[dim italic]No usernames match '{escape_rich_text(query)}'.[/]\n"
            "[dim]Try: clear the search box.[/]"
        )
    return (
        f"[dim italic]No usernames in {list_type.value} yet.[/]\n"
        "[dim]Try: press [bold]a[/bold] to add one or [bold]Ctrl+B[/bold] to paste many.[/]"
    )


def build_status_line(counts: Mapping[ListType, int], *, locked: bool, pending: int) -> str:
    parts = [
        f"Following: {counts.get(ListType.FOLLOWING, 0)}",
        f"Followers: {counts.get(ListType.FOLLOWERS, 0)}",
    ]
    parts.append("[bold red]LOCKED[/]" if locked else "[green]editable[/]")
    if pending:
        parts.append(f"[yellow]syncing ({pending})[/]")
    return " · ".join(parts)


def render_toasts(events: Sequence[NotificationEvent]) -> str:
    """Render live notifications, newest last."""
    lines = []
    for event in events:
        color, icon = _TOAST_STYLES[event.kind]
        lines.append(f"[{color}]{icon}[/] {escape_rich_text(event.message)}")
    return "\n".join(lines)


__all__ = [
    "COPIED_MARKER",
    "build_list_empty_message",
    "build_list_header",
    "build_status_line",
    "render_handle_option",
    "render_toasts",
]
