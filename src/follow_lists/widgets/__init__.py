"""Rendering helpers extracted from app.py for modular UI composition."""

from follow_lists.widgets.listing import (
    COPIED_MARKER,
    build_list_empty_message,
    build_list_header,
    build_status_line,
    render_handle_option,
    render_toasts,
)

__all__ = [
    "COPIED_MARKER",
    "build_list_empty_message",
    "build_list_header",
    "build_status_line",
    "render_handle_option",
    "render_toasts",
]
