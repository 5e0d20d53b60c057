"""UI-facing copy builders for notification messages."""

from __future__ import annotations

from follow_lists.models import BulkImportResult, ListType

LOAD_FAILED = "Failed to load usernames"
ADD_FAILED = "Failed to add username"
BULK_ADD_FAILED = "Failed to bulk add usernames"
REMOVE_FAILED = "Failed to remove username"
NO_VALID_USERNAMES = "No valid usernames found"
INVALID_IMPORT_FILE = "Invalid import file"
EXPORT_FAILED = "Failed to export"
COPY_FAILED = "Failed to copy"
COPY_ALL_FAILED = "Failed to copy all"
USERNAME_REMOVED = "Username removed"
EXPORT_SUCCEEDED = "Exported successfully"
LIST_LOCKED = "List is locked"
LOCK_SET = "Locked - read-only mode"
LOCK_CLEARED = "Unlocked - editing enabled"
OPEN_FAILED = "Could not open profile in browser"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def build_added_message(username: str, list_type: ListType) -> str:
    return f"@{username} added to {list_type.value}"


def build_bulk_added_message(result: BulkImportResult) -> str:
    return f"Added {result.imported} of {_plural(result.total, 'username')}"


def build_import_summary(imported: int, total: int) -> str:
    return f"Import successful: added {imported} of {_plural(total, 'username')}"


def build_import_failure(failed_lists: list[ListType], reason: str) -> str:
    names = ", ".join(list_type.value for list_type in failed_lists)
    return f"Import failed for {names}: {reason}"


def build_copied_message(username: str) -> str:
    return f"Copied @{username}"


def build_copied_all_message(count: int) -> str:
    return f"Copied {_plural(count, 'username')}"


def build_export_message(path_name: str | None) -> str:
    if path_name:
        return f"{EXPORT_SUCCEEDED} to {path_name}"
    return EXPORT_SUCCEEDED


__all__ = [
    "ADD_FAILED",
    "BULK_ADD_FAILED",
    "COPY_ALL_FAILED",
    "COPY_FAILED",
    "EXPORT_FAILED",
    "EXPORT_SUCCEEDED",
    "INVALID_IMPORT_FILE",
    "LIST_LOCKED",
    "LOAD_FAILED",
    "LOCK_CLEARED",
    "LOCK_SET",
    "NO_VALID_USERNAMES",
    "OPEN_FAILED",
    "REMOVE_FAILED",
    "USERNAME_REMOVED",
    "build_added_message",
    "build_bulk_added_message",
    "build_copied_all_message",
    "build_copied_message",
    "build_export_message",
    "build_import_failure",
    "build_import_summary",
]
