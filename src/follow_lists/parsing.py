"""Handle parsing: turn pasted text or imported entries into clean usernames."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from follow_lists.errors import HandleValidationError
from follow_lists.models import strip_handle_prefix

# Separators between pasted handles: any run of whitespace or commas
_HANDLE_SEPARATOR = re.compile(r"[\s,]+")


def normalize_handles(raw_text: str) -> list[str]:
    """Split raw text into candidate usernames.

    Tokens are separated by runs of whitespace, newlines or commas. Every
    leading "@" is dropped, not only the first, so no output starts with "@";
    empty tokens are discarded. Order follows first occurrence and duplicates
    are kept; deduplication is the server's call.

    Returns an empty list (never raises) when nothing usable is found.
    """
    if not raw_text:
        return []
    handles: list[str] = []
    for token in _HANDLE_SEPARATOR.split(raw_text):
        username = strip_handle_prefix(token)
        if username:
            handles.append(username)
    return handles


def parse_single_handle(raw: str) -> str:
    """Clean one typed handle.

    Raises:
        HandleValidationError: If nothing is left after trimming.
    """
    username = strip_handle_prefix(raw)
    if not username:
        raise HandleValidationError("Enter a username to add")
    return username


def usernames_from_entries(entries: Any) -> list[str]:
    """Extract usernames from an imported sequence.

    Each entry may be a bare username string or an object with a ``username``
    field. Anything else is skipped.
    """
    if not isinstance(entries, list):
        return []
    return list(_iter_entry_usernames(entries))


def _iter_entry_usernames(entries: Iterable[Any]) -> Iterable[str]:
    for entry in entries:
        if isinstance(entry, dict):
            entry = entry.get("username")
        if not isinstance(entry, str):
            continue
        username = strip_handle_prefix(entry)
        if username:
            yield username


__all__ = [
    "normalize_handles",
    "parse_single_handle",
    "usernames_from_entries",
]
