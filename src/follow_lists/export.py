"""Portable export document: build, serialize, and parse for import."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from follow_lists.errors import MalformedDocumentError
from follow_lists.models import EXPORT_FILENAME_PREFIX, ListType
from follow_lists.parsing import usernames_from_entries
from follow_lists.store import CollectionStore


def format_export_timestamp(now: datetime) -> str:
    """Format a datetime as an ISO-8601 UTC string with millisecond precision."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    utc = now.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_export_document(store: CollectionStore, now: datetime | None = None) -> dict[str, Any]:
    """Snapshot both collections into the export document shape."""
    current = now or datetime.now(timezone.utc)
    document: dict[str, Any] = {
        list_type.value: [record.to_dict() for record in store.records(list_type)]
        for list_type in ListType
    }
    document["exportedAt"] = format_export_timestamp(current)
    return document


def serialize_export_document(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def get_export_filename(now: datetime | None = None) -> str:
    """Return the dated export file name, e.g. ``x-usernames-2024-01-15.json``."""
    current = now or datetime.now(timezone.utc)
    return f"{EXPORT_FILENAME_PREFIX}-{current.strftime('%Y-%m-%d')}.json"


def parse_import_document(content: str | bytes) -> dict[ListType, list[str]]:
    """Parse an import document into usernames per list.

    Each list may hold full record objects or bare username strings; missing
    or non-list sections yield an empty sequence.

    Raises:
        MalformedDocumentError: If the content is not a JSON object.
    """
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedDocumentError(f"Import file is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedDocumentError(
            f"Import file root must be an object, got {type(data).__name__}"
        )
    return {list_type: usernames_from_entries(data.get(list_type.value)) for list_type in ListType}


__all__ = [
    "build_export_document",
    "format_export_timestamp",
    "get_export_filename",
    "parse_import_document",
    "serialize_export_document",
]
