"""Search/filter projection over the active collection, plus text helpers."""

from __future__ import annotations

from rich.markup import escape as escape_markup

from follow_lists.models import HandleRecord, ListType
from follow_lists.store import CollectionStore


def escape_rich_text(text: str) -> str:
    """Escape text for safe Rich markup rendering."""
    return escape_markup(text) if text else ""


def filter_records(store: CollectionStore, list_type: ListType, query: str) -> list[HandleRecord]:
    """Pure projection of ``(list_type, query, store)`` to the visible records."""
    return store.project(list_type, query)


class FilterView:
    """Memoized wrapper around :func:`filter_records`.

    The cache key includes the store version, so any store mutation produces
    a fresh projection. Results are identical to calling the function directly.
    """

    def __init__(self, store: CollectionStore) -> None:
        self._store = store
        self._key: tuple[ListType, str, int] | None = None
        self._result: list[HandleRecord] = []

    def visible(self, list_type: ListType, query: str) -> list[HandleRecord]:
        key = (list_type, query, self._store.version)
        if key != self._key:
            self._result = filter_records(self._store, list_type, query)
            self._key = key
        return list(self._result)


__all__ = [
    "FilterView",
    "escape_rich_text",
    "filter_records",
]
