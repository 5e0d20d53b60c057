"""In-memory collection store for the following/followers lists."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from follow_lists.models import HandleRecord, ListType

logger = logging.getLogger(__name__)


class CollectionStore:
    """Holds both collections and their counters.

    Newest records come first. Every mutator updates the collection and its
    counter together and bumps ``version`` so derived views can cache on it.
    Local duplicates are allowed; uniqueness is the server's business.
    """

    def __init__(self) -> None:
        self._collections: dict[ListType, list[HandleRecord]] = {lt: [] for lt in ListType}
        self._counts: dict[ListType, int] = {lt: 0 for lt in ListType}
        self._version = 0
        self._listeners: list[Callable[[], None]] = []

    @property
    def version(self) -> int:
        return self._version

    def records(self, list_type: ListType) -> tuple[HandleRecord, ...]:
        """Return a read-only view of one collection in display order."""
        return tuple(self._collections[list_type])

    def count(self, list_type: ListType) -> int:
        return self._counts[list_type]

    def counts(self) -> dict[ListType, int]:
        return dict(self._counts)

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register a callback invoked after every state change."""
        self._listeners.append(listener)

    def replace_all(self, list_type: ListType, records: Iterable[HandleRecord]) -> None:
        """Overwrite one collection with authoritative server state."""
        new_records = list(records)
        self._collections[list_type] = new_records
        self._counts[list_type] = len(new_records)
        self._changed()
        logger.debug("Replaced %s with %d records", list_type.value, len(new_records))

    def prepend(self, list_type: ListType, record: HandleRecord) -> None:
        """Insert a server-confirmed record at the front of a collection."""
        self._collections[list_type].insert(0, record)
        self._counts[list_type] += 1
        self._changed()

    def remove(self, list_type: ListType, record_id: int | str) -> bool:
        """Remove a record by id. Returns False (and changes nothing) if absent."""
        records = self._collections[list_type]
        for index, record in enumerate(records):
            if record.id == record_id:
                del records[index]
                self._counts[list_type] -= 1
                self._changed()
                return True
        return False

    def find(self, record_id: int | str) -> HandleRecord | None:
        """Look up a record by id in either collection."""
        for list_type in ListType:
            for record in self._collections[list_type]:
                if record.id == record_id:
                    return record
        return None

    def project(self, list_type: ListType, query: str) -> list[HandleRecord]:
        """Return records whose username or display name contains ``query``.

        Matching is case-insensitive; an empty query returns the whole
        collection in order. Never mutates the store.
        """
        records = self._collections[list_type]
        needle = query.lower()
        if not needle:
            return list(records)
        return [
            record
            for record in records
            if needle in record.username.lower()
            or (record.display_name is not None and needle in record.display_name.lower())
        ]

    def _changed(self) -> None:
        self._version += 1
        for listener in list(self._listeners):
            listener()


__all__ = [
    "CollectionStore",
]
