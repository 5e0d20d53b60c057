"""Data models and constants for the follow-lists application."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

# Application identity: single source of truth for platformdirs config paths
CONFIG_APP_NAME = "follow-lists"

DEFAULT_API_BASE_URL = "http://localhost:3001/api"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30
MAX_REQUEST_TIMEOUT_SECONDS = 300

# Lifetimes of transient UI state, in seconds
NOTIFICATION_TIMEOUT_SECONDS = 3.0
COPY_MARK_TIMEOUT_SECONDS = 2.0

EXPORT_FILENAME_PREFIX = "x-usernames"
PROFILE_URL_TEMPLATE = "https://x.com/{username}"

# Leading run of whitespace and "@" characters in front of a username
_HANDLE_PREFIX = re.compile(r"^[\s@]+")


class ListType(str, Enum):
    """The two tracked collections. Values are the wire representation."""

    FOLLOWING = "following"
    FOLLOWERS = "followers"


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


def strip_handle_prefix(value: str) -> str:
    """Trim whitespace and drop the leading "@" decoration.

    The whole leading run is removed (``"@@alice"`` gives ``alice``), which
    keeps the result stable when applied twice.
    """
    return _HANDLE_PREFIX.sub("", value).rstrip()


@dataclass(slots=True)
class HandleRecord:
    """One account handle stored in a collection.

    ``username`` never carries the leading "@"; that is added at display time.
    ``id`` is assigned by the remote service and treated as opaque.
    """

    id: int | str
    username: str
    list_type: ListType
    display_name: str | None = None

    @property
    def handle(self) -> str:
        return f"@{self.username}"

    @classmethod
    def from_api(cls, data: Any) -> HandleRecord:
        """Build a record from a server payload.

        Raises:
            ValueError: If the payload lacks a usable id, username or list type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Record payload is not an object: {data!r}")
        record_id = data.get("id")
        if isinstance(record_id, bool) or not isinstance(record_id, (int, str)):
            raise ValueError(f"Record payload has no usable id: {data!r}")
        raw_username = data.get("username")
        username = strip_handle_prefix(raw_username) if isinstance(raw_username, str) else ""
        if not username:
            raise ValueError(f"Record payload has no username: {data!r}")
        try:
            list_type = ListType(data.get("list_type"))
        except ValueError as e:
            raise ValueError(f"Record payload has unknown list_type: {data!r}") from e
        display_name = data.get("display_name")
        return cls(
            id=record_id,
            username=username,
            list_type=list_type,
            display_name=display_name if isinstance(display_name, str) and display_name else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire/export shape."""
        return {
            "id": self.id,
            "username": self.username,
            "display_name": self.display_name,
            "list_type": self.list_type.value,
        }


@dataclass(slots=True, frozen=True)
class BulkImportResult:
    """Counts reported by the bulk endpoint."""

    imported: int
    total: int


@dataclass(slots=True, frozen=True)
class NotificationEvent:
    """A transient user-facing status message."""

    id: int
    message: str
    kind: NotificationKind
    created_at: datetime


@dataclass(slots=True)
class EditLock:
    """Session-scoped switch that disables every mutating operation."""

    locked: bool = False

    def toggle(self) -> bool:
        self.locked = not self.locked
        return self.locked


@dataclass(slots=True)
class UserConfig:
    """User configuration loaded from the platform config directory."""

    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout_seconds: int = DEFAULT_REQUEST_TIMEOUT_SECONDS
    export_dir: str = ""
    version: int = 1

    def __post_init__(self) -> None:
        self.request_timeout_seconds = max(
            1, min(self.request_timeout_seconds, MAX_REQUEST_TIMEOUT_SECONDS)
        )


__all__ = [
    "COPY_MARK_TIMEOUT_SECONDS",
    "CONFIG_APP_NAME",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_REQUEST_TIMEOUT_SECONDS",
    "EXPORT_FILENAME_PREFIX",
    "MAX_REQUEST_TIMEOUT_SECONDS",
    "NOTIFICATION_TIMEOUT_SECONDS",
    "PROFILE_URL_TEMPLATE",
    "BulkImportResult",
    "EditLock",
    "HandleRecord",
    "ListType",
    "NotificationEvent",
    "NotificationKind",
    "UserConfig",
    "strip_handle_prefix",
]
