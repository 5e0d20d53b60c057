"""Follow Lists - a terminal client for following/followers handle lists."""

from follow_lists.errors import (
    FollowListsError,
    HandleValidationError,
    MalformedDocumentError,
    RequestFailure,
)
from follow_lists.models import (
    BulkImportResult,
    HandleRecord,
    ListType,
    NotificationEvent,
    NotificationKind,
    UserConfig,
)
from follow_lists.parsing import normalize_handles
from follow_lists.store import CollectionStore
from follow_lists.sync import SyncController

__version__ = "0.1.0"

__all__ = [
    "BulkImportResult",
    "CollectionStore",
    "FollowListsError",
    "HandleRecord",
    "HandleValidationError",
    "ListType",
    "MalformedDocumentError",
    "NotificationEvent",
    "NotificationKind",
    "RequestFailure",
    "SyncController",
    "UserConfig",
    "normalize_handles",
]
