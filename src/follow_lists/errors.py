"""Exception types raised inside the core and recovered by the sync controller."""

from __future__ import annotations


class FollowListsError(Exception):
    """Base class for recoverable follow-lists failures."""


class HandleValidationError(FollowListsError):
    """Input yielded nothing that could be sent to the server."""


class RequestFailure(FollowListsError):
    """A remote call failed at the network level or was rejected by the server."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedDocumentError(FollowListsError):
    """An import document could not be read or parsed."""


__all__ = [
    "FollowListsError",
    "HandleValidationError",
    "MalformedDocumentError",
    "RequestFailure",
]
