"""Internal service layer for remote list-storage calls."""

from follow_lists.services.usernames_service import (
    build_url,
    bulk_create_usernames,
    create_username,
    delete_username,
    fetch_usernames,
)

__all__ = [
    "build_url",
    "bulk_create_usernames",
    "create_username",
    "delete_username",
    "fetch_usernames",
]
