"""Service interfaces + default adapters for app-level dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import httpx

from follow_lists.models import BulkImportResult, HandleRecord, ListType
from follow_lists.services import usernames_service as _usernames


@runtime_checkable
class UsernamesService(Protocol):
    """Interface for the remote list-storage operations."""

    async def fetch_usernames(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        timeout_seconds: int,
    ) -> list[HandleRecord]:
        """Fetch every record across both lists."""
        ...

    async def create_username(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        username: str,
        list_type: ListType,
        timeout_seconds: int,
    ) -> HandleRecord:
        """Create a record and return it as stored by the server."""
        ...

    async def bulk_create_usernames(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        usernames: list[str],
        list_type: ListType,
        timeout_seconds: int,
    ) -> BulkImportResult:
        """Submit a batch for one list and return the imported/total counts."""
        ...

    async def delete_username(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        record_id: int | str,
        timeout_seconds: int,
    ) -> None:
        """Delete a record by id."""
        ...


class DefaultUsernamesService:
    """Default adapter that delegates to function-based API helpers."""

    async def fetch_usernames(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        timeout_seconds: int,
    ) -> list[HandleRecord]:
        return await _usernames.fetch_usernames(
            client=client,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
        )

    async def create_username(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        username: str,
        list_type: ListType,
        timeout_seconds: int,
    ) -> HandleRecord:
        return await _usernames.create_username(
            client=client,
            base_url=base_url,
            username=username,
            list_type=list_type,
            timeout_seconds=timeout_seconds,
        )

    async def bulk_create_usernames(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        usernames: list[str],
        list_type: ListType,
        timeout_seconds: int,
    ) -> BulkImportResult:
        return await _usernames.bulk_create_usernames(
            client=client,
            base_url=base_url,
            usernames=usernames,
            list_type=list_type,
            timeout_seconds=timeout_seconds,
        )

    async def delete_username(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        record_id: int | str,
        timeout_seconds: int,
    ) -> None:
        await _usernames.delete_username(
            client=client,
            base_url=base_url,
            record_id=record_id,
            timeout_seconds=timeout_seconds,
        )


@dataclass(slots=True)
class AppServices:
    """Aggregated service interfaces consumed by the sync controller."""

    usernames: UsernamesService


def build_default_app_services() -> AppServices:
    """Build default app services backed by the function-based modules."""
    return AppServices(usernames=DefaultUsernamesService())


__all__ = [
    "AppServices",
    "DefaultUsernamesService",
    "UsernamesService",
    "build_default_app_services",
]
