"""Tests for service interface adapters and defaults."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from follow_lists.models import BulkImportResult, HandleRecord, ListType
from follow_lists.services.interfaces import (
    AppServices,
    UsernamesService,
    build_default_app_services,
)


def test_build_default_app_services_protocol_compatible() -> None:
    services = build_default_app_services()

    assert isinstance(services, AppServices)
    assert isinstance(services.usernames, UsernamesService)


def test_fake_service_satisfies_protocol(fake_service) -> None:
    assert isinstance(fake_service, UsernamesService)


@pytest.mark.asyncio
async def test_default_adapter_delegates_fetch_and_create() -> None:
    services = build_default_app_services()
    record = HandleRecord(id=1, username="alice", list_type=ListType.FOLLOWING)

    with (
        patch(
            "follow_lists.services.usernames_service.fetch_usernames",
            new=AsyncMock(return_value=[record]),
        ) as fetch_mock,
        patch(
            "follow_lists.services.usernames_service.create_username",
            new=AsyncMock(return_value=record),
        ) as create_mock,
    ):
        fetched = await services.usernames.fetch_usernames(
            client=None, base_url="http://x/api", timeout_seconds=5
        )
        created = await services.usernames.create_username(
            client=None,
            base_url="http://x/api",
            username="alice",
            list_type=ListType.FOLLOWING,
            timeout_seconds=5,
        )

    assert fetched == [record]
    assert created is record
    fetch_mock.assert_awaited_once_with(client=None, base_url="http://x/api", timeout_seconds=5)
    create_mock.assert_awaited_once()


@pytest.mark.asyncio
async def test_default_adapter_delegates_bulk_and_delete() -> None:
    services = build_default_app_services()
    result = BulkImportResult(imported=1, total=2)

    with (
        patch(
            "follow_lists.services.usernames_service.bulk_create_usernames",
            new=AsyncMock(return_value=result),
        ) as bulk_mock,
        patch(
            "follow_lists.services.usernames_service.delete_username",
            new=AsyncMock(return_value=None),
        ) as delete_mock,
    ):
        got = await services.usernames.bulk_create_usernames(
            client=None,
            base_url="http://x/api",
            usernames=["a", "b"],
            list_type=ListType.FOLLOWERS,
            timeout_seconds=5,
        )
        await services.usernames.delete_username(
            client=None, base_url="http://x/api", record_id=4, timeout_seconds=5
        )

    assert got == result
    bulk_mock.assert_awaited_once()
    delete_mock.assert_awaited_once_with(
        client=None, base_url="http://x/api", record_id=4, timeout_seconds=5
    )
