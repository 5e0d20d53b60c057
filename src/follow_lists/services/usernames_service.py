"""Internal helpers for the remote usernames API (list, create, bulk, delete)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from follow_lists.errors import RequestFailure
from follow_lists.models import BulkImportResult, HandleRecord, ListType

logger = logging.getLogger(__name__)


def build_url(base_url: str, *parts: str) -> str:
    """Join the configured API base with path segments."""
    return "/".join([base_url.rstrip("/"), *(str(p).strip("/") for p in parts)])


async def _send(
    client: httpx.AsyncClient | None,
    method: str,
    url: str,
    *,
    timeout_seconds: int,
    json_body: dict[str, Any] | None = None,
) -> httpx.Response:
    async def _do(active_client: httpx.AsyncClient) -> httpx.Response:
        return await active_client.request(method, url, json=json_body, timeout=timeout_seconds)

    try:
        if client is not None:
            return await _do(client)
        async with httpx.AsyncClient() as tmp_client:
            return await _do(tmp_client)
    except httpx.HTTPError as e:
        raise RequestFailure(f"{method} {url} failed: {e}") from e


def _decode_envelope(response: httpx.Response, default_error: str) -> dict[str, Any]:
    """Return the JSON envelope of a successful call or raise RequestFailure.

    Rejections carry the server's ``error`` text when it sent one, falling
    back to ``default_error``.
    """
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        if response.is_error:
            raise RequestFailure(
                f"{default_error} (HTTP {response.status_code})",
                status_code=response.status_code,
            )
        raise RequestFailure(f"{default_error}: response was not a JSON object")
    if payload.get("success") is not True:
        error = payload.get("error")
        message = error if isinstance(error, str) and error else default_error
        raise RequestFailure(message, status_code=response.status_code)
    return payload


async def fetch_usernames(
    *,
    client: httpx.AsyncClient | None,
    base_url: str,
    timeout_seconds: int,
) -> list[HandleRecord]:
    """Fetch the full dataset across both lists.

    Records the server sends in an unusable shape are skipped with a warning.
    """
    response = await _send(
        client, "GET", build_url(base_url, "usernames"), timeout_seconds=timeout_seconds
    )
    payload = _decode_envelope(response, "Failed to load usernames")
    raw_records = payload.get("data")
    if not isinstance(raw_records, list):
        raise RequestFailure("Failed to load usernames: response has no data list")
    records: list[HandleRecord] = []
    for raw in raw_records:
        try:
            records.append(HandleRecord.from_api(raw))
        except ValueError as e:
            logger.warning("Skipping malformed record from server: %s", e)
    return records


async def create_username(
    *,
    client: httpx.AsyncClient | None,
    base_url: str,
    username: str,
    list_type: ListType,
    timeout_seconds: int,
) -> HandleRecord:
    """Create one record and return it with its server-assigned id."""
    response = await _send(
        client,
        "POST",
        build_url(base_url, "usernames"),
        timeout_seconds=timeout_seconds,
        json_body={"username": username, "list_type": list_type.value},
    )
    payload = _decode_envelope(response, "Failed to add username")
    try:
        return HandleRecord.from_api(payload.get("data"))
    except ValueError as e:
        raise RequestFailure(f"Failed to add username: {e}") from e


async def bulk_create_usernames(
    *,
    client: httpx.AsyncClient | None,
    base_url: str,
    usernames: list[str],
    list_type: ListType,
    timeout_seconds: int,
) -> BulkImportResult:
    """Submit a batch of usernames for one list and return the server counts."""
    response = await _send(
        client,
        "POST",
        build_url(base_url, "usernames", "bulk"),
        timeout_seconds=timeout_seconds,
        json_body={"usernames": usernames, "list_type": list_type.value},
    )
    payload = _decode_envelope(response, "Failed to import")
    imported = payload.get("imported")
    total = payload.get("total")
    if isinstance(imported, bool) or not isinstance(imported, int):
        imported = 0
    if isinstance(total, bool) or not isinstance(total, int):
        total = len(usernames)
    return BulkImportResult(imported=imported, total=total)


async def delete_username(
    *,
    client: httpx.AsyncClient | None,
    base_url: str,
    record_id: int | str,
    timeout_seconds: int,
) -> None:
    """Delete one record by id."""
    response = await _send(
        client,
        "DELETE",
        build_url(base_url, "usernames", str(record_id)),
        timeout_seconds=timeout_seconds,
    )
    _decode_envelope(response, "Failed to remove username")


__all__ = [
    "build_url",
    "bulk_create_usernames",
    "create_username",
    "delete_username",
    "fetch_usernames",
]
