"""Focused tests for handle entry modals."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from follow_lists.app import FollowListsApp
from follow_lists.modals import BulkAddModal, ImportPathModal
from follow_lists.models import ListType
from follow_lists.services.interfaces import AppServices


@pytest.mark.asyncio
async def test_bulk_add_modal_compose_and_actions(fake_service, clipboard):
    app = FollowListsApp(services=AppServices(usernames=fake_service), clipboard=clipboard)
    modal = BulkAddModal(ListType.FOLLOWERS, "@alice")

    async with app.run_test() as pilot:
        app.push_screen(modal)
        await pilot.pause(0.05)
        assert "followers" in str(modal.query_one("#bulk-title").render())
        assert modal.query_one("#bulk-textarea").text == "@alice"

    modal.dismiss = MagicMock()
    modal.query_one = MagicMock(return_value=SimpleNamespace(text="a, b"))
    modal.action_save()
    modal.dismiss.assert_called_once_with("a, b")

    modal.dismiss = MagicMock()
    modal.query_one = MagicMock(return_value=SimpleNamespace(text="  \n "))
    modal.action_save()
    modal.dismiss.assert_called_once_with(None)

    modal.dismiss = MagicMock()
    modal.action_cancel()
    modal.dismiss.assert_called_once_with(None)

    modal.action_save = MagicMock()
    modal.on_save_pressed()
    modal.action_save.assert_called_once_with()

    modal.action_cancel = MagicMock()
    modal.on_cancel_pressed()
    modal.action_cancel.assert_called_once_with()


@pytest.mark.asyncio
async def test_import_path_modal_compose_and_actions(fake_service, clipboard):
    app = FollowListsApp(services=AppServices(usernames=fake_service), clipboard=clipboard)
    modal = ImportPathModal("~/exports/x.json")

    async with app.run_test() as pilot:
        app.push_screen(modal)
        await pilot.pause(0.05)
        assert modal.query_one("#import-input").value == "~/exports/x.json"

    modal.dismiss = MagicMock()
    modal.query_one = MagicMock(return_value=SimpleNamespace(value="  /tmp/in.json "))
    modal.action_submit()
    modal.dismiss.assert_called_once_with("/tmp/in.json")

    modal.dismiss = MagicMock()
    modal.query_one = MagicMock(return_value=SimpleNamespace(value="   "))
    modal.action_submit()
    modal.dismiss.assert_called_once_with(None)

    modal.action_submit = MagicMock()
    modal.on_input_submitted()
    modal.on_import_pressed()
    assert modal.action_submit.call_count == 2

    modal.action_cancel = MagicMock()
    modal.on_cancel_pressed()
    modal.action_cancel.assert_called_once_with()
