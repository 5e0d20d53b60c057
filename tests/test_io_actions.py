"""Tests for file, clipboard, and browser helpers."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from follow_lists.errors import MalformedDocumentError
from follow_lists.io_actions import (
    DEFAULT_EXPORT_DIR,
    build_copy_all_payload,
    copy_to_clipboard,
    get_clipboard_command_plan,
    get_export_dir,
    get_profile_url,
    open_profile,
    read_import_file,
    write_export_file,
)
from follow_lists.models import UserConfig


class TestExportFiles:
    def test_write_export_file_writes_atomically(self, tmp_path) -> None:
        export_dir = tmp_path / "exports"

        out = write_export_file(
            content='{"following": []}',
            export_dir=export_dir,
            filename="x-usernames-2024-01-15.json",
        )

        assert out == export_dir / "x-usernames-2024-01-15.json"
        assert out.read_text(encoding="utf-8") == '{"following": []}'
        assert list(export_dir.glob(".export-*.tmp")) == []

    def test_write_export_file_cleans_temp_on_failure(self, tmp_path) -> None:
        with (
            patch("follow_lists.io_actions.os.replace", side_effect=OSError("disk full")),
            pytest.raises(OSError),
        ):
            write_export_file(content="x", export_dir=tmp_path, filename="out.json")

        assert list(tmp_path.iterdir()) == []

    def test_get_export_dir_prefers_config(self, tmp_path) -> None:
        assert get_export_dir(UserConfig(export_dir=str(tmp_path))) == tmp_path
        assert get_export_dir(UserConfig()) == Path.home() / DEFAULT_EXPORT_DIR


class TestImportFiles:
    def test_read_import_file(self, tmp_path) -> None:
        path = tmp_path / "in.json"
        path.write_text('{"followers": ["a"]}', encoding="utf-8")
        assert read_import_file(path) == '{"followers": ["a"]}'

    def test_missing_file_is_malformed(self, tmp_path) -> None:
        with pytest.raises(MalformedDocumentError):
            read_import_file(tmp_path / "nope.json")

    def test_binary_file_is_malformed(self, tmp_path) -> None:
        path = tmp_path / "in.json"
        path.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(MalformedDocumentError):
            read_import_file(path)


def test_build_copy_all_payload(make_record) -> None:
    records = [make_record(username="a"), make_record(username="b")]
    assert build_copy_all_payload(records) == "@a\n@b"
    assert build_copy_all_payload([]) == ""


def test_profile_url_and_open(make_record) -> None:
    record = make_record(username="alice")
    assert get_profile_url(record) == "https://x.com/alice"

    with patch("follow_lists.io_actions.webbrowser.open", return_value=True) as open_mock:
        assert open_profile(record) is True
    open_mock.assert_called_once_with("https://x.com/alice")


class TestClipboard:
    @pytest.mark.parametrize(
        ("system", "first_command", "encoding"),
        [
            ("Darwin", ["pbcopy"], "utf-8"),
            ("Linux", ["xclip", "-selection", "clipboard"], "utf-8"),
            ("Windows", ["clip"], "utf-16"),
        ],
    )
    def test_command_plan(self, system, first_command, encoding) -> None:
        commands, got_encoding = get_clipboard_command_plan(system)
        assert commands[0] == first_command
        assert got_encoding == encoding

    def test_unknown_platform_has_no_plan(self) -> None:
        assert get_clipboard_command_plan("Plan9") is None

    def test_linux_falls_back_to_xsel(self) -> None:
        calls: list[list[str]] = []

        def fake_run(command, **kwargs):
            calls.append(command)
            if command[0] == "xclip":
                raise FileNotFoundError("xclip")
            return subprocess.CompletedProcess(command, 0)

        with (
            patch("follow_lists.io_actions.platform.system", return_value="Linux"),
            patch("follow_lists.io_actions.subprocess.run", side_effect=fake_run),
        ):
            assert copy_to_clipboard("@alice") is True

        assert [c[0] for c in calls] == ["xclip", "xsel"]

    def test_all_tools_missing_returns_false(self) -> None:
        with (
            patch("follow_lists.io_actions.platform.system", return_value="Darwin"),
            patch("follow_lists.io_actions.subprocess.run", side_effect=FileNotFoundError()),
        ):
            assert copy_to_clipboard("@alice") is False
