"""Tests for CLI bootstrap helpers."""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import MagicMock, patch

import pytest

from follow_lists.cli import _configure_logging, _validate_api_url, main
from follow_lists.models import UserConfig


def _run(argv, *, config=None, tty=True):
    app_factory = MagicMock()
    code = main(
        argv,
        load_config_fn=lambda: config or UserConfig(),
        configure_logging_fn=lambda debug: None,
        validate_interactive_tty_fn=lambda: tty,
        app_factory=app_factory,
    )
    return code, app_factory


def test_main_runs_app_with_loaded_config() -> None:
    config = UserConfig(api_base_url="http://saved/api", request_timeout_seconds=10)
    code, app_factory = _run([], config=config)

    assert code == 0
    app_factory.assert_called_once_with(config=config)
    app_factory.return_value.run.assert_called_once_with()


def test_main_flags_override_config() -> None:
    code, app_factory = _run(
        ["--api-url", "https://other.example/api", "--timeout", "7", "--export-dir", "/tmp/x"],
        config=UserConfig(api_base_url="http://saved/api"),
    )

    assert code == 0
    config = app_factory.call_args.kwargs["config"]
    assert config.api_base_url == "https://other.example/api"
    assert config.request_timeout_seconds == 7
    assert config.export_dir == "/tmp/x"


@pytest.mark.parametrize("url", ["ftp://host/api", "not a url", "http://"])
def test_main_rejects_bad_api_url(url: str, capsys) -> None:
    code, app_factory = _run(["--api-url", url])

    assert code == 1
    app_factory.assert_not_called()
    assert "--api-url" in capsys.readouterr().err


def test_main_rejects_non_positive_timeout() -> None:
    code, app_factory = _run(["--timeout", "0"])
    assert code == 1
    app_factory.assert_not_called()


def test_main_requires_tty(capsys) -> None:
    code, app_factory = _run([], tty=False)

    assert code == 2
    app_factory.assert_not_called()
    assert "interactive TTY" in capsys.readouterr().err


def test_validate_api_url_accepts_http_and_https() -> None:
    assert _validate_api_url("http://localhost:3001/api") is None
    assert _validate_api_url("https://lists.example.com") is None


def test_configure_logging_disabled_without_debug() -> None:
    try:
        _configure_logging(False)
        assert logging.root.manager.disable == logging.CRITICAL
    finally:
        logging.disable(logging.NOTSET)


def test_configure_logging_debug_writes_rotating_file(tmp_path) -> None:
    before = list(logging.root.handlers)
    level = logging.root.level
    try:
        with patch("follow_lists.cli.get_config_dir", return_value=tmp_path):
            _configure_logging(True)
        added = [h for h in logging.root.handlers if h not in before]
        assert len(added) == 1
        assert isinstance(added[0], logging.handlers.RotatingFileHandler)
        assert added[0].baseFilename == str(tmp_path / "debug.log")
        assert logging.root.level == logging.DEBUG
    finally:
        for handler in logging.root.handlers[:]:
            if handler not in before:
                logging.root.removeHandler(handler)
                handler.close()
        logging.root.setLevel(level)
