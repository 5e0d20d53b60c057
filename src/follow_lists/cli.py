"""CLI/bootstrap helpers for the follow-lists application."""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import sys
from collections.abc import Callable
from typing import Any

import httpx

from follow_lists.config import get_config_dir, load_config
from follow_lists.models import MAX_REQUEST_TIMEOUT_SECONDS, UserConfig

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level."""
    if not debug:
        # Default: suppress all logging (TUI captures stderr)
        logging.disable(logging.CRITICAL)
        return

    log_dir = get_config_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "debug.log"

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def _validate_interactive_tty() -> bool:
    """Return True when stdin/stdout are interactive terminals."""
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _validate_api_url(value: str) -> str | None:
    """Return an error message if ``value`` is not an absolute http(s) URL."""
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError) as e:
        return f"invalid URL: {e}"
    if url.scheme not in ("http", "https") or not url.host:
        return "URL must start with http:// or https:// and name a host"
    return None


def _apply_overrides(config: UserConfig, args: argparse.Namespace) -> UserConfig:
    """Layer command-line flags over the loaded config file."""
    return UserConfig(
        api_base_url=args.api_url or config.api_base_url,
        request_timeout_seconds=args.timeout or config.request_timeout_seconds,
        export_dir=args.export_dir or config.export_dir,
        version=config.version,
    )


def main(
    argv: list[str] | None = None,
    *,
    load_config_fn: Callable[[], UserConfig] = load_config,
    configure_logging_fn: Callable[[bool], None] = _configure_logging,
    validate_interactive_tty_fn: Callable[[], bool] = _validate_interactive_tty,
    app_factory: Callable[..., Any] | None = None,
) -> int:
    """Main entry point. Returns exit code."""
    parser = argparse.ArgumentParser(
        description="Manage following/followers handle lists backed by a list-storage API"
    )
    parser.add_argument(
        "--api-url",
        type=str,
        default=None,
        help="Base URL of the list-storage API (default: config value or http://localhost:3001/api)",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help=f"Request timeout in seconds (1-{MAX_REQUEST_TIMEOUT_SECONDS})",
    )
    parser.add_argument(
        "--export-dir",
        type=str,
        default=None,
        help="Directory for exported JSON files (default: ~/follow-lists-exports)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to file (~/.config/follow-lists/debug.log)",
    )
    args = parser.parse_args(argv)

    if args.api_url is not None:
        problem = _validate_api_url(args.api_url)
        if problem:
            print(f"Error: --api-url {problem}", file=sys.stderr)
            return 1
    if args.timeout is not None and args.timeout <= 0:
        print("Error: --timeout must be a positive number of seconds", file=sys.stderr)
        return 1

    configure_logging_fn(args.debug)
    config = _apply_overrides(load_config_fn(), args)
    logger.debug("follow-lists starting, api=%s", config.api_base_url)

    if not validate_interactive_tty_fn():
        print(
            "Error: follow-lists requires an interactive TTY for the full UI.",
            file=sys.stderr,
        )
        return 2

    if app_factory is None:
        from follow_lists.app import FollowListsApp as _FollowListsApp

        app_factory = _FollowListsApp

    app = app_factory(config=config)
    app.run()
    return 0


__all__ = [
    "_apply_overrides",
    "_configure_logging",
    "_validate_api_url",
    "_validate_interactive_tty",
    "main",
]
