"""Helpers for the file, clipboard and browser side effects of UI actions."""

from __future__ import annotations

import logging
import os
import platform
import subprocess
import tempfile
import webbrowser
from collections.abc import Sequence
from pathlib import Path

from follow_lists.errors import MalformedDocumentError
from follow_lists.models import PROFILE_URL_TEMPLATE, HandleRecord, UserConfig

logger = logging.getLogger(__name__)

# Default export directory, relative to the home directory
DEFAULT_EXPORT_DIR = "follow-lists-exports"

SUBPROCESS_TIMEOUT = 5


def get_export_dir(config: UserConfig) -> Path:
    """Return the configured export directory, or the default under $HOME."""
    if config.export_dir:
        return Path(config.export_dir).expanduser()
    return Path.home() / DEFAULT_EXPORT_DIR


def write_export_file(*, content: str, export_dir: Path, filename: str) -> Path:
    """Write export content using atomic temp-file replacement."""
    filepath = export_dir / filename
    export_dir.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=export_dir, suffix=".tmp", prefix=".export-")
    closed = False
    try:
        os.write(fd, content.encode("utf-8"))
        os.close(fd)
        closed = True
        os.replace(tmp_path, filepath)
    except BaseException:
        if not closed:
            os.close(fd)
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
    return filepath


def read_import_file(path: Path) -> str:
    """Read an import document from disk.

    Raises:
        MalformedDocumentError: If the file cannot be read as UTF-8 text.
    """
    try:
        return path.expanduser().read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedDocumentError(f"Could not read import file {path}: {e}") from e


def build_copy_all_payload(records: Sequence[HandleRecord]) -> str:
    """One ``@username`` per line, in display order."""
    return "\n".join(record.handle for record in records)


def get_profile_url(record: HandleRecord) -> str:
    return PROFILE_URL_TEMPLATE.format(username=record.username)


def open_profile(record: HandleRecord) -> bool:
    """Open the record's profile page in the system browser."""
    url = get_profile_url(record)
    try:
        return webbrowser.open(url)
    except webbrowser.Error as e:
        logger.warning("Could not open %s: %s", url, e)
        return False


def get_clipboard_command_plan(system: str) -> tuple[list[list[str]], str] | None:
    """Return clipboard command candidates and input encoding for a platform."""
    if system == "Darwin":
        return ([["pbcopy"]], "utf-8")
    if system == "Linux":
        return ([["xclip", "-selection", "clipboard"], ["xsel", "--clipboard", "--input"]], "utf-8")
    if system == "Windows":
        return ([["clip"]], "utf-16")
    return None


def copy_to_clipboard(text: str) -> bool:
    """Copy text to the system clipboard. Returns True on success.

    Tries each platform clipboard tool in turn, with timeout protection.
    """
    try:
        system = platform.system()
        plan = get_clipboard_command_plan(system)
        if plan is None:
            logger.warning("Clipboard copy failed: unsupported platform %s", system)
            return False
        commands, encoding = plan
        payload = text.encode(encoding)
        for index, command in enumerate(commands):
            try:
                subprocess.run(  # nosec B603
                    command,
                    input=payload,
                    check=True,
                    shell=False,
                    timeout=SUBPROCESS_TIMEOUT,
                )
                break
            except (FileNotFoundError, subprocess.CalledProcessError):
                if index == len(commands) - 1:
                    raise
        return True
    except (
        subprocess.CalledProcessError,
        FileNotFoundError,
        subprocess.TimeoutExpired,
        OSError,
    ) as e:
        logger.warning("Clipboard copy failed: %s", e)
        return False


__all__ = [
    "DEFAULT_EXPORT_DIR",
    "build_copy_all_payload",
    "copy_to_clipboard",
    "get_clipboard_command_plan",
    "get_export_dir",
    "get_profile_url",
    "open_profile",
    "read_import_file",
    "write_export_file",
]
