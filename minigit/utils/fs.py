"""File system utilities for Mini Git.

Provides atomic writes, whole-file binary access, directory creation
and a lock-file primitive for serializing index updates.
"""

from __future__ import annotations

import json
import os
import secrets
import tempfile
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from ..errors import RepositoryLockedError


def atomic_write(file_path: Path | str, content: str | bytes, mode: str = "w") -> None:
    """Write content atomically using tempfile + rename pattern.

    Args:
        file_path: Target file path
        content: Content to write
        mode: Write mode ('w' for text, 'wb' for binary)
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Temp file must live in the target directory for os.replace to be atomic
    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp"
    )

    try:
        if "b" in mode:
            with os.fdopen(fd, mode) as f:
                f.write(content)
        else:
            with os.fdopen(fd, mode, encoding="utf-8", errors="surrogateescape", newline="\n") as f:
                f.write(content)
        os.replace(tmp_path, path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def read_bytes(file_path: Path | str) -> bytes:
    """Read a whole file as bytes.

    Raises:
        OSError: If the file is missing or unreadable
    """
    with open(file_path, "rb") as f:
        return f.read()


def write_bytes(file_path: Path | str, content: bytes) -> None:
    """Write bytes verbatim, creating parent directories as needed."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.write(content)


def read_lines(file_path: Path | str) -> list[str] | None:
    """Read a text file as a list of lines without line terminators.

    Bytes that are not valid UTF-8 come back as surrogate escapes, the
    same way the OS hands undecodable filenames to Python, so they
    survive a write through ``atomic_write``.

    Returns:
        List of lines, or None if the file cannot be read
    """
    try:
        with open(file_path, encoding="utf-8", errors="surrogateescape", newline="") as f:
            text = f.read()
    except OSError:
        return None

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def ensure_dir(dir_path: Path | str) -> Path:
    """Ensure directory exists, creating it if necessary.

    Args:
        dir_path: Directory path to create

    Returns:
        Path object for the directory
    """
    path = Path(dir_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def safe_json_load(file_path: Path | str, default: Any = None) -> Any:
    """Safely load JSON file with fallback.

    Args:
        file_path: Path to JSON file
        default: Default value if file doesn't exist or is invalid

    Returns:
        Parsed JSON or default value
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError):
        return default if default is not None else {}


@contextmanager
def exclusive_lock(
    lock_path: Path | str,
    timeout: float = 5.0,
    stale_after: float = 30.0,
    poll_interval: float = 0.05,
) -> Iterator[Path]:
    """Hold an exclusive lock file for the duration of the block.

    The lock is a file created with O_EXCL holding an owner token. A lock
    whose mtime is older than ``stale_after`` seconds is assumed abandoned
    and removed. On release the file is only removed if it still holds
    our token, so a holder whose lock was broken leaves the new owner's
    lock in place.

    Args:
        lock_path: Path of the lock file
        timeout: Seconds to wait before giving up
        stale_after: Age in seconds after which an existing lock is broken
        poll_interval: Seconds between attempts

    Raises:
        RepositoryLockedError: If the lock cannot be acquired in time
    """
    path = Path(lock_path)
    deadline = time.monotonic() + timeout

    while True:
        try:
            fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
            break
        except FileExistsError:
            try:
                age = time.time() - path.stat().st_mtime
            except FileNotFoundError:
                continue
            if age > stale_after:
                try:
                    path.unlink()
                except FileNotFoundError:
                    pass
                continue
            if time.monotonic() >= deadline:
                raise RepositoryLockedError(
                    f"Another Mini Git process holds the lock: {path}"
                ) from None
            time.sleep(poll_interval)

    token = f"{os.getpid()} {secrets.token_hex(8)}"
    try:
        with os.fdopen(fd, "w") as f:
            f.write(token)
        yield path
    finally:
        _release_lock(path, token)


def _release_lock(path: Path, token: str) -> None:
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            owner = f.read()
    except FileNotFoundError:
        return
    if owner != token:
        return
    try:
        path.unlink()
    except FileNotFoundError:
        pass
