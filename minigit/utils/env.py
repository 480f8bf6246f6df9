"""Environment utilities for Mini Git."""

from __future__ import annotations

import os
import sys
from pathlib import Path


def is_debug_mode() -> bool:
    """Check if debug mode is enabled.

    Returns:
        True if MINIGIT_DEBUG is set to a truthy value
    """
    val = os.environ.get("MINIGIT_DEBUG", "").lower()
    return val in ("1", "true", "yes", "on")


def log_debug(message: str) -> None:
    """Log debug message to stderr.

    Only outputs if MINIGIT_DEBUG is set.
    """
    if is_debug_mode():
        print(f"[minigit] {message}", file=sys.stderr)


def get_home_dir() -> Path:
    """Get user home directory.

    Returns:
        Path to home directory
    """
    return Path.home()


def get_global_minigit_dir() -> Path:
    """Get global config directory (~/.minigit).

    Returns:
        Path to global Mini Git config directory
    """
    return get_home_dir() / ".minigit"


def determine_project_root() -> Path:
    """Resolve the directory a command operates on.

    MINIGIT_PROJECT_ROOT wins over the current working directory.
    """
    val = os.environ.get("MINIGIT_PROJECT_ROOT")
    if isinstance(val, str) and val.strip():
        return Path(val.strip()).expanduser()
    return Path.cwd()
