"""Utility modules for Mini Git."""

from .fs import (
    atomic_write,
    ensure_dir,
    exclusive_lock,
    read_bytes,
    read_lines,
    safe_json_load,
    write_bytes,
)
from .env import (
    determine_project_root,
    get_global_minigit_dir,
    get_home_dir,
    is_debug_mode,
    log_debug,
)

__all__ = [
    "atomic_write",
    "ensure_dir",
    "exclusive_lock",
    "read_bytes",
    "read_lines",
    "safe_json_load",
    "write_bytes",
    "determine_project_root",
    "get_global_minigit_dir",
    "get_home_dir",
    "is_debug_mode",
    "log_debug",
]
