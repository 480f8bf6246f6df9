"""Configuration schemas for Mini Git.

Defines dataclasses for all configuration structures.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

DEFAULT_REPO_DIR = ".mini_git"
DEFAULT_HASH_ALGORITHM = "sha256"
DEFAULT_ID_LENGTH = 7
MIN_ID_LENGTH = 4
MAX_ID_LENGTH = 64


def _coerce_algorithm(val: object) -> str:
    if not isinstance(val, str):
        return DEFAULT_HASH_ALGORITHM
    name = val.strip().lower()
    # shake_* digests have no fixed length
    if name not in hashlib.algorithms_guaranteed or name.startswith("shake_"):
        return DEFAULT_HASH_ALGORITHM
    return name


def _coerce_id_length(val: object) -> int:
    if isinstance(val, bool) or not isinstance(val, int):
        return DEFAULT_ID_LENGTH
    return max(MIN_ID_LENGTH, min(MAX_ID_LENGTH, val))


def _coerce_seconds(val: object, default: float) -> float:
    if isinstance(val, bool) or not isinstance(val, (int, float)) or val <= 0:
        return default
    return float(val)


def _coerce_repo_dir(val: object) -> str:
    if isinstance(val, str) and val.strip() and val.strip() not in {".", ".."}:
        return val.strip()
    return DEFAULT_REPO_DIR


@dataclass
class LockConfig:
    """Settings for the repository lock file."""
    timeout_seconds: float = 5.0
    stale_seconds: float = 30.0

    @classmethod
    def from_dict(cls, data: dict) -> LockConfig:
        """Create LockConfig from dictionary."""
        defaults = cls()
        return cls(
            timeout_seconds=_coerce_seconds(data.get("timeoutSeconds"), defaults.timeout_seconds),
            stale_seconds=_coerce_seconds(data.get("staleSeconds"), defaults.stale_seconds),
        )


@dataclass
class MiniGitConfig:
    """Main Mini Git configuration."""
    repo_dir: str = DEFAULT_REPO_DIR
    id_length: int = DEFAULT_ID_LENGTH
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    lock: LockConfig = field(default_factory=LockConfig)

    @classmethod
    def from_dict(cls, data: dict) -> MiniGitConfig:
        """Create MiniGitConfig from dictionary.

        Unknown keys are ignored and invalid values fall back to defaults.
        """
        lock_data = data.get("lock", {})
        return cls(
            repo_dir=_coerce_repo_dir(data.get("repoDir")),
            id_length=_coerce_id_length(data.get("idLength", DEFAULT_ID_LENGTH)),
            hash_algorithm=_coerce_algorithm(data.get("hashAlgorithm", DEFAULT_HASH_ALGORITHM)),
            lock=LockConfig.from_dict(lock_data if isinstance(lock_data, dict) else {}),
        )
