"""Repository storage for Mini Git.

Owns the on-disk layout (repository root, per-commit snapshot
directories, index file) and whole-file binary access to both the
snapshots and the working directory.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path, PurePath
from typing import Iterator

from ..config.types import LockConfig
from ..utils.env import log_debug
from ..utils.fs import atomic_write, ensure_dir, exclusive_lock, read_bytes, write_bytes
from .models import InitResult, Outcome

FILES_MARKER = "[FILES]"
COMMITS_MARKER = "[COMMITS]"


class RepositoryStore:
    """Manages the repository directory and snapshot storage."""

    COMMITS_DIR_NAME = "commits"
    INDEX_NAME = "index.txt"
    LOCK_SUFFIX = ".lock"

    def __init__(
        self,
        project_root: Path,
        repo_dir: str = ".mini_git",
        lock_config: LockConfig | None = None,
    ):
        """Initialize repository store.

        Args:
            project_root: Working directory that tracked paths are relative to
            repo_dir: Name of the repository directory inside project_root
            lock_config: Timeouts for the index lock
        """
        self.project_root = Path(project_root)
        self.repo_root = self.project_root / repo_dir
        self.commits_dir = self.repo_root / self.COMMITS_DIR_NAME
        self.index_path = self.repo_root / self.INDEX_NAME
        self.lock_config = lock_config or LockConfig()

    def is_initialized(self) -> bool:
        return self.index_path.is_file()

    def initialize(self) -> InitResult:
        """Create the repository layout if the index does not exist yet.

        Only the index file decides whether the repository exists; missing
        directories next to an existing index are left alone.

        Returns:
            InitResult with OK or ALREADY_INITIALIZED
        """
        if self.is_initialized():
            return InitResult(
                success=False,
                outcome=Outcome.ALREADY_INITIALIZED,
                repo_dir=str(self.repo_root),
            )

        ensure_dir(self.repo_root)
        ensure_dir(self.commits_dir)
        atomic_write(self.index_path, f"{FILES_MARKER}\n{COMMITS_MARKER}\n")
        log_debug(f"Initialized repository at {self.repo_root}")
        return InitResult(success=True, outcome=Outcome.OK, repo_dir=str(self.repo_root))

    @contextmanager
    def lock(self) -> Iterator[Path]:
        """Serialize index updates across processes."""
        ensure_dir(self.repo_root)
        lock_path = self.index_path.with_name(self.INDEX_NAME + self.LOCK_SUFFIX)
        with exclusive_lock(
            lock_path,
            timeout=self.lock_config.timeout_seconds,
            stale_after=self.lock_config.stale_seconds,
        ) as held:
            yield held

    def snapshot_dir(self, commit_id: str) -> Path:
        return self.commits_dir / commit_id

    def snapshot_directory_exists(self, commit_id: str) -> bool:
        """Check whether a snapshot directory exists for commit_id.

        Ids that are not a single plain path component never exist.
        """
        if not _is_plain_component(commit_id):
            return False
        return self.snapshot_dir(commit_id).is_dir()

    def snapshot_path(self, commit_id: str, relative_path: str) -> Path:
        """Map a tracked path to its location inside a snapshot.

        Absolute paths lose their anchor so they nest under the snapshot.

        Raises:
            ValueError: If the id is invalid or the path escapes the snapshot
        """
        if not _is_plain_component(commit_id):
            raise ValueError(f"Invalid commit id: {commit_id!r}")

        pure = PurePath(relative_path)
        parts = pure.parts[1:] if pure.anchor else pure.parts
        if not parts or ".." in parts:
            raise ValueError(f"Path cannot be stored in a snapshot: {relative_path}")
        return self.snapshot_dir(commit_id).joinpath(*parts)

    def create_snapshot_directory(self, commit_id: str) -> Path:
        return ensure_dir(self.snapshot_dir(commit_id))

    def write_snapshot_file(self, commit_id: str, relative_path: str, content: bytes) -> Path:
        """Write bytes into a snapshot, overwriting any existing copy."""
        target = self.snapshot_path(commit_id, relative_path)
        write_bytes(target, content)
        return target

    def snapshot_file_exists(self, commit_id: str, relative_path: str) -> bool:
        try:
            return self.snapshot_path(commit_id, relative_path).is_file()
        except ValueError:
            return False

    def read_snapshot_file(self, commit_id: str, relative_path: str) -> bytes | None:
        """Read a file from a snapshot.

        Returns:
            File bytes, or None if the snapshot holds no such file
        """
        if not self.snapshot_file_exists(commit_id, relative_path):
            return None
        try:
            return read_bytes(self.snapshot_path(commit_id, relative_path))
        except OSError as e:
            log_debug(f"Cannot read {relative_path} from snapshot {commit_id}: {e}")
            return None

    def working_path(self, path: str) -> Path:
        """Resolve a tracked path against the project root."""
        return self.project_root / path

    def read_file(self, path: str) -> bytes:
        """Read a working-directory file.

        Raises:
            OSError: If the file is missing or unreadable
        """
        return read_bytes(self.working_path(path))

    def write_file(self, path: str, content: bytes) -> None:
        """Overwrite a working-directory file in place, keeping its mode."""
        write_bytes(self.working_path(path), content)


def _is_plain_component(name: str) -> bool:
    if not name or name in (".", ".."):
        return False
    return "/" not in name and "\\" not in name and "\x00" not in name
