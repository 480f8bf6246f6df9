"""Mini Git controller - main orchestrator.

Wires configuration, repository store, index, commit engine and
history reporter into the operations exposed by the CLI.
"""

from __future__ import annotations

from pathlib import Path

from ..config import ConfigLoader, MiniGitConfig
from ..utils.env import log_debug
from .engine import CommitEngine
from .history import HistoryReporter
from .identifiers import IdentifierGenerator
from .index import IndexFile
from .models import (
    CheckoutResult,
    CommitResult,
    InitResult,
    Outcome,
    StatusReport,
    TrackResult,
)
from .repository import RepositoryStore


class MiniGitController:
    """Main controller for Mini Git operations."""

    def __init__(self, project_root: Path | str | None = None, config: MiniGitConfig | None = None):
        """Initialize controller.

        Args:
            project_root: Project root directory (defaults to cwd)
            config: Explicit configuration; loaded from disk when omitted
        """
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self._config_loader = ConfigLoader(project_root=self.project_root)
        self._config = config
        self._store: RepositoryStore | None = None
        self._engine: CommitEngine | None = None

    @property
    def config(self) -> MiniGitConfig:
        """Get current configuration."""
        if self._config is None:
            self._config = self._config_loader.config
        return self._config

    @property
    def store(self) -> RepositoryStore:
        """Get repository store (lazy init)."""
        if self._store is None:
            self._store = RepositoryStore(
                project_root=self.project_root,
                repo_dir=self.config.repo_dir,
                lock_config=self.config.lock,
            )
        return self._store

    @property
    def index(self) -> IndexFile:
        return IndexFile(self.store.index_path)

    @property
    def engine(self) -> CommitEngine:
        """Get commit engine (lazy init)."""
        if self._engine is None:
            self._engine = CommitEngine(
                store=self.store,
                index=self.index,
                identifiers=IdentifierGenerator(
                    length=self.config.id_length,
                    algorithm=self.config.hash_algorithm,
                ),
            )
        return self._engine

    @property
    def history(self) -> HistoryReporter:
        return HistoryReporter(self.index)

    def init(self) -> InitResult:
        """Initialize a repository in the project root."""
        if self.store.is_initialized():
            return self.store.initialize()
        with self.store.lock():
            return self.store.initialize()

    def track(self, path: str) -> TrackResult:
        """Add a file to the tracked set.

        Args:
            path: Path as given by the user, relative to the project root

        Returns:
            TrackResult with OK, ALREADY_TRACKED, FILE_NOT_FOUND or NOT_INITIALIZED
        """
        if not self.store.is_initialized():
            return TrackResult(success=False, outcome=Outcome.NOT_INITIALIZED, path=path)

        if not self.store.working_path(path).is_file():
            return TrackResult(success=False, outcome=Outcome.FILE_NOT_FOUND, path=path)

        with self.store.lock():
            added = self.index.append_tracked_file(path)

        if not added:
            return TrackResult(success=False, outcome=Outcome.ALREADY_TRACKED, path=path)
        return TrackResult(success=True, outcome=Outcome.OK, path=path)

    def commit(self, message: str) -> CommitResult:
        """Snapshot all tracked files under a new commit."""
        if not self.store.is_initialized():
            return CommitResult(success=False, outcome=Outcome.NO_TRACKED_FILES)

        with self.store.lock():
            result = self.engine.commit(message)

        if result.success:
            log_debug(f"Committed {result.commit_id} ({len(result.files)} files, {len(result.skipped)} skipped)")
        return result

    def checkout(self, commit_id: str) -> CheckoutResult:
        """Restore tracked files from a commit."""
        if not self.store.is_initialized():
            return CheckoutResult(success=False, outcome=Outcome.COMMIT_NOT_FOUND, commit_id=commit_id)

        with self.store.lock():
            return self.engine.checkout(commit_id)

    def log_lines(self) -> list[str]:
        """Return the formatted history as lines."""
        return list(self.history.iter_log_lines())

    def status(self) -> StatusReport:
        """Get repository status."""
        initialized = self.store.is_initialized()
        commits = self.history.list_commits() if initialized else []
        return StatusReport(
            initialized=initialized,
            project_root=str(self.project_root),
            repo_dir=str(self.store.repo_root),
            tracked_files=self.index.get_tracked_files() if initialized else [],
            commit_count=len(commits),
            latest_commit=commits[-1] if commits else None,
        )
