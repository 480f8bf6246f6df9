"""Commit engine for Mini Git.

Creates snapshots of the tracked files and restores them. Both
operations work file by file: one unreadable or missing file is
reported and skipped, the rest proceed. Nothing is rolled back.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Callable

from ..utils.env import log_debug
from .identifiers import IdentifierGenerator
from .index import IndexFile
from .models import CheckoutResult, CommitRecord, CommitResult, FileOutcome, Outcome
from .repository import RepositoryStore

_LINE_BREAKS = re.compile(r"\r\n|\r|\n")


def current_timestamp(now: datetime | None = None) -> str:
    """Format wall-clock time like C ctime(), without the newline."""
    return (now or datetime.now()).ctime()


def normalize_message(message: str) -> str:
    """Fold line breaks so a message always fits on one index line."""
    return _LINE_BREAKS.sub(" ", message)


class CommitEngine:
    """Orchestrates snapshot creation and restoration."""

    def __init__(
        self,
        store: RepositoryStore,
        index: IndexFile,
        identifiers: IdentifierGenerator | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.store = store
        self.index = index
        self.identifiers = identifiers or IdentifierGenerator()
        self._clock = clock or datetime.now

    def commit(self, message: str) -> CommitResult:
        """Snapshot every tracked file and append a commit record.

        Args:
            message: Commit message

        Returns:
            CommitResult with the new id and one FileOutcome per tracked file
        """
        files = self.index.get_tracked_files()
        if not files:
            return CommitResult(success=False, outcome=Outcome.NO_TRACKED_FILES)

        message = normalize_message(message)

        contents: dict[str, bytes | None] = {}
        for path in files:
            try:
                contents[path] = self.store.read_file(path)
            except OSError as e:
                log_debug(f"Cannot read {path}: {e}")
                contents[path] = None

        payload = b"".join(c for c in contents.values() if c is not None)
        commit_id = self.identifiers.generate(payload + message.encode("utf-8", "surrogateescape"))

        self.store.create_snapshot_directory(commit_id)
        outcomes: list[FileOutcome] = []
        for path in files:
            content = contents[path]
            if content is None:
                outcomes.append(FileOutcome(path, Outcome.FILE_UNREADABLE_AT_COMMIT_TIME, "unreadable"))
                continue
            try:
                self.store.write_snapshot_file(commit_id, path, content)
            except (OSError, ValueError) as e:
                log_debug(f"Cannot snapshot {path}: {e}")
                outcomes.append(FileOutcome(path, Outcome.FILE_UNREADABLE_AT_COMMIT_TIME, str(e)))
                continue
            outcomes.append(FileOutcome(path, Outcome.CAPTURED))

        record = CommitRecord(
            id=commit_id,
            message=message,
            timestamp=current_timestamp(self._clock()),
        )
        self.index.append_commit_record(record)

        return CommitResult(
            success=True,
            outcome=Outcome.OK,
            commit_id=commit_id,
            record=record,
            files=outcomes,
        )

    def checkout(self, commit_id: str) -> CheckoutResult:
        """Restore currently tracked files from a commit's snapshot.

        Files tracked now but absent from the snapshot are left untouched.
        Files in the snapshot that are no longer tracked are ignored.

        Args:
            commit_id: Id of the commit to restore

        Returns:
            CheckoutResult with one FileOutcome per tracked file
        """
        if not self.store.snapshot_directory_exists(commit_id):
            return CheckoutResult(success=False, outcome=Outcome.COMMIT_NOT_FOUND, commit_id=commit_id)

        outcomes: list[FileOutcome] = []
        for path in self.index.get_tracked_files():
            content = self.store.read_snapshot_file(commit_id, path)
            if content is None:
                outcomes.append(FileOutcome(path, Outcome.FILE_MISSING_FROM_SNAPSHOT))
                continue
            try:
                self.store.write_file(path, content)
            except OSError as e:
                log_debug(f"Cannot restore {path}: {e}")
                outcomes.append(FileOutcome(path, Outcome.RESTORE_FAILED, str(e)))
                continue
            outcomes.append(FileOutcome(path, Outcome.RESTORED))

        return CheckoutResult(success=True, outcome=Outcome.OK, commit_id=commit_id, files=outcomes)
