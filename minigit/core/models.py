"""Records and operation results for Mini Git."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Outcome(str, Enum):
    """Outcome of an operation or of one per-file step."""
    OK = "ok"
    CAPTURED = "captured"
    RESTORED = "restored"
    NOT_INITIALIZED = "not_initialized"
    ALREADY_INITIALIZED = "already_initialized"
    FILE_NOT_FOUND = "file_not_found"
    ALREADY_TRACKED = "already_tracked"
    NO_TRACKED_FILES = "no_tracked_files"
    COMMIT_NOT_FOUND = "commit_not_found"
    FILE_MISSING_FROM_SNAPSHOT = "file_missing_from_snapshot"
    FILE_UNREADABLE_AT_COMMIT_TIME = "file_unreadable_at_commit_time"
    RESTORE_FAILED = "restore_failed"


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """One entry of the commit log."""
    id: str
    message: str
    timestamp: str

    def to_lines(self) -> list[str]:
        """Render as the labeled lines stored in the index."""
        return [
            f"ID: {self.id}",
            f"Message: {self.message}",
            f"Time: {self.timestamp}",
        ]

    @classmethod
    def from_lines(cls, lines: list[str]) -> CommitRecord | None:
        """Parse labeled lines; returns None when no ID line is present."""
        fields: dict[str, str] = {}
        for line in lines:
            label, sep, value = line.partition(": ")
            if sep and label in ("ID", "Message", "Time") and label not in fields:
                fields[label] = value
        if not fields.get("ID"):
            return None
        return cls(
            id=fields["ID"],
            message=fields.get("Message", ""),
            timestamp=fields.get("Time", ""),
        )


@dataclass(frozen=True, slots=True)
class FileOutcome:
    """Result of a single per-file step during commit or checkout."""
    path: str
    outcome: Outcome
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome in (Outcome.CAPTURED, Outcome.RESTORED)


@dataclass
class InitResult:
    """Result of initializing a repository."""
    success: bool
    outcome: Outcome
    repo_dir: str = ""


@dataclass
class TrackResult:
    """Result of adding a file to tracking."""
    success: bool
    outcome: Outcome
    path: str = ""


@dataclass
class CommitResult:
    """Result of a commit operation."""
    success: bool
    outcome: Outcome
    commit_id: str = ""
    record: CommitRecord | None = None
    files: list[FileOutcome] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        """True when the commit succeeded but some files were skipped."""
        return self.success and any(not f.ok for f in self.files)

    @property
    def skipped(self) -> list[FileOutcome]:
        return [f for f in self.files if not f.ok]


@dataclass
class CheckoutResult:
    """Result of restoring a commit into the working directory."""
    success: bool
    outcome: Outcome
    commit_id: str = ""
    files: list[FileOutcome] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        """True when the checkout succeeded but some files were not restored."""
        return self.success and any(not f.ok for f in self.files)

    @property
    def restored(self) -> list[str]:
        return [f.path for f in self.files if f.outcome is Outcome.RESTORED]


@dataclass
class StatusReport:
    """Snapshot of repository state for display."""
    initialized: bool
    project_root: str
    repo_dir: str
    tracked_files: list[str] = field(default_factory=list)
    commit_count: int = 0
    latest_commit: CommitRecord | None = None
