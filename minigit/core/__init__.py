"""Core modules for Mini Git."""

from .controller import MiniGitController
from .engine import CommitEngine
from .history import HistoryReporter
from .identifiers import IdentifierGenerator, generate
from .index import IndexFile
from .models import (
    CheckoutResult,
    CommitRecord,
    CommitResult,
    FileOutcome,
    InitResult,
    Outcome,
    StatusReport,
    TrackResult,
)
from .repository import RepositoryStore

__all__ = [
    "MiniGitController",
    "CommitEngine",
    "HistoryReporter",
    "IdentifierGenerator",
    "generate",
    "IndexFile",
    "CheckoutResult",
    "CommitRecord",
    "CommitResult",
    "FileOutcome",
    "InitResult",
    "Outcome",
    "StatusReport",
    "TrackResult",
    "RepositoryStore",
]
