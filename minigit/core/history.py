"""History reporting for Mini Git."""

from __future__ import annotations

from typing import Iterator, TextIO

from .index import IndexFile
from .models import CommitRecord

SEPARATOR = "-" * 33


class HistoryReporter:
    """Renders the commit log in append order (oldest first)."""

    def __init__(self, index: IndexFile):
        self.index = index

    def iter_log_lines(self) -> Iterator[str]:
        """Yield a separator per commit followed by its labeled lines."""
        for block in self.index.iter_commit_blocks():
            yield SEPARATOR
            yield from block

    def show_log(self, stream: TextIO) -> int:
        """Write the log to stream.

        Returns:
            Number of commit blocks written
        """
        count = 0
        for line in self.iter_log_lines():
            if line == SEPARATOR:
                count += 1
            print(line, file=stream)
        return count

    def list_commits(self) -> list[CommitRecord]:
        return list(self.index.iter_commit_records())

    def latest(self) -> CommitRecord | None:
        latest = None
        for record in self.index.iter_commit_records():
            latest = record
        return latest
