"""Index and commit log for Mini Git.

The index is a line-oriented text file with two regions::

    [FILES]
    <tracked path>...
    [COMMITS]
    [COMMIT]
    ID: <id>
    Message: <message>
    Time: <timestamp>
    <blank line>

It is parsed fresh on every read. Reads are tolerant: a missing file
or a missing marker yields empty results. Writes rewrite the whole
file atomically and refuse to touch an index without both markers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from ..errors import MalformedIndexError, UnsupportedPathError
from ..utils.env import log_debug
from ..utils.fs import atomic_write, read_lines
from .models import CommitRecord
from .repository import COMMITS_MARKER, FILES_MARKER

COMMIT_MARKER = "[COMMIT]"
RESERVED_LINES = frozenset({FILES_MARKER, COMMITS_MARKER, COMMIT_MARKER, ""})


class IndexFile:
    """Reads and appends to the index/log file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def read_lines(self) -> list[str]:
        """Return all lines of the index, or an empty list if unreadable."""
        lines = read_lines(self.path)
        return lines if lines is not None else []

    def get_tracked_files(self) -> list[str]:
        """Return tracked paths in tracking order."""
        lines = self.read_lines()
        bounds = _files_region(lines)
        if bounds is None:
            return []
        start, end = bounds
        return [line for line in lines[start:end] if line]

    def is_tracked(self, path: str) -> bool:
        return path in self.get_tracked_files()

    def append_tracked_file(self, path: str) -> bool:
        """Add path at the end of the FILES region.

        Returns:
            True if added, False if the path was already tracked

        Raises:
            UnsupportedPathError: If path cannot be stored as an index line
            MalformedIndexError: If the index lacks its section markers
        """
        if path in RESERVED_LINES or "\n" in path or "\r" in path:
            raise UnsupportedPathError(f"Path cannot be tracked: {path!r}")

        lines = self.read_lines()
        bounds = _files_region(lines)
        if bounds is None:
            raise MalformedIndexError(f"Index is missing {FILES_MARKER} or {COMMITS_MARKER}: {self.path}")

        start, end = bounds
        if path in lines[start:end]:
            return False

        lines.insert(end, path)
        self._write(lines)
        log_debug(f"Tracking {path}")
        return True

    def append_commit_record(self, record: CommitRecord) -> None:
        """Append a commit block to the end of the log.

        Raises:
            MalformedIndexError: If the index lacks its section markers
        """
        lines = self.read_lines()
        if _files_region(lines) is None:
            raise MalformedIndexError(f"Index is missing {FILES_MARKER} or {COMMITS_MARKER}: {self.path}")

        lines.extend([COMMIT_MARKER, *record.to_lines(), ""])
        self._write(lines)
        log_debug(f"Appended commit {record.id}")

    def iter_commit_blocks(self) -> Iterator[list[str]]:
        """Yield the lines of each commit block in append order.

        A block runs from a [COMMIT] marker to the next blank line. The
        file is re-read on every call.
        """
        lines = self.read_lines()
        try:
            start = lines.index(COMMITS_MARKER) + 1
        except ValueError:
            return

        block: list[str] | None = None
        for line in lines[start:]:
            if line == COMMIT_MARKER:
                if block is not None:
                    yield block
                block = []
            elif line == "":
                if block is not None:
                    yield block
                    block = None
            elif block is not None:
                block.append(line)

        # Trailing block cut off by end of file
        if block is not None:
            yield block

    def iter_commit_records(self) -> Iterator[CommitRecord]:
        """Yield parsed commit records, skipping blocks without an ID."""
        for block in self.iter_commit_blocks():
            record = CommitRecord.from_lines(block)
            if record is None:
                log_debug(f"Skipping malformed commit block: {block!r}")
                continue
            yield record

    def _write(self, lines: list[str]) -> None:
        atomic_write(self.path, "\n".join(lines) + "\n")


def _files_region(lines: list[str]) -> tuple[int, int] | None:
    """Return the [start, end) slice of tracked-path lines, or None."""
    try:
        files_at = lines.index(FILES_MARKER)
        commits_at = lines.index(COMMITS_MARKER, files_at + 1)
    except ValueError:
        return None
    return files_at + 1, commits_at
