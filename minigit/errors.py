"""Exceptions raised by Mini Git."""


class MiniGitError(Exception):
    """Base class for errors that abort a Mini Git operation."""


class RepositoryLockedError(MiniGitError):
    """Raised when the repository lock cannot be acquired in time."""


class MalformedIndexError(MiniGitError):
    """Raised when the index is missing a section marker and cannot be updated."""


class UnsupportedPathError(MiniGitError):
    """Raised for paths that cannot be represented as a line of the index."""
