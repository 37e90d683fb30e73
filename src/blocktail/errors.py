"""Exception hierarchy for blocktail.

Every error raised by the library derives from :class:`TailError`, so a
caller can catch the whole family or match one specific kind.
"""

from __future__ import annotations


class TailError(Exception):
    """Base exception for all blocktail errors."""


class InvalidArgument(TailError, ValueError):
    """An argument to ``tail()`` failed validation.

    Raised before any file is opened.
    """


class FileOpenError(TailError, OSError):
    """The file could not be opened (missing, unreadable, a directory...)."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot open {path}: {reason}")
        self.path = path
        self.reason = reason


class TruncatedFileError(TailError, OSError):
    """A read returned fewer bytes than the size snapshot promised.

    The file shrank between the size snapshot and the read. Stream mode may
    already have written earlier chunks when this is raised.

    Attributes:
        offset: Byte offset the short read started at.
        expected: Number of bytes requested.
        received: Number of bytes actually returned.
    """

    def __init__(self, offset: int, expected: int, received: int) -> None:
        super().__init__(
            f"File truncated during read: expected {expected} bytes at offset {offset}, got {received}"
        )
        self.offset = offset
        self.expected = expected
        self.received = received
