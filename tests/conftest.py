"""Shared pytest fixtures for the blocktail test suite.

Provides temporary log files, a reference implementation of "last N
lines" to check the block scanner against, and file wrappers that shrink
or grow the file on disk in the middle of a ``tail()`` call.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

import pytest
from loguru import logger

import blocktail.core


@pytest.fixture(autouse=True)
def quiet_logger():
    """Reset loguru after each test.

    The CLI tests install a stderr sink bound to pytest's capture stream;
    removing it keeps later tests from writing to a closed capture.
    """
    yield
    logger.remove()
    logger.disable("blocktail")


@pytest.fixture
def write_log(tmp_path: Path):
    """Factory fixture that writes *data* to a file under ``tmp_path``.

    Example::

        path = write_log(b"a\\nb\\n")
    """

    def _write(data: bytes, name: str = "app.log") -> Path:
        p = tmp_path / name
        p.write_bytes(data)
        return p

    return _write


@pytest.fixture
def numbered_lines():
    """Factory for ``count`` lines of varying length, newline-terminated.

    Line lengths cycle so separators do not fall on a regular stride
    relative to the block size.
    """

    def _make(count: int) -> bytes:
        return b"".join(b"entry-%05d %s\n" % (i, b"x" * (i % 41)) for i in range(count))

    return _make


_LINE_RE = re.compile(rb"[^\n]*\n|[^\n]+\Z")


def reference_offset(data: bytes, n: int) -> int:
    """Offset of the last *n* lines, computed by splitting the whole buffer."""
    lines = _LINE_RE.findall(data)
    return len(data) - sum(len(line) for line in lines[-n:])


class HookedFile:
    """A real binary file that runs *hook(path)* just before read number *fire_on*.

    Used to change the file on disk after ``tail()`` has taken its size
    snapshot.
    """

    def __init__(self, path: str, hook, fire_on: int = 1) -> None:
        self._f = open(path, "rb", buffering=0)
        self._path = path
        self._hook = hook
        self._fire_on = fire_on
        self.reads = 0

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self._f.seek(offset, whence)

    def read(self, size: int = -1) -> bytes:
        self.reads += 1
        if self.reads == self._fire_on:
            self._hook(self._path)
        return self._f.read(size)

    def close(self) -> None:
        self._f.close()

    @property
    def closed(self) -> bool:
        return self._f.closed


@pytest.fixture
def hooked_open(monkeypatch):
    """Replace ``blocktail.core.open_source`` with a :class:`HookedFile` factory.

    Returns an installer ``install(hook, fire_on=1)``; the list it returns
    collects every handle ``tail()`` opened so tests can check it was closed.
    """

    def _install(hook, fire_on: int = 1):
        opened = []

        def _open(path):
            f = HookedFile(path, hook, fire_on)
            opened.append(f)
            return f

        monkeypatch.setattr(blocktail.core, "open_source", _open)
        return opened

    return _install


def truncate_to(size: int):
    """Hook that truncates the file to *size* bytes."""
    return lambda path: os.truncate(path, size)


def append(data: bytes):
    """Hook that appends *data* to the file."""

    def _append(path):
        with open(path, "ab") as f:
            f.write(data)

    return _append
