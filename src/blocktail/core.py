"""Public call surface: validate, open, snapshot, locate, materialize, close.

``tail()`` owns the file handle for the duration of one call and releases
it on every exit path, including truncation detected mid-read.
"""

from __future__ import annotations

import codecs
import os
from typing import BinaryIO, List, Optional, Union

from loguru import logger

from .errors import FileOpenError, InvalidArgument, TruncatedFileError
from .locate import BUFSIZE, locate_offset
from .materialize import Mode, materialize

PathArg = Union[str, "os.PathLike[str]"]


def _validate_path(path) -> str:
    if isinstance(path, os.PathLike):
        path = os.fspath(path)
    if not isinstance(path, str):
        raise InvalidArgument(f"path must be a string, got {type(path).__name__}")
    if not path:
        raise InvalidArgument("path must not be empty")
    if "\0" in path:
        raise InvalidArgument("path must not contain a NUL byte")
    return path


def _validate_n_lines(n_lines) -> int:
    # bool is an int subclass but never a meaningful line count
    if isinstance(n_lines, bool):
        raise InvalidArgument("n_lines must be a positive integer, got bool")
    if isinstance(n_lines, float):
        if not n_lines.is_integer():
            raise InvalidArgument(f"n_lines must be a whole number, got {n_lines}")
        n_lines = int(n_lines)
    if not isinstance(n_lines, int):
        raise InvalidArgument(f"n_lines must be a positive integer, got {type(n_lines).__name__}")
    if n_lines < 1:
        raise InvalidArgument(f"n_lines must be a positive integer, got {n_lines}")
    return n_lines


def _validate_bufsize(bufsize) -> int:
    if isinstance(bufsize, bool) or not isinstance(bufsize, int):
        raise InvalidArgument(f"bufsize must be a positive integer, got {type(bufsize).__name__}")
    if bufsize < 1:
        raise InvalidArgument(f"bufsize must be a positive integer, got {bufsize}")
    return bufsize


def _validate_encoding(encoding) -> str:
    if not isinstance(encoding, str):
        raise InvalidArgument(f"encoding must be a string, got {type(encoding).__name__}")
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise InvalidArgument(f"unknown encoding: {encoding}")
    return encoding


def _validate_stream(stream) -> Mode:
    if stream is None or stream is True:
        return Mode.STREAM
    if stream is False:
        return Mode.TABLE
    raise InvalidArgument(f"stream must be a boolean, got {type(stream).__name__}")


def open_source(path: str) -> BinaryIO:
    """Open *path* for unbuffered binary reading.

    Every block read goes to the file itself, so a file that shrank after
    the size snapshot is seen as a short read.

    Raises:
        FileOpenError: If the underlying ``open`` fails.
    """
    try:
        return open(path, "rb", buffering=0)
    except OSError as e:
        raise FileOpenError(path, e.strerror or str(e)) from e


def snapshot_size(source: BinaryIO) -> int:
    """Return the current size of *source* by seeking to its end."""
    return source.seek(0, os.SEEK_END)


def tail(
    path: PathArg,
    n_lines: int,
    stream: Optional[bool] = None,
    *,
    sink: Optional[BinaryIO] = None,
    encoding: str = "utf-8",
    bufsize: int = BUFSIZE,
) -> Optional[List[str]]:
    """Output the last *n_lines* lines of the file at *path*.

    Args:
        path: File to read. Must be a non-empty string or path-like.
        n_lines: Number of trailing lines (positive whole number).
        stream: ``None`` or ``True`` streams the bytes to *sink* and returns
            ``None``; ``False`` returns the lines as a list of strings.
        sink: Binary writable for stream mode; defaults to stdout.
        encoding: Codec used to decode lines in table mode.
        bufsize: Block size for both the backward scan and the re-read.

    Raises:
        InvalidArgument: Bad *path*, *n_lines*, *stream*, *encoding* or
            *bufsize*; raised before I/O.
        FileOpenError: The file could not be opened.
        TruncatedFileError: The file shrank while it was being read.
    """
    path = _validate_path(path)
    n_lines = _validate_n_lines(n_lines)
    mode = _validate_stream(stream)
    encoding = _validate_encoding(encoding)
    bufsize = _validate_bufsize(bufsize)

    source = open_source(path)
    try:
        size = snapshot_size(source)
        logger.debug("Tailing {} lines of {} ({} bytes, {} mode)", n_lines, path, size, mode.value)
        offset = locate_offset(source, n_lines, size, bufsize)
        return materialize(source, offset, size, mode, sink=sink, encoding=encoding, bufsize=bufsize)
    except TruncatedFileError as e:
        logger.warning("{} shrank while reading: {}", path, e)
        raise
    finally:
        source.close()

