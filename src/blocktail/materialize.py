"""Forward re-read of the tail: stream raw chunks or build a list of lines.

Both output modes consume the same chunk generator, which reads from the
located offset up to the size snapshot taken at open time. Bytes appended
to the file during the call are never read.
"""

from __future__ import annotations

import enum
import sys
from typing import BinaryIO, Iterable, Iterator, List, Optional

from .locate import BUFSIZE, SEPARATOR, read_block


class Mode(enum.Enum):
    """Output mode for :func:`materialize`."""
    STREAM = "stream"
    TABLE = "table"


def iter_chunks(source: BinaryIO, offset: int, size_at_open: int, bufsize: int = BUFSIZE) -> Iterator[bytes]:
    """Yield the bytes from *offset* to *size_at_open* in *bufsize* chunks.

    The last chunk holds the remainder and may be shorter than *bufsize*.

    Raises:
        TruncatedFileError: If any chunk comes back short.
    """
    position = offset
    while position < size_at_open:
        size = min(bufsize, size_at_open - position)
        yield read_block(source, position, size)
        position += size


def split_lines(chunks: Iterable[bytes], encoding: str = "utf-8") -> List[str]:
    """Split a chunk sequence on ``\\n`` into decoded lines, in order.

    A line that straddles one or more chunk boundaries is carried over as a
    fragment and emitted once, whole. A final line without a trailing
    separator is kept; the empty string after a trailing separator is not.
    """
    lines: List[str] = []
    fragment = b""
    for chunk in chunks:
        parts = (fragment + chunk).split(SEPARATOR)
        fragment = parts.pop()
        lines.extend(p.decode(encoding, errors="replace") for p in parts)
    if fragment:
        lines.append(fragment.decode(encoding, errors="replace"))
    return lines


def materialize(
    source: BinaryIO,
    offset: int,
    size_at_open: int,
    mode: Mode,
    sink: Optional[BinaryIO] = None,
    encoding: str = "utf-8",
    bufsize: int = BUFSIZE,
) -> Optional[List[str]]:
    """Re-read the tail starting at *offset* and emit it in *mode*.

    In ``Mode.STREAM`` each chunk is written to *sink* (binary stdout by
    default) as soon as it is read, and ``None`` is returned. In
    ``Mode.TABLE`` the decoded lines are returned as a list.

    Raises:
        TruncatedFileError: If the file shrank below *size_at_open*.
    """
    chunks = iter_chunks(source, offset, size_at_open, bufsize)

    if mode is Mode.TABLE:
        return split_lines(chunks, encoding)

    out = sink if sink is not None else sys.stdout.buffer
    for chunk in chunks:
        out.write(chunk)
    out.flush()
    return None
