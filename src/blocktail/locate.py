"""Backward offset location: find where the last N lines of a file begin.

The file is scanned backward in fixed-size blocks, so memory stays bounded
by one block no matter how large the file or the line count is. Only the
size captured when the file was opened is ever considered; bytes appended
afterwards are invisible to the scan.
"""

from __future__ import annotations

from typing import BinaryIO, Optional, Tuple

from loguru import logger

from .errors import TruncatedFileError

BUFSIZE = 8192
SEPARATOR = b"\n"


def read_block(source: BinaryIO, offset: int, size: int) -> bytes:
    """Read exactly *size* bytes from *source* starting at *offset*.

    Raises:
        TruncatedFileError: If fewer than *size* bytes come back.
    """
    source.seek(offset)
    block = source.read(size)
    if len(block) < size:
        raise TruncatedFileError(offset, size, len(block))
    return block


def count_newlines(block: bytes, lines_remaining: int) -> Tuple[int, Optional[int]]:
    """Count separators in *block* from its last byte toward its first.

    Stops at the first separator that takes the count past
    *lines_remaining*.

    Returns:
        ``(found, index)`` where *index* is the position of the stopping
        separator inside *block*, or ``None`` if the block ran out first.
    """
    found = 0
    index = block.rfind(SEPARATOR)
    while index != -1:
        found += 1
        if found > lines_remaining:
            return found, index
        index = block.rfind(SEPARATOR, 0, index)
    return found, None


def locate_offset(source: BinaryIO, n_lines: int, size_at_open: int, bufsize: int = BUFSIZE) -> int:
    """Return the byte offset of the first byte of the last *n_lines* lines.

    The offset sits just past the (N+1)-th separator counted from the end,
    or at 0 when the file holds N lines or fewer. A final line with no
    trailing separator still counts as a line.

    Args:
        source: Seekable binary file object.
        n_lines: Number of trailing lines wanted (>= 1).
        size_at_open: File size captured when the file was opened.
        bufsize: Block size for the backward scan.

    Raises:
        TruncatedFileError: If the file shrank below *size_at_open*.
    """
    if size_at_open == 0:
        return 0

    if size_at_open <= bufsize:
        block_size = size_at_open
        position = 0
    else:
        block_size = bufsize
        position = size_at_open - bufsize

    lines_remaining = n_lines
    last_block = True
    scanned = 0

    while True:
        if position < 0:
            # Only the bytes before the previous block are left
            block_size = bufsize + position
            position = 0

        block = read_block(source, position, block_size)
        scanned += 1

        if last_block:
            if not block.endswith(SEPARATOR):
                # The unterminated final line uses up one line of the budget
                lines_remaining -= 1
            last_block = False

        found, index = count_newlines(block, lines_remaining)
        if index is not None:
            offset = position + index + 1
            logger.debug("Offset {} found after scanning {} block(s)", offset, scanned)
            return offset

        if position == 0:
            logger.debug("Start of file reached after {} block(s); fewer than {} lines", scanned, n_lines)
            return 0

        lines_remaining -= found
        position -= bufsize
