"""blocktail: the last N lines of a file, found by scanning backward in blocks."""

from __future__ import annotations

from loguru import logger

from .core import tail
from .errors import FileOpenError, InvalidArgument, TailError, TruncatedFileError
from .locate import BUFSIZE, locate_offset
from .materialize import Mode, materialize

__all__ = [
    "BUFSIZE",
    "FileOpenError",
    "InvalidArgument",
    "Mode",
    "TailError",
    "TruncatedFileError",
    "locate_offset",
    "materialize",
    "tail",
]

logger.disable(__name__)
