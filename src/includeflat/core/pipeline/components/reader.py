from __future__ import annotations

"""
Resilient Source Reading Component.

Opens source files for line-by-line consumption. Opening is kept separate
from iteration so callers can tell "file cannot be opened" apart from the
content that follows. Undecodable byte sequences are replaced instead of
aborting the run.
"""

from typing import Iterator, TextIO

from includeflat.domain.constants import DEFAULT_ENCODING

# -----------------------------------------------------------------------------
# STREAM READING OPERATIONS
# -----------------------------------------------------------------------------

def open_source(file_path: str, encoding: str = DEFAULT_ENCODING) -> TextIO:
    """
    Open a source file for reading.

    Args:
        file_path: Path to the target file.
        encoding: Text encoding of the file.

    Returns:
        TextIO: Open handle; the caller owns and closes it.

    Raises:
        OSError: If the path is missing, a directory, or unreadable.
    """
    return open(file_path, "r", encoding=encoding, errors="replace")


def iter_lines(handle: TextIO) -> Iterator[str]:
    """
    Yield the lines of an open handle without their terminators.

    Universal newline mode already folds '\\r\\n' and '\\r' into '\\n',
    so only a single trailing '\\n' has to be removed.
    """
    for line in handle:
        if line.endswith("\n"):
            line = line[:-1]
        yield line
