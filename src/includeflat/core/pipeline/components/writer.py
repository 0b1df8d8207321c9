from __future__ import annotations

"""
Output Writer Component.

A single append-only sink threaded through every recursion frame of one
expansion run. The top-level call constructs it once; nested frames only
ever append lines to it.
"""

from typing import TextIO

from includeflat.domain.constants import DEFAULT_ENCODING

# -----------------------------------------------------------------------------
# FILE OUTPUT MANAGEMENT
# -----------------------------------------------------------------------------

class OutputWriter:
    """
    Line-oriented, append-only writer over an open text stream.

    Attributes:
        lines_written: Number of lines appended so far.
    """

    def __init__(self, stream: TextIO):
        self._stream = stream
        self.lines_written = 0

    def write_line(self, text: str) -> None:
        """Append one line followed by a line terminator."""
        self._stream.write(text)
        self._stream.write("\n")
        self.lines_written += 1

    def flush(self) -> None:
        self._stream.flush()


def open_output_file(file_path: str, encoding: str = DEFAULT_ENCODING) -> TextIO:
    """
    Create or truncate the output file.

    Characters the target encoding cannot represent are replaced, the same
    way the reader treats undecodable input.

    Args:
        file_path: Target file path.
        encoding: Output text encoding.

    Raises:
        OSError: If the file cannot be opened for writing.
    """
    return open(file_path, "w", encoding=encoding, errors="replace")
