from __future__ import annotations

"""
Recursive Include Expander.

Performs a depth-first walk of the implicit include graph. Every plain line
is appended to the shared output writer; every directive line is replaced,
in place, by the fully expanded body of the file it references. The first
failure anywhere in the tree aborts the whole run and is reported once,
against the immediate including file and its own 1-based line number.
"""

import logging
import os
import sys
from typing import List, Optional, Sequence, TextIO

from includeflat.core.pipeline.components.reader import iter_lines, open_source
from includeflat.core.pipeline.components.writer import OutputWriter, open_output_file
from includeflat.core.preprocessor.directives import parse_directive
from includeflat.core.preprocessor.resolver import resolve
from includeflat.domain.constants import (
    CYCLIC_INCLUDE_FMT,
    DEFAULT_ENCODING,
    OPEN_INPUT_FAILED_FMT,
    OPEN_OUTPUT_FAILED_FMT,
    OUTPUT_IS_INPUT_FMT,
    UNKNOWN_INCLUDE_FMT,
)
from includeflat.domain.models import (
    ErrorKind,
    ExpansionError,
    ExpansionResult,
    ExpansionStats,
    IncludeKind,
    IncludeNode,
    IncludeToken,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# EXPANSION ENGINE
# -----------------------------------------------------------------------------

class IncludeExpander:
    """
    State of one top-level expansion run.

    Holds the pieces shared by every recursion frame: the output writer,
    the frozen search path, the stack of files currently open (for cycle
    detection) and the traversal counters. Per-file state (handle and line
    counter) lives on the Python stack inside ``expand``.
    """

    def __init__(
            self,
            writer: OutputWriter,
            search_path: Sequence[str],
            *,
            encoding: str = DEFAULT_ENCODING,
            diagnostics: Optional[TextIO] = None,
    ):
        self.writer = writer
        self.search_path = tuple(search_path)
        self.encoding = encoding
        self.stats = ExpansionStats()
        self.root: Optional[IncludeNode] = None
        self._diagnostics = diagnostics
        self._open_stack: List[str] = []

    def run(
            self,
            file_path: str,
            caller_file: Optional[str] = None,
            caller_line: int = 0,
    ) -> ExpansionResult:
        """Expand a file and wrap the outcome into a result object."""
        error = self.expand(file_path, caller_file, caller_line)
        self.stats.lines_written = self.writer.lines_written
        return ExpansionResult(
            ok=error is None,
            error=error,
            root=self.root,
            stats=self.stats,
        )

    def expand(
            self,
            file_path: str,
            caller_file: Optional[str] = None,
            caller_line: int = 0,
            parent: Optional[IncludeNode] = None,
            kind: Optional[IncludeKind] = None,
    ) -> Optional[ExpansionError]:
        """
        Stream one file into the writer, descending into its includes.

        Args:
            file_path: File to expand.
            caller_file: Including file, or None for the root file.
            caller_line: Directive line inside caller_file.
            parent: Tree node of the including file.
            kind: Directive form that led here.

        Returns:
            Optional[ExpansionError]: None on success, else the first error.
        """
        try:
            handle = open_source(file_path, self.encoding)
        except OSError as e:
            logger.debug(f"Cannot open {file_path}: {e}")
            if caller_file is None:
                return self._fail(
                    ErrorKind.TOP_LEVEL_OPEN,
                    OPEN_INPUT_FAILED_FMT.format(path=file_path),
                    target=file_path,
                )
            return self._fail(
                ErrorKind.INCLUDE_OPEN,
                UNKNOWN_INCLUDE_FMT.format(
                    name=os.path.basename(file_path), file=caller_file, line=caller_line
                ),
                target=os.path.basename(file_path),
                including_file=caller_file,
                line=caller_line,
            )

        node = IncludeNode(file_path, kind, caller_line)
        if parent is None:
            self.root = node
        else:
            parent.children.append(node)

        self._open_stack.append(_identity(file_path))
        self.stats.files_expanded += 1
        self.stats.max_depth = max(self.stats.max_depth, len(self._open_stack) - 1)
        logger.debug(f"Expanding {file_path} (depth {len(self._open_stack) - 1})")

        try:
            with handle:
                for line_number, line in enumerate(iter_lines(handle), start=1):
                    token = parse_directive(line)
                    if token is None:
                        self.writer.write_line(line)
                        continue

                    error = self._include(token, file_path, line_number, node)
                    if error is not None:
                        return error
        finally:
            self._open_stack.pop()

        return None

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _include(
            self,
            token: IncludeToken,
            file_path: str,
            line_number: int,
            node: IncludeNode,
    ) -> Optional[ExpansionError]:
        """Resolve one directive and recurse into its target."""
        resolution = resolve(token, file_path, self.search_path, line_number)

        if not resolution.found:
            return self._fail(
                ErrorKind.UNRESOLVED_INCLUDE,
                UNKNOWN_INCLUDE_FMT.format(name=token.target, file=file_path, line=line_number),
                target=token.target,
                including_file=file_path,
                line=line_number,
            )

        if _identity(resolution.path) in self._open_stack:
            return self._fail(
                ErrorKind.CYCLIC_INCLUDE,
                CYCLIC_INCLUDE_FMT.format(name=token.target, file=file_path, line=line_number),
                target=token.target,
                including_file=file_path,
                line=line_number,
            )

        self.stats.directives_resolved += 1
        return self.expand(resolution.path, file_path, line_number, node, token.kind)

    def _fail(self, kind: ErrorKind, message: str, **context) -> ExpansionError:
        """Report an error once, at the point of discovery."""
        logger.debug(f"Expansion aborted [{kind.value}]: {message}")
        self.writer.flush()
        self._report(message)
        return ExpansionError(kind=kind, message=message, **context)

    def _report(self, message: str) -> None:
        stream = self._diagnostics if self._diagnostics is not None else sys.stdout
        print(message, file=stream)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def expand(
        file_path: str,
        writer: OutputWriter,
        search_path: Sequence[str],
        caller_file: Optional[str] = None,
        caller_line: int = 0,
        *,
        encoding: str = DEFAULT_ENCODING,
        diagnostics: Optional[TextIO] = None,
) -> ExpansionResult:
    """
    Expand a single file into an existing writer.

    When caller_file is given, an unreadable file_path is reported as an
    include failure against that caller instead of a top-level failure.
    """
    expander = IncludeExpander(writer, search_path, encoding=encoding, diagnostics=diagnostics)
    return expander.run(file_path, caller_file, caller_line)


def preprocess(
        input_file: str,
        output_file: str,
        search_path: Sequence[str],
        *,
        encoding: str = DEFAULT_ENCODING,
        diagnostics: Optional[TextIO] = None,
) -> ExpansionResult:
    """
    Flatten input_file into output_file.

    Both files are opened up front; if either fails the expander is never
    invoked. An output path that names the input file is refused before
    anything is truncated. The output is truncated first and keeps whatever was written
    before an error aborted the run.

    Args:
        input_file: Root source file.
        output_file: Destination of the flattened text.
        search_path: Ordered include directories.
        encoding: Text encoding for input and output.
        diagnostics: Stream for diagnostic lines (stdout when None).

    Returns:
        ExpansionResult: Outcome of the run.
    """
    stream = diagnostics if diagnostics is not None else sys.stdout

    if is_same_file(input_file, output_file):
        message = OUTPUT_IS_INPUT_FMT.format(path=output_file)
        logger.debug(f"Refusing to overwrite the input file {input_file}")
        print(message, file=stream)
        return ExpansionResult(
            ok=False,
            error=ExpansionError(ErrorKind.TOP_LEVEL_OPEN, message, target=output_file),
        )

    try:
        with open_source(input_file, encoding):
            pass
    except OSError as e:
        logger.debug(f"Input open failure for {input_file}: {e}")
        message = OPEN_INPUT_FAILED_FMT.format(path=input_file)
        print(message, file=stream)
        return ExpansionResult(
            ok=False,
            error=ExpansionError(ErrorKind.TOP_LEVEL_OPEN, message, target=input_file),
        )

    try:
        out = open_output_file(output_file, encoding)
    except OSError as e:
        logger.debug(f"Output open failure for {output_file}: {e}")
        message = OPEN_OUTPUT_FAILED_FMT.format(path=output_file)
        print(message, file=stream)
        return ExpansionResult(
            ok=False,
            error=ExpansionError(ErrorKind.TOP_LEVEL_OPEN, message, target=output_file),
        )

    with out:
        writer = OutputWriter(out)
        expander = IncludeExpander(writer, search_path, encoding=encoding, diagnostics=diagnostics)
        return expander.run(input_file)


def _identity(path: str) -> str:
    """Canonical key used to detect a file that is already being expanded."""
    return os.path.normcase(os.path.realpath(path))


def is_same_file(first: str, second: str) -> bool:
    """True if both paths name the same file (symlinks and case folded)."""
    return _identity(first) == _identity(second)
