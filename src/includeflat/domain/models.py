from __future__ import annotations

"""
Preprocessor Domain Data Models.

Defines the value objects exchanged between the directive classifier,
the resolver and the recursive expander. Failures travel as explicit
result objects rather than exceptions so that every layer can decide
how far to propagate them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

# -----------------------------------------------------------------------------
# DIRECTIVES
# -----------------------------------------------------------------------------

class IncludeKind(str, Enum):
    """Delimiter family of an include directive."""
    LOCAL = "local"    # #include "file"
    GLOBAL = "global"  # #include <file>


@dataclass(frozen=True)
class IncludeToken:
    """
    A single parsed include directive.

    Attributes:
        kind: Quoted (LOCAL) or angle-bracket (GLOBAL) form.
        target: Relative path text found between the delimiters.
    """
    kind: IncludeKind
    target: str

    @property
    def is_local(self) -> bool:
        return self.kind is IncludeKind.LOCAL


@dataclass(frozen=True)
class Resolution:
    """
    Outcome of looking up an include target on disk.

    Attributes:
        token: The directive being resolved.
        including_file: Path of the file that contains the directive.
        line: 1-based line of the directive inside the including file.
        path: Resolved file path, or None when nothing matched.
    """
    token: IncludeToken
    including_file: str
    line: int
    path: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.path is not None

# -----------------------------------------------------------------------------
# ERRORS
# -----------------------------------------------------------------------------

class ErrorKind(str, Enum):
    """Failure categories of an expansion run."""
    TOP_LEVEL_OPEN = "top_level_open"
    UNRESOLVED_INCLUDE = "unresolved_include"
    INCLUDE_OPEN = "include_open"
    CYCLIC_INCLUDE = "cyclic_include"


@dataclass(frozen=True)
class ExpansionError:
    """
    First error discovered during a run.

    Attributes:
        kind: Failure category.
        message: Human-readable diagnostic line, as printed.
        target: Include target (or file) that could not be expanded.
        including_file: Immediate parent file of the failing directive.
        line: 1-based line number inside including_file (0 at top level).
    """
    kind: ErrorKind
    message: str
    target: str = ""
    including_file: str = ""
    line: int = 0

# -----------------------------------------------------------------------------
# TRAVERSAL BOOKKEEPING
# -----------------------------------------------------------------------------

@dataclass
class IncludeNode:
    """
    One visited file in the include tree.

    Children are appended in the order their directives are met, so a
    pre-order walk of the tree mirrors the layout of the flattened output.
    """
    path: str
    kind: Optional[IncludeKind] = None
    line: int = 0
    children: List["IncludeNode"] = field(default_factory=list)


@dataclass
class ExpansionStats:
    """Counters accumulated across all recursion frames of one run."""
    files_expanded: int = 0
    directives_resolved: int = 0
    lines_written: int = 0
    max_depth: int = 0


@dataclass(frozen=True)
class ExpansionResult:
    """
    Tagged result of an expansion (or a whole preprocess run).

    Attributes:
        ok: True only if every file in the include tree was processed.
        error: The first error encountered, when ok is False.
        root: Include tree gathered so far (partial on failure).
        stats: Traversal counters.
    """
    ok: bool
    error: Optional[ExpansionError] = None
    root: Optional[IncludeNode] = None
    stats: ExpansionStats = field(default_factory=ExpansionStats)
