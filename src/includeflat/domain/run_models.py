from __future__ import annotations

"""
Run Domain Data Models.

Defines the result structure handed from the pipeline engine to the
interface layer, together with the factory functions that build it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from includeflat.domain.models import ExpansionResult

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RunResult:
    """
    Unified result object of a complete preprocessing run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Diagnostic message in case of failure.
        error_kind: ErrorKind value of the failure ('' on success or for
            configuration errors caught before expansion).
        input_path: Root source file.
        output_path: Flattened output file.
        include_dirs: Effective search path, in lookup order.
        encoding: Text encoding used for input and output.
        files_expanded: Number of files streamed into the output.
        directives_resolved: Number of include directives followed.
        lines_written: Number of lines in the output file.
        max_depth: Deepest include nesting reached (root is 0).
        tree_lines: Rendered include tree.
        summary: Additional execution metadata.
    """
    ok: bool
    error: str

    input_path: str
    output_path: str
    include_dirs: List[str]
    encoding: str

    error_kind: str = ""

    files_expanded: int = 0
    directives_resolved: int = 0
    lines_written: int = 0
    max_depth: int = 0

    tree_lines: List[str] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        expansion: Optional[ExpansionResult] = None,
        tree_lines: Optional[List[str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> RunResult:
    """
    Create a failed run result instance.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        expansion: Partial expansion outcome, if the expander ran.
        tree_lines: Rendered partial include tree.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        RunResult: An immutable error result object.
    """
    kind = ""
    if expansion is not None and expansion.error is not None:
        kind = expansion.error.kind.value
    return _build(False, error, kind, cfg, expansion, tree_lines, summary_extra)


def create_success_result(
        cfg: Dict[str, Any],
        expansion: ExpansionResult,
        tree_lines: Optional[List[str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> RunResult:
    """
    Create a successful run result instance.

    Args:
        cfg: Final configuration used during execution.
        expansion: Outcome of the expander.
        tree_lines: Rendered include tree.
        summary_extra: Final execution metrics.

    Returns:
        RunResult: An immutable success result object.
    """
    return _build(True, "", "", cfg, expansion, tree_lines, summary_extra)


def _build(
        ok: bool,
        error: str,
        error_kind: str,
        cfg: Dict[str, Any],
        expansion: Optional[ExpansionResult],
        tree_lines: Optional[List[str]],
        summary_extra: Optional[Dict[str, Any]],
) -> RunResult:
    stats = expansion.stats if expansion is not None else None
    return RunResult(
        ok=ok,
        error=error,
        error_kind=error_kind,
        input_path=cfg.get("input_path", ""),
        output_path=cfg.get("output_path", ""),
        include_dirs=list(cfg.get("include_dirs", [])),
        encoding=cfg.get("encoding", ""),
        files_expanded=stats.files_expanded if stats else 0,
        directives_resolved=stats.directives_resolved if stats else 0,
        lines_written=stats.lines_written if stats else 0,
        max_depth=stats.max_depth if stats else 0,
        tree_lines=tree_lines or [],
        summary=summary_extra or {},
    )
