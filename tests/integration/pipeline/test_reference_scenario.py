from __future__ import annotations

"""
Integration test for the reference source tree.

The tree mixes local and global includes, nested relative lookups and a
final unresolvable directive. The expected output is everything up to the
failing line.
"""

import io
import os
from pathlib import Path

from includeflat.core.pipeline.engine import run_pipeline
from includeflat.core.preprocessor.expander import preprocess
from includeflat.domain.models import ErrorKind

SEARCH_PATH = ["sources/include1", "sources/include2"]
EXPECTED_DIAGNOSTIC = "unknown include file dummy.txt at file sources/a.cpp at line 8\n"


def test_reference_scenario_via_preprocess(sources_dir: Path, expected_partial_output: str) -> None:
    diag = io.StringIO()

    result = preprocess("sources/a.cpp", "sources/a.in", SEARCH_PATH, diagnostics=diag)

    assert not result.ok
    assert result.error.kind is ErrorKind.UNRESOLVED_INCLUDE
    assert diag.getvalue() == EXPECTED_DIAGNOSTIC
    assert (sources_dir / "a.in").read_text(encoding="utf-8") == expected_partial_output


def test_reference_scenario_stats(sources_dir: Path) -> None:
    result = preprocess("sources/a.cpp", "sources/a.in", SEARCH_PATH, diagnostics=io.StringIO())

    # a.cpp, b.h, c.h, std1.h, d.h, std2.h
    assert result.stats.files_expanded == 6
    assert result.stats.directives_resolved == 5
    assert result.stats.lines_written == 13
    assert result.stats.max_depth == 3


def test_reference_scenario_search_order_matters(sources_dir: Path) -> None:
    """Without include2 the d.h directive is the first failure."""
    diag = io.StringIO()

    preprocess("sources/a.cpp", "sources/a.in", ["sources/include1"], diagnostics=diag)

    d_h = os.path.join("sources", "dir1", "d.h")
    assert diag.getvalue() == f"unknown include file lib/std2.h at file {d_h} at line 2\n"


def test_reference_scenario_via_engine(sources_dir: Path, expected_partial_output: str) -> None:
    diag = io.StringIO()

    result = run_pipeline(
        {"input_path": "sources/a.cpp", "include_dirs": SEARCH_PATH, "print_tree": True},
        diagnostics=diag,
    )

    assert not result.ok
    assert result.output_path == "sources/a.in"
    assert diag.getvalue() == EXPECTED_DIAGNOSTIC
    assert (sources_dir / "a.in").read_text(encoding="utf-8") == expected_partial_output
    assert len(result.tree_lines) == 6
