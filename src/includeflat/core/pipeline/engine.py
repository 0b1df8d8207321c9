from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates one preprocessing run:
1. Validates configuration.
2. Resolves input/output paths and the effective search path.
3. Prepares the output directory.
4. Runs the include expander.
5. Renders the include tree and packages the result.
"""

import logging
import os
from typing import Any, Dict, Optional, TextIO

from includeflat.core.analysis.tree_renderer import render_include_tree
from includeflat.core.pipeline.stages.validator import validate_config
from includeflat.core.preprocessor.expander import is_same_file, preprocess
from includeflat.core.preprocessor.resolver import build_search_path
from includeflat.domain.constants import INCLUDE_PATH_ENV_VAR
from includeflat.domain.run_models import (
    RunResult,
    create_error_result,
    create_success_result,
)
from includeflat.infra.fs import (
    default_output_path,
    expand_user_path,
    missing_directories,
    safe_mkdir,
    split_path_list,
)

logger = logging.getLogger(__name__)


def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        diagnostics: Optional[TextIO] = None,
) -> RunResult:
    """
    Execute a full preprocessing run.

    Args:
        config: The configuration dictionary (raw or partial).
        diagnostics: Stream for include diagnostics (stdout when None).

    Returns:
        RunResult: Object containing status, metrics, and the include tree.
    """
    logger.info("Preprocessing started.")

    # -------------------------------------------------------------------------
    # 1) Config Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)

    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    # -------------------------------------------------------------------------
    # 2) Paths & Search Path
    # -------------------------------------------------------------------------
    input_path = expand_user_path(cfg["input_path"])
    if not input_path:
        msg = "No input file given."
        logger.error(msg)
        return create_error_result(msg, cfg)

    output_path = expand_user_path(cfg["output_path"]) or default_output_path(input_path)
    if is_same_file(input_path, output_path):
        msg = f"Output file would overwrite the input file: {output_path}"
        logger.error(msg)
        return create_error_result(msg, dict(cfg, input_path=input_path, output_path=output_path))

    search_path = build_search_path(
        [expand_user_path(d) for d in cfg["include_dirs"]],
        split_path_list(os.environ.get(INCLUDE_PATH_ENV_VAR)),
    )
    for missing in missing_directories(list(search_path)):
        logger.warning(f"Search path entry is not a directory: {missing}")

    cfg = dict(cfg, input_path=input_path, output_path=output_path, include_dirs=list(search_path))
    logger.debug(f"Search path: {list(search_path)}")

    # -------------------------------------------------------------------------
    # 3) Output Directory Preparation
    # -------------------------------------------------------------------------
    ok, err = safe_mkdir(os.path.dirname(output_path))
    if not ok:
        msg = f"Failed to create output directory for {output_path}: {err}"
        logger.critical(msg)
        return create_error_result(msg, cfg)

    # -------------------------------------------------------------------------
    # 4) Expansion
    # -------------------------------------------------------------------------
    expansion = preprocess(
        input_path,
        output_path,
        search_path,
        encoding=cfg["encoding"],
        diagnostics=diagnostics,
    )
    tree_lines = render_include_tree(expansion.root)

    summary = {
        "search_path": list(search_path),
        "tree": {
            "printed": bool(cfg["print_tree"]),
            "lines": len(tree_lines),
        },
    }

    if not expansion.ok:
        error = expansion.error
        logger.error(f"Preprocessing aborted [{error.kind.value}]: {error.message}")
        summary["failure"] = {
            "target": error.target,
            "including_file": error.including_file,
            "line": error.line,
        }
        return create_error_result(error.message, cfg, expansion, tree_lines, summary)

    stats = expansion.stats
    logger.info(
        f"Preprocessing completed: {stats.files_expanded} files, "
        f"{stats.lines_written} lines -> {output_path}"
    )
    return create_success_result(cfg, expansion, tree_lines, summary)
