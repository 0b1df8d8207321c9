from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, loading and merging of
configuration sources (defaults, persisted session, explicit config file,
command-line overrides), pipeline execution, and result rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from includeflat.core.pipeline.engine import run_pipeline
from includeflat.core.pipeline.stages.validator import validate_config
from includeflat.domain.config import (
    SESSION_KEYS,
    get_default_config,
    load_config,
    load_config_file,
    save_config,
)
from includeflat.domain.run_models import RunResult
from includeflat.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from includeflat.interface.cli import args as cli_args
from includeflat.utils.i18n import i18n

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failed run, 2 bad input, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase (locale first: help texts are translated)
    requested_locale = cli_args.peek_locale(argv)
    if requested_locale and requested_locale != i18n.locale:
        i18n.load_locale(requested_locale)

    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console stderr, optional rotating file)
    log_level = "DEBUG" if args.debug else "INFO"
    log_file = get_default_log_path() if args.log_file == "" else args.log_file
    logging_conf = LoggingConfig(level=log_level, console=True, log_file=log_file)
    configure_logging(logging_conf)

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration (defaults vs persisted session)
    if args.use_defaults:
        base_conf = get_default_config()
    else:
        base_conf = load_config()

    if args.config_file:
        file_conf = load_config_file(args.config_file)
        if file_conf is None:
            msg = i18n.t("cli.errors.config_unreadable", path=args.config_file)
            logger.error(msg)
            print(f"ERROR: {msg}", file=sys.stderr)
            return 2
        base_conf = _merge_config(base_conf, file_conf)

    # 4. Map and merge command-line overrides
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)

    # 5. Schema validation and normalization
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if not requested_locale and clean_conf["locale"] != i18n.locale:
        i18n.load_locale(clean_conf["locale"])

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    # 6. Pre-flight input verification
    input_path = clean_conf.get("input_path", "")
    if not input_path:
        msg = i18n.t("cli.errors.no_input")
        logger.error(msg)
        parser.print_usage(sys.stderr)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2
    if not os.path.isfile(os.path.expanduser(input_path)):
        msg = i18n.t("cli.errors.path_not_exist", path=input_path)
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    if args.save_config:
        save_config(clean_conf)

    # 7. Pipeline execution phase
    logger.info(f"Targeting input file: {input_path}")
    try:
        # Keep stdout parseable when it carries JSON
        diagnostics = sys.stderr if args.json_output else None
        result = run_pipeline(clean_conf, diagnostics=diagnostics)
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return 130
    except Exception as e:
        msg = i18n.t("cli.errors.unexpected", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1

    # 8. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result, print_tree=bool(clean_conf["print_tree"]))

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known session keys are merged and None never overwrites a value.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k in SESSION_KEYS:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: RunResult, print_tree: bool = False) -> None:
    """
    Format and print the run result.

    Include diagnostics were already printed by the expander; this view
    only adds the status line, the statistics and the optional tree.

    Args:
        result: The run result to render.
        print_tree: Whether to append the include tree.
    """
    if not result.ok:
        print(i18n.t("cli.status.failed"), file=sys.stderr)
        if not result.error_kind:
            print(f"ERROR: {i18n.t('cli.errors.run_fail', error=result.error)}", file=sys.stderr)
    else:
        print(i18n.t("cli.status.success"))
        print(i18n.t("cli.status.output_file", path=result.output_path))
        print(i18n.t("cli.status.files", count=result.files_expanded))
        print(i18n.t("cli.status.directives", count=result.directives_resolved))
        print(i18n.t("cli.status.lines", count=result.lines_written))
        print(i18n.t("cli.status.depth", count=result.max_depth))

    if print_tree and result.tree_lines:
        print("\n" + i18n.t("cli.status.tree"))
        for line in result.tree_lines:
            print(f"  {line}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
