from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema, including help messages,
argument types, and defaults. Provides logic to translate raw argparse
namespaces into domain-compatible configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional, Sequence

from includeflat.domain.constants import SUPPORTED_LOCALES
from includeflat.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the IncludeFlat CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="includeflat",
        description=i18n.t("app.description"),
    )

    # --- Path Management ---
    p.add_argument(
        "input_path",
        nargs="?",
        default=None,
        help=i18n.t("cli.args.input"),
    )
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help=i18n.t("cli.args.output"),
    )

    # --- Search Path ---
    p.add_argument(
        "-I", "--include-dir",
        dest="include_dir",
        action="append",
        default=None,
        metavar="DIR",
        help=i18n.t("cli.args.include_dir"),
    )
    p.add_argument(
        "--include-dirs",
        dest="include_dirs_csv",
        default=None,
        metavar="DIR[,DIR...]",
        help=i18n.t("cli.args.include_dirs"),
    )
    p.add_argument(
        "--encoding",
        default=None,
        help=i18n.t("cli.args.encoding"),
    )

    # --- Configuration Sources ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        metavar="FILE",
        help=i18n.t("cli.args.config"),
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help=i18n.t("cli.args.defaults"),
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help=i18n.t("cli.args.save"),
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help=i18n.t("cli.args.dump"),
    )

    # --- Reporting ---
    p.add_argument(
        "--tree",
        action="store_true",
        help=i18n.t("cli.args.tree"),
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help=i18n.t("cli.args.json"),
    )
    p.add_argument(
        "--locale",
        choices=SUPPORTED_LOCALES,
        default=None,
        help=i18n.t("cli.args.locale"),
    )

    # --- Diagnostics ---
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        nargs="?",
        const="",
        metavar="FILE",
        help=i18n.t("cli.args.log_file"),
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug"),
    )

    return p


def peek_locale(argv: Optional[Sequence[str]]) -> Optional[str]:
    """
    Extract '--locale' before the full parser exists.

    Help texts are translated at parser construction time, so the
    language has to be known first.
    """
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--locale", choices=SUPPORTED_LOCALES, default=None)
    known, _ = pre.parse_known_args(argv)
    return known.locale

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a domain configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["input_path"] = args.input_path
    overrides["output_path"] = args.output_path
    overrides["encoding"] = args.encoding
    overrides["locale"] = args.locale

    # Search path: repeated -I first, then the CSV form, order preserved
    include_dirs: List[str] = list(args.include_dir or [])
    include_dirs.extend(_split_csv(args.include_dirs_csv) or [])
    overrides["include_dirs"] = include_dirs or None

    if args.tree:
        overrides["print_tree"] = True

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
