from __future__ import annotations

"""
Configuration Validation Service.

Acts as the gatekeeper between untrusted configuration sources (CLI flags,
JSON files) and the engine. Handles type coercion and default value
injection so the engine only ever sees a well-formed dictionary.
"""

import codecs
import logging
from typing import Any, Dict, List, Tuple

from includeflat.domain.config import get_default_config
from includeflat.domain.constants import SUPPORTED_LOCALES

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: A tuple containing the normalized
                                          configuration and a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Schema Definition
    path_fields = ["input_path", "output_path"]
    string_fields = ["encoding", "locale"]
    bool_fields = ["print_tree"]
    list_fields = ["include_dirs"]

    # 3. Field Processing & Normalization
    for field in path_fields:
        merged[field] = _as_path(
            merged.get(field), defaults.get(field, ""), field, warnings, strict
        )

    for field in string_fields:
        merged[field] = _as_str(
            merged.get(field), defaults.get(field, ""), field, warnings, strict
        )

    for field in bool_fields:
        merged[field] = _as_bool(
            merged.get(field), defaults.get(field, False), field, warnings, strict
        )

    for field in list_fields:
        merged[field] = _as_list_str(
            merged.get(field), defaults.get(field, []), field, warnings, strict
        )

    # 4. Domain-Specific Normalization
    merged["encoding"] = _normalize_encoding(merged["encoding"], defaults["encoding"], warnings, strict)
    merged["locale"] = _normalize_locale(merged["locale"], defaults["locale"], warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_path(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """
    Validate path inputs without altering them.

    Unlike plain strings, paths keep surrounding whitespace: it can be part
    of a real file name. Only a blank value falls back.
    """
    if isinstance(value, str):
        return value if value.strip() else fallback
    return _as_str(value, fallback, field, warnings, strict)


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "да"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "нет"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is an ordered list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return list(fallback)

    # CSV string to list conversion for CLI/JSON convenience
    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        warnings.append(f"Field '{field}' converted from CSV string to list.")
        return items

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_encoding(encoding: str, fallback: str, warnings: List[str], strict: bool) -> str:
    """Reject codec names Python does not know."""
    try:
        codecs.lookup(encoding)
    except LookupError:
        if strict:
            raise ValueError(f"Unknown encoding '{encoding}'.")
        warnings.append(f"Unknown encoding '{encoding}'. Using '{fallback}'.")
        return fallback
    return encoding


def _normalize_locale(locale: str, fallback: str, warnings: List[str], strict: bool) -> str:
    """Restrict the CLI language to the shipped locale files."""
    loc = locale.lower()
    if loc in SUPPORTED_LOCALES:
        return loc
    if strict:
        raise ValueError(f"Unsupported locale '{locale}'.")
    warnings.append(f"Unsupported locale '{locale}'. Using '{fallback}'.")
    return fallback
