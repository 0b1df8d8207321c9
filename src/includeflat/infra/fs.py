from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation, directory creation and the
location of persistent application data. Acts as an abstraction over the
'os' module to ensure uniform behavior across Windows and Unix-like systems.
"""

import os
from typing import List, Optional, Tuple

from includeflat.domain.constants import DEFAULT_OUTPUT_SUFFIX

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "IncludeFlat"
UNIX_APP_DIR_NAME = ".includeflat"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/IncludeFlat
    - Linux/Mac: ~/.includeflat

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        # Read-only home: callers fall back to defaults when files are missing
        pass

    return os.path.abspath(path)


def expand_user_path(path: Optional[str]) -> str:
    """
    Expand a leading '~' in a path string.

    Everything else is kept verbatim: relative paths stay relative, so
    diagnostics show paths the way the user typed them, and '$' or
    surrounding spaces are treated as part of the file name.
    """
    if not path:
        return ""
    return os.path.expanduser(path)


def default_output_path(input_path: str) -> str:
    """
    Derive the output file next to the input (a.cpp -> a.in).

    Args:
        input_path: Root source file.

    Returns:
        str: Sibling path with the default output suffix.
    """
    stem, _ = os.path.splitext(input_path)
    return stem + DEFAULT_OUTPUT_SUFFIX


def split_path_list(value: Optional[str]) -> List[str]:
    """Split an os.pathsep separated directory list, dropping empty items."""
    if not value:
        return []
    return [p.strip() for p in value.split(os.pathsep) if p.strip()]

# -----------------------------------------------------------------------------
# FILESYSTEM VALIDATION API
# -----------------------------------------------------------------------------

def missing_directories(paths: List[str]) -> List[str]:
    """
    Identify search path entries that are not existing directories.

    Args:
        paths: Directories to inspect.

    Returns:
        List[str]: Entries that do not exist or are not directories.
    """
    return [p for p in paths if not os.path.isdir(p)]


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    if not path:
        return True, None
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)
