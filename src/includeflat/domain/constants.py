from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to application-wide constants: versioning,
default artifact naming and the fixed diagnostic message formats emitted
while expanding include directives.
"""

from typing import List

CURRENT_CONFIG_VERSION = "1.0.0"
DEFAULT_ENCODING = "utf-8"
DEFAULT_LOCALE = "en"
SUPPORTED_LOCALES: List[str] = ["en", "ru"]

# Suffix used when no explicit output file is requested (a.cpp -> a.in)
DEFAULT_OUTPUT_SUFFIX = ".in"

# Environment variable holding extra search directories (os.pathsep separated)
INCLUDE_PATH_ENV_VAR = "INCLUDEFLAT_INCLUDE_PATH"

# -----------------------------------------------------------------------------
# DIAGNOSTIC FORMATS
# -----------------------------------------------------------------------------
# These lines are a stable, machine-greppable contract. They are never
# translated.
UNKNOWN_INCLUDE_FMT = "unknown include file {name} at file {file} at line {line}"
CYCLIC_INCLUDE_FMT = "cyclic include of {name} at file {file} at line {line}"
OPEN_INPUT_FAILED_FMT = "Error: failed to open input file: {path}"
OPEN_OUTPUT_FAILED_FMT = "Error: failed to open output file: {path}"
OUTPUT_IS_INPUT_FMT = "Error: output file is the input file: {path}"
