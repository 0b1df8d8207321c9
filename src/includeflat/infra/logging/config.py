from __future__ import annotations

"""
Logging Settings.

A preprocessing run emits a handful of INFO lines plus one DEBUG line per
resolved directive, so the defaults favour small log segments: a long
`--debug` session over a large include tree rolls over instead of growing
one file without bound.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

# Accepted spellings of --debug / config level names
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for one call to ``configure_logging``.

    Attributes:
        level: Threshold name ('DEBUG' traces every include resolution).
        console: Mirror records to stderr, keeping stdout for diagnostics.
        log_file: Rotating log file, or None for console only.
        max_bytes: Segment size that triggers a rollover.
        backup_count: Rolled-over segments kept next to the active file.
        console_fmt: Terminal line layout.
        file_fmt: Log file line layout (adds time and logger name).
        datefmt: Timestamp layout for the log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 256 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s: %(message)s"
    file_fmt: str = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
