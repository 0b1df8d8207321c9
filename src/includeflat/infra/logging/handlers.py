from __future__ import annotations

"""
Handler factories for the includeflat log pipeline.

Every handler created here carries a marker attribute. Re-configuration
removes marked handlers only, so pytest's capture handlers or handlers
installed by an embedding program survive a second ``configure_logging``.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

_HANDLER_TAG_ATTR: str = "_includeflat_handler"


def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open the log file for appending, creating its directory first.

    An unwritable log location only costs the log: a warning goes to
    stderr and the run continues with console logging.

    Args:
        log_file: Path given by --log-file (or the default log path).
        level_int: Threshold for this handler.
        formatter: Line layout for file records.
        max_bytes: Rollover size.
        backup_count: Segments to keep.

    Returns:
        Optional[RotatingFileHandler]: The handler, or None if the file
        could not be opened.
    """
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(parent, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: log file '{log_file}' unavailable ({e}); logging to console only\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
