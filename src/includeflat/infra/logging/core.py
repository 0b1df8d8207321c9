from __future__ import annotations

"""
Root logger setup for the includeflat CLI.

Records go through a QueueHandler on the root logger and are drained by a
QueueListener thread into the stderr and log file handlers. The expander
therefore never waits on log file I/O between lines. ``configure_logging``
is safe to call more than once: the CLI calls it per ``main()`` and tests
call ``main()`` repeatedly in one process.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from includeflat.infra.fs import get_user_data_dir
from includeflat.infra.logging.config import _LEVEL_MAP, LoggingConfig
from includeflat.infra.logging.handlers import (
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

# Attributes stored on the root logger
_CONFIGURED_FLAG_ATTR: str = "_includeflat_configured"
_QUEUE_LISTENER_ATTR: str = "_includeflat_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = "includeflat.log") -> str:
    """Location used by a bare ``--log-file``: ``<user data dir>/logs/<file_name>``."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Install the includeflat handlers on the root logger.

    A second call is a no-op unless ``force`` is set, in which case the
    previous listener is stopped and our handlers are replaced. Handlers
    owned by someone else are left attached.

    Args:
        cfg: Level, destinations and formats.
        force: Rebuild even if logging was already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    try:
        if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
            return root

        level_int = _parse_level(cfg.level)
        root.setLevel(level_int)

        _remove_our_handlers(root)
        _stop_existing_listener(root)

        sinks: List[logging.Handler] = []

        if cfg.console:
            sh = logging.StreamHandler(sys.stderr)
            sh.setLevel(level_int)
            sh.setFormatter(logging.Formatter(cfg.console_fmt))
            _tag_handler(sh)
            sinks.append(sh)

        if cfg.log_file:
            fh = _create_rotating_file_handler(
                cfg.log_file,
                level_int,
                logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
                cfg.max_bytes,
                cfg.backup_count,
            )
            if fh:
                sinks.append(fh)

        if not sinks:
            return root

        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
        queue_handler = QueueHandler(log_queue)
        _tag_handler(queue_handler)

        listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
        listener.start()
        root.addHandler(queue_handler)

        setattr(root, _QUEUE_LISTENER_ATTR, listener)
        setattr(root, _CONFIGURED_FLAG_ATTR, True)

        # Drain the queue before the interpreter exits
        atexit.register(_safe_stop_listener, listener)

        return root

    except (OSError, ValueError, TypeError) as e:
        # Bad format strings or a broken stderr: fall back to a plain handler
        _remove_our_handlers(root)
        _stop_existing_listener(root)

        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(logging.Formatter("includeflat (fallback logging) %(levelname)s: %(message)s"))
        _tag_handler(sh)
        root.addHandler(sh)

        root.warning(f"Logging setup failed ({e}); using a plain stderr handler.")
        return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Map a level name to its constant; unknown names mean INFO."""
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()


def _stop_existing_listener(root: logging.Logger) -> None:
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """
    Stop a listener that may already be stopped.

    Both the atexit hook and a forced reconfiguration can reach the same
    listener; ``QueueListener.stop`` clears ``_thread`` once it has joined.
    """
    if listener and getattr(listener, "_thread", None) is not None:
        listener.stop()
