from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the asynchronous QueueListener architecture, idempotency
of configuration, and log file rotation logic.
"""

import logging
import time
from pathlib import Path

import pytest

from includeflat.infra.logging import (
    _HANDLER_TAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    LoggingConfig,
    configure_logging,
    get_default_log_path,
)

pytestmark = pytest.mark.usefixtures("reset_logging")


def test_logging_idempotency() -> None:
    """Multiple config calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    root = logging.getLogger()
    initial_handler_count = len(root.handlers)

    configure_logging(cfg)
    assert len(root.handlers) == initial_handler_count, "Handlers were duplicated."


def test_force_reconfiguration_replaces_listener() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    root = logging.getLogger()
    first = getattr(root, _QUEUE_LISTENER_ATTR)

    configure_logging(LoggingConfig(level="DEBUG"), force=True)

    assert getattr(root, _QUEUE_LISTENER_ATTR) is not first
    assert root.level == logging.DEBUG


def test_log_file_receives_records(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "run.log"
    configure_logging(LoggingConfig(level="DEBUG", console=False, log_file=str(log_file)))

    logging.getLogger("includeflat.test").info("expansion finished")
    getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR).stop()
    setattr(logging.getLogger(), _QUEUE_LISTENER_ATTR, None)

    content = log_file.read_text(encoding="utf-8")
    assert "expansion finished" in content
    assert "includeflat.test" in content


def test_log_rotation(tmp_path: Path) -> None:
    """File rotation when the size limit is exceeded."""
    log_file = tmp_path / "test_rotate.log"
    cfg = LoggingConfig(
        level="DEBUG",
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1
    )

    configure_logging(cfg)
    logger = logging.getLogger("test_rotate")

    for _ in range(10):
        logger.debug("This is a long log message to trigger rotation." * 5)

    # Give time for the QueueListener to process
    time.sleep(0.5)

    assert log_file.exists()
    assert (tmp_path / "test_rotate.log.1").exists(), "Rotation backup file was not created."


def test_queue_listener_architecture() -> None:
    """The root logger uses a QueueHandler-based architecture."""
    configure_logging(LoggingConfig(level="INFO", console=True))

    root = logging.getLogger()
    queue_handlers = [h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]

    assert len(queue_handlers) > 0
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not None


def test_unknown_level_defaults_to_info() -> None:
    configure_logging(LoggingConfig(level="chatty"))

    assert logging.getLogger().level == logging.INFO


def test_default_log_path_in_user_data_dir() -> None:
    path = get_default_log_path()

    assert path.endswith("includeflat.log")
    assert "logs" in Path(path).parts


def test_default_rotation_settings() -> None:
    cfg = LoggingConfig()

    assert cfg.max_bytes == 256 * 1024
    assert cfg.backup_count == 2
    assert cfg.log_file is None


def test_unwritable_log_file_keeps_console(tmp_path: Path, capsys) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    configure_logging(LoggingConfig(console=True, log_file=str(blocker / "run.log")))

    listener = getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR)
    assert len(listener.handlers) == 1
    assert "logging to console only" in capsys.readouterr().err
