from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation of persisted configuration and the i18n singleton.
3. The reference source tree used by the end-to-end expansion scenario.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Dict
from unittest.mock import patch

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Reference Scenario
# -----------------------------------------------------------------------------
SOURCE_TREE: Dict[str, str] = {
    "sources/a.cpp": (
        "// this comment before include\n"
        "#include \"dir1/b.h\"\n"
        "// text between b.h and c.h\n"
        "#include \"dir1/d.h\"\n"
        "\n"
        "int SayHello() {\n"
        "    cout << \"hello, world!\" << endl;\n"
        "#   include<dummy.txt>\n"
        "}\n"
    ),
    "sources/dir1/b.h": (
        "// text from b.h before include\n"
        "#include \"subdir/c.h\"\n"
        "// text from b.h after include"
    ),
    "sources/dir1/subdir/c.h": (
        "// text from c.h before include\n"
        "#include <std1.h>\n"
        "// text from c.h after include\n"
    ),
    "sources/dir1/d.h": (
        "// text from d.h before include\n"
        "#include \"lib/std2.h\"\n"
        "// text from d.h after include\n"
    ),
    "sources/include1/std1.h": "// std1\n",
    "sources/include2/lib/std2.h": "// std2\n",
}

EXPECTED_PARTIAL_OUTPUT = (
    "// this comment before include\n"
    "// text from b.h before include\n"
    "// text from c.h before include\n"
    "// std1\n"
    "// text from c.h after include\n"
    "// text from b.h after include\n"
    "// text between b.h and c.h\n"
    "// text from d.h before include\n"
    "// std2\n"
    "// text from d.h after include\n"
    "\n"
    "int SayHello() {\n"
    "    cout << \"hello, world!\" << endl;\n"
)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def write_tree() -> Callable[[Path, Dict[str, str]], Path]:
    """
    Return a helper that materializes {relative_path: content} under a root.
    """
    def _write(root: Path, files: Dict[str, str]) -> Path:
        for rel, content in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def sources_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, write_tree) -> Path:
    """
    Build the reference 'sources' tree and chdir next to it.

    Working from tmp_path keeps every path relative ('sources/a.cpp'), so
    diagnostics can be compared verbatim.
    """
    write_tree(tmp_path, SOURCE_TREE)
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("INCLUDEFLAT_INCLUDE_PATH", raising=False)
    return tmp_path / "sources"


@pytest.fixture(autouse=True)
def isolated_config_file(tmp_path: Path):
    """Keep persisted configuration away from the real user data directory."""
    config_path = tmp_path / "user_data" / "config.json"
    with patch("includeflat.domain.config.CONFIG_FILE", str(config_path)):
        yield config_path


@pytest.fixture(autouse=True)
def reset_locale():
    """Restore the English CLI strings after tests that switch languages."""
    from includeflat.utils.i18n import i18n

    yield
    if i18n.locale != "en":
        i18n.load_locale("en")


@pytest.fixture
def expected_partial_output() -> str:
    """Flattened text produced before the reference scenario hits dummy.txt."""
    return EXPECTED_PARTIAL_OUTPUT


@pytest.fixture
def reset_logging():
    """Detach the application's root handlers before and after a test."""
    import logging
    from logging.handlers import QueueListener

    from includeflat.infra.logging import _QUEUE_LISTENER_ATTR

    def _reset() -> None:
        root = logging.getLogger()
        listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
        if listener and isinstance(listener, QueueListener):
            listener.stop()
            setattr(root, _QUEUE_LISTENER_ATTR, None)
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        if hasattr(root, "_includeflat_configured"):
            delattr(root, "_includeflat_configured")

    _reset()
    yield
    _reset()
