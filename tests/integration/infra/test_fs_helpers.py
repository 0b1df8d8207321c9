from __future__ import annotations

"""
Integration tests for FileSystem helpers.

Verifies path expansion, default output naming, search path splitting
and directory creation.
"""

import os
from pathlib import Path

import pytest

from includeflat.infra.fs import (
    default_output_path,
    expand_user_path,
    get_user_data_dir,
    missing_directories,
    safe_mkdir,
    split_path_list,
)


def test_expand_user_path_keeps_name_verbatim(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INC_ROOT", "/opt/inc")

    assert expand_user_path("sources/a.cpp") == "sources/a.cpp"
    assert expand_user_path(" spaced name.c ") == " spaced name.c "
    assert expand_user_path("$INC_ROOT/lib") == "$INC_ROOT/lib"
    assert expand_user_path(None) == ""
    assert expand_user_path("") == ""


def test_expand_user_path_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    assert expand_user_path("~/x.c") == os.path.join(str(tmp_path), "x.c")


@pytest.mark.parametrize("given, expected", [
    ("sources/a.cpp", "sources/a.in"),
    ("main", "main.in"),
    ("dir.v2/file.tar.gz", "dir.v2/file.tar.in"),
])
def test_default_output_path(given, expected) -> None:
    assert default_output_path(given) == expected


def test_split_path_list() -> None:
    value = os.pathsep.join(["inc1", "", " inc2 "])

    assert split_path_list(value) == ["inc1", "inc2"]
    assert split_path_list("") == []
    assert split_path_list(None) == []


def test_missing_directories(tmp_path: Path) -> None:
    (tmp_path / "real").mkdir()
    (tmp_path / "file.h").write_text("", encoding="utf-8")
    paths = [str(tmp_path / "real"), str(tmp_path / "file.h"), str(tmp_path / "ghost")]

    assert missing_directories(paths) == paths[1:]


def test_safe_mkdir(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b"

    assert safe_mkdir(str(target)) == (True, None)
    assert target.is_dir()
    assert safe_mkdir("") == (True, None)


def test_safe_mkdir_over_file(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    ok, err = safe_mkdir(str(blocker / "sub"))

    assert ok is False
    assert err


def test_get_user_data_dir_is_absolute(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    path = get_user_data_dir()

    assert os.path.isabs(path)
    assert os.path.isdir(path)
