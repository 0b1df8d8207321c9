from __future__ import annotations

"""
Unit tests for the Include Resolver.

Verifies:
1. Directory-relative precedence for quoted includes.
2. Ordered search path fallback.
3. Angle includes never look next to the including file.
4. Search path construction (ordering, blanks, duplicates).
"""

from pathlib import Path

from includeflat.core.preprocessor.resolver import build_search_path, find_in_search_path, resolve
from includeflat.domain.models import IncludeKind, IncludeToken


def _local(target: str) -> IncludeToken:
    return IncludeToken(IncludeKind.LOCAL, target)


def _global(target: str) -> IncludeToken:
    return IncludeToken(IncludeKind.GLOBAL, target)


def test_local_prefers_including_directory(tmp_path: Path, write_tree) -> None:
    write_tree(tmp_path, {
        "src/main.c": "",
        "src/t.h": "local",
        "inc/t.h": "search",
    })
    including = str(tmp_path / "src" / "main.c")

    res = resolve(_local("t.h"), including, [str(tmp_path / "inc")], line=3)

    assert res.found
    assert res.path == str(tmp_path / "src" / "t.h")
    assert res.line == 3
    assert res.including_file == including


def test_local_falls_back_to_search_path(tmp_path: Path, write_tree) -> None:
    write_tree(tmp_path, {"src/main.c": "", "inc/t.h": ""})

    res = resolve(_local("t.h"), str(tmp_path / "src" / "main.c"), [str(tmp_path / "inc")])

    assert res.path == str(tmp_path / "inc" / "t.h")


def test_search_path_order_first_entry_wins(tmp_path: Path, write_tree) -> None:
    write_tree(tmp_path, {"one/t.h": "", "two/t.h": ""})
    search = [str(tmp_path / "one"), str(tmp_path / "two")]

    res = resolve(_global("t.h"), str(tmp_path / "main.c"), search)
    assert res.path == str(tmp_path / "one" / "t.h")

    res = resolve(_global("t.h"), str(tmp_path / "main.c"), list(reversed(search)))
    assert res.path == str(tmp_path / "two" / "t.h")


def test_global_ignores_including_directory(tmp_path: Path, write_tree) -> None:
    write_tree(tmp_path, {"src/main.c": "", "src/t.h": "", "inc/other.h": ""})

    res = resolve(_global("t.h"), str(tmp_path / "src" / "main.c"), [str(tmp_path / "inc")])

    assert not res.found
    assert res.path is None


def test_global_with_search_entry_equal_to_including_dir(tmp_path: Path, write_tree) -> None:
    write_tree(tmp_path, {"src/main.c": "", "src/t.h": ""})

    res = resolve(_global("t.h"), str(tmp_path / "src" / "main.c"), [str(tmp_path / "src")])

    assert res.path == str(tmp_path / "src" / "t.h")


def test_not_found_carries_context(tmp_path: Path) -> None:
    res = resolve(_local("missing.h"), "sources/a.cpp", [str(tmp_path)], line=8)

    assert not res.found
    assert res.token.target == "missing.h"
    assert res.including_file == "sources/a.cpp"
    assert res.line == 8


def test_nested_target_paths(tmp_path: Path, write_tree) -> None:
    write_tree(tmp_path, {"inc/lib/deep/x.h": ""})

    assert find_in_search_path("lib/deep/x.h", [str(tmp_path / "inc")]) == str(
        tmp_path / "inc" / "lib" / "deep" / "x.h"
    )
    assert find_in_search_path("lib/deep/x.h", []) is None


def test_build_search_path_preserves_order() -> None:
    path = build_search_path(["b", " a ", "", "b"], None, ["c", "a"])

    assert path == ("b", "a", "c")
    assert isinstance(path, tuple)
