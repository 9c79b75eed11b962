from __future__ import annotations

"""
Unit tests for the FileSystem Infrastructure Layer.
"""

import os
from pathlib import Path

import pytest

from sonar_runner.infra.fs import (
    get_file_from_path,
    get_user_data_dir,
    list_matching_files,
    resolve_path,
)


def test_get_file_from_path(tmp_path: Path) -> None:
    base = str(tmp_path)
    absolute = str(tmp_path / "abs")

    assert get_file_from_path("  rel/dir  ", base) == os.path.join(base, "rel/dir")
    assert get_file_from_path(absolute, "/elsewhere") == absolute


def test_resolve_path_canonicalises_relative_paths(tmp_path: Path) -> None:
    (tmp_path / "a" / "b").mkdir(parents=True)

    resolved = resolve_path(str(tmp_path / "a" / "b"), "..")
    assert resolved == os.path.realpath(str(tmp_path / "a"))
    assert resolve_path("/base", str(tmp_path)) == str(tmp_path)


def test_list_matching_files(tmp_path: Path) -> None:
    (tmp_path / "A.JAR").write_text("", encoding="utf-8")
    (tmp_path / "b.jar").write_text("", encoding="utf-8")
    (tmp_path / "c.jar").mkdir()

    assert list_matching_files(str(tmp_path), "*.jar") == [str(tmp_path / "b.jar")]
    assert list_matching_files(str(tmp_path / "missing"), "*") == []


def test_get_user_data_dir_on_posix(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    if os.name == "nt":
        pytest.skip("POSIX layout only")
    monkeypatch.setenv("HOME", str(tmp_path))

    assert get_user_data_dir() == os.path.join(str(tmp_path), ".sonar-runner")
    assert not (tmp_path / ".sonar-runner").exists()
