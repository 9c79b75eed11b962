from __future__ import annotations

"""
Unit tests for Runner Settings Resolution.

Verifies the precedence of the property layers: defaults < runner
settings < project settings < environment < command line.
"""

import json
import os
from pathlib import Path
from typing import Dict

import pytest

from sonar_runner.domain.config import (
    get_runner_home,
    load_environment_properties,
    load_runner_properties,
)
from sonar_runner.domain.errors import RunnerError


@pytest.fixture
def runner_home(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    (home / "conf").mkdir(parents=True)
    (home / "conf" / "sonar-runner.properties").write_text(
        "sonar.host.url=http://global\nsonar.projectVersion=0.1\nsonar.language=java\n",
        encoding="utf-8",
    )
    return home


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "project"
    project.mkdir()
    (project / "sonar-project.properties").write_text(
        "sonar.projectKey=from-file\nsonar.projectVersion=1.0\nsonar.language=py\n",
        encoding="utf-8",
    )
    return project


def _env(runner_home: Path, **extra: str) -> Dict[str, str]:
    env = {"SONAR_RUNNER_HOME": str(runner_home)}
    env.update(extra)
    return env


def test_get_runner_home(runner_home: Path) -> None:
    assert get_runner_home({"SONAR_RUNNER_HOME": str(runner_home)}) == str(runner_home)


def test_layers_precedence(runner_home: Path, project_dir: Path) -> None:
    cli = {"sonar.projectBaseDir": str(project_dir), "sonar.projectVersion": "9.9"}
    env = _env(runner_home, SONARQUBE_SCANNER_PARAMS=json.dumps({"sonar.language": "go", "sonar.verbose": True}))

    props = load_runner_properties(cli, env)

    assert props["sonar.host.url"] == "http://global"
    assert props["sonar.projectKey"] == "from-file"
    assert props["sonar.language"] == "go"
    assert props["sonar.verbose"] == "True"
    assert props["sonar.projectVersion"] == "9.9"
    assert props["sonar.projectBaseDir"] == str(project_dir)


def test_base_dir_defaults_to_working_directory(
        runner_home: Path,
        project_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.chdir(project_dir)
    props = load_runner_properties({}, _env(runner_home))

    assert props["sonar.projectBaseDir"] == os.path.abspath(os.getcwd())
    assert props["sonar.projectKey"] == "from-file"


def test_explicit_project_settings(runner_home: Path, project_dir: Path) -> None:
    (project_dir / "other.properties").write_text("sonar.projectKey=other\n", encoding="utf-8")
    cli = {"sonar.projectBaseDir": str(project_dir), "project.settings": "other.properties"}

    props = load_runner_properties(cli, _env(runner_home))
    assert props["sonar.projectKey"] == "other"


def test_missing_explicit_settings_files_fail(runner_home: Path, project_dir: Path) -> None:
    cli = {"sonar.projectBaseDir": str(project_dir), "project.settings": "none.properties"}
    with pytest.raises(RunnerError, match="Project settings file does not exist"):
        load_runner_properties(cli, _env(runner_home))

    with pytest.raises(RunnerError, match="Runner settings file does not exist"):
        load_runner_properties({"runner.settings": str(runner_home / "none")}, _env(runner_home))


def test_missing_runner_home_settings_is_optional(tmp_path: Path, project_dir: Path) -> None:
    props = load_runner_properties(
        {"sonar.projectBaseDir": str(project_dir)},
        {"SONAR_RUNNER_HOME": str(tmp_path / "empty")},
    )
    assert "sonar.host.url" not in props


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]"])
def test_invalid_environment_params(raw: str) -> None:
    with pytest.raises(RunnerError, match="SONARQUBE_SCANNER_PARAMS"):
        load_environment_properties({"SONARQUBE_SCANNER_PARAMS": raw})


def test_empty_environment_params() -> None:
    assert load_environment_properties({}) == {}
