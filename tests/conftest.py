from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures describing minimal valid projects on disk.
"""

import os
import sys
from pathlib import Path
from typing import Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def simple_project(tmp_path: Path) -> Path:
    """
    Create a single-module project layout.

    Structure:
    /simple
      /src
      /lib
        a.jar
        b.jar
    """
    root = tmp_path / "simple"
    (root / "src").mkdir(parents=True)
    (root / "lib").mkdir()
    (root / "lib" / "a.jar").write_text("", encoding="utf-8")
    (root / "lib" / "b.jar").write_text("", encoding="utf-8")
    return root


@pytest.fixture
def root_properties(simple_project: Path) -> Dict[str, str]:
    """Return the five mandatory root properties pointing at simple_project."""
    return {
        "sonar.projectBaseDir": str(simple_project),
        "sonar.projectKey": "com.foo:simple",
        "sonar.projectName": "Simple",
        "sonar.projectVersion": "1.0",
        "sonar.sources": "src",
    }


@pytest.fixture
def multi_module_project(tmp_path: Path) -> Path:
    """
    Create an aggregator with two modules.

    Structure:
    /multi
      /module1/src
      /module2/src
    """
    root = tmp_path / "multi"
    (root / "module1" / "src").mkdir(parents=True)
    (root / "module2" / "src").mkdir(parents=True)
    return root
