from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the property keys understood by the runner, the default values
applied when they are absent, and the immutable lookup tables used while
building project definitions.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

RUNNER_VERSION = "2.0.0"

# -----------------------------------------------------------------------------
# PROJECT PROPERTY KEYS
# -----------------------------------------------------------------------------
PROPERTY_PROJECT_BASEDIR = "sonar.projectBaseDir"
PROPERTY_PROJECT_CONFIG_FILE = "sonar.projectConfigFile"
PROPERTY_PROJECT_KEY = "sonar.projectKey"
PROPERTY_PROJECT_NAME = "sonar.projectName"
PROPERTY_PROJECT_DESCRIPTION = "sonar.projectDescription"
PROPERTY_PROJECT_VERSION = "sonar.projectVersion"
PROPERTY_MODULES = "sonar.modules"

PROPERTY_SOURCES = "sonar.sources"
PROPERTY_TESTS = "sonar.tests"
PROPERTY_BINARIES = "sonar.binaries"
PROPERTY_LIBRARIES = "sonar.libraries"

# Replaced by the same keys preceded by "sonar."
PROPERTY_OLD_SOURCES = "sources"
PROPERTY_OLD_TESTS = "tests"
PROPERTY_OLD_BINARIES = "binaries"
PROPERTY_OLD_LIBRARIES = "libraries"

PROPERTY_WORK_DIRECTORY = "sonar.working.directory"
DEF_VALUE_WORK_DIRECTORY = ".sonar"

PROJECT_SETTINGS_FILENAME = "sonar-project.properties"

# -----------------------------------------------------------------------------
# RUNNER SETTINGS KEYS
# -----------------------------------------------------------------------------
PROPERTY_RUNNER_SETTINGS = "runner.settings"
PROPERTY_PROJECT_SETTINGS = "project.settings"
RUNNER_SETTINGS_FILENAME = "sonar-runner.properties"

ENV_RUNNER_HOME = "SONAR_RUNNER_HOME"
ENV_SCANNER_PARAMS = "SONARQUBE_SCANNER_PARAMS"

# -----------------------------------------------------------------------------
# LOOKUP TABLES
# -----------------------------------------------------------------------------
DEPRECATED_PROPS_TO_NEW_PROPS: Mapping[str, str] = MappingProxyType({
    PROPERTY_OLD_SOURCES: PROPERTY_SOURCES,
    PROPERTY_OLD_TESTS: PROPERTY_TESTS,
    PROPERTY_OLD_BINARIES: PROPERTY_BINARIES,
    PROPERTY_OLD_LIBRARIES: PROPERTY_LIBRARIES,
})

# Required for every project, root or module, once parent properties are merged
MANDATORY_PROPERTIES_FOR_PROJECT: Tuple[str, ...] = (
    PROPERTY_PROJECT_BASEDIR,
    PROPERTY_PROJECT_KEY,
    PROPERTY_PROJECT_NAME,
    PROPERTY_PROJECT_VERSION,
    PROPERTY_SOURCES,
)

# Required for a module before its properties get merged with its parent ones
MANDATORY_PROPERTIES_FOR_CHILD: Tuple[str, ...] = (
    PROPERTY_PROJECT_KEY,
    PROPERTY_PROJECT_NAME,
)

NON_HERITED_PROPERTIES_FOR_CHILD: Tuple[str, ...] = (
    PROPERTY_PROJECT_BASEDIR,
    PROPERTY_MODULES,
    PROPERTY_PROJECT_DESCRIPTION,
)

# Stripped from aggregator projects
MODULE_ONLY_PROPERTIES: Tuple[str, ...] = (
    PROPERTY_SOURCES,
    PROPERTY_TESTS,
    PROPERTY_BINARIES,
    PROPERTY_LIBRARIES,
)
