from __future__ import annotations

"""
Runner Settings Resolution.

Merges the property layers feeding an analysis, lowest precedence first:
1. Built-in defaults.
2. Global runner settings ('conf/sonar-runner.properties' of the runner home).
3. Project settings ('sonar-project.properties' of the project base directory).
4. The SONARQUBE_SCANNER_PARAMS environment variable (JSON object).
5. Command-line definitions.
"""

import json
import logging
import os
from typing import Dict, Mapping, Optional

from sonar_runner.domain.constants import (
    ENV_RUNNER_HOME,
    ENV_SCANNER_PARAMS,
    PROJECT_SETTINGS_FILENAME,
    PROPERTY_PROJECT_BASEDIR,
    PROPERTY_PROJECT_SETTINGS,
    PROPERTY_RUNNER_SETTINGS,
    RUNNER_SETTINGS_FILENAME,
)
from sonar_runner.domain.errors import RunnerError
from sonar_runner.infra.fs import get_file_from_path, get_user_data_dir, is_file
from sonar_runner.infra.properties import load_properties

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# DEFAULTS
# -----------------------------------------------------------------------------

def get_default_properties() -> Dict[str, str]:
    return {PROPERTY_PROJECT_BASEDIR: os.getcwd()}


def get_runner_home(environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Resolve the runner home: SONAR_RUNNER_HOME, else the user data directory.
    """
    env = os.environ if environ is None else environ
    home = (env.get(ENV_RUNNER_HOME) or "").strip()
    return os.path.abspath(home) if home else get_user_data_dir()

# -----------------------------------------------------------------------------
# LAYERS
# -----------------------------------------------------------------------------

def load_runner_settings(
        cli_properties: Mapping[str, str],
        environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Load the global runner settings file.

    An explicit 'runner.settings' file must exist; the default one is optional.

    Raises:
        RunnerError: If an explicitly named settings file does not exist.
    """
    explicit = cli_properties.get(PROPERTY_RUNNER_SETTINGS)
    if explicit:
        path = os.path.abspath(explicit.strip())
        if not is_file(path):
            raise RunnerError(f"Runner settings file does not exist: {path}")
        return load_properties(path)

    path = os.path.join(get_runner_home(environ), "conf", RUNNER_SETTINGS_FILENAME)
    if not is_file(path):
        logger.debug(f"No runner settings file at {path}")
        return {}
    logger.debug(f"Runner settings: {path}")
    return load_properties(path)


def load_project_settings(base_dir: str, cli_properties: Mapping[str, str]) -> Dict[str, str]:
    """
    Load the project settings file.

    Raises:
        RunnerError: If an explicitly named project settings file does not exist.
    """
    explicit = cli_properties.get(PROPERTY_PROJECT_SETTINGS)
    if explicit:
        path = os.path.abspath(get_file_from_path(explicit, base_dir))
        if not is_file(path):
            raise RunnerError(f"Project settings file does not exist: {path}")
        return load_properties(path)

    path = os.path.join(base_dir, PROJECT_SETTINGS_FILENAME)
    if not is_file(path):
        logger.debug(f"No project settings file at {path}")
        return {}
    logger.debug(f"Project settings: {path}")
    return load_properties(path)


def load_environment_properties(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Read properties passed as a JSON object through SONARQUBE_SCANNER_PARAMS.

    Raises:
        RunnerError: If the variable is set but is not a JSON object.
    """
    env = os.environ if environ is None else environ
    raw = (env.get(ENV_SCANNER_PARAMS) or "").strip()
    if not raw:
        return {}

    try:
        data = json.loads(raw)
    except ValueError as e:
        raise RunnerError(f"Failed to parse JSON in {ENV_SCANNER_PARAMS} environment variable") from e

    if not isinstance(data, dict):
        raise RunnerError(f"{ENV_SCANNER_PARAMS} must contain a JSON object")
    return {str(k): "" if v is None else str(v) for k, v in data.items()}

# -----------------------------------------------------------------------------
# FACADE API
# -----------------------------------------------------------------------------

def load_runner_properties(
        cli_properties: Mapping[str, str],
        environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Resolve the complete property bag of an invocation.

    The project base directory used to locate the project settings file is
    taken from the command line or the environment layer, else from the
    global settings, else the working directory. Relative values are made
    absolute against the working directory.

    Args:
        cli_properties: Command-line definitions.
        environ: Environment to read, defaults to os.environ.

    Returns:
        Dict[str, str]: Merged properties.
    """
    props = get_default_properties()
    props.update(load_runner_settings(cli_properties, environ))

    env_props = load_environment_properties(environ)
    overrides: Dict[str, str] = dict(env_props)
    overrides.update(cli_properties)

    base_dir = overrides.get(PROPERTY_PROJECT_BASEDIR) or props[PROPERTY_PROJECT_BASEDIR]
    base_dir = os.path.abspath(base_dir.strip())

    props.update(load_project_settings(base_dir, overrides))
    props.update(overrides)
    props[PROPERTY_PROJECT_BASEDIR] = base_dir
    return props
