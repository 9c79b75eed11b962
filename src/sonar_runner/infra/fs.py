from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation and directory listing utilities
used to resolve project base directories, properties files and library
patterns. Acts as an abstraction over the 'os' module to ensure uniform
behavior across Windows and Unix-like systems.
"""

import fnmatch
import os
from typing import List

from sonar_runner.domain.errors import RunnerError

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "SonarRunner"
UNIX_APP_DIR_NAME = ".sonar-runner"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for runner settings.

    Standards:
    - Windows: %LOCALAPPDATA%/SonarRunner
    - Linux/Mac: ~/.sonar-runner

    Unlike the scratch directories, this one is not created on lookup.

    Returns:
        str: Absolute path to the runner data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def get_file_from_path(path: str, base_dir: str) -> str:
    """
    Return the file denoted by a path that is either absolute or relative
    to base_dir. Surrounding whitespace of the raw value is ignored.

    Args:
        path: Raw path as written in a property.
        base_dir: Directory relative paths are joined to.

    Returns:
        str: Joined path (not canonicalised).
    """
    p = path.strip()
    if os.path.isabs(p):
        return p
    return os.path.join(base_dir, p)


def resolve_path(base_dir: str, path: str) -> str:
    """
    Canonicalise a path relative to base_dir; absolute paths are kept as-is.

    Raises:
        RunnerError: If the path cannot be canonicalised.
    """
    if os.path.isabs(path):
        return path
    try:
        return os.path.realpath(os.path.join(base_dir, path))
    except (OSError, ValueError) as e:
        raise RunnerError(f'Unable to resolve path "{path}"') from e


def is_dir(path: str) -> bool:
    return os.path.isdir(path)


def is_file(path: str) -> bool:
    return os.path.isfile(path)

# -----------------------------------------------------------------------------
# DIRECTORY LISTING API
# -----------------------------------------------------------------------------

def list_matching_files(directory: str, wildcard: str) -> List[str]:
    """
    List plain files of a directory whose name matches a wildcard.

    Matching is case-sensitive on every platform. Sub-directories are never
    returned, even when their name matches.

    Args:
        directory: Directory to list (not walked recursively).
        wildcard: Shell-style filename pattern ('*', '?').

    Returns:
        List[str]: Absolute paths sorted by filename; empty when the
                   directory does not exist or cannot be listed.
    """
    try:
        names = os.listdir(directory)
    except OSError:
        return []

    # Only '*' and '?' are wildcards; '[' is matched literally
    pattern = wildcard.replace("[", "[[]")

    matches: List[str] = []
    for name in sorted(names):
        full = os.path.join(directory, name)
        if fnmatch.fnmatchcase(name, pattern) and os.path.isfile(full):
            matches.append(os.path.abspath(full))
    return matches
