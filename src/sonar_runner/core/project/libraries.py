from __future__ import annotations

"""
Library Pattern Resolution.

Expands the wildcard entries of 'sonar.libraries' (for instance
'lib/*.jar') into the absolute paths of the files they designate.
"""

import logging
import os
from typing import List, Tuple

from sonar_runner.domain.errors import RunnerError
from sonar_runner.infra.fs import list_matching_files, resolve_path

logger = logging.getLogger(__name__)


def split_pattern(pattern: str) -> Tuple[str, str]:
    """
    Split a pattern at its last path separator.

    Both '/' and '\\' are accepted whatever the platform.

    Returns:
        Tuple[str, str]: (directory part, defaulting to '.'; filename wildcard).
    """
    i = max(pattern.rfind("/"), pattern.rfind("\\"))
    if i == -1:
        return ".", pattern
    return pattern[:i], pattern[i + 1:]


def get_libraries(base_dir: str, pattern: str) -> List[str]:
    """
    Return the files matching a library pattern.

    The directory part is resolved against base_dir unless absolute. Only
    plain files are matched, never directories, and the search does not
    recurse.

    Args:
        base_dir: Base directory of the project declaring the pattern.
        pattern: Raw 'sonar.libraries' entry.

    Returns:
        List[str]: Absolute file paths, sorted by filename.

    Raises:
        RunnerError: If the pattern matches no file.
    """
    dir_path, file_pattern = split_pattern(pattern)
    directory = resolve_path(base_dir, dir_path)
    files = list_matching_files(directory, file_pattern)
    if not files:
        raise RunnerError(
            f'No files matching pattern "{file_pattern}" in directory "{directory}"'
        )
    logger.debug(f"Pattern '{pattern}' resolved to {len(files)} file(s) in {directory}")
    return files


def resolve_library_patterns(base_dir: str, patterns: List[str]) -> List[str]:
    """Expand every pattern, keeping declaration order."""
    lib_paths: List[str] = []
    for pattern in patterns:
        lib_paths.extend(get_libraries(base_dir, pattern))
    return [os.path.abspath(p) for p in lib_paths]
