from __future__ import annotations

"""
Project Definition Validation Service.

Gatekeeper of the project tree: checks mandatory properties and module
key uniqueness while the tree is built, then runs a final depth-first pass
that verifies source directories of leaf modules, expands their library
patterns, and strips module-level properties from aggregator projects.
"""

import logging
import os
from typing import Dict, Iterable, List

from sonar_runner.core.project.libraries import resolve_library_patterns
from sonar_runner.core.project.properties_utils import (
    get_list_from_property,
    get_module_ids,
    is_key_prefixed_by_module_id,
    replace_deprecated_properties,
)
from sonar_runner.domain.constants import (
    MODULE_ONLY_PROPERTIES,
    PROPERTY_LIBRARIES,
    PROPERTY_PROJECT_KEY,
    PROPERTY_SOURCES,
)
from sonar_runner.domain.errors import RunnerError
from sonar_runner.domain.project_models import ProjectDefinition
from sonar_runner.infra.fs import get_file_from_path, is_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# BUILD-TIME CHECKS
# -----------------------------------------------------------------------------

def check_mandatory_properties(props: Dict[str, str], mandatory_props: Iterable[str]) -> None:
    """
    Verify that every mandatory key is present.

    Deprecated keys are renamed first, so 'sources' satisfies
    'sonar.sources'. Presence is what counts; an empty value is accepted.

    Args:
        props: Property bag, updated in place by the deprecated key renaming.
        mandatory_props: Keys that must be defined.

    Raises:
        RunnerError: Listing every missing key.
    """
    replace_deprecated_properties(props)
    missing = [key for key in mandatory_props if key not in props]
    if missing:
        project_key = props.get(PROPERTY_PROJECT_KEY)
        raise RunnerError(
            f"You must define the following mandatory properties for "
            f"'{'Unknown' if project_key is None else project_key}': {', '.join(missing)}"
        )


def check_uniqueness_of_child_key(child: ProjectDefinition, parent: ProjectDefinition) -> None:
    """
    Raises:
        RunnerError: If a sibling already attached to parent has child's key.
    """
    for definition in parent.sub_projects:
        if definition.key == child.key:
            raise RunnerError(
                f"Project '{parent.key}' can't have 2 modules with the following key: {child.key}"
            )


def check_existence_of_directories(project_key: str, base_dir: str, source_dirs: List[str]) -> None:
    """
    Raises:
        RunnerError: Naming the first declared directory that does not exist.
    """
    for path in source_dirs:
        if not is_dir(get_file_from_path(path, base_dir)):
            raise RunnerError(
                f"The folder '{path}' does not exist for '{project_key}' project "
                f"(base directory = {os.path.abspath(base_dir)})"
            )

# -----------------------------------------------------------------------------
# POST-BUILD PASS
# -----------------------------------------------------------------------------

def clean_and_check_project_definitions(project: ProjectDefinition) -> None:
    """
    Validate and clean a project tree, depth-first.

    Args:
        project: Root of the (sub)tree, updated in place.
    """
    if not project.sub_projects:
        clean_and_check_module_properties(project)
        return

    clean_aggregator_project_properties(project)
    for module in project.sub_projects:
        clean_and_check_project_definitions(module)


def clean_and_check_module_properties(project: ProjectDefinition) -> None:
    """
    Check the source directories of a leaf project and replace its library
    patterns with the resolved absolute file paths.
    """
    properties = project.properties

    source_dirs = get_list_from_property(properties, PROPERTY_SOURCES)
    check_existence_of_directories(project.key or "", project.base_dir, source_dirs)

    patterns = get_list_from_property(properties, PROPERTY_LIBRARIES)
    lib_paths = resolve_library_patterns(project.base_dir, patterns)
    properties[PROPERTY_LIBRARIES] = ",".join(lib_paths)


def clean_aggregator_project_properties(project: ProjectDefinition) -> None:
    """
    Remove from an aggregator project the properties that only make sense
    on modules, and the properties addressed to its own modules.
    """
    properties = project.properties

    for key in MODULE_ONLY_PROPERTIES:
        properties.pop(key, None)

    module_ids = get_module_ids(properties)
    for key in list(properties):
        if is_key_prefixed_by_module_id(key, module_ids):
            del properties[key]

    logger.debug(f"Cleaned aggregator project '{project.key}' ({len(module_ids)} module(s))")
