from __future__ import annotations

"""
Project Definition Builder.

Turns a flat property bag into a validated tree of project definitions:
1. Defines the root project and its work directory.
2. Walks 'sonar.modules' recursively, parent before children, resolving
   each module's base directory and optional properties file.
3. Merges inheritable parent properties into every module and prefixes
   module keys with their parent key.
4. Runs the final validation and cleaning pass over the whole tree.
"""

import logging
import os
from typing import Dict, Mapping, Optional

from sonar_runner.core.project.properties_utils import (
    extract_module_properties,
    get_module_ids,
    merge_parent_properties,
    prefix_project_key_with_parent_key,
    set_project_key_and_name_if_not_defined,
)
from sonar_runner.core.project.validator import (
    check_mandatory_properties,
    check_uniqueness_of_child_key,
    clean_and_check_project_definitions,
)
from sonar_runner.domain.constants import (
    DEF_VALUE_WORK_DIRECTORY,
    MANDATORY_PROPERTIES_FOR_CHILD,
    MANDATORY_PROPERTIES_FOR_PROJECT,
    PROJECT_SETTINGS_FILENAME,
    PROPERTY_PROJECT_BASEDIR,
    PROPERTY_PROJECT_CONFIG_FILE,
    PROPERTY_PROJECT_KEY,
    PROPERTY_WORK_DIRECTORY,
)
from sonar_runner.domain.errors import RunnerError
from sonar_runner.domain.project_models import ProjectDefinition
from sonar_runner.infra.fs import get_file_from_path, is_dir, is_file
from sonar_runner.infra.properties import load_properties

logger = logging.getLogger(__name__)


class ProjectBuilder:
    """
    Creates a project definition from a set of properties.

    The builder holds no state besides the input bag; the root work
    directory is passed explicitly down the recursion.
    """

    def __init__(self, properties: Mapping[str, str]) -> None:
        self._properties: Dict[str, str] = dict(properties)

    @classmethod
    def create(cls, properties: Mapping[str, str]) -> "ProjectBuilder":
        return cls(properties)

    def generate_project_definition(self) -> ProjectDefinition:
        """
        Build, validate and clean the project tree.

        Returns:
            ProjectDefinition: The root project.

        Raises:
            RunnerError: On the first invalid project or module.
        """
        root_project = self.define_project(dict(self._properties), None, None)
        root_work_dir = root_project.work_dir
        self.define_children(root_project, root_work_dir)
        clean_and_check_project_definitions(root_project)

        logger.debug(
            f"Project definition of '{root_project.key}' built "
            f"({sum(1 for _ in root_project.walk())} node(s))"
        )
        return root_project

    # -------------------------------------------------------------------------
    # PROJECT NODES
    # -------------------------------------------------------------------------

    def define_project(
            self,
            properties: Dict[str, str],
            parent: Optional[ProjectDefinition],
            root_work_dir: Optional[str],
    ) -> ProjectDefinition:
        """
        Create a single, childless project node.

        Args:
            properties: Bag of the node; deprecated keys are renamed in place.
            parent: Owning project, None for the root.
            root_work_dir: Work directory of the root, None for the root itself.
        """
        check_mandatory_properties(properties, MANDATORY_PROPERTIES_FOR_PROJECT)
        base_dir = properties[PROPERTY_PROJECT_BASEDIR]

        if parent is None:
            work_dir = self.init_root_project_work_dir(base_dir)
        else:
            work_dir = self.init_module_work_dir(properties, root_work_dir or "")

        return ProjectDefinition(base_dir=base_dir, work_dir=work_dir, properties=properties)

    def init_root_project_work_dir(self, base_dir: str) -> str:
        work_dir = (self._properties.get(PROPERTY_WORK_DIRECTORY) or "").strip()
        if not work_dir:
            return os.path.join(base_dir, DEF_VALUE_WORK_DIRECTORY)
        if os.path.isabs(work_dir):
            return work_dir
        return os.path.join(base_dir, work_dir)

    @staticmethod
    def init_module_work_dir(properties: Mapping[str, str], root_work_dir: str) -> str:
        clean_key = "".join((properties.get(PROPERTY_PROJECT_KEY) or "").split())
        clean_key = clean_key.replace(":", "_")
        return os.path.join(root_work_dir, clean_key)

    # -------------------------------------------------------------------------
    # MODULES
    # -------------------------------------------------------------------------

    def define_children(self, parent_project: ProjectDefinition, root_work_dir: str) -> None:
        """
        Recursively build and attach the modules listed by a project.
        """
        parent_props = parent_project.properties
        for module_id in get_module_ids(parent_props):
            module_props = extract_module_properties(module_id, parent_props)
            child_project = self.load_child_project(
                parent_project, module_props, module_id, root_work_dir
            )
            check_uniqueness_of_child_key(child_project, parent_project)
            # the module may have modules as well
            self.define_children(child_project, root_work_dir)
            parent_project.add_sub_project(child_project)

    def load_child_project(
            self,
            parent_project: ProjectDefinition,
            module_props: Dict[str, str],
            module_id: str,
            root_work_dir: str,
    ) -> ProjectDefinition:
        set_project_key_and_name_if_not_defined(module_props, module_id)

        if PROPERTY_PROJECT_BASEDIR in module_props:
            base_dir = get_file_from_path(
                module_props[PROPERTY_PROJECT_BASEDIR], parent_project.base_dir
            )
            set_project_base_dir(base_dir, module_props, module_id)
            try_to_find_and_load_props_file(base_dir, module_props, module_id)
        elif PROPERTY_PROJECT_CONFIG_FILE in module_props:
            load_props_file(parent_project, module_props, module_id)
        else:
            base_dir = os.path.join(parent_project.base_dir, module_id)
            set_project_base_dir(base_dir, module_props, module_id)
            try_to_find_and_load_props_file(base_dir, module_props, module_id)

        check_mandatory_properties(module_props, MANDATORY_PROPERTIES_FOR_CHILD)
        merge_parent_properties(module_props, parent_project.properties)
        prefix_project_key_with_parent_key(module_props, parent_project.key or "")

        logger.debug(f"Defining module '{module_id}' as '{module_props[PROPERTY_PROJECT_KEY]}'")
        return self.define_project(module_props, parent_project, root_work_dir)


# -----------------------------------------------------------------------------
# MODULE BASE DIRECTORY AND PROPERTIES FILES
# -----------------------------------------------------------------------------

def load_props_file(parent_project: ProjectDefinition, module_props: Dict[str, str], module_id: str) -> None:
    """
    Merge the file named by 'sonar.projectConfigFile' into a module bag and
    derive the module base directory from it.

    Raises:
        RunnerError: If the file does not exist.
    """
    property_file = get_file_from_path(
        module_props[PROPERTY_PROJECT_CONFIG_FILE], parent_project.base_dir
    )
    if not is_file(property_file):
        raise RunnerError(
            f"The properties file of the module '{module_id}' does not exist: "
            f"{os.path.abspath(property_file)}"
        )

    module_props.update(load_properties(property_file))
    file_dir = os.path.dirname(os.path.abspath(property_file))
    if PROPERTY_PROJECT_BASEDIR in module_props:
        base_dir = get_file_from_path(module_props[PROPERTY_PROJECT_BASEDIR], file_dir)
    else:
        base_dir = file_dir
    set_project_base_dir(base_dir, module_props, module_id)


def try_to_find_and_load_props_file(base_dir: str, module_props: Dict[str, str], module_id: str) -> None:
    """
    Merge the module's own settings file, if any; it may move the base directory.
    """
    property_file = os.path.join(base_dir, PROJECT_SETTINGS_FILENAME)
    if not is_file(property_file):
        return

    module_props.update(load_properties(property_file))
    if PROPERTY_PROJECT_BASEDIR in module_props:
        overwritten_base_dir = get_file_from_path(
            module_props[PROPERTY_PROJECT_BASEDIR],
            os.path.dirname(os.path.abspath(property_file)),
        )
        set_project_base_dir(overwritten_base_dir, module_props, module_id)


def set_project_base_dir(base_dir: str, child_props: Dict[str, str], module_id: str) -> None:
    """
    Raises:
        RunnerError: If base_dir is not an existing directory.
    """
    if not is_dir(base_dir):
        raise RunnerError(
            f"The base directory of the module '{module_id}' does not exist: "
            f"{os.path.abspath(base_dir)}"
        )
    child_props[PROPERTY_PROJECT_BASEDIR] = os.path.abspath(base_dir)


def generate_project_definition(properties: Mapping[str, str]) -> ProjectDefinition:
    """Build the validated project tree described by a property bag."""
    return ProjectBuilder.create(properties).generate_project_definition()
