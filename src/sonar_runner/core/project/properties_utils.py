from __future__ import annotations

"""
Property Bag Helpers.

Small, side-effect-explicit operations on property bags shared by the
project builder and the validation pass: list parsing, module-prefixed
extraction, parent-to-child inheritance and deprecated key substitution.
"""

import logging
from typing import Dict, Iterable, List, Mapping

from sonar_runner.domain.constants import (
    DEPRECATED_PROPS_TO_NEW_PROPS,
    NON_HERITED_PROPERTIES_FOR_CHILD,
    PROPERTY_MODULES,
    PROPERTY_PROJECT_KEY,
    PROPERTY_PROJECT_NAME,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PARSING
# -----------------------------------------------------------------------------

def get_list_from_property(props: Mapping[str, str], key: str) -> List[str]:
    """
    Split a comma-separated property into trimmed, non-empty items.

    Args:
        props: Property bag.
        key: Property to read; a missing key yields an empty list.

    Returns:
        List[str]: Items in declaration order.
    """
    value = props.get(key) or ""
    return [item.strip() for item in value.split(",") if item.strip()]


def get_module_ids(props: Mapping[str, str]) -> List[str]:
    return get_list_from_property(props, PROPERTY_MODULES)


def is_key_prefixed_by_module_id(key: str, module_ids: Iterable[str]) -> bool:
    return any(key.startswith(module_id + ".") for module_id in module_ids)

# -----------------------------------------------------------------------------
# TRANSFORMATIONS
# -----------------------------------------------------------------------------

def extract_module_properties(module: str, props: Mapping[str, str]) -> Dict[str, str]:
    """
    Collect the '<module>.<key>' entries of a parent bag as '<key>'.

    Args:
        module: Module id as listed in 'sonar.modules'.
        props: Parent property bag.

    Returns:
        Dict[str, str]: Fresh bag owned by the module.
    """
    prefix = module + "."
    return {
        key[len(prefix):]: value
        for key, value in props.items()
        if key.startswith(prefix)
    }


def merge_parent_properties(child_props: Dict[str, str], parent_props: Mapping[str, str]) -> None:
    """
    Copy inheritable parent entries the child does not define itself.

    Entries describing the parent's own location, module list or
    description, and entries addressed to one of the parent's modules,
    are never inherited.

    Args:
        child_props: Module bag, updated in place.
        parent_props: Parent bag, left untouched.
    """
    module_ids = get_module_ids(parent_props)
    for key, value in parent_props.items():
        if (key not in child_props
                and key not in NON_HERITED_PROPERTIES_FOR_CHILD
                and not is_key_prefixed_by_module_id(key, module_ids)):
            child_props[key] = value


def set_project_key_and_name_if_not_defined(child_props: Dict[str, str], module_id: str) -> None:
    child_props.setdefault(PROPERTY_PROJECT_KEY, module_id)
    child_props.setdefault(PROPERTY_PROJECT_NAME, module_id)


def prefix_project_key_with_parent_key(child_props: Dict[str, str], parent_key: str) -> None:
    child_key = child_props.get(PROPERTY_PROJECT_KEY)
    child_props[PROPERTY_PROJECT_KEY] = f"{parent_key}:{child_key}"


def replace_deprecated_properties(props: Dict[str, str]) -> None:
    """
    Rename deprecated keys to their 'sonar.'-prefixed equivalents in place.

    The deprecated value wins over an already present new key. Each
    renamed key is reported with a warning.

    Args:
        props: Property bag, updated in place.
    """
    for old_key, new_key in DEPRECATED_PROPS_TO_NEW_PROPS.items():
        if old_key in props:
            logger.warning(
                f"/!\\ The '{old_key}' property is deprecated and is replaced by "
                f"'{new_key}'. Don't forget to update your files."
            )
            props[new_key] = props.pop(old_key)
