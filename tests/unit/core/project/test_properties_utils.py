from __future__ import annotations

"""
Unit tests for the Property Bag Helpers.

Verifies list parsing, module-prefixed extraction, parent inheritance and
deprecated key renaming.
"""

from sonar_runner.core.project.properties_utils import (
    extract_module_properties,
    get_list_from_property,
    is_key_prefixed_by_module_id,
    merge_parent_properties,
    prefix_project_key_with_parent_key,
    replace_deprecated_properties,
    set_project_key_and_name_if_not_defined,
)


def test_get_list_from_property_trims_and_drops_empty_items() -> None:
    props = {"sonar.modules": " a, b ,,c ,  "}
    assert get_list_from_property(props, "sonar.modules") == ["a", "b", "c"]


def test_get_list_from_missing_or_blank_property() -> None:
    assert get_list_from_property({}, "sonar.modules") == []
    assert get_list_from_property({"sonar.modules": "  "}, "sonar.modules") == []


def test_extract_module_properties() -> None:
    props = {
        "sonar.projectKey": "root",
        "core.sonar.projectKey": "core-key",
        "core.sonar.sources": "src/main",
        "core-api.sonar.sources": "api",
    }
    assert extract_module_properties("core", props) == {
        "sonar.projectKey": "core-key",
        "sonar.sources": "src/main",
    }


def test_is_key_prefixed_by_module_id_requires_dot() -> None:
    assert is_key_prefixed_by_module_id("core.sonar.sources", ["api", "core"])
    assert not is_key_prefixed_by_module_id("core-api.sonar.sources", ["core"])
    assert not is_key_prefixed_by_module_id("sonar.sources", [])


def test_merge_parent_properties_fills_missing_only() -> None:
    parent = {
        "sonar.projectBaseDir": "/root",
        "sonar.modules": "a,b",
        "sonar.projectDescription": "Root description",
        "sonar.projectVersion": "1.0",
        "sonar.language": "java",
        "a.sonar.projectKey": "A",
        "b.sonar.projectKey": "B",
    }
    child = {"sonar.projectKey": "a", "sonar.language": "py"}

    merge_parent_properties(child, parent)

    assert child == {
        "sonar.projectKey": "a",
        "sonar.language": "py",
        "sonar.projectVersion": "1.0",
    }


def test_set_project_key_and_name_if_not_defined() -> None:
    props = {"sonar.projectName": "Named"}
    set_project_key_and_name_if_not_defined(props, "mod")

    assert props == {"sonar.projectKey": "mod", "sonar.projectName": "Named"}


def test_prefix_project_key_with_parent_key() -> None:
    props = {"sonar.projectKey": "mod"}
    prefix_project_key_with_parent_key(props, "com.foo:root")

    assert props["sonar.projectKey"] == "com.foo:root:mod"


def test_replace_deprecated_properties() -> None:
    props = {
        "sources": "src",
        "tests": "test",
        "binaries": "target/classes",
        "libraries": "lib/*.jar",
        "sonar.projectKey": "key",
    }
    replace_deprecated_properties(props)

    assert props == {
        "sonar.sources": "src",
        "sonar.tests": "test",
        "sonar.binaries": "target/classes",
        "sonar.libraries": "lib/*.jar",
        "sonar.projectKey": "key",
    }


def test_deprecated_value_overrides_new_key() -> None:
    props = {"sources": "old", "sonar.sources": "new"}
    replace_deprecated_properties(props)

    assert props == {"sonar.sources": "old"}
